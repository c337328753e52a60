"""Completion entry point used by editors."""

from __future__ import annotations

from typing import List

from forestcomplete.completion.matcher import match
from forestcomplete.completion.synthesizer import synthesize
from forestcomplete.forest.cache import ForestCache
from forestcomplete.models import CompletionCandidate, Match, ReplaceRange


async def complete(
    text: str,
    cache: ForestCache,
    *,
    cursor: int | None = None,
    line: int = 0,
    show_id: bool = False,
) -> List[CompletionCandidate]:
    """Candidates for the cursor position, or ``[]`` outside a reference.

    The forest is only requested once a trigger syntax matched, and a stale
    snapshot is preferred over waiting for forester.
    """
    result = match(text, cursor)
    if not isinstance(result, Match):
        return []
    forest = await cache.get(fast_return_stale=True)
    return synthesize(forest, ReplaceRange.from_match(result, line), show_id)
