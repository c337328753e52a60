"""Build completion candidates from forest entries."""

from __future__ import annotations

from typing import Iterable, List

from forestcomplete.models import CompletionCandidate, Entry, ReplaceRange


def entry_label(entry: Entry, show_id: bool) -> str:
    if entry.title is None:
        return f"[{entry.identifier}]"
    if show_id:
        return f"[{entry.identifier}] {entry.title}"
    return entry.title


def synthesize(
    forest: Iterable[Entry], range: ReplaceRange, show_id: bool = False
) -> List[CompletionCandidate]:
    """One candidate per entry, in forest order.

    The label is cosmetic; accepting a candidate always inserts the tree id.
    Ranking against ``filter_text`` is left to the editor.
    """
    candidates: List[CompletionCandidate] = []
    for entry in forest:
        filter_parts = [entry.identifier]
        if entry.title is not None:
            filter_parts.append(entry.title)
        if entry.taxon is not None:
            filter_parts.append(entry.taxon)
        candidates.append(
            CompletionCandidate(
                label=entry_label(entry, show_id),
                description=entry.taxon or "",
                insert_text=entry.identifier,
                filter_text=" ".join(filter_parts),
                detail=f"{entry.taxon or 'Tree'} [{entry.identifier}]",
                documentation=entry.title,
                range=range,
            )
        )
    return candidates
