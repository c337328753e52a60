"""Tests for the completion entry point."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

from forestcomplete.completion.provider import complete
from forestcomplete.models import Entry, ReplaceRange


def _cache(forest) -> MagicMock:
    cache = MagicMock()
    cache.get = AsyncMock(return_value=forest)
    return cache


class TestComplete:
    """Tests for complete."""

    def test_no_trigger_skips_forest(self) -> None:
        """The forest is not requested outside a reference."""
        cache = _cache([Entry("abc")])

        assert asyncio.run(complete("plain text", cache)) == []
        cache.get.assert_not_called()

    def test_candidates(self) -> None:
        cache = _cache([Entry("abc", title="Hello"), Entry("abd")])

        candidates = asyncio.run(complete("see \\ref{ab", cache, line=4, show_id=True))

        cache.get.assert_awaited_once_with(fast_return_stale=True)
        assert [candidate.label for candidate in candidates] == ["[abc] Hello", "[abd]"]
        assert {candidate.range for candidate in candidates} == {ReplaceRange(9, 11, 4)}

    def test_cursor(self) -> None:
        cache = _cache([Entry("abc")])

        candidates = asyncio.run(complete("[[ab]] tail", cache, cursor=4))

        assert candidates[0].range == ReplaceRange(2, 4, 0)
