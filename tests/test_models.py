"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from forestcomplete.models import (
    Entry,
    Failure,
    FailureKind,
    Match,
    ReplaceRange,
    Success,
)


class TestEntry:
    """Test Entry dataclass."""

    def test_defaults(self) -> None:
        entry = Entry("abc")

        assert entry.title is None
        assert entry.taxon is None
        assert entry.tags == ()
        assert entry.route == ""
        assert entry.metas == {}
        assert entry.source_path == ""

    def test_immutable(self) -> None:
        entry = Entry("abc")

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.title = "changed"  # type: ignore[misc]

    def test_identity_by_fields(self) -> None:
        assert Entry("abc", title="A") == Entry("abc", title="A")
        assert Entry("abc", title="A") != Entry("abc", title="B")

    def test_round_trip_dict(self) -> None:
        data = {
            "uri": "abc",
            "title": "A",
            "taxon": "Note",
            "tags": ["x", "y"],
            "route": "abc.xml",
            "metas": {"k": "v"},
            "sourcePath": "trees/abc.tree",
        }

        assert Entry.from_dict(data).to_dict() == data


class TestFailure:
    """Test Failure diagnostics."""

    def test_defaults(self) -> None:
        failure = Failure("boom")

        assert failure.kind is FailureKind.EXIT
        assert failure.diagnostic() == "boom"

    def test_diagnostic_includes_output(self) -> None:
        failure = Failure("boom", "out", "err", kind=FailureKind.PARSE)

        assert failure.diagnostic() == "boom\n\nout\n\nerr"

    def test_diagnostic_skips_empty_stdout(self) -> None:
        assert Failure("boom", "", "err").diagnostic() == "boom\n\nerr"


class TestRanges:
    def test_success_holds_forest(self) -> None:
        assert Success([Entry("a")]).forest == [Entry("a")]

    def test_range_from_match(self) -> None:
        result = ReplaceRange.from_match(Match(3, 5, "ab"), line=7)

        assert result == ReplaceRange(start=3, end=5, line=7)
