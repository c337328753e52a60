"""Tests for completion candidate synthesis."""

from __future__ import annotations

from forestcomplete.completion.synthesizer import entry_label, synthesize
from forestcomplete.models import Entry, ReplaceRange

RANGE = ReplaceRange(start=5, end=7, line=3)


class TestEntryLabel:
    """Tests for entry_label."""

    def test_untitled(self) -> None:
        assert entry_label(Entry("abc"), show_id=False) == "[abc]"
        assert entry_label(Entry("abc"), show_id=True) == "[abc]"

    def test_title_only(self) -> None:
        assert entry_label(Entry("abc", title="Hello"), show_id=False) == "Hello"

    def test_title_with_id(self) -> None:
        assert entry_label(Entry("abc", title="Hello"), show_id=True) == "[abc] Hello"


class TestSynthesize:
    """Tests for synthesize."""

    def test_titled_entry(self) -> None:
        """Label is the title, insertion is the id."""
        candidates = synthesize([Entry("abc", title="Hello")], RANGE, show_id=False)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.insert_text == "abc"
        assert candidate.label == "Hello"
        assert candidate.filter_text == "abc Hello"
        assert candidate.detail == "Tree [abc]"
        assert candidate.documentation == "Hello"
        assert candidate.description == ""
        assert candidate.range == RANGE

    def test_taxon(self) -> None:
        entry = Entry("thm-0001", title="Zorn", taxon="Theorem")
        candidate = synthesize([entry], RANGE, show_id=True)[0]

        assert candidate.label == "[thm-0001] Zorn"
        assert candidate.filter_text == "thm-0001 Zorn Theorem"
        assert candidate.detail == "Theorem [thm-0001]"
        assert candidate.description == "Theorem"

    def test_untitled_entry(self) -> None:
        candidate = synthesize([Entry("abc", taxon="Person")], RANGE)[0]

        assert candidate.label == "[abc]"
        assert candidate.filter_text == "abc Person"
        assert candidate.documentation is None

    def test_order_and_shared_range(self) -> None:
        """Entries keep forest order and share one range."""
        forest = [Entry("b"), Entry("a"), Entry("c")]
        candidates = synthesize(forest, RANGE)

        assert [candidate.insert_text for candidate in candidates] == ["b", "a", "c"]
        assert {candidate.range for candidate in candidates} == {RANGE}

    def test_empty_forest(self) -> None:
        assert synthesize([], RANGE) == []

    def test_to_dict(self) -> None:
        data = synthesize([Entry("abc", title="Hello")], RANGE)[0].to_dict()

        assert data["insertText"] == "abc"
        assert data["range"] == {"line": 3, "start": 5, "end": 7}
