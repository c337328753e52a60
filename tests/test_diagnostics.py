"""Tests for user-visible diagnostics."""

from __future__ import annotations

import io

from rich.console import Console

from forestcomplete.diagnostics import ConsoleReporter, RecordingReporter


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_messages_printed_verbatim(self) -> None:
        """Brackets in messages are not treated as markup."""
        buffer = io.StringIO()
        reporter = ConsoleReporter(Console(file=buffer, width=200))

        reporter.warning("Forester: Critical error - [abc]")
        reporter.error("Forester query failed: boom")

        output = buffer.getvalue()
        assert "Forester: Critical error - [abc]" in output
        assert "Forester query failed: boom" in output


class TestRecordingReporter:
    """Tests for RecordingReporter."""

    def test_drain(self) -> None:
        reporter = RecordingReporter()
        reporter.warning("w")
        reporter.error("e")

        assert reporter.drain() == [("warning", "w"), ("error", "e")]
        assert reporter.drain() == []
