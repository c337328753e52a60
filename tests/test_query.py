"""Tests for the forest query path."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

from forestcomplete.config import ForesterSettings
from forestcomplete.forest.query import ForestQuery
from forestcomplete.models import Entry, Failure, FailureKind, Success


def _query(outcome, settings: ForesterSettings | None = None, root: Path = Path("/forest")):
    runner = MagicMock()
    runner.run = AsyncMock(return_value=outcome)
    reporter = MagicMock()
    query = ForestQuery(settings or ForesterSettings(), root, reporter, runner)
    return query, runner, reporter


class TestForestQuery:
    """Tests for ForestQuery."""

    def test_invokes_runner(self) -> None:
        """Runs `query all` with the config file in the project root."""
        settings = ForesterSettings(path="/opt/forester", config="site.toml", timeout_ms=500)
        query, runner, _ = _query(Success([]), settings)

        asyncio.run(query.run())

        runner.run.assert_awaited_once_with(
            "/opt/forester", ["query", "all", "site.toml"], Path("/forest"), 500
        )

    def test_success(self) -> None:
        forest = [Entry("abc", title="Hello")]
        query, _, reporter = _query(Success(forest))

        assert asyncio.run(query.forest()) == forest
        reporter.error.assert_not_called()

    def test_failure_falls_back_to_empty(self) -> None:
        """Failures are reported and yield an empty forest."""
        query, _, reporter = _query(Failure("process exited with code 2 and signal None", "out", "err"))

        assert asyncio.run(query.forest()) == []
        reporter.warning.assert_not_called()
        reporter.error.assert_called_once_with(
            "Forester query failed: process exited with code 2 and signal None\n\nout\n\nerr"
        )

    def test_spawn_failure_is_critical(self) -> None:
        """Spawn errors raise an extra critical warning."""
        query, _, reporter = _query(Failure("No such file", kind=FailureKind.SPAWN))

        outcome = asyncio.run(query.run())

        assert isinstance(outcome, Failure)
        reporter.warning.assert_called_once_with("Forester: Critical error - No such file")
        reporter.error.assert_called_once_with("Forester query failed: No such file")

    def test_default_runner(self) -> None:
        from forestcomplete.process.runner import SubprocessRunner

        query = ForestQuery(ForesterSettings(), Path("/forest"), MagicMock())

        assert isinstance(query.runner, SubprocessRunner)
