"""Query the forest of the open project."""

from __future__ import annotations

import logging
from pathlib import Path

from forestcomplete.config import ForesterSettings
from forestcomplete.diagnostics import Reporter
from forestcomplete.models import Failure, FailureKind, Forest, QueryOutcome, Success
from forestcomplete.process.runner import ProcessRunner, SubprocessRunner

LOGGER = logging.getLogger(__name__)


class ForestQuery:
    """Runs ``forester query all`` for one project and reports failures."""

    def __init__(
        self,
        settings: ForesterSettings,
        root: Path,
        reporter: Reporter,
        runner: ProcessRunner | None = None,
    ) -> None:
        self.settings = settings
        self.root = root
        self.reporter = reporter
        self.runner = runner or SubprocessRunner()

    async def run(self) -> QueryOutcome:
        outcome = await self.runner.run(
            self.settings.path,
            self.settings.query_args(),
            self.root,
            self.settings.timeout_ms,
        )
        if isinstance(outcome, Failure):
            self._report(outcome)
        else:
            LOGGER.debug("Forester returned %d trees", len(outcome.forest))
        return outcome

    async def forest(self) -> Forest:
        """Query and fall back to an empty forest on failure."""
        outcome = await self.run()
        return outcome.forest if isinstance(outcome, Success) else []

    def _report(self, failure: Failure) -> None:
        if failure.kind is FailureKind.SPAWN:
            self.reporter.warning(f"Forester: Critical error - {failure.message}")
        self.reporter.error("Forester query failed: " + failure.diagnostic())
