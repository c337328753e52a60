"""User-visible diagnostics.

The host editor decides how warnings and errors are shown. Anything that
implements :class:`Reporter` can stand in for it; :class:`ConsoleReporter`
prints to stderr for command line use.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Tuple

from rich.console import Console
from rich.markup import escape

LOGGER = logging.getLogger(__name__)


class Reporter(Protocol):
    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleReporter:
    """Report messages on a rich console (stderr by default)."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def warning(self, message: str) -> None:
        LOGGER.debug("warning: %s", message)
        self.console.print(f"[yellow]{escape(message)}[/yellow]", highlight=False)

    def error(self, message: str) -> None:
        LOGGER.debug("error: %s", message)
        self.console.print(f"[red]{escape(message)}[/red]", highlight=False)


class RecordingReporter:
    """Keeps messages in memory, used by the web bridge to return them."""

    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def warning(self, message: str) -> None:
        LOGGER.warning(message)
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        LOGGER.error(message)
        self.messages.append(("error", message))

    def drain(self) -> List[Tuple[str, str]]:
        messages, self.messages = self.messages, []
        return messages
