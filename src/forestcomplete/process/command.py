"""One-shot forester commands such as ``forester new``."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol, Sequence

from forestcomplete.diagnostics import Reporter

LOGGER = logging.getLogger(__name__)


class CommandExecutor(Protocol):
    async def execute(self, executable: str, args: Sequence[str], cwd: Path) -> str | None: ...


def format_command_error(cause: str, stdout: str = "", stderr: str = "") -> str:
    message = cause
    if stdout:
        message += "\n\n" + stdout
    if stderr:
        message += "\n\n" + stderr
    return message


class SubprocessExecutor:
    """Run a command to completion and hand back its trimmed stdout.

    Anything on stderr is shown to the user even when the command succeeds.
    Failures are reported and turn into ``None``; callers must treat ``None``
    as "nothing was done".
    """

    def __init__(self, reporter: Reporter) -> None:
        self.reporter = reporter

    async def execute(self, executable: str, args: Sequence[str], cwd: Path) -> str | None:
        command = [executable, *args]
        LOGGER.info("Running %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            self.reporter.error(format_command_error(f"{type(exc).__name__}: {exc}"))
            return None

        try:
            raw_stdout, raw_stderr = await process.communicate()
        finally:
            if process.returncode is None:
                process.kill()
                await process.wait()

        stdout = raw_stdout.decode("utf-8", errors="replace")
        stderr = raw_stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            cause = f"Command failed: {' '.join(command)} (exit code {process.returncode})"
            self.reporter.error(format_command_error(cause, stdout, stderr))
            return None

        if stderr:
            self.reporter.error(stderr)
        return stdout.strip()
