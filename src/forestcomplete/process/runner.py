"""Bounded invocation of ``forester query``.

The runner is the only place a query process is spawned. Every outcome,
including a missing executable or a timeout, is returned as a
:data:`~forestcomplete.models.QueryOutcome` value instead of raised.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
from pathlib import Path
from typing import Protocol, Sequence

from forestcomplete.config import DEFAULT_TIMEOUT_MS
from forestcomplete.models import Failure, FailureKind, QueryOutcome, Success
from forestcomplete.process.normalize import normalize

LOGGER = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    async def run(
        self,
        executable: str,
        args: Sequence[str],
        cwd: Path,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> QueryOutcome: ...


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


def _format_seconds(timeout_ms: int) -> str:
    return f"{timeout_ms / 1000:g}s"


def _exit_status(returncode: int) -> tuple[int | None, str | None]:
    """Split a returncode into (exit code, signal name)."""
    if returncode >= 0:
        return returncode, None
    try:
        return None, signal.Signals(-returncode).name
    except ValueError:
        return None, str(-returncode)


class SubprocessRunner:
    """Run forester with asyncio and parse its JSON answer."""

    async def run(
        self,
        executable: str,
        args: Sequence[str],
        cwd: Path,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> QueryOutcome:
        LOGGER.debug("Running %s %s in %s", executable, " ".join(args), cwd)
        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                *args,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            LOGGER.warning("Unable to start %s: %s", executable, exc)
            return Failure(str(exc), kind=FailureKind.SPAWN)

        try:
            raw_stdout, raw_stderr = await asyncio.wait_for(
                process.communicate(), timeout=timeout_ms / 1000
            )
        except asyncio.TimeoutError:
            LOGGER.warning("%s timed out after %sms", executable, timeout_ms)
            return Failure(
                f"timed out after {_format_seconds(timeout_ms)}", kind=FailureKind.TIMEOUT
            )
        finally:
            # Single exit point for the child: whatever happened above, it is
            # not left running once we return.
            if process.returncode is None:
                process.kill()
                await process.wait()

        stdout = _decode(raw_stdout)
        stderr = _decode(raw_stderr)
        code, signal_name = _exit_status(process.returncode)
        if code != 0 or signal_name is not None:
            LOGGER.debug("%s exited with code %s and signal %s", executable, code, signal_name)
            return Failure(
                f"process exited with code {code} and signal {signal_name}",
                stdout,
                stderr,
                kind=FailureKind.EXIT,
            )

        try:
            parsed = json.loads(stdout)
        except ValueError:
            return Failure(
                "didn't return a valid JSON response:\n" + stdout,
                stdout,
                stderr,
                kind=FailureKind.PARSE,
            )
        try:
            forest = normalize(parsed)
        except (TypeError, ValueError, AttributeError) as exc:
            LOGGER.warning("Unreadable trees in forester output: %s", exc)
            return Failure(
                f"returned trees that could not be read: {exc}",
                stdout,
                stderr,
                kind=FailureKind.PARSE,
            )
        return Success(forest)
