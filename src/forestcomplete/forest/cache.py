"""Cached forest snapshots.

A snapshot is replaced wholesale by each successful query. At most one
query runs at a time; concurrent callers share its result.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional, Protocol

from forestcomplete.models import Forest, QueryOutcome, Success

LOGGER = logging.getLogger(__name__)


class ForestSource(Protocol):
    async def run(self) -> QueryOutcome: ...


class ForestCache:
    def __init__(
        self,
        source: ForestSource,
        *,
        max_age: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.max_age = max_age
        self._clock = clock
        self._snapshot: Optional[Forest] = None
        self._loaded_at: float = 0.0
        self._stale = True
        self._generation = 0
        self._pending: Optional[asyncio.Task[Forest]] = None

    @property
    def snapshot(self) -> Optional[Forest]:
        return self._snapshot

    @property
    def is_stale(self) -> bool:
        if self._snapshot is None or self._stale:
            return True
        if self.max_age is not None:
            return self._clock() - self._loaded_at > self.max_age
        return False

    def invalidate(self) -> None:
        """Mark the snapshot stale, e.g. after a tree file changed."""
        LOGGER.debug("Forest snapshot invalidated")
        self._stale = True
        self._generation += 1

    async def get(self, *, fast_return_stale: bool = False) -> Forest:
        """Return the forest, querying forester when the snapshot is stale.

        With ``fast_return_stale`` a stale snapshot is returned at once while
        the refresh continues in the background.
        """
        if not self.is_stale:
            return self._snapshot  # type: ignore[return-value]
        task = self._refresh_task()
        if fast_return_stale and self._snapshot is not None:
            return self._snapshot
        return await asyncio.shield(task)

    async def refresh(self) -> Forest:
        return await asyncio.shield(self._refresh_task())

    async def aclose(self) -> None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _refresh_task(self) -> "asyncio.Task[Forest]":
        loop = asyncio.get_running_loop()
        if self._pending is not None and self._pending.get_loop() is not loop:
            # Left over from an event loop that is gone.
            self._pending = None
        if self._pending is None or self._pending.done():
            self._pending = loop.create_task(self._load())
        return self._pending

    async def _load(self) -> Forest:
        generation = self._generation
        outcome = await self.source.run()
        if isinstance(outcome, Success):
            self._snapshot = outcome.forest
            self._loaded_at = self._clock()
            # An invalidation during the query leaves the result stale.
            self._stale = generation != self._generation
            return outcome.forest
        # Keep serving the last good snapshot; the next get() retries.
        return self._snapshot if self._snapshot is not None else []
