"""Coalescing scheduler for debounced background work."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

from galscript.config import get_logger

logger = get_logger(__name__)

WorkFactory = Callable[[], Awaitable[Any]]


class CoalescingScheduler:
    """Run keyed work after a delay, coalescing bursts per key.

    Scheduling a key that is still waiting cancels the waiting run and
    restarts the delay, so a burst of triggers produces a single run. Work
    that has already started is left to finish.
    """

    def __init__(self, default_delay: float = 0.5) -> None:
        self.default_delay = default_delay
        self._waiting: dict[Hashable, asyncio.Task[None]] = {}
        self._running: set[asyncio.Task[None]] = set()

    def schedule(
        self, key: Hashable, work: WorkFactory, delay: float | None = None
    ) -> asyncio.Task[None]:
        """Schedule ``work`` under ``key``, replacing any waiting run.

        Must be called from a running event loop.
        """
        self.cancel(key)
        wait = self.default_delay if delay is None else delay
        task = asyncio.get_running_loop().create_task(self._run(key, work, wait))
        self._waiting[key] = task
        return task

    async def _run(self, key: Hashable, work: WorkFactory, delay: float) -> None:
        await asyncio.sleep(delay)

        task = self._waiting.pop(key, None)
        if task is not None:
            self._running.add(task)
        try:
            await work()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Scheduled work failed", key=str(key), error=str(e))
        finally:
            if task is not None:
                self._running.discard(task)

    def cancel(self, key: Hashable) -> bool:
        """Cancel a waiting run for ``key``; returns True if one was pending."""
        task = self._waiting.pop(key, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._waiting):
            self.cancel(key)
        for task in list(self._running):
            task.cancel()
        self._running.clear()

    def is_pending(self, key: Hashable) -> bool:
        task = self._waiting.get(key)
        return task is not None and not task.done()

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._waiting.values() if not task.done())

    async def wait_idle(self) -> None:
        """Wait until no run is waiting or in progress."""
        while True:
            tasks = [t for t in (*self._waiting.values(), *self._running) if not t.done()]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
