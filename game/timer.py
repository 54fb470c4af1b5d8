"""Cancellable periodic task driving the game ticks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class Timer(Protocol):
    """Schedules a callback every `interval_ms` until cancelled.

    Scheduling replaces any outstanding schedule, so at most one
    callback chain is ever pending.
    """

    @property
    def active(self) -> bool: ...

    def schedule(self, interval_ms: int, callback: Callable[[], object]) -> None: ...

    def cancel(self) -> None: ...


class PeriodicTask:
    """asyncio implementation of `Timer`.

    Each schedule gets a generation number; a loop whose generation is
    stale exits without calling back, even if it was already awake when
    it got replaced. Rescheduling from inside the callback is allowed.
    """

    def __init__(self):
        self._task: asyncio.Task | None = None
        self._generation = 0
        self.interval_ms: int | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, interval_ms: int, callback: Callable[[], object]) -> None:
        """Cancel any running schedule and start calling `callback` every `interval_ms`.

        Must be called with a running event loop.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self.cancel()
        self.interval_ms = interval_ms
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(self._generation, interval_ms / 1000.0, callback))

    def cancel(self) -> None:
        self._generation += 1
        task, self._task = self._task, None
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # A loop cancelling itself from its own callback exits on the generation check
        if task is not current:
            task.cancel()

    async def _run(self, generation: int, delay: float, callback: Callable[[], object]) -> None:
        try:
            while generation == self._generation:
                await asyncio.sleep(delay)
                if generation != self._generation:
                    return
                callback()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Tick callback failed, stopping timer")
