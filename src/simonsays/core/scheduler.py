"""Timed, sequential delivery of announced secrets."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Sequence

import structlog

LOGGER = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[object]]


class AnnouncementScheduler:
    """Announce a sequence one element at a time with fixed pacing.

    The pacing delay elapses before every announcement and once more after
    the last one, then ``on_complete`` is called. A scheduler owns at most one
    pending task; :meth:`cancel` stops it so nothing else is delivered.

    Args:
        pacing_seconds: Delay before each announcement and before completion
        sleep: Coroutine function used for the delay (``asyncio.sleep`` by default)
    """

    def __init__(self, pacing_seconds: float, *, sleep: Optional[SleepFunc] = None) -> None:
        self.pacing_seconds = pacing_seconds
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def task(self) -> Optional[asyncio.Task[None]]:
        return self._task

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(
        self,
        sequence: Sequence[int],
        announce: Callable[[int], None],
        on_complete: Callable[[], None],
    ) -> asyncio.Task[None]:
        """Schedule the announcement of ``sequence`` on the running event loop.

        ``on_complete`` may start the next announcement while its own task is
        still finishing.
        """

        loop = asyncio.get_running_loop()
        if self.pending and self._task is not asyncio.current_task(loop):
            raise RuntimeError("An announcement is already in progress")

        values = tuple(sequence)
        LOGGER.debug("announcement.start", length=len(values), pacing=self.pacing_seconds)
        self._task = loop.create_task(self._deliver(values, announce, on_complete))
        return self._task

    def cancel(self) -> None:
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            LOGGER.debug("announcement.cancelled")

    async def _deliver(
        self,
        values: Sequence[int],
        announce: Callable[[int], None],
        on_complete: Callable[[], None],
    ) -> None:
        for value in values:
            await self._sleep(self.pacing_seconds)
            announce(value)
        await self._sleep(self.pacing_seconds)
        on_complete()
