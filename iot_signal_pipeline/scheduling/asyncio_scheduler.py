"""
Asyncio Scheduler
=================

Runs repeating timers in real time on an asyncio event loop.

Each firing re-arms the next one with loop.call_at() relative to the
previous due time, so the period does not drift with callback duration.
Callbacks run on the loop thread, one at a time.
"""

import asyncio
from typing import Dict, Optional

from .repeating_scheduler import (
    RepeatingScheduler,
    TimerCallback,
    TimerHandle,
    validate_interval,
)


class AsyncioScheduler(RepeatingScheduler):
    """
    Wall-clock scheduler backed by an asyncio event loop.

    Attributes:
        loop: Loop to schedule on. When None, the running loop is used,
            so the scheduler must then be used from inside a coroutine.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.loop: Optional[asyncio.AbstractEventLoop] = loop
        self._pending: Dict[TimerHandle, asyncio.TimerHandle] = {}

    def now_ms(self) -> float:
        return self._resolve_loop().time() * 1000.0

    def schedule_repeating(
        self,
        interval_ms: float,
        callback: TimerCallback
    ) -> TimerHandle:
        validate_interval(interval_ms)

        loop = self._resolve_loop()
        handle = TimerHandle(interval_ms, callback, on_cancel=self._release)
        self._arm(loop, handle, loop.time() + interval_ms / 1000.0)
        return handle

    def get_pending_timer_count(self) -> int:
        return len(self._pending)

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self.loop is None:
            self.loop = asyncio.get_running_loop()
        return self.loop

    def _arm(
        self,
        loop: asyncio.AbstractEventLoop,
        handle: TimerHandle,
        due_time: float
    ) -> None:
        self._pending[handle] = loop.call_at(due_time, self._fire, loop, handle, due_time)

    def _fire(
        self,
        loop: asyncio.AbstractEventLoop,
        handle: TimerHandle,
        due_time: float
    ) -> None:
        self._pending.pop(handle, None)
        if handle.cancelled:
            return

        self._arm(loop, handle, due_time + handle.interval_ms / 1000.0)
        handle.callback()

    def _release(self, handle: TimerHandle) -> None:
        pending: Optional[asyncio.TimerHandle] = self._pending.pop(handle, None)
        if pending is not None:
            pending.cancel()
