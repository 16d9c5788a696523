"""
Virtual Clock Scheduler
=======================

A scheduler whose clock only moves when advance() or run_until() is
called. Timers fire synchronously inside those calls, one at a time, in
due-time order; timers due at the same instant fire in the order they
were scheduled.

This makes periodic behavior testable without sleeping:

    scheduler = VirtualClockScheduler()
    handle = scheduler.schedule_repeating(3000, tick)
    scheduler.advance(9000)     # tick() runs 3 times
"""

import heapq
import itertools
from typing import List, Tuple

from .repeating_scheduler import (
    RepeatingScheduler,
    TimerCallback,
    TimerHandle,
    validate_interval,
)


class VirtualClockScheduler(RepeatingScheduler):
    """
    Manually advanced scheduler.

    Attributes:
        current_time_ms: The virtual time.
    """

    def __init__(self, start_time_ms: float = 0.0) -> None:
        self.current_time_ms: float = start_time_ms

        # Min-heap of (due time, scheduling order, handle)
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def now_ms(self) -> float:
        return self.current_time_ms

    def schedule_repeating(
        self,
        interval_ms: float,
        callback: TimerCallback
    ) -> TimerHandle:
        validate_interval(interval_ms)

        handle = TimerHandle(interval_ms, callback)
        self._push(self.current_time_ms + interval_ms, handle)
        return handle

    def advance(self, duration_ms: float) -> None:
        """Move the clock forward by duration_ms, firing every due timer."""
        if duration_ms < 0:
            raise ValueError(f"Cannot move the clock backwards: {duration_ms} ms")
        self.run_until(self.current_time_ms + duration_ms)

    def run_until(self, target_time_ms: float) -> None:
        """Fire every timer due at or before target_time_ms, then stop there."""
        while self._queue:
            due_time_ms, _, handle = self._queue[0]

            if handle.cancelled:
                heapq.heappop(self._queue)
                continue

            if due_time_ms > target_time_ms:
                break

            heapq.heappop(self._queue)
            self.current_time_ms = due_time_ms

            # Re-arm before running, so the callback may cancel its own timer
            self._push(due_time_ms + handle.interval_ms, handle)
            handle.callback()

        self.current_time_ms = max(self.current_time_ms, target_time_ms)

    def get_pending_timer_count(self) -> int:
        """Number of timers that will still fire."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def _push(self, due_time_ms: float, handle: TimerHandle) -> None:
        heapq.heappush(self._queue, (due_time_ms, next(self._sequence), handle))
