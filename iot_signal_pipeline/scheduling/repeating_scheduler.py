"""
Repeating Scheduler Port
========================

This module defines the abstraction the pipeline uses to run periodic
work: "call this every N milliseconds and give me a handle to stop it".

Implementations:
- VirtualClockScheduler: time advances only when told to (tests, offline runs)
- AsyncioScheduler: wall-clock time on an asyncio event loop

The pipeline never touches real timers directly, so it runs identically
against either implementation.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional


TimerCallback = Callable[[], None]


class TimerHandle:
    """
    Cancelable handle for one repeating timer.

    Cancelling is idempotent: cancelling an already cancelled handle does
    nothing.

    Attributes:
        interval_ms: Period of the timer.
        callback: Work executed on each firing.
    """

    def __init__(
        self,
        interval_ms: float,
        callback: TimerCallback,
        on_cancel: Optional[Callable[["TimerHandle"], None]] = None
    ) -> None:
        """
        Initialize the handle.

        Args:
            interval_ms: Period of the timer in milliseconds.
            callback: Function called on each firing.
            on_cancel: Hook the owning scheduler uses to release its
                resources. Called at most once.
        """
        self.interval_ms: float = interval_ms
        self.callback: TimerCallback = callback
        self._on_cancel: Optional[Callable[["TimerHandle"], None]] = on_cancel
        self._cancelled: bool = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True

        if self._on_cancel is not None:
            self._on_cancel(self)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"TimerHandle(interval_ms={self.interval_ms}, {state})"


class RepeatingScheduler(ABC):
    """Abstract base class for schedulers of periodic callbacks."""

    @abstractmethod
    def schedule_repeating(
        self,
        interval_ms: float,
        callback: TimerCallback
    ) -> TimerHandle:
        """
        Call callback every interval_ms, first firing one interval from now.

        Returns:
            TimerHandle that stops the timer when cancelled.
        """
        pass

    @abstractmethod
    def now_ms(self) -> float:
        """Return the scheduler's current time in milliseconds."""
        pass


def validate_interval(interval_ms: float) -> None:
    """Reject non-positive periods, which would fire forever."""
    if interval_ms <= 0:
        raise ValueError(
            f"Timer interval must be positive. Received: {interval_ms} ms"
        )
