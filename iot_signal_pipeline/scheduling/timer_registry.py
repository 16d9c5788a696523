"""
Timer Registry
==============

Tracks every active timer of an engine under a name, so all of them can
be cancelled individually or together.
"""

from typing import Dict, List, Optional

from .repeating_scheduler import TimerHandle


class TimerRegistry:
    """
    Named collection of timer handles.

    Registering a handle under a name that is already taken cancels the
    previous handle first, so a name never leaks a running timer.
    Cancelling an unknown or already cancelled name is a no-op.
    """

    def __init__(self) -> None:
        self._handles: Dict[str, TimerHandle] = {}

    def register(self, name: str, handle: TimerHandle) -> TimerHandle:
        """Store a handle under name, replacing (and cancelling) any previous one."""
        self.cancel(name)
        self._handles[name] = handle
        return handle

    def cancel(self, name: str) -> bool:
        """
        Cancel and forget the timer registered under name.

        Returns:
            True if an active timer was cancelled.
        """
        handle: Optional[TimerHandle] = self._handles.pop(name, None)
        if handle is None or handle.cancelled:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every registered timer. Returns the number cancelled."""
        return sum(self.cancel(name) for name in list(self._handles))

    def get(self, name: str) -> Optional[TimerHandle]:
        return self._handles.get(name)

    def is_active(self, name: str) -> bool:
        handle = self._handles.get(name)
        return handle is not None and not handle.cancelled

    def get_active_names(self) -> List[str]:
        """Return the names of timers that are still running."""
        return [name for name, handle in self._handles.items() if not handle.cancelled]

    def __len__(self) -> int:
        return len(self.get_active_names())
