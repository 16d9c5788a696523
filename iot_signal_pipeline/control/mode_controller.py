"""
Mode Controller
===============

Two-state machine holding the active sensor mode.

    ANALOG  <──switch_to──>  DIGITAL       (initial state: ANALOG)

A switch is instantaneous. Switching to the mode that is already active
is a no-op: listeners are not notified, so nothing is re-rendered and no
timer is reset.
"""

from typing import Callable, List, Union

from ..signals.sensor_mode import SensorMode

TransitionListener = Callable[[SensorMode, SensorMode], None]


class ModeController:
    """
    Holds the active mode and notifies listeners of transitions.

    Attributes:
        transition_count: Number of real transitions performed.
    """

    def __init__(self, initial_mode: Union[SensorMode, str] = SensorMode.ANALOG) -> None:
        self._current_mode: SensorMode = SensorMode.coerce(initial_mode)
        self._listeners: List[TransitionListener] = []
        self.transition_count: int = 0

    @property
    def current_mode(self) -> SensorMode:
        return self._current_mode

    def add_transition_listener(self, listener: TransitionListener) -> None:
        """Register listener(previous_mode, new_mode), called after each transition."""
        self._listeners.append(listener)

    def switch_to(self, mode: Union[SensorMode, str]) -> bool:
        """
        Make mode the active mode.

        Returns:
            True if the mode changed, False if it was already active.

        Raises:
            ValueError: If mode is not a known sensor mode.
        """
        new_mode: SensorMode = SensorMode.coerce(mode)
        if new_mode is self._current_mode:
            return False

        previous_mode: SensorMode = self._current_mode
        self._current_mode = new_mode
        self.transition_count += 1

        for listener in list(self._listeners):
            listener(previous_mode, new_mode)
        return True
