"""
Sensor Mode
===========

The two sensor classes the pipeline can simulate.
"""

from enum import Enum
from typing import Union


class SensorMode(str, Enum):
    """Active sensor branch of the pipeline."""

    ANALOG = "analog"
    DIGITAL = "digital"

    @classmethod
    def coerce(cls, mode: Union["SensorMode", str]) -> "SensorMode":
        """
        Convert a mode name to a SensorMode.

        Raises:
            ValueError: If the value is not "analog" or "digital".
        """
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).lower())
        except ValueError:
            raise ValueError(
                f"Unknown sensor mode: {mode!r}. "
                f"Expected one of: {', '.join(m.value for m in cls)}"
            ) from None
