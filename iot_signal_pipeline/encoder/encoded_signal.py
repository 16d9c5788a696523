"""
Encoded Signal
==============

Immutable results of running one reading through the encoding pipeline.

Analog chain:   temperature → voltage → ADC code → bit string → payload
Digital chain:  detected    → logic level → voltage → bit → status label
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from ..signals.sensor_mode import SensorMode


class LogicLevel(str, Enum):
    """Electrical state of a digital sensor output."""

    HIGH = "HIGH"
    LOW = "LOW"


@dataclass(frozen=True)
class AnalogPayload:
    """
    Structured record transmitted for an analog sample.

    Attributes:
        temperature: Temperature rounded to one decimal.
        timestamp_seconds: Unix time of the sample, whole seconds.
    """
    temperature: float
    timestamp_seconds: int

    def to_dict(self) -> Dict[str, Any]:
        """Return the payload with the short keys used on the wire."""
        return {"temp": self.temperature, "ts": self.timestamp_seconds}


@dataclass(frozen=True)
class AnalogEncodedSignal:
    """
    Output of the analog encoding chain.

    Attributes:
        temperature_celsius: Raw reading the signal was derived from.
        voltage: Sensor output voltage (V).
        code: ADC quantization code.
        bits: Code as a zero-padded binary string.
        payload: Record sent to the application.
    """
    temperature_celsius: float
    voltage: float
    code: int
    bits: str
    payload: AnalogPayload

    @property
    def mode(self) -> SensorMode:
        return SensorMode.ANALOG


@dataclass(frozen=True)
class DigitalEncodedSignal:
    """
    Output of the digital encoding chain.

    Attributes:
        detected: Raw reading the signal was derived from.
        logic_level: HIGH when motion was detected.
        voltage: V_ref for HIGH, 0 V for LOW.
        bit: '1' or '0'.
        status_label: "Motion" or "None".
    """
    detected: bool
    logic_level: LogicLevel
    voltage: float
    bit: str
    status_label: str

    @property
    def mode(self) -> SensorMode:
        return SensorMode.DIGITAL


EncodedSignal = Union[AnalogEncodedSignal, DigitalEncodedSignal]
