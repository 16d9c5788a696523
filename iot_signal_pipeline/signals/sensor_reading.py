"""
Sensor Reading
==============

Raw, mode-tagged values produced by the sampler on each tick.

A reading lives for exactly one tick: it is created by the sampler,
consumed by the encoder and then discarded. No history is kept.
"""

from dataclasses import dataclass
from typing import Union

from .sensor_mode import SensorMode


@dataclass(frozen=True)
class AnalogReading:
    """
    Temperature sample from the analog sensor.

    Attributes:
        temperature_celsius: Simulated temperature in °C.
    """
    temperature_celsius: float

    @property
    def mode(self) -> SensorMode:
        return SensorMode.ANALOG


@dataclass(frozen=True)
class DigitalReading:
    """
    Sample from the PIR motion sensor.

    Attributes:
        detected: True when motion was detected on this tick.
    """
    detected: bool

    @property
    def mode(self) -> SensorMode:
        return SensorMode.DIGITAL


SensorReading = Union[AnalogReading, DigitalReading]
