"""
Signals Module
==============

This module contains the sensor modes, the raw readings and the sampler
that generates them.
"""

from .sensor_mode import SensorMode
from .sensor_reading import AnalogReading, DigitalReading, SensorReading
from .sensor_sampler import SensorSampler

__all__ = ["SensorMode", "AnalogReading", "DigitalReading", "SensorReading", "SensorSampler"]
