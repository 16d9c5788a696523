"""
IoT Signal Pipeline Simulation Package
======================================

This package simulates, for teaching purposes, how readings from two
classes of IoT sensors travel through the signal chain:

- Analog temperature sensor: sampling → voltage → ADC code → binary → payload
- Digital PIR motion sensor: detection → logic level → bit

The engine produces the exact values a display would show at every
stage, on a schedule driven by an injectable clock and random source.

Package Structure:
- configuration/: Simulation constants and their validation
- signals/: Sensor modes, raw readings and the sampler
- encoder/: ADC quantizer and signal encoder
- control/: Active-mode state machine
- scheduling/: Repeating timers, timer registry and pipeline cycles
- presentation/: Display frames and a console renderer
- simulation/: The engine and the offline simulation runner
- metrics/: Quantization and detection metrics
- visualization/: Plotting tools
"""

from .configuration.simulation_configuration import ConfigurationError, SimulationConfiguration
from .signals.sensor_mode import SensorMode
from .simulation.signal_simulation_engine import SignalSimulationEngine

__version__ = "1.0.0"

__all__ = ["ConfigurationError", "SimulationConfiguration", "SensorMode", "SignalSimulationEngine"]
