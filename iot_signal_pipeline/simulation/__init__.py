"""
Simulation Module
=================

This module provides the engine that runs the signal pipeline, and the
offline runner that drives it on a virtual clock.
"""

from .signal_simulation_engine import SignalSimulationEngine
from .simulation_runner import ModeSwitch, SimulationResults, SimulationRunner

__all__ = ["SignalSimulationEngine", "ModeSwitch", "SimulationResults", "SimulationRunner"]
