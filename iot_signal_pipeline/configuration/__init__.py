"""
Configuration Module
====================

Static simulation constants and their validation.
"""

from .simulation_configuration import (
    ConfigurationError,
    DEFAULT_STAGE_NAMES,
    SimulationConfiguration,
)

__all__ = ["ConfigurationError", "DEFAULT_STAGE_NAMES", "SimulationConfiguration"]
