"""
Control Module
==============

State machine for the active sensor mode.
"""

from .mode_controller import ModeController

__all__ = ["ModeController"]
