"""
Visualization Module
====================

This module provides plotting functions for analyzing the frame history
of a signal pipeline simulation.
"""

from .pipeline_plotter import PipelinePlotter

__all__ = ["PipelinePlotter"]
