"""
Presentation Module
===================

Display frames built from encoded signals, and a console renderer.
"""

from .display_frame import DisplayFrame, build_display_frame
from .console_presenter import ConsolePresenter

__all__ = ["DisplayFrame", "build_display_frame", "ConsolePresenter"]
