"""
Console Presenter
=================

A text presentation layer: prints each display frame and stage change
to a stream. Subscribe it to an engine with

    engine.on_frame(presenter.render)
    engine.on_stage_advance(presenter.render_stage)
"""

import sys
from typing import Optional, TextIO

from ..scheduling.stage_pointer import StagePointer
from ..signals.sensor_mode import SensorMode
from .display_frame import DisplayFrame


class ConsolePresenter:
    """
    Writes frames as aligned text blocks.

    Attributes:
        stream: Destination of the output (stdout by default).
        show_stages: If False, stage changes are not printed.
    """

    def __init__(self, stream: Optional[TextIO] = None, show_stages: bool = True) -> None:
        self.stream: TextIO = stream if stream is not None else sys.stdout
        self.show_stages: bool = show_stages
        self.frames_rendered: int = 0

    def render(self, frame: DisplayFrame) -> None:
        """Print one display frame."""
        self.frames_rendered += 1

        lines = [
            "-" * 50,
            f"{frame.mode_label} | {frame.sensor_title} ({frame.sensor_description})",
            "-" * 50,
            f"  Sensor Value:     {frame.sensor_value_text}",
            f"  Sensor Voltage:   {frame.sensor_voltage_text}",
            f"  Sensor State:     {frame.sensor_state_text}",
            f"  Processing:       {frame.processing_description}",
        ]

        if frame.mode is SensorMode.ANALOG:
            lines.append(f"  ADC Code:         {frame.code_text}")
            lines.append(f"  Binary:           {frame.bits_text}")
        else:
            lines.append(f"  Bit:              {frame.bits_text}")

        lines.append(f"  Payload:          {frame.payload_text}")
        lines.append(
            f"  Application:      {frame.application_action} -> "
            f"{frame.application_display_text}"
        )

        self.stream.write("\n".join(lines) + "\n")

    def render_stage(self, pointer: StagePointer) -> None:
        """Print the highlighted stage."""
        if not self.show_stages:
            return

        markers = " ".join(
            "[*]" if index == pointer.index else "[ ]"
            for index in range(pointer.stage_count)
        )
        self.stream.write(f"  Stage {markers}  {pointer.name}\n")
