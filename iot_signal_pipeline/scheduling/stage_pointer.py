"""
Stage Pointer
=============

Cyclic index into the ordered pipeline stage markers. It only tells a
display which stage to highlight; it is unrelated to when data is
actually sampled or encoded.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StagePointer:
    """
    Position of the highlighted pipeline stage.

    Attributes:
        index: Highlighted stage, 0 <= index < stage_count.
        stage_count: Number of stage markers.
        name: Display name of the highlighted stage.
    """
    index: int
    stage_count: int
    name: str = ""

    def __post_init__(self) -> None:
        if self.stage_count < 1:
            raise ValueError(f"stage_count must be at least 1. Received: {self.stage_count}")
        if not 0 <= self.index < self.stage_count:
            raise ValueError(
                f"Stage index {self.index} outside [0, {self.stage_count})"
            )

    def next_index(self) -> int:
        """Index after this one, wrapping from the last stage to 0."""
        return (self.index + 1) % self.stage_count
