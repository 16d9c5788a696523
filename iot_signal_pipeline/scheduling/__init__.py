"""
Scheduling Module
=================

Periodic timers, their registry and the two cycles of the pipeline.
"""

from .repeating_scheduler import RepeatingScheduler, TimerHandle
from .timer_registry import TimerRegistry
from .virtual_clock_scheduler import VirtualClockScheduler
from .asyncio_scheduler import AsyncioScheduler
from .stage_pointer import StagePointer
from .pipeline_scheduler import SAMPLING_TIMER_NAME, STAGE_TIMER_NAME, PipelineScheduler

__all__ = [
    "RepeatingScheduler",
    "TimerHandle",
    "TimerRegistry",
    "VirtualClockScheduler",
    "AsyncioScheduler",
    "StagePointer",
    "PipelineScheduler",
    "SAMPLING_TIMER_NAME",
    "STAGE_TIMER_NAME",
]
