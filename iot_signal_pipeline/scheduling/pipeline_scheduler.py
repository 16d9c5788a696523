"""
Pipeline Scheduler
==================

This module drives the two periodic cycles of the simulation:

1. Sampling cycle (every update_interval_ms)
   Runs one sample → encode → emit unit of work. It fires once
   immediately when started and then periodically. Restarting it (on a
   mode switch) cancels the running timer and starts a fresh cadence.

2. Stage cycle (every animation_interval_ms)
   Moves the highlighted stage forward by one, wrapping after the last
   stage. On start the pointer resets to 0 and is emitted immediately.
   It does not depend on the mode or on the sampling cycle.

Both timers are held in one TimerRegistry, so stop() cancels everything
and can be called any number of times.
"""

from typing import Callable

from ..configuration.simulation_configuration import SimulationConfiguration
from .repeating_scheduler import RepeatingScheduler
from .stage_pointer import StagePointer
from .timer_registry import TimerRegistry

SAMPLING_TIMER_NAME = "sampling"
STAGE_TIMER_NAME = "stage"


class PipelineScheduler:
    """
    Owns the sampling and stage-highlight cycles.

    Attributes:
        configuration: Tick intervals and stage count.
        scheduler: Source of repeating timers.
        timer_registry: Where both timer handles are tracked.
        stage_index: Currently highlighted stage.
        sampling_restart_count: How many times the sampling cadence was
            restarted by a mode switch.
    """

    def __init__(
        self,
        configuration: SimulationConfiguration,
        scheduler: RepeatingScheduler,
        timer_registry: TimerRegistry,
        on_sampling_tick: Callable[[], None],
        on_stage_tick: Callable[[StagePointer], None]
    ) -> None:
        """
        Initialize the pipeline scheduler.

        Args:
            configuration: Simulation parameters.
            scheduler: Timer implementation (virtual or real time).
            timer_registry: Registry that tracks the timer handles.
            on_sampling_tick: Called on every sampling tick.
            on_stage_tick: Called with the new pointer on every stage tick.
        """
        self.configuration: SimulationConfiguration = configuration
        self.scheduler: RepeatingScheduler = scheduler
        self.timer_registry: TimerRegistry = timer_registry

        self._on_sampling_tick: Callable[[], None] = on_sampling_tick
        self._on_stage_tick: Callable[[StagePointer], None] = on_stage_tick

        self.stage_index: int = 0
        self.sampling_restart_count: int = 0
        self._running: bool = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """
        Start both cycles, each with an immediate first tick.

        Returns:
            False if the cycles were already running.
        """
        if self._running:
            return False

        self._running = True
        try:
            self._arm_sampling_timer()
            self._arm_stage_timer()
            self._on_sampling_tick()

            # A frame listener may have stopped us during the first tick
            if self._running:
                self._on_stage_tick(self.get_stage_pointer())
        except BaseException:
            # Never leave one cycle running without the other
            self.stop()
            raise
        return True

    def stop(self) -> bool:
        """
        Cancel both cycles.

        Returns:
            False if nothing was running.
        """
        was_running: bool = self._running
        self._running = False

        self.timer_registry.cancel(SAMPLING_TIMER_NAME)
        self.timer_registry.cancel(STAGE_TIMER_NAME)
        return was_running

    def restart_sampling(self) -> bool:
        """
        Restart the sampling cadence with an immediate tick.

        Returns:
            False (and does nothing) when the scheduler is stopped.
        """
        if not self._running:
            return False

        self.sampling_restart_count += 1
        self._start_sampling_cycle()
        return True

    def get_stage_pointer(self) -> StagePointer:
        """Return the current stage pointer."""
        return StagePointer(
            index=self.stage_index,
            stage_count=self.configuration.stage_count,
            name=self.configuration.get_stage_name(self.stage_index)
        )

    def _start_sampling_cycle(self) -> None:
        self._arm_sampling_timer()
        self._on_sampling_tick()

    def _arm_sampling_timer(self) -> None:
        handle = self.scheduler.schedule_repeating(
            self.configuration.update_interval_ms,
            self._on_sampling_tick
        )
        self.timer_registry.register(SAMPLING_TIMER_NAME, handle)

    def _arm_stage_timer(self) -> None:
        self.stage_index = 0
        handle = self.scheduler.schedule_repeating(
            self.configuration.animation_interval_ms,
            self._advance_stage
        )
        self.timer_registry.register(STAGE_TIMER_NAME, handle)

    def _advance_stage(self) -> None:
        self.stage_index = (self.stage_index + 1) % self.configuration.stage_count
        self._on_stage_tick(self.get_stage_pointer())
