"""
Signal Simulation Engine
========================

This module provides the engine that runs the IoT signal pipeline and
hands finished display frames to a presentation layer.

Each sampling tick performs one complete unit of work:

    [Sampler] → reading → [Encoder] → encoded signal → [DisplayFrame] → listeners

Only the active mode is sampled. A stage-highlight cycle runs alongside,
independent of the mode and of sampling.

Every engine owns its own mode, random generator, timers and listeners,
so several engines can run side by side without interfering.

Usage:
    scheduler = VirtualClockScheduler()
    engine = SignalSimulationEngine(scheduler=scheduler, seed=42)
    engine.on_frame(lambda frame: print(frame.sensor_value_text))
    engine.start()              # immediate frame
    scheduler.advance(3000)     # one more frame
    engine.switch_mode("digital")
    engine.stop()
"""

import logging
import numpy as np
from typing import Callable, List, Optional, Union

from ..configuration.simulation_configuration import SimulationConfiguration
from ..control.mode_controller import ModeController
from ..encoder.signal_encoder import SignalEncoder
from ..presentation.display_frame import DisplayFrame, build_display_frame
from ..scheduling.asyncio_scheduler import AsyncioScheduler
from ..scheduling.pipeline_scheduler import PipelineScheduler
from ..scheduling.repeating_scheduler import RepeatingScheduler
from ..scheduling.stage_pointer import StagePointer
from ..scheduling.timer_registry import TimerRegistry
from ..signals.sensor_mode import SensorMode
from ..signals.sensor_sampler import SensorSampler

logger = logging.getLogger(__name__)

FrameListener = Callable[[DisplayFrame], None]
StageListener = Callable[[StagePointer], None]


class SignalSimulationEngine:
    """
    Runs the sampling and stage cycles and publishes their results.

    Attributes:
        configuration: Validated simulation parameters.
        scheduler: Timer implementation driving both cycles.
        timer_registry: Every timer the engine has running.
        mode_controller: Holds the active sensor mode.
        sampler: Generates raw readings.
        encoder: Converts readings to encoded signals.
        pipeline_scheduler: Owns the two periodic cycles.
        last_frame: Most recent frame emitted, or None.
        frame_count: Number of frames emitted so far.
    """

    def __init__(
        self,
        configuration: Optional[SimulationConfiguration] = None,
        scheduler: Optional[RepeatingScheduler] = None,
        random_generator: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        time_source: Optional[Callable[[], float]] = None,
        initial_mode: Union[SensorMode, str] = SensorMode.ANALOG
    ) -> None:
        """
        Initialize the engine.

        Args:
            configuration: Simulation parameters. Defaults to
                SimulationConfiguration().
            scheduler: Timer implementation. Defaults to an
                AsyncioScheduler on the running event loop.
            random_generator: numpy Generator used for sampling.
            seed: Seed for a new generator when none is injected.
            time_source: Returns Unix time in seconds, used for payload
                timestamps. Defaults to time.time.
            initial_mode: Mode active before any switch.
        """
        self.configuration: SimulationConfiguration = (
            configuration if configuration is not None else SimulationConfiguration()
        )
        self.scheduler: RepeatingScheduler = (
            scheduler if scheduler is not None else AsyncioScheduler()
        )
        self.timer_registry: TimerRegistry = TimerRegistry()

        # ===== PIPELINE COMPONENTS =====
        self.mode_controller: ModeController = ModeController(initial_mode)
        self.sampler: SensorSampler = SensorSampler(
            self.configuration,
            random_generator=random_generator,
            seed=seed
        )
        self.encoder: SignalEncoder = SignalEncoder(
            self.configuration,
            time_source=time_source
        )
        self.pipeline_scheduler: PipelineScheduler = PipelineScheduler(
            configuration=self.configuration,
            scheduler=self.scheduler,
            timer_registry=self.timer_registry,
            on_sampling_tick=self._run_sampling_tick,
            on_stage_tick=self._publish_stage
        )

        self._frame_listeners: List[FrameListener] = []
        self._stage_listeners: List[StageListener] = []
        self.last_frame: Optional[DisplayFrame] = None
        self.frame_count: int = 0

        self.mode_controller.add_transition_listener(self._on_mode_transition)

    # ----------------------------
    # State
    # ----------------------------

    @property
    def current_mode(self) -> SensorMode:
        return self.mode_controller.current_mode

    @property
    def is_running(self) -> bool:
        return self.pipeline_scheduler.is_running

    @property
    def stage_pointer(self) -> StagePointer:
        return self.pipeline_scheduler.get_stage_pointer()

    # ----------------------------
    # Subscriptions
    # ----------------------------

    def on_frame(self, callback: FrameListener) -> Callable[[], None]:
        """
        Subscribe to display frames.

        Returns:
            Function that removes the subscription.
        """
        self._frame_listeners.append(callback)
        return lambda: self._remove_listener(self._frame_listeners, callback)

    def on_stage_advance(self, callback: StageListener) -> Callable[[], None]:
        """
        Subscribe to stage pointer changes.

        Returns:
            Function that removes the subscription.
        """
        self._stage_listeners.append(callback)
        return lambda: self._remove_listener(self._stage_listeners, callback)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> None:
        """Start both cycles with an immediate tick. No-op when running."""
        if self.is_running:
            return

        logger.info("Starting signal pipeline in %s mode", self.current_mode.value)
        self.pipeline_scheduler.start()

    def stop(self) -> None:
        """Cancel both cycles. No-op when already stopped."""
        if self.pipeline_scheduler.stop():
            logger.info("Signal pipeline stopped")

    def suspend(self) -> None:
        """Pause updates while the host is inactive."""
        if self.is_running:
            logger.info("Host inactive - pausing updates")
        self.stop()

    def resume(self) -> None:
        """Resume updates with a fresh immediate tick of both cycles."""
        if not self.is_running:
            logger.info("Host active - resuming updates")
        self.start()

    # ----------------------------
    # Mode
    # ----------------------------

    def switch_mode(self, mode: Union[SensorMode, str]) -> None:
        """
        Make mode active and publish a fresh frame for it.

        Switching to the active mode does nothing: no frame is emitted
        and the sampling cadence is not reset.
        """
        self.mode_controller.switch_to(mode)

    def _on_mode_transition(self, previous_mode: SensorMode, new_mode: SensorMode) -> None:
        logger.info("Switching mode: %s -> %s", previous_mode.value, new_mode.value)

        # Running: the restarted cycle ticks immediately
        if not self.pipeline_scheduler.restart_sampling():
            self.refresh()

    # ----------------------------
    # Ticks
    # ----------------------------

    def refresh(self) -> DisplayFrame:
        """Sample, encode and publish one frame for the active mode."""
        mode: SensorMode = self.current_mode

        reading = self.sampler.sample(mode)
        signal = self.encoder.encode(mode, reading)
        frame: DisplayFrame = build_display_frame(signal)

        self.last_frame = frame
        self.frame_count += 1
        logger.debug("Frame %d (%s): %s", self.frame_count, mode.value, frame.sensor_value_text)

        for listener in list(self._frame_listeners):
            # A listener switched modes; the newer frame was already published
            if frame.mode is not self.current_mode:
                break
            listener(frame)
        return frame

    def _run_sampling_tick(self) -> None:
        self.refresh()

    def _publish_stage(self, pointer: StagePointer) -> None:
        logger.debug("Stage %d/%d: %s", pointer.index + 1, pointer.stage_count, pointer.name)
        for listener in list(self._stage_listeners):
            listener(pointer)

    @staticmethod
    def _remove_listener(listeners: list, callback: Callable) -> None:
        if callback in listeners:
            listeners.remove(callback)
