"""
Simulation Runner
=================

This module runs the signal pipeline offline, on a virtual clock, and
collects everything it produced.

The SimulationRunner handles:
1. Building an engine on a VirtualClockScheduler
2. Replaying a schedule of mode switches
3. Collecting display frames and stage pointers
4. Calculating quantization and detection metrics
5. Results aggregation

A run with a fixed seed is fully reproducible: the random generator,
the clock and the payload timestamps are all deterministic.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from ..configuration.simulation_configuration import SimulationConfiguration
from ..metrics.quantization_metrics import (
    compute_analog_frame_statistics,
    compute_detection_rate,
    compute_ideal_signal_to_quantization_noise_ratio_db,
)
from ..presentation.display_frame import DisplayFrame
from ..scheduling.stage_pointer import StagePointer
from ..scheduling.virtual_clock_scheduler import VirtualClockScheduler
from ..signals.sensor_mode import SensorMode
from .signal_simulation_engine import SignalSimulationEngine

# 2023-11-14T22:13:20Z, virtual time 0 of every run
DEFAULT_START_EPOCH_SECONDS: float = 1_700_000_000.0


@dataclass(frozen=True)
class ModeSwitch:
    """
    A scheduled mode change.

    Attributes:
        time_ms: Virtual time of the switch.
        mode: Mode to switch to.
    """
    time_ms: float
    mode: SensorMode

    def __post_init__(self) -> None:
        if self.time_ms < 0:
            raise ValueError(f"Mode switch time must not be negative: {self.time_ms} ms")
        object.__setattr__(self, "mode", SensorMode.coerce(self.mode))


@dataclass
class SimulationResults:
    """
    Container for all simulation results.

    Attributes:
        configuration: The SimulationConfiguration used for this run.
        duration_ms: Simulated time span.
        initial_mode: Mode at virtual time 0.
        frames: Every display frame emitted, in order.
        frame_times_ms: Virtual time of each frame.
        stage_history: Every stage pointer emitted, in order.
        mode_switch_count: Number of real mode transitions.
        analog_statistics: Output of compute_analog_frame_statistics().
        detection_rate: Fraction of digital frames with motion (NaN if none).
        ideal_sqnr_db: Ideal SQNR for the configured resolution.
        simulation_completed: Whether the run finished.
    """
    configuration: SimulationConfiguration
    duration_ms: float
    initial_mode: SensorMode

    frames: List[DisplayFrame] = field(default_factory=list)
    frame_times_ms: List[float] = field(default_factory=list)
    stage_history: List[StagePointer] = field(default_factory=list)

    mode_switch_count: int = 0
    analog_statistics: Dict[str, Any] = field(default_factory=dict)
    detection_rate: float = float("nan")
    ideal_sqnr_db: float = 0.0

    simulation_completed: bool = False

    def get_frames_for_mode(self, mode: Union[SensorMode, str]) -> List[DisplayFrame]:
        """Return the frames emitted while mode was active."""
        mode = SensorMode.coerce(mode)
        return [frame for frame in self.frames if frame.mode is mode]

    def print_summary(self) -> None:
        """
        Print a formatted summary of the simulation results.

        Shows the configuration, the frame counts per mode and the
        quantization and detection metrics.
        """
        config = self.configuration
        analog_frames = self.get_frames_for_mode(SensorMode.ANALOG)
        digital_frames = self.get_frames_for_mode(SensorMode.DIGITAL)

        print("\n" + "=" * 70)
        print("SIMULATION RESULTS SUMMARY")
        print("=" * 70)

        # Configuration section
        print("\n--- Configuration ---")
        print(f"  Duration:                {self.duration_ms / 1000:.1f} s")
        print(f"  Initial Mode:            {self.initial_mode.value}")
        print(f"  Update Interval:         {config.update_interval_ms} ms")
        print(f"  Animation Interval:      {config.animation_interval_ms} ms")
        print(f"  ADC Resolution:          {config.adc_bits} bits "
              f"({config.number_of_quantization_levels} levels, max code {config.adc_max})")
        print(f"  Voltage Reference:       {config.voltage_reference} V")
        print(f"  Temperature Range:       {config.temperature_min_celsius} - "
              f"{config.temperature_max_celsius} °C")
        print(f"  Detection Chance:        {config.detection_chance}")

        # Frames section
        print("\n--- Frames ---")
        print(f"  Total Frames:            {len(self.frames)}")
        print(f"  Analog Frames:           {len(analog_frames)}")
        print(f"  Digital Frames:          {len(digital_frames)}")
        print(f"  Mode Switches:           {self.mode_switch_count}")
        print(f"  Stage Ticks:             {len(self.stage_history)}")

        # Analog section
        stats = self.analog_statistics
        if stats.get("analog_frame_count", 0) > 0:
            print("\n--- Analog / Quantization ---")
            print(f"  Mean Temperature:        {stats['mean_temperature_celsius']:.2f} °C")
            print(f"  Code Range:              {stats['min_code']} - {stats['max_code']}")
            print(f"  Max |Quantization Err|:  "
                  f"{stats['max_abs_quantization_error_volts'] * 1000:.3f} mV")
            print(f"  Measured SQNR:           {stats['sqnr_db']:.1f} dB")
            print(f"  Ideal SQNR:              {self.ideal_sqnr_db:.1f} dB")

        # Digital section
        if digital_frames:
            print("\n--- Digital / Motion ---")
            print(f"  Detection Rate:          {self.detection_rate * 100:.1f}% "
                  f"(expected {config.detection_chance * 100:.1f}%)")

        # Completion status
        print("\n--- Status ---")
        print(f"  Simulation Completed:    {'Yes' if self.simulation_completed else 'No'}")

        print("\n" + "=" * 70)

    def get_metrics_dict(self) -> Dict[str, Any]:
        """
        Return all metrics as a dictionary.

        Useful for programmatic access, logging, or export to files.
        """
        metrics: Dict[str, Any] = {
            "frame_count": len(self.frames),
            "analog_frame_count": len(self.get_frames_for_mode(SensorMode.ANALOG)),
            "digital_frame_count": len(self.get_frames_for_mode(SensorMode.DIGITAL)),
            "stage_tick_count": len(self.stage_history),
            "mode_switch_count": self.mode_switch_count,
            "detection_rate": self.detection_rate,
            "ideal_sqnr_db": self.ideal_sqnr_db,
            "simulation_completed": self.simulation_completed
        }
        metrics.update(self.analog_statistics)
        return metrics


class SimulationRunner:
    """
    Offline orchestrator for the signal pipeline.

    Usage:
        runner = SimulationRunner(SimulationConfiguration(), seed=7)
        results = runner.run(
            duration_ms=30_000,
            mode_switches=[ModeSwitch(15_000, SensorMode.DIGITAL)]
        )
        results.print_summary()

    Attributes:
        configuration: Simulation parameters for every run.
        seed: Seed of the random generator, None for a random run.
        start_epoch_seconds: Unix time at virtual time 0.
    """

    def __init__(
        self,
        configuration: Optional[SimulationConfiguration] = None,
        seed: Optional[int] = None,
        start_epoch_seconds: float = DEFAULT_START_EPOCH_SECONDS
    ) -> None:
        self.configuration: SimulationConfiguration = (
            configuration if configuration is not None else SimulationConfiguration()
        )
        self.seed: Optional[int] = seed
        self.start_epoch_seconds: float = start_epoch_seconds

    def run(
        self,
        duration_ms: float,
        initial_mode: Union[SensorMode, str] = SensorMode.ANALOG,
        mode_switches: Optional[Sequence[ModeSwitch]] = None,
        verbose: bool = True
    ) -> SimulationResults:
        """
        Execute one simulation.

        Args:
            duration_ms: Virtual time to simulate. Ticks due exactly at
                duration_ms are included.
            initial_mode: Mode active at time 0.
            mode_switches: Scheduled mode changes within the run.
            verbose: If True, print progress messages.

        Returns:
            SimulationResults containing all frames and metrics.
        """
        if duration_ms < 0:
            raise ValueError(f"Duration must not be negative: {duration_ms} ms")

        config = self.configuration
        initial_mode = SensorMode.coerce(initial_mode)
        switches: List[ModeSwitch] = sorted(mode_switches or [], key=lambda s: s.time_ms)

        for switch in switches:
            if switch.time_ms > duration_ms:
                raise ValueError(
                    f"Mode switch at {switch.time_ms} ms is after the end of the "
                    f"run ({duration_ms} ms)"
                )

        results = SimulationResults(
            configuration=config,
            duration_ms=duration_ms,
            initial_mode=initial_mode
        )

        if verbose:
            print("\n" + "-" * 50)
            print(f"Running simulation: {duration_ms / 1000:.1f} s, "
                  f"start in {initial_mode.value} mode, {len(switches)} switch(es)")
            print("-" * 50)

        # ===== STEP 1: BUILD ENGINE =====
        if verbose:
            print("  [1/3] Building engine on a virtual clock...")

        scheduler = VirtualClockScheduler()
        engine = SignalSimulationEngine(
            configuration=config,
            scheduler=scheduler,
            random_generator=np.random.default_rng(self.seed),
            time_source=lambda: self.start_epoch_seconds + scheduler.now_ms() / 1000.0,
            initial_mode=initial_mode
        )

        def record_frame(frame: DisplayFrame) -> None:
            results.frames.append(frame)
            results.frame_times_ms.append(scheduler.now_ms())

        engine.on_frame(record_frame)
        engine.on_stage_advance(results.stage_history.append)

        # ===== STEP 2: RUN =====
        if verbose:
            print("  [2/3] Running sampling and stage cycles...")

        engine.start()
        for switch in switches:
            scheduler.run_until(switch.time_ms)
            engine.switch_mode(switch.mode)
        scheduler.run_until(duration_ms)
        engine.stop()

        # ===== STEP 3: METRICS =====
        if verbose:
            print("  [3/3] Calculating metrics...")

        results.mode_switch_count = engine.mode_controller.transition_count
        results.analog_statistics = compute_analog_frame_statistics(
            results.frames,
            bit_width=config.adc_bits,
            voltage_reference=config.voltage_reference
        )
        results.detection_rate = compute_detection_rate(results.frames)
        results.ideal_sqnr_db = compute_ideal_signal_to_quantization_noise_ratio_db(
            config.adc_bits
        )
        results.simulation_completed = True

        if verbose:
            print(f"  Simulation complete! {len(results.frames)} frames, "
                  f"{len(results.stage_history)} stage ticks")

        return results
