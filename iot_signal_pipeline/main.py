"""
IoT Signal Pipeline Simulation - Main Entry Point
=================================================

Command line front end for the signal pipeline simulation.

Two ways to run:
1. Offline (default): simulate a time span on a virtual clock, then print
   a summary and optionally plot the frame history.
2. Live (--live): run in real time on an asyncio event loop and print
   every frame and stage change as it happens.

Usage:
    python -m iot_signal_pipeline.main --duration-s 30 --seed 7
    python -m iot_signal_pipeline.main --switch-at 15:digital --plot
    python -m iot_signal_pipeline.main --live --duration-s 12

Or import and use programmatically:
    from iot_signal_pipeline.main import run_offline_simulation
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from .configuration.simulation_configuration import (
    ConfigurationError,
    SimulationConfiguration,
)
from .presentation.console_presenter import ConsolePresenter
from .scheduling.asyncio_scheduler import AsyncioScheduler
from .signals.sensor_mode import SensorMode
from .simulation.signal_simulation_engine import SignalSimulationEngine
from .simulation.simulation_runner import ModeSwitch, SimulationResults, SimulationRunner

logger = logging.getLogger(__name__)


# ============================================================================
# SIMULATION FUNCTIONS
# ============================================================================

def run_offline_simulation(
    configuration: SimulationConfiguration,
    duration_s: float,
    initial_mode: SensorMode = SensorMode.ANALOG,
    mode_switches: Sequence[ModeSwitch] = (),
    seed: Optional[int] = None,
    show_frames: bool = False,
    plot_results: bool = False,
    save_plot_prefix: Optional[str] = None,
    verbose: bool = True
) -> SimulationResults:
    """
    Simulate duration_s seconds on a virtual clock.

    Args:
        configuration: Simulation parameters.
        duration_s: Simulated time span in seconds.
        initial_mode: Mode active at time 0.
        mode_switches: Scheduled mode changes.
        seed: Random seed for a reproducible run.
        show_frames: If True, print every frame after the run.
        plot_results: If True, display plots of the frame history.
        save_plot_prefix: If provided, save the plots with this prefix.
        verbose: If True, print progress and the summary.

    Returns:
        SimulationResults of the run.
    """
    runner = SimulationRunner(configuration, seed=seed)
    results = runner.run(
        duration_ms=duration_s * 1000.0,
        initial_mode=initial_mode,
        mode_switches=mode_switches,
        verbose=verbose
    )

    if show_frames:
        presenter = ConsolePresenter(show_stages=False)
        for time_ms, frame in zip(results.frame_times_ms, results.frames):
            print(f"\nt = {time_ms / 1000:.1f} s")
            presenter.render(frame)

    if verbose:
        results.print_summary()

    if plot_results or save_plot_prefix:
        # Imported here so headless runs never load matplotlib
        from .visualization.pipeline_plotter import PipelinePlotter

        PipelinePlotter.plot_results(
            results,
            save_path_prefix=save_plot_prefix,
            show=plot_results
        )

    return results


async def run_live_simulation(
    configuration: SimulationConfiguration,
    duration_s: float,
    initial_mode: SensorMode = SensorMode.ANALOG,
    mode_switches: Sequence[ModeSwitch] = (),
    seed: Optional[int] = None,
    show_stages: bool = True
) -> SignalSimulationEngine:
    """
    Run the engine in real time and print frames as they are produced.

    Args:
        configuration: Simulation parameters.
        duration_s: Wall-clock run time in seconds.
        initial_mode: Mode active at start.
        mode_switches: Mode changes, timed from the start.
        seed: Random seed.
        show_stages: If True, print stage pointer changes too.

    Returns:
        The (stopped) engine.
    """
    loop = asyncio.get_running_loop()
    presenter = ConsolePresenter(show_stages=show_stages)

    engine = SignalSimulationEngine(
        configuration=configuration,
        scheduler=AsyncioScheduler(loop),
        seed=seed,
        initial_mode=initial_mode
    )
    engine.on_frame(presenter.render)
    engine.on_stage_advance(presenter.render_stage)

    switch_timers: List[asyncio.TimerHandle] = [
        loop.call_later(switch.time_ms / 1000.0, engine.switch_mode, switch.mode)
        for switch in mode_switches
    ]

    engine.start()
    try:
        await asyncio.sleep(duration_s)
    finally:
        for timer in switch_timers:
            timer.cancel()
        engine.stop()

    return engine


# ============================================================================
# COMMAND LINE
# ============================================================================

def parse_mode_switch(text: str) -> ModeSwitch:
    """
    Parse a "<seconds>:<mode>" argument, e.g. "15:digital".

    Raises:
        argparse.ArgumentTypeError: If the text is malformed.
    """
    time_text, separator, mode_text = text.partition(":")
    if not separator:
        raise argparse.ArgumentTypeError(
            f"Expected <seconds>:<mode>, got {text!r}"
        )

    try:
        return ModeSwitch(time_ms=float(time_text) * 1000.0, mode=SensorMode.coerce(mode_text))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='IoT sensor signal pipeline simulation (sampling, quantization, encoding)'
    )
    parser.add_argument(
        '--mode',
        type=str,
        choices=[mode.value for mode in SensorMode],
        default=SensorMode.ANALOG.value,
        help='Initial sensor mode (default: analog)'
    )
    parser.add_argument(
        '--duration-s',
        type=float,
        default=30.0,
        help='Simulated (or, with --live, wall-clock) duration in seconds (default: 30)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for a reproducible run'
    )
    parser.add_argument(
        '--switch-at',
        type=parse_mode_switch,
        action='append',
        default=[],
        metavar='SECONDS:MODE',
        help='Switch mode at the given time, e.g. 15:digital (repeatable)'
    )
    parser.add_argument(
        '--adc-bits',
        type=int,
        default=12,
        help='ADC resolution in bits (default: 12)'
    )
    parser.add_argument(
        '--detection-chance',
        type=float,
        default=0.6,
        help='Probability of motion per digital tick (default: 0.6)'
    )
    parser.add_argument(
        '--update-interval-ms',
        type=int,
        default=3000,
        help='Sampling period in milliseconds (default: 3000)'
    )
    parser.add_argument(
        '--live',
        action='store_true',
        help='Run in real time and print frames as they arrive'
    )
    parser.add_argument(
        '--show-frames',
        action='store_true',
        help='Print every frame of an offline run'
    )
    parser.add_argument(
        '--plot',
        action='store_true',
        help='Display plots of the frame history (offline only)'
    )
    parser.add_argument(
        '--save-plot',
        type=str,
        default=None,
        metavar='PREFIX',
        help='Save plots as PREFIX_analog.png, PREFIX_digital.png, PREFIX_stages.png'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Only print warnings and errors'
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the command line tool. Returns the exit status."""
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        configuration = SimulationConfiguration(
            update_interval_ms=args.update_interval_ms,
            adc_bits=args.adc_bits,
            detection_chance=args.detection_chance
        )
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    initial_mode = SensorMode.coerce(args.mode)

    if args.live:
        try:
            asyncio.run(run_live_simulation(
                configuration,
                duration_s=args.duration_s,
                initial_mode=initial_mode,
                mode_switches=args.switch_at,
                seed=args.seed
            ))
        except KeyboardInterrupt:
            logger.info("Interrupted")
        return 0

    try:
        run_offline_simulation(
            configuration,
            duration_s=args.duration_s,
            initial_mode=initial_mode,
            mode_switches=args.switch_at,
            seed=args.seed,
            show_frames=args.show_frames,
            plot_results=args.plot,
            save_plot_prefix=args.save_plot,
            verbose=not args.quiet
        )
    except ValueError as e:
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
