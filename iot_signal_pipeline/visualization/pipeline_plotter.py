"""
Pipeline Plotter
================

This module provides plotting functions for the frame history of a
simulation run.

Plots included:
1. Analog chain over time (temperature, sensor voltage, ADC code)
2. Digital chain over time (logic level as a step plot)
3. Stage pointer over time
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Optional, Sequence, Tuple

from ..encoder.encoded_signal import AnalogEncodedSignal, DigitalEncodedSignal
from ..presentation.display_frame import DisplayFrame
from ..scheduling.stage_pointer import StagePointer
from ..simulation.simulation_runner import SimulationResults


class PipelinePlotter:
    """
    Plotting utilities for signal pipeline simulation results.

    All methods are static to allow easy use without instantiation.
    Each returns the Figure it created. With show=False the figure is
    saved (if requested) and closed in pyplot, so repeated headless calls
    do not accumulate open figures.
    """

    # Default figure size for consistency
    DEFAULT_FIGURE_SIZE: Tuple[int, int] = (12, 9)
    DEFAULT_SINGLE_PLOT_SIZE: Tuple[int, int] = (12, 4)

    @staticmethod
    def plot_analog_history(
        frames: Sequence[DisplayFrame],
        frame_times_ms: Sequence[float],
        voltage_reference: float,
        adc_max: int,
        title_prefix: str = "",
        save_path: Optional[str] = None,
        show: bool = True
    ) -> Figure:
        """
        Plot the three analog stages against time.

        Creates a 3-subplot figure showing:
        1. Sensor temperature (°C)
        2. Sensor output voltage with the ADC reference
        3. ADC code with full scale

        Args:
            frames: Frame history; digital frames are skipped.
            frame_times_ms: Virtual time of each frame.
            voltage_reference: ADC reference, drawn as a limit line.
            adc_max: Full-scale code, drawn as a limit line.
            title_prefix: Optional prefix for the main title.
            save_path: If provided, save figure to this path.
            show: If True, display the figure.
        """
        points = [
            (time_ms, frame.signal)
            for time_ms, frame in zip(frame_times_ms, frames)
            if isinstance(frame.signal, AnalogEncodedSignal)
        ]
        if not points:
            raise ValueError("No analog frames to plot")

        # Convert time to seconds for readability
        time_axis_s: np.ndarray = np.array([time_ms for time_ms, _ in points]) / 1000.0
        temperatures: np.ndarray = np.array([s.temperature_celsius for _, s in points])
        voltages: np.ndarray = np.array([s.voltage for _, s in points])
        codes: np.ndarray = np.array([s.code for _, s in points])

        fig, axes = plt.subplots(3, 1, figsize=PipelinePlotter.DEFAULT_FIGURE_SIZE, sharex=True)
        fig.suptitle(
            f"{title_prefix}Analog Sensor Signal Chain",
            fontsize=14,
            fontweight='bold'
        )

        # ===== SUBPLOT 1: Temperature =====
        axes[0].plot(time_axis_s, temperatures, 'bo-', linewidth=0.8, markersize=4)
        axes[0].set_ylabel('Temperature (°C)', fontsize=10)
        axes[0].set_title('Sampling', fontsize=11)
        axes[0].grid(True, alpha=0.3)

        # ===== SUBPLOT 2: Voltage =====
        axes[1].plot(time_axis_s, voltages, 'go-', linewidth=0.8, markersize=4)
        axes[1].axhline(
            y=voltage_reference, color='r', linestyle='--',
            linewidth=0.8, label=f'V_ref = {voltage_reference} V'
        )
        axes[1].set_ylabel('Voltage (V)', fontsize=10)
        axes[1].set_title('Sensor Output', fontsize=11)
        axes[1].grid(True, alpha=0.3)
        axes[1].legend(loc='upper right', fontsize=9)

        # ===== SUBPLOT 3: ADC code =====
        axes[2].step(time_axis_s, codes, 'm-', linewidth=1.0, where='post')
        axes[2].axhline(
            y=adc_max, color='r', linestyle='--',
            linewidth=0.8, label=f'Full scale = {adc_max}'
        )
        axes[2].set_xlabel('Time (s)', fontsize=10)
        axes[2].set_ylabel('Code', fontsize=10)
        axes[2].set_title('Quantization', fontsize=11)
        axes[2].grid(True, alpha=0.3)
        axes[2].legend(loc='upper right', fontsize=9)

        PipelinePlotter._finish(fig, save_path, show)
        return fig

    @staticmethod
    def plot_digital_history(
        frames: Sequence[DisplayFrame],
        frame_times_ms: Sequence[float],
        title_prefix: str = "",
        save_path: Optional[str] = None,
        show: bool = True
    ) -> Figure:
        """
        Plot the PIR logic level against time.

        Args:
            frames: Frame history; analog frames are skipped.
            frame_times_ms: Virtual time of each frame.
            title_prefix: Optional prefix for the title.
            save_path: If provided, save figure to this path.
            show: If True, display the figure.
        """
        points = [
            (time_ms, frame.signal)
            for time_ms, frame in zip(frame_times_ms, frames)
            if isinstance(frame.signal, DigitalEncodedSignal)
        ]
        if not points:
            raise ValueError("No digital frames to plot")

        time_axis_s: np.ndarray = np.array([time_ms for time_ms, _ in points]) / 1000.0
        bits: np.ndarray = np.array([int(s.bit) for _, s in points])

        fig, ax = plt.subplots(1, 1, figsize=PipelinePlotter.DEFAULT_SINGLE_PLOT_SIZE)

        # Use step plot for binary signal
        ax.step(time_axis_s, bits, 'r-', linewidth=1.0, where='post')
        ax.set_title(f"{title_prefix}PIR Sensor Logic Level", fontsize=12, fontweight='bold')
        ax.set_xlabel('Time (s)', fontsize=10)
        ax.set_ylabel('Logic Level', fontsize=10)
        ax.set_ylim(-0.5, 1.5)
        ax.set_yticks([0, 1])
        ax.set_yticklabels(['LOW', 'HIGH'])
        ax.grid(True, alpha=0.3)

        PipelinePlotter._finish(fig, save_path, show)
        return fig

    @staticmethod
    def plot_stage_history(
        stage_history: Sequence[StagePointer],
        animation_interval_ms: float,
        save_path: Optional[str] = None,
        show: bool = True
    ) -> Figure:
        """
        Plot the highlighted stage index over time.

        Args:
            stage_history: Pointers in emission order, one per interval.
            animation_interval_ms: Stage cycle period.
            save_path: If provided, save figure to this path.
            show: If True, display the figure.
        """
        if not stage_history:
            raise ValueError("No stage pointers to plot")

        time_axis_s: np.ndarray = np.arange(len(stage_history)) * animation_interval_ms / 1000.0
        indices: np.ndarray = np.array([pointer.index for pointer in stage_history])
        stage_count: int = stage_history[0].stage_count

        fig, ax = plt.subplots(1, 1, figsize=PipelinePlotter.DEFAULT_SINGLE_PLOT_SIZE)
        ax.step(time_axis_s, indices, 'c-', linewidth=1.0, where='post')
        ax.set_title("Highlighted Pipeline Stage", fontsize=12, fontweight='bold')
        ax.set_xlabel('Time (s)', fontsize=10)
        ax.set_ylabel('Stage', fontsize=10)
        ax.set_yticks(range(stage_count))

        # Label the ticks with the stage names we have seen
        names = {pointer.index: pointer.name for pointer in stage_history}
        ax.set_yticklabels([names.get(i, str(i)) for i in range(stage_count)])
        ax.grid(True, alpha=0.3)

        PipelinePlotter._finish(fig, save_path, show)
        return fig

    @staticmethod
    def plot_results(
        results: SimulationResults,
        save_path_prefix: Optional[str] = None,
        show: bool = True
    ) -> list:
        """
        Plot every chain present in a run's results.

        Args:
            results: Output of SimulationRunner.run().
            save_path_prefix: If provided, figures are saved as
                <prefix>_analog.png, <prefix>_digital.png, <prefix>_stages.png.
            show: If True, display the figures.

        Returns:
            List of the created figures.
        """
        config = results.configuration
        figures: list = []

        def path_for(name: str) -> Optional[str]:
            return f"{save_path_prefix}_{name}.png" if save_path_prefix else None

        if results.analog_statistics.get("analog_frame_count", 0) > 0:
            figures.append(PipelinePlotter.plot_analog_history(
                results.frames,
                results.frame_times_ms,
                voltage_reference=config.voltage_reference,
                adc_max=config.adc_max,
                save_path=path_for("analog"),
                show=show
            ))

        if not np.isnan(results.detection_rate):
            figures.append(PipelinePlotter.plot_digital_history(
                results.frames,
                results.frame_times_ms,
                save_path=path_for("digital"),
                show=show
            ))

        if results.stage_history:
            figures.append(PipelinePlotter.plot_stage_history(
                results.stage_history,
                animation_interval_ms=config.animation_interval_ms,
                save_path=path_for("stages"),
                show=show
            ))

        return figures

    @staticmethod
    def _finish(fig: Figure, save_path: Optional[str], show: bool) -> None:
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Figure saved to:  {save_path}")

        if show:
            plt.show()
        else:
            # Headless use: release it from pyplot, the Figure object stays usable
            plt.close(fig)
