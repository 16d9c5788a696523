import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from iot_signal_pipeline.simulation import ModeSwitch, SimulationRunner
from iot_signal_pipeline.visualization import PipelinePlotter


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def mixed_results():
    return SimulationRunner(seed=4).run(
        duration_ms=18000,
        mode_switches=[ModeSwitch(9000, "digital")],
        verbose=False
    )


def test_plot_results_saves_every_chain(mixed_results, tmp_path):
    prefix = str(tmp_path / "run")
    figures = PipelinePlotter.plot_results(mixed_results, save_path_prefix=prefix, show=False)

    assert len(figures) == 3
    for name in ("analog", "digital", "stages"):
        assert (tmp_path / f"run_{name}.png").exists()


def test_plot_results_skips_missing_chain(tmp_path):
    results = SimulationRunner(seed=4).run(duration_ms=6000, verbose=False)
    figures = PipelinePlotter.plot_results(results, show=False)
    assert len(figures) == 2


def test_analog_plot_has_three_panels(mixed_results):
    fig = PipelinePlotter.plot_analog_history(
        mixed_results.frames,
        mixed_results.frame_times_ms,
        voltage_reference=3.3,
        adc_max=4095,
        show=False
    )
    assert len(fig.axes) == 3


def test_plots_reject_empty_history():
    with pytest.raises(ValueError):
        PipelinePlotter.plot_analog_history([], [], 3.3, 4095, show=False)
    with pytest.raises(ValueError):
        PipelinePlotter.plot_digital_history([], [], show=False)
    with pytest.raises(ValueError):
        PipelinePlotter.plot_stage_history([], 1500, show=False)


def test_headless_plots_do_not_accumulate_open_figures(mixed_results):
    for _ in range(3):
        figures = PipelinePlotter.plot_results(mixed_results, show=False)
        assert len(figures) == 3

    assert plt.get_fignums() == []
    assert len(figures[0].axes) == 3
