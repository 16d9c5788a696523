import math

import pytest

from iot_signal_pipeline.signals import SensorMode
from iot_signal_pipeline.simulation import ModeSwitch, SimulationRunner


def test_frames_and_stage_ticks_over_nine_seconds():
    results = SimulationRunner(seed=3).run(duration_ms=9000, verbose=False)

    assert results.frame_times_ms == [0, 3000, 6000, 9000]
    assert len(results.stage_history) == 7
    assert results.simulation_completed
    assert math.isnan(results.detection_rate)
    assert results.analog_statistics["analog_frame_count"] == 4


def test_mode_switch_mid_run():
    results = SimulationRunner(seed=3).run(
        duration_ms=9000,
        mode_switches=[ModeSwitch(4500, "digital")],
        verbose=False
    )

    assert results.frame_times_ms == [0, 3000, 4500, 7500]
    assert [frame.mode for frame in results.frames] == [
        SensorMode.ANALOG, SensorMode.ANALOG, SensorMode.DIGITAL, SensorMode.DIGITAL
    ]
    assert results.mode_switch_count == 1
    assert len(results.get_frames_for_mode("digital")) == 2
    assert 0.0 <= results.detection_rate <= 1.0


def test_payload_timestamps_follow_virtual_clock():
    results = SimulationRunner(seed=3).run(duration_ms=3000, verbose=False)
    timestamps = [frame.signal.payload.timestamp_seconds for frame in results.frames]
    assert timestamps == [1_700_000_000, 1_700_000_003]


def test_switch_after_end_is_rejected():
    with pytest.raises(ValueError):
        SimulationRunner().run(duration_ms=1000, mode_switches=[ModeSwitch(2000, "digital")])


def test_negative_switch_time_is_rejected():
    with pytest.raises(ValueError):
        ModeSwitch(-1, "digital")


def test_seeded_runs_are_reproducible():
    switches = [ModeSwitch(10000, "digital")]
    first = SimulationRunner(seed=11).run(20000, mode_switches=switches, verbose=False)
    second = SimulationRunner(seed=11).run(20000, mode_switches=switches, verbose=False)

    assert [f.get_text_fields() for f in first.frames] == [
        f.get_text_fields() for f in second.frames
    ]


def test_metrics_dict_and_summary(capsys):
    results = SimulationRunner(seed=1).run(
        duration_ms=30000,
        mode_switches=[ModeSwitch(15000, SensorMode.DIGITAL)],
        verbose=True
    )
    metrics = results.get_metrics_dict()

    assert metrics["frame_count"] == len(results.frames)
    assert metrics["analog_frame_count"] + metrics["digital_frame_count"] == metrics["frame_count"]
    assert metrics["ideal_sqnr_db"] == pytest.approx(74.0)
    assert 0 <= metrics["min_code"] <= metrics["max_code"] <= 4095

    results.print_summary()
    output = capsys.readouterr().out
    assert "SIMULATION RESULTS SUMMARY" in output
    assert "[3/3]" in output
