import math

import numpy as np
import pytest

from iot_signal_pipeline.encoder import SignalEncoder
from iot_signal_pipeline.metrics import (
    compute_analog_frame_statistics,
    compute_detection_rate,
    compute_effective_number_of_bits,
    compute_ideal_signal_to_quantization_noise_ratio_db,
    compute_least_significant_bit_volts,
    compute_quantization_error_volts,
    compute_signal_to_quantization_noise_ratio_db,
)
from iot_signal_pipeline.presentation import build_display_frame
from iot_signal_pipeline.signals import AnalogReading, DigitalReading


@pytest.fixture
def encoder(configuration):
    return SignalEncoder(configuration, time_source=lambda: 0.0)


def test_lsb_and_quantization_error():
    step = compute_least_significant_bit_volts(12, 3.3)
    assert step == pytest.approx(3.3 / 4095)

    error = compute_quantization_error_volts(2.25, 2792, 12, 3.3)
    assert 0.0 <= error < step


def test_ideal_sqnr_and_enob_are_inverse():
    sqnr = compute_ideal_signal_to_quantization_noise_ratio_db(12)
    assert sqnr == pytest.approx(74.0)
    assert compute_effective_number_of_bits(sqnr) == pytest.approx(12.0)


def test_invalid_bit_width():
    with pytest.raises(ValueError):
        compute_least_significant_bit_volts(0, 3.3)
    with pytest.raises(ValueError):
        compute_ideal_signal_to_quantization_noise_ratio_db(0)


def test_measured_sqnr():
    voltages = np.array([1.0, 2.0, 3.0])
    assert compute_signal_to_quantization_noise_ratio_db(voltages, voltages) == math.inf

    noisy = voltages - 0.01
    expected = 10 * np.log10(np.mean(voltages ** 2) / 0.01 ** 2)
    assert compute_signal_to_quantization_noise_ratio_db(voltages, noisy) == pytest.approx(expected)

    with pytest.raises(ValueError):
        compute_signal_to_quantization_noise_ratio_db(voltages, voltages[:2])


def test_detection_rate(encoder):
    frames = [
        build_display_frame(encoder.encode_digital(DigitalReading(detected)))
        for detected in (True, False, True, True)
    ]
    frames.append(build_display_frame(encoder.encode_analog(AnalogReading(21.0))))

    assert compute_detection_rate(frames) == pytest.approx(0.75)
    assert math.isnan(compute_detection_rate(frames[-1:]))


def test_analog_frame_statistics(encoder):
    frames = [
        build_display_frame(encoder.encode_analog(AnalogReading(t)))
        for t in (20.0, 22.5, 25.0)
    ]
    stats = compute_analog_frame_statistics(frames, bit_width=12, voltage_reference=3.3)

    assert stats["analog_frame_count"] == 3
    assert stats["mean_temperature_celsius"] == pytest.approx(22.5)
    assert stats["min_code"] == frames[0].signal.code
    assert stats["max_code"] == frames[-1].signal.code
    assert stats["max_abs_quantization_error_volts"] < 3.3 / 4095
    assert stats["sqnr_db"] > 60.0


def test_analog_statistics_without_analog_frames(encoder):
    frames = [build_display_frame(encoder.encode_digital(DigitalReading(True)))]
    assert compute_analog_frame_statistics(frames, 12, 3.3) == {"analog_frame_count": 0}
