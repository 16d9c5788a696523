"""
Quantization Metrics
====================

Figures of merit for the analog-to-digital stage of the pipeline, and
summary statistics over a history of display frames.

LEAST SIGNIFICANT BIT:
======================

For an N-bit converter with reference V_ref the code step is

    LSB = V_ref / (2^N - 1)

Example (12 bits, 3.3 V): LSB ≈ 0.806 mV

The quantization error of one sample is the distance between the sensor
voltage and the level its code represents:

    e = V - code * LSB,   0 <= e < LSB   (floor quantizer, in range)

IDEAL SIGNAL-TO-QUANTIZATION-NOISE RATIO:
=========================================

    SQNR (dB) = 6.02 * N + 1.76

and the inverse relation gives the effective number of bits:

    ENOB = (SNR - 1.76) / 6.02
"""

import numpy as np
from typing import Any, Dict, Sequence

from ..encoder.encoded_signal import AnalogEncodedSignal, DigitalEncodedSignal
from ..presentation.display_frame import DisplayFrame


def compute_least_significant_bit_volts(bit_width: int, voltage_reference: float) -> float:
    """
    Compute the voltage represented by one code step.

    Args:
        bit_width: ADC resolution in bits.
        voltage_reference: Full-scale reference voltage.

    Returns:
        float: LSB size in volts.
    """
    if bit_width < 1:
        raise ValueError("ADC must have at least 1 bit")
    return voltage_reference / (2 ** bit_width - 1)


def compute_quantization_error_volts(
    voltage: float,
    code: int,
    bit_width: int,
    voltage_reference: float
) -> float:
    """
    Compute the difference between a voltage and the level of its code.

    Clamped codes give errors larger than one LSB.
    """
    step: float = compute_least_significant_bit_volts(bit_width, voltage_reference)
    return voltage - code * step


def compute_ideal_signal_to_quantization_noise_ratio_db(bit_width: int) -> float:
    """
    Ideal SQNR of an N-bit converter for a full-scale sine wave.

    Formula: SQNR = 6.02 * N + 1.76

    Example:
        12 bits → 74.0 dB
    """
    if bit_width < 1:
        raise ValueError("ADC must have at least 1 bit")
    return 6.02 * bit_width + 1.76


def compute_effective_number_of_bits(signal_to_noise_ratio_db: float) -> float:
    """
    Compute ENOB from a measured SNR.

    Formula: ENOB = (SNR - 1.76) / 6.02
    """
    return (signal_to_noise_ratio_db - 1.76) / 6.02


def compute_signal_to_quantization_noise_ratio_db(
    voltages: np.ndarray,
    quantized_voltages: np.ndarray
) -> float:
    """
    Measure SQNR from sensor voltages and the levels their codes represent.

    Args:
        voltages: Sensor output voltages.
        quantized_voltages: code * LSB for each sample.

    Returns:
        float: SQNR in dB (inf when there is no quantization error).
    """
    voltages = np.asarray(voltages, dtype=float)
    quantized_voltages = np.asarray(quantized_voltages, dtype=float)

    if voltages.shape != quantized_voltages.shape:
        raise ValueError("Voltage and quantized voltage arrays differ in length")
    if voltages.size == 0:
        raise ValueError("Cannot compute SQNR of an empty signal")

    signal_power: float = float(np.mean(voltages ** 2))
    noise_power: float = float(np.mean((voltages - quantized_voltages) ** 2))

    if noise_power == 0.0:
        return float("inf")
    return float(10.0 * np.log10(signal_power / noise_power))


def compute_detection_rate(frames: Sequence[DisplayFrame]) -> float:
    """
    Fraction of digital frames that reported motion.

    Returns:
        float: Rate in [0, 1], or NaN when there are no digital frames.
    """
    detections = [
        frame.signal.detected
        for frame in frames
        if isinstance(frame.signal, DigitalEncodedSignal)
    ]
    if not detections:
        return float("nan")
    return float(np.mean(detections))


def compute_analog_frame_statistics(
    frames: Sequence[DisplayFrame],
    bit_width: int,
    voltage_reference: float
) -> Dict[str, Any]:
    """
    Summarize the analog frames of a run.

    Args:
        frames: Frame history; digital frames are skipped.
        bit_width: ADC resolution the frames were encoded with.
        voltage_reference: ADC reference voltage.

    Returns:
        Dict with sample count, temperature and code ranges, mean
        quantization error and measured SQNR. Empty (count 0) when
        there are no analog frames.
    """
    signals = [
        frame.signal
        for frame in frames
        if isinstance(frame.signal, AnalogEncodedSignal)
    ]
    if not signals:
        return {"analog_frame_count": 0}

    temperatures: np.ndarray = np.array([s.temperature_celsius for s in signals])
    voltages: np.ndarray = np.array([s.voltage for s in signals])
    codes: np.ndarray = np.array([s.code for s in signals])

    step: float = compute_least_significant_bit_volts(bit_width, voltage_reference)
    quantized_voltages: np.ndarray = codes * step
    errors: np.ndarray = voltages - quantized_voltages

    return {
        "analog_frame_count": len(signals),
        "mean_temperature_celsius": float(np.mean(temperatures)),
        "min_temperature_celsius": float(np.min(temperatures)),
        "max_temperature_celsius": float(np.max(temperatures)),
        "min_code": int(np.min(codes)),
        "max_code": int(np.max(codes)),
        "mean_quantization_error_volts": float(np.mean(errors)),
        "max_abs_quantization_error_volts": float(np.max(np.abs(errors))),
        "sqnr_db": compute_signal_to_quantization_noise_ratio_db(voltages, quantized_voltages),
    }
