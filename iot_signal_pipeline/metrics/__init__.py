"""
Metrics Module
==============

This module contains functions for calculating quantization metrics:
- LSB size and quantization error
- Ideal and measured SQNR
- ENOB (Effective Number of Bits)
- Frame history statistics
"""

from .quantization_metrics import (
    compute_least_significant_bit_volts,
    compute_quantization_error_volts,
    compute_ideal_signal_to_quantization_noise_ratio_db,
    compute_effective_number_of_bits,
    compute_signal_to_quantization_noise_ratio_db,
    compute_detection_rate,
    compute_analog_frame_statistics
)

__all__ = [
    "compute_least_significant_bit_volts",
    "compute_quantization_error_volts",
    "compute_ideal_signal_to_quantization_noise_ratio_db",
    "compute_effective_number_of_bits",
    "compute_signal_to_quantization_noise_ratio_db",
    "compute_detection_rate",
    "compute_analog_frame_statistics"
]
