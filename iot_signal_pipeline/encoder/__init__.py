"""
Encoder Module
==============

This module contains the analog-to-digital and encoding stages of the
sensor pipeline.
"""

from .adc_quantizer import AdcQuantizer, parse_bits
from .encoded_signal import (
    AnalogEncodedSignal,
    AnalogPayload,
    DigitalEncodedSignal,
    EncodedSignal,
    LogicLevel,
)
from .signal_encoder import SignalEncoder, round_half_up

__all__ = [
    "AdcQuantizer",
    "parse_bits",
    "AnalogEncodedSignal",
    "AnalogPayload",
    "DigitalEncodedSignal",
    "EncodedSignal",
    "LogicLevel",
    "SignalEncoder",
    "round_half_up",
]
