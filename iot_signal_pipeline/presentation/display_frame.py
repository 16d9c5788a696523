"""
Display Frame
=============

This module builds the complete snapshot handed to a presentation layer
after each sampling tick: the active mode, the encoded signal and every
text field a display shows for it.

A frame is built in one step from one encoded signal, so its fields are
always consistent with each other and with the mode they describe.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict

from ..encoder.encoded_signal import (
    AnalogEncodedSignal,
    DigitalEncodedSignal,
    EncodedSignal,
)
from ..encoder.signal_encoder import round_half_up
from ..signals.sensor_mode import SensorMode


@dataclass(frozen=True)
class DisplayFrame:
    """
    Rendered snapshot of one sampling tick.

    Attributes:
        mode: Sensor mode the frame belongs to.
        signal: Encoded signal for this tick.
        mode_label: Name of the active sensor class.
        sensor_title: Heading of the sensor stage.
        sensor_description: Kind of signal the sensor emits.
        processing_description: What the processing stage does.
        application_action: What the application drives with the value.
        sensor_value_text: Reading as shown at the sensor stage.
        sensor_voltage_text: Sensor output voltage.
        sensor_state_text: Sensor state ("Active", "HIGH" or "LOW").
        code_text: ADC code (analog) or bit (digital).
        bits_text: Binary representation.
        payload_text: Transmitted payload.
        application_display_text: Value shown by the application stage.
    """
    mode: SensorMode
    signal: EncodedSignal
    mode_label: str
    sensor_title: str
    sensor_description: str
    processing_description: str
    application_action: str
    sensor_value_text: str
    sensor_voltage_text: str
    sensor_state_text: str
    code_text: str
    bits_text: str
    payload_text: str
    application_display_text: str

    def get_text_fields(self) -> Dict[str, str]:
        """Return the text fields keyed by name."""
        return {
            "mode_label": self.mode_label,
            "sensor_title": self.sensor_title,
            "sensor_description": self.sensor_description,
            "processing_description": self.processing_description,
            "application_action": self.application_action,
            "sensor_value_text": self.sensor_value_text,
            "sensor_voltage_text": self.sensor_voltage_text,
            "sensor_state_text": self.sensor_state_text,
            "code_text": self.code_text,
            "bits_text": self.bits_text,
            "payload_text": self.payload_text,
            "application_display_text": self.application_display_text,
        }


def format_temperature(temperature_celsius: float) -> str:
    return f"{round_half_up(temperature_celsius, 1):.1f}°C"


def format_payload(payload: Dict[str, Any]) -> str:
    """Serialize a payload the way it is sent: compact JSON, key order kept."""
    return json.dumps(payload)


def build_display_frame(signal: EncodedSignal) -> DisplayFrame:
    """Derive a DisplayFrame from the output of SignalEncoder.encode()."""
    if isinstance(signal, AnalogEncodedSignal):
        return _build_analog_frame(signal)
    if isinstance(signal, DigitalEncodedSignal):
        return _build_digital_frame(signal)
    raise TypeError(f"Cannot build a frame from {type(signal).__name__}")


def _build_analog_frame(signal: AnalogEncodedSignal) -> DisplayFrame:
    temperature_text: str = format_temperature(signal.temperature_celsius)

    return DisplayFrame(
        mode=SensorMode.ANALOG,
        signal=signal,
        mode_label="Analog Sensor",
        sensor_title="Analog Sensor",
        sensor_description="Analog Signal",
        processing_description="ADC + Encoding",
        application_action="Heating",
        sensor_value_text=temperature_text,
        sensor_voltage_text=f"{signal.voltage:.2f}V",
        sensor_state_text="Active",
        code_text=str(signal.code),
        bits_text=signal.bits,
        payload_text=format_payload(signal.payload.to_dict()),
        application_display_text=temperature_text
    )


def _build_digital_frame(signal: DigitalEncodedSignal) -> DisplayFrame:
    return DisplayFrame(
        mode=SensorMode.DIGITAL,
        signal=signal,
        mode_label="Digital Sensor",
        sensor_title="PIR Sensor",
        sensor_description="Digital Signal",
        processing_description="Direct Encoding",
        application_action="Lighting",
        sensor_value_text=signal.status_label,
        sensor_voltage_text=f"{signal.voltage:g}V",
        sensor_state_text=signal.logic_level.value,
        code_text=signal.bit,
        bits_text=signal.bit,
        payload_text=signal.bit,
        application_display_text=signal.status_label
    )
