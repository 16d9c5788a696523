import io
import json

import pytest

from iot_signal_pipeline.encoder import SignalEncoder
from iot_signal_pipeline.presentation import ConsolePresenter, build_display_frame
from iot_signal_pipeline.scheduling import StagePointer
from iot_signal_pipeline.signals import AnalogReading, DigitalReading, SensorMode

from conftest import FIXED_UNIX_TIME


@pytest.fixture
def encoder(configuration):
    return SignalEncoder(configuration, time_source=lambda: FIXED_UNIX_TIME)


def test_analog_frame_text_fields(encoder):
    frame = build_display_frame(encoder.encode_analog(AnalogReading(22.5)))

    assert frame.mode is SensorMode.ANALOG
    assert frame.mode_label == "Analog Sensor"
    assert frame.processing_description == "ADC + Encoding"
    assert frame.application_action == "Heating"
    assert frame.sensor_value_text == "22.5°C"
    assert frame.sensor_voltage_text == "2.25V"
    assert frame.sensor_state_text == "Active"
    assert frame.code_text == "2792"
    assert frame.bits_text == "101011101000"
    assert frame.application_display_text == "22.5°C"
    assert json.loads(frame.payload_text) == {"temp": 22.5, "ts": 1_700_000_000}
    assert frame.payload_text == '{"temp": 22.5, "ts": 1700000000}'


def test_digital_frame_text_fields(encoder):
    detected = build_display_frame(encoder.encode_digital(DigitalReading(True)))
    assert detected.mode is SensorMode.DIGITAL
    assert detected.sensor_title == "PIR Sensor"
    assert detected.processing_description == "Direct Encoding"
    assert detected.application_action == "Lighting"
    assert detected.sensor_value_text == "Motion"
    assert detected.sensor_voltage_text == "3.3V"
    assert detected.sensor_state_text == "HIGH"
    assert detected.bits_text == "1"

    idle = build_display_frame(encoder.encode_digital(DigitalReading(False)))
    assert idle.sensor_value_text == "None"
    assert idle.sensor_voltage_text == "0V"
    assert idle.sensor_state_text == "LOW"
    assert idle.payload_text == "0"


def test_text_fields_dict_is_complete(encoder):
    frame = build_display_frame(encoder.encode_analog(AnalogReading(20.0)))
    fields = frame.get_text_fields()
    assert len(fields) == 12
    assert all(isinstance(value, str) for value in fields.values())


def test_frame_requires_encoded_signal():
    with pytest.raises(TypeError):
        build_display_frame(AnalogReading(21.0))


def test_console_presenter_renders_frame_and_stage(encoder):
    stream = io.StringIO()
    presenter = ConsolePresenter(stream=stream)

    presenter.render(build_display_frame(encoder.encode_analog(AnalogReading(22.5))))
    presenter.render_stage(StagePointer(index=1, stage_count=4, name="Quantization"))

    output = stream.getvalue()
    assert "22.5°C" in output
    assert "101011101000" in output
    assert "[ ] [*] [ ] [ ]" in output
    assert "Quantization" in output
    assert presenter.frames_rendered == 1


def test_console_presenter_can_hide_stages():
    stream = io.StringIO()
    ConsolePresenter(stream=stream, show_stages=False).render_stage(StagePointer(0, 4, "Sampling"))
    assert stream.getvalue() == ""


def test_temperature_text_rounds_ties_up(encoder):
    frame = build_display_frame(encoder.encode_analog(AnalogReading(22.25)))
    assert frame.sensor_value_text == "22.3°C"
    assert frame.payload_text.startswith('{"temp": 22.3,')
