import numpy as np
import pytest

from iot_signal_pipeline.encoder import AdcQuantizer, parse_bits


def test_reference_scenario_code_and_bits():
    quantizer = AdcQuantizer(bit_width=12, voltage_reference=3.3)
    code = quantizer.quantize(2.25)
    assert code == int(np.floor(2.25 / 3.3 * 4095))
    assert code == 2792
    assert quantizer.format_bits(code) == "101011101000"


def test_bits_are_zero_padded():
    quantizer = AdcQuantizer(bit_width=12, voltage_reference=3.3)
    assert quantizer.format_bits(0) == "000000000000"
    assert quantizer.format_bits(5) == "000000000101"
    assert quantizer.format_bits(4095) == "111111111111"


def test_full_scale_is_clamped():
    quantizer = AdcQuantizer(bit_width=8, voltage_reference=1.0)
    assert quantizer.quantize(1.0) == 255
    assert quantizer.quantize(7.5) == 255


def test_unclamped_overflow_keeps_growing():
    quantizer = AdcQuantizer(bit_width=8, voltage_reference=1.0, clamp_to_full_scale=False)
    code = quantizer.quantize(2.0)
    assert code == 510
    bits = quantizer.format_bits(code)
    assert len(bits) > 8
    assert parse_bits(bits) == code


def test_negative_voltage_gives_zero_code():
    quantizer = AdcQuantizer(bit_width=12, voltage_reference=3.3, clamp_to_full_scale=False)
    assert quantizer.quantize(-0.5) == 0


def test_code_to_voltage_is_one_step_per_code():
    quantizer = AdcQuantizer(bit_width=12, voltage_reference=3.3)
    assert quantizer.get_step_size_volts() == pytest.approx(3.3 / 4095)
    assert quantizer.code_to_voltage(4095) == pytest.approx(3.3)
    assert quantizer.get_number_of_levels() == 4096


@pytest.mark.parametrize("bit_width", [0, 33])
def test_invalid_bit_width(bit_width):
    with pytest.raises(ValueError):
        AdcQuantizer(bit_width=bit_width)


def test_invalid_reference():
    with pytest.raises(ValueError):
        AdcQuantizer(voltage_reference=0.0)


def test_parse_bits_rejects_non_binary():
    with pytest.raises(ValueError):
        parse_bits("10201")
    with pytest.raises(ValueError):
        parse_bits("")


def test_format_bits_rejects_negative_code():
    with pytest.raises(ValueError):
        AdcQuantizer().format_bits(-1)
