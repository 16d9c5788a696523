"""
Signal Encoder Module
=====================

This module turns a raw sensor reading into the artifacts of each stage
of the IoT signal chain.

Analog pipeline (temperature sensor):
    1. Transfer function:  V = offset + (T - T_min) * sensitivity
    2. Quantization:       code = floor(V / V_ref * (2^N - 1))
    3. Binary encoding:    code in base 2, N characters wide
    4. Payload:            {"temp": round_half_up(T, 1), "ts": floor(unix_time)}

Digital pipeline (PIR sensor):
    The output is already binary, so there is no ADC stage. The
    detection flag maps directly to a logic level, a voltage and a bit.

    detected=True  → HIGH, V_ref, '1', "Motion"
    detected=False → LOW,  0 V,   '0', "None"

The encoder holds no state between calls. Its only inputs besides the
reading are the configuration and the time source used for payload
timestamps.
"""

import time
import numpy as np
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Optional, Union

from ..configuration.simulation_configuration import SimulationConfiguration
from ..signals.sensor_mode import SensorMode
from ..signals.sensor_reading import AnalogReading, DigitalReading, SensorReading
from .adc_quantizer import AdcQuantizer
from .encoded_signal import (
    AnalogEncodedSignal,
    AnalogPayload,
    DigitalEncodedSignal,
    EncodedSignal,
    LogicLevel,
)

MOTION_STATUS_LABEL = "Motion"
NO_MOTION_STATUS_LABEL = "None"


def round_half_up(value: float, decimals: int = 1) -> float:
    """
    Round with ties away from zero, on the exact binary value of the float.

    Built-in round() sends ties to even (22.25 → 22.2); display readouts
    expect 22.25 → 22.3.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


class SignalEncoder:
    """
    Converts readings into encoded signals for either sensor mode.

    Attributes:
        configuration: Simulation parameters.
        quantizer: The ADC used by the analog chain.
        time_source: Returns the current Unix time in seconds.
    """

    def __init__(
        self,
        configuration: SimulationConfiguration,
        time_source: Optional[Callable[[], float]] = None
    ) -> None:
        self.configuration: SimulationConfiguration = configuration
        self.quantizer: AdcQuantizer = AdcQuantizer(
            bit_width=configuration.adc_bits,
            voltage_reference=configuration.voltage_reference,
            clamp_to_full_scale=configuration.clamp_adc_code
        )
        self.time_source: Callable[[], float] = time_source or time.time

    def encode(
        self,
        mode: Union[SensorMode, str],
        reading: SensorReading
    ) -> EncodedSignal:
        """
        Encode a reading for the given mode.

        Raises:
            TypeError: If the reading does not belong to the mode.
        """
        mode = SensorMode.coerce(mode)

        if mode is SensorMode.ANALOG:
            if not isinstance(reading, AnalogReading):
                raise TypeError(
                    f"Analog mode requires an AnalogReading, got "
                    f"{type(reading).__name__}"
                )
            return self.encode_analog(reading)

        if not isinstance(reading, DigitalReading):
            raise TypeError(
                f"Digital mode requires a DigitalReading, got "
                f"{type(reading).__name__}"
            )
        return self.encode_digital(reading)

    def temperature_to_voltage(self, temperature_celsius: float) -> float:
        """Apply the sensor transfer function."""
        config = self.configuration
        return (
            config.sensor_offset_volts
            + (temperature_celsius - config.temperature_min_celsius)
            * config.sensor_sensitivity_volts_per_celsius
        )

    def encode_analog(self, reading: AnalogReading) -> AnalogEncodedSignal:
        """Run the temperature through transfer, ADC, binary and payload stages."""
        temperature: float = reading.temperature_celsius

        # ===== STAGE 1: SENSOR OUTPUT =====
        voltage: float = self.temperature_to_voltage(temperature)

        # ===== STAGE 2: QUANTIZATION =====
        code: int = self.quantizer.quantize(voltage)

        # ===== STAGE 3: BINARY ENCODING =====
        bits: str = self.quantizer.format_bits(code)

        # ===== STAGE 4: PAYLOAD =====
        payload: AnalogPayload = AnalogPayload(
            temperature=round_half_up(temperature, 1),
            timestamp_seconds=int(np.floor(self.time_source()))
        )

        return AnalogEncodedSignal(
            temperature_celsius=temperature,
            voltage=voltage,
            code=code,
            bits=bits,
            payload=payload
        )

    def encode_digital(self, reading: DigitalReading) -> DigitalEncodedSignal:
        """Map the detection flag to logic level, voltage, bit and label."""
        detected: bool = bool(reading.detected)

        if detected:
            return DigitalEncodedSignal(
                detected=True,
                logic_level=LogicLevel.HIGH,
                voltage=self.configuration.voltage_reference,
                bit="1",
                status_label=MOTION_STATUS_LABEL
            )

        return DigitalEncodedSignal(
            detected=False,
            logic_level=LogicLevel.LOW,
            voltage=0.0,
            bit="0",
            status_label=NO_MOTION_STATUS_LABEL
        )
