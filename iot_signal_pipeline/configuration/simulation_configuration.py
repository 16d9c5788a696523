"""
Simulation Configuration
========================

This module holds the static constants of the sensor pipeline simulation:
tick intervals, ADC resolution, reference voltage, temperature range and
motion detection probability.

Every component reads its parameters from one SimulationConfiguration
instance. The configuration is validated when it is constructed, so an
invalid value is rejected before any engine exists.

Sensor Transfer Function:
    The analog temperature sensor outputs

        voltage = sensor_offset_volts
                  + (temperature - temperature_min_celsius) * sensitivity

    With the defaults (2.0 V, 0.1 V/°C) the 20-25 °C range maps to 2.0-2.5 V.
    This is independent of the ADC reference voltage (3.3 V).
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)


DEFAULT_STAGE_NAMES: Tuple[str, ...] = (
    "Sampling",
    "Quantization",
    "Encoding",
    "Application",
)

_FINITE_FIELD_NAMES: Tuple[str, ...] = (
    "update_interval_ms",
    "animation_interval_ms",
    "voltage_reference",
    "temperature_min_celsius",
    "temperature_max_celsius",
    "sensor_offset_volts",
    "sensor_sensitivity_volts_per_celsius",
    "detection_chance",
)


class ConfigurationError(ValueError):
    """Raised when a simulation parameter violates its constraints."""


@dataclass(frozen=True)
class SimulationConfiguration:
    """
    Configuration parameters for the sensor pipeline simulation.

    Attributes:
        update_interval_ms: Period of the sampling cycle.
        animation_interval_ms: Period of the stage highlight cycle.
        adc_bits: ADC resolution in bits (1 to 32).
        voltage_reference: ADC full-scale reference voltage (V).
        temperature_min_celsius: Lower bound of simulated temperatures.
        temperature_max_celsius: Upper bound of simulated temperatures.
        detection_chance: Probability that the PIR sensor reports motion
            on a given tick (0 to 1).
        stage_count: Number of pipeline stage markers cycled by the
            stage pointer.
        stage_names: Display names for the stage markers.
        sensor_offset_volts: Sensor output at temperature_min_celsius.
        sensor_sensitivity_volts_per_celsius: Slope of the sensor output.
        clamp_adc_code: If True, ADC codes are clamped to [0, adc_max].
    """
    # Scheduling
    update_interval_ms: int = 3000
    animation_interval_ms: int = 1500

    # ADC
    adc_bits: int = 12
    voltage_reference: float = 3.3
    clamp_adc_code: bool = True

    # Analog temperature sensor
    temperature_min_celsius: float = 20.0
    temperature_max_celsius: float = 25.0
    sensor_offset_volts: float = 2.0
    sensor_sensitivity_volts_per_celsius: float = 0.1

    # Digital motion sensor
    detection_chance: float = 0.6

    # Stage highlighting
    stage_count: int = 4
    stage_names: Tuple[str, ...] = DEFAULT_STAGE_NAMES

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration parameters."""
        # NaN slips through every ordered comparison below
        for field_name in _FINITE_FIELD_NAMES:
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise ConfigurationError(
                    f"{field_name} must be a finite number. Received: {value}"
                )

        if self.update_interval_ms <= 0:
            raise ConfigurationError(
                f"update_interval_ms must be positive. "
                f"Received: {self.update_interval_ms}"
            )

        if self.animation_interval_ms <= 0:
            raise ConfigurationError(
                f"animation_interval_ms must be positive. "
                f"Received: {self.animation_interval_ms}"
            )

        if not isinstance(self.adc_bits, int) or isinstance(self.adc_bits, bool):
            raise ConfigurationError(
                f"adc_bits must be an integer. Received: {self.adc_bits!r}"
            )

        if self.adc_bits < 1 or self.adc_bits > 32:
            raise ConfigurationError(
                f"adc_bits must be between 1 and 32. Received: {self.adc_bits}"
            )

        if self.voltage_reference <= 0:
            raise ConfigurationError(
                f"voltage_reference must be positive. "
                f"Received: {self.voltage_reference} V"
            )

        if self.temperature_max_celsius <= self.temperature_min_celsius:
            raise ConfigurationError(
                f"temperature_max_celsius ({self.temperature_max_celsius}) must be "
                f"greater than temperature_min_celsius "
                f"({self.temperature_min_celsius})"
            )

        if not 0.0 <= self.detection_chance <= 1.0:
            raise ConfigurationError(
                f"detection_chance must be in [0, 1]. "
                f"Received: {self.detection_chance}"
            )

        if self.stage_count < 1:
            raise ConfigurationError(
                f"stage_count must be at least 1. Received: {self.stage_count}"
            )

        if self.sensor_sensitivity_volts_per_celsius < 0:
            raise ConfigurationError(
                f"sensor_sensitivity_volts_per_celsius must not be negative. "
                f"Received: {self.sensor_sensitivity_volts_per_celsius}"
            )

        # Not an error: codes are clamped (or overflow) but the user
        # probably did not intend it
        maximum_sensor_voltage: float = (
            self.sensor_offset_volts
            + self.temperature_span_celsius * self.sensor_sensitivity_volts_per_celsius
        )
        if maximum_sensor_voltage > self.voltage_reference:
            logger.warning(
                "Sensor output reaches %.2f V at %.1f °C, above the ADC "
                "reference of %.2f V; codes will %s",
                maximum_sensor_voltage,
                self.temperature_max_celsius,
                self.voltage_reference,
                "saturate" if self.clamp_adc_code else "exceed adc_max",
            )

    @property
    def adc_max(self) -> int:
        """Largest ADC code: 2^bits - 1 (4095 for 12 bits)."""
        return 2 ** self.adc_bits - 1

    @property
    def number_of_quantization_levels(self) -> int:
        return 2 ** self.adc_bits

    @property
    def temperature_span_celsius(self) -> float:
        return self.temperature_max_celsius - self.temperature_min_celsius

    def get_stage_name(self, index: int) -> str:
        """Return the display name of a stage marker."""
        if index < len(self.stage_names):
            return self.stage_names[index]
        return f"Stage {index + 1}"

    def get_summary_dict(self) -> Dict[str, Any]:
        """Return a dictionary summary of the configuration."""
        summary: Dict[str, Any] = asdict(self)
        summary["stage_names"] = [
            self.get_stage_name(i) for i in range(self.stage_count)
        ]
        summary["adc_max"] = self.adc_max
        summary["number_of_quantization_levels"] = self.number_of_quantization_levels
        return summary
