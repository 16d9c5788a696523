"""
Sensor Sampler
==============

This module generates the synthetic readings of both simulated sensors.

Analog (temperature):
    temperature = T_min + u * (T_max - T_min),   u ~ Uniform[0, 1)

Digital (PIR motion):
    detected = u < detection_chance              (Bernoulli trial)

Every call draws fresh values. Samples are independent and identically
distributed: there is no correlation between consecutive ticks.

The random source is an injected numpy Generator, so a seeded run is
fully reproducible.
"""

import numpy as np
from typing import Optional, Union

from ..configuration.simulation_configuration import SimulationConfiguration
from .sensor_mode import SensorMode
from .sensor_reading import AnalogReading, DigitalReading, SensorReading


class SensorSampler:
    """
    Produces raw readings for the active sensor mode.

    Attributes:
        configuration: Temperature range and detection probability.
        random_generator: Source of uniform random numbers.
    """

    def __init__(
        self,
        configuration: SimulationConfiguration,
        random_generator: Optional[np.random.Generator] = None,
        seed: Optional[int] = None
    ) -> None:
        """
        Initialize the sampler.

        Args:
            configuration: Simulation parameters.
            random_generator: Generator to draw from. Takes precedence
                over seed when both are given.
            seed: Seed for a new numpy default_rng when no generator
                is injected. None gives a non-deterministic generator.
        """
        self.configuration: SimulationConfiguration = configuration

        if random_generator is None:
            random_generator = np.random.default_rng(seed)
        self.random_generator: np.random.Generator = random_generator

    def sample(self, mode: Union[SensorMode, str]) -> SensorReading:
        """Draw one reading for the given mode."""
        mode = SensorMode.coerce(mode)

        if mode is SensorMode.ANALOG:
            return self.sample_temperature()
        return self.sample_motion()

    def sample_temperature(self) -> AnalogReading:
        """Draw a temperature uniformly from the configured range."""
        config = self.configuration
        uniform_value: float = float(self.random_generator.random())

        temperature: float = (
            config.temperature_min_celsius
            + uniform_value * config.temperature_span_celsius
        )
        return AnalogReading(temperature_celsius=temperature)

    def sample_motion(self) -> DigitalReading:
        """Run one Bernoulli trial with the configured detection chance."""
        uniform_value: float = float(self.random_generator.random())
        return DigitalReading(
            detected=uniform_value < self.configuration.detection_chance
        )
