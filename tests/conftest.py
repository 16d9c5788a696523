import pytest

from iot_signal_pipeline.configuration import SimulationConfiguration
from iot_signal_pipeline.scheduling import VirtualClockScheduler
from iot_signal_pipeline.simulation import SignalSimulationEngine

FIXED_UNIX_TIME = 1_700_000_000.7


@pytest.fixture
def configuration():
    return SimulationConfiguration()


@pytest.fixture
def scheduler():
    return VirtualClockScheduler()


@pytest.fixture
def make_engine(scheduler):
    """Build engines on the shared virtual clock with a fixed seed and time."""
    def factory(**overrides):
        overrides.setdefault("scheduler", scheduler)
        overrides.setdefault("seed", 1234)
        overrides.setdefault("time_source", lambda: FIXED_UNIX_TIME)
        return SignalSimulationEngine(**overrides)
    return factory
