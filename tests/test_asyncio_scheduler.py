import asyncio

import pytest

from iot_signal_pipeline.configuration import SimulationConfiguration
from iot_signal_pipeline.scheduling import AsyncioScheduler
from iot_signal_pipeline.simulation import SignalSimulationEngine


def test_repeating_timer_on_event_loop():
    async def scenario():
        scheduler = AsyncioScheduler()
        fired = []
        handle = scheduler.schedule_repeating(10, lambda: fired.append(scheduler.now_ms()))

        await asyncio.sleep(0.105)
        handle.cancel()
        count = len(fired)
        await asyncio.sleep(0.05)
        return fired, count, scheduler.get_pending_timer_count()

    fired, count_at_cancel, pending = asyncio.run(scenario())

    assert 3 <= count_at_cancel <= 11
    assert len(fired) == count_at_cancel
    assert pending == 0


def test_rejects_non_positive_interval():
    async def scenario():
        AsyncioScheduler().schedule_repeating(0, lambda: None)

    with pytest.raises(ValueError):
        asyncio.run(scenario())


def test_engine_runs_in_real_time():
    async def scenario():
        configuration = SimulationConfiguration(update_interval_ms=20, animation_interval_ms=10)
        engine = SignalSimulationEngine(configuration=configuration, seed=8)
        frames = []
        engine.on_frame(frames.append)

        engine.start()
        await asyncio.sleep(0.07)
        engine.switch_mode("digital")
        await asyncio.sleep(0.03)
        engine.stop()
        await asyncio.sleep(0.03)
        return engine, frames

    engine, frames = asyncio.run(scenario())

    assert len(frames) >= 3
    assert frames[-1].mode.value == "digital"
    assert engine.scheduler.get_pending_timer_count() == 0
    assert not engine.is_running
