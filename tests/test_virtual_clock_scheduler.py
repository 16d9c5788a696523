import pytest

from iot_signal_pipeline.scheduling import TimerRegistry, VirtualClockScheduler


def test_repeating_timer_fires_every_interval(scheduler):
    fired = []
    scheduler.schedule_repeating(3000, lambda: fired.append(scheduler.now_ms()))

    scheduler.advance(2999)
    assert fired == []

    scheduler.advance(1)
    scheduler.advance(6000)
    assert fired == [3000, 6000, 9000]
    assert scheduler.now_ms() == 9000


def test_timers_fire_in_due_order(scheduler):
    fired = []
    scheduler.schedule_repeating(3000, lambda: fired.append(("slow", scheduler.now_ms())))
    scheduler.schedule_repeating(1500, lambda: fired.append(("fast", scheduler.now_ms())))

    scheduler.run_until(3000)
    assert fired == [("fast", 1500), ("slow", 3000), ("fast", 3000)]


def test_cancelled_timer_never_fires(scheduler):
    fired = []
    handle = scheduler.schedule_repeating(1000, lambda: fired.append(1))
    scheduler.advance(1000)

    handle.cancel()
    handle.cancel()
    scheduler.advance(5000)

    assert fired == [1]
    assert handle.cancelled
    assert scheduler.get_pending_timer_count() == 0


def test_callback_may_cancel_its_own_timer(scheduler):
    fired = []

    def tick():
        fired.append(scheduler.now_ms())
        if len(fired) == 2:
            handle.cancel()

    handle = scheduler.schedule_repeating(500, tick)
    scheduler.advance(5000)
    assert fired == [500, 1000]


def test_clock_cannot_move_backwards(scheduler):
    with pytest.raises(ValueError):
        scheduler.advance(-1)


@pytest.mark.parametrize("interval_ms", [0, -10])
def test_non_positive_interval_is_rejected(scheduler, interval_ms):
    with pytest.raises(ValueError):
        scheduler.schedule_repeating(interval_ms, lambda: None)


def test_custom_start_time():
    scheduler = VirtualClockScheduler(start_time_ms=500)
    fired = []
    scheduler.schedule_repeating(100, lambda: fired.append(scheduler.now_ms()))
    scheduler.advance(200)
    assert fired == [600, 700]


def test_registry_replaces_and_cancels_previous_handle(scheduler):
    registry = TimerRegistry()
    first = registry.register("sampling", scheduler.schedule_repeating(100, lambda: None))
    second = registry.register("sampling", scheduler.schedule_repeating(100, lambda: None))

    assert first.cancelled
    assert not second.cancelled
    assert registry.get("sampling") is second
    assert len(registry) == 1


def test_registry_cancel_is_idempotent(scheduler):
    registry = TimerRegistry()
    registry.register("stage", scheduler.schedule_repeating(100, lambda: None))

    assert registry.cancel("stage") is True
    assert registry.cancel("stage") is False
    assert registry.cancel("unknown") is False
    assert not registry.is_active("stage")


def test_registry_cancel_all(scheduler):
    registry = TimerRegistry()
    registry.register("sampling", scheduler.schedule_repeating(100, lambda: None))
    registry.register("stage", scheduler.schedule_repeating(50, lambda: None))
    assert sorted(registry.get_active_names()) == ["sampling", "stage"]

    assert registry.cancel_all() == 2
    assert registry.cancel_all() == 0
    assert scheduler.get_pending_timer_count() == 0
