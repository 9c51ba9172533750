from __future__ import annotations

import pytest

from slide_engine import ManualScheduler, MonotonicScheduler, NavigationConfig
from slide_engine.scheduler import _TimerQueue


def test_callbacks_run_in_due_order_then_scheduling_order() -> None:
    scheduler = ManualScheduler()
    calls: list[str] = []
    scheduler.call_later(0.3, lambda: calls.append("late"))
    scheduler.call_later(0.1, lambda: calls.append("first"))
    scheduler.call_later(0.1, lambda: calls.append("second"))
    assert scheduler.advance(0.5) == 3
    assert calls == ["first", "second", "late"]


def test_advance_stops_at_target_time() -> None:
    scheduler = ManualScheduler()
    calls: list[float] = []
    scheduler.call_later(0.2, lambda: calls.append(scheduler.now()))
    scheduler.call_later(1.0, lambda: calls.append(scheduler.now()))
    scheduler.advance(0.5)
    assert calls == [pytest.approx(0.2)]
    assert scheduler.now() == pytest.approx(0.5)
    assert scheduler.pending == 1
    assert scheduler.next_due() == pytest.approx(1.0)


def test_callbacks_scheduled_inside_window_also_run() -> None:
    scheduler = ManualScheduler()
    calls: list[str] = []

    def outer() -> None:
        calls.append("outer")
        scheduler.call_later(0.1, lambda: calls.append("inner"))

    scheduler.call_later(0.1, outer)
    scheduler.advance(0.5)
    assert calls == ["outer", "inner"]


def test_run_all_drains_chained_callbacks() -> None:
    scheduler = ManualScheduler()
    calls: list[int] = []

    def chain(n: int) -> None:
        calls.append(n)
        if n < 3:
            scheduler.call_later(1.0, lambda: chain(n + 1))

    scheduler.call_later(1.0, lambda: chain(1))
    assert scheduler.run_all() == 3
    assert calls == [1, 2, 3]
    assert scheduler.now() == pytest.approx(3.0)


def test_negative_values_are_rejected() -> None:
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-0.1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1)


def test_monotonic_scheduler_runs_due_callbacks_only() -> None:
    scheduler = MonotonicScheduler()
    calls: list[str] = []
    scheduler.call_later(0, lambda: calls.append("now"))
    scheduler.call_later(3600, lambda: calls.append("later"))
    assert scheduler.run_due() == 1
    assert calls == ["now"]
    assert scheduler.pending == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fade_out_delay": -0.1},
        {"settle_delay": -1},
        {"swipe_threshold": 0},
        {"retreat_zone": 0.7, "advance_zone": 0.6},
        {"advance_zone": 1.5},
        {"retreat_zone": -0.1},
    ],
)
def test_navigation_config_validation(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        NavigationConfig(**kwargs).validate()


def test_navigation_config_defaults() -> None:
    config = NavigationConfig()
    config.validate()
    assert config.transition_seconds == pytest.approx(0.5)
    assert config.swipe_threshold == 50


def test_timer_queue_needs_a_clock() -> None:
    with pytest.raises(TypeError):
        _TimerQueue()

    class NoClock(_TimerQueue):
        pass

    with pytest.raises(TypeError):
        NoClock()
