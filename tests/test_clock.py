import pytest

from skyhop.core.clock import Ticker


def test_first_firing_is_one_period_after_registration():
    ticker = Ticker()
    fired = []
    ticker.every("tick", 20, fired.append)

    ticker.advance(19)
    assert fired == []

    ticker.advance(1)
    assert fired == [20]


def test_activities_fire_in_registration_order_at_shared_instants():
    ticker = Ticker()
    order = []
    ticker.every("a", 20, lambda now: order.append(("a", now)))
    ticker.every("b", 40, lambda now: order.append(("b", now)))
    ticker.every("c", 20, lambda now: order.append(("c", now)))

    ticker.advance(40)

    assert order == [
        ("a", 20), ("c", 20),
        ("a", 40), ("b", 40), ("c", 40),
    ]


def test_step_hook_runs_once_per_instant_before_activities():
    ticker = Ticker()
    calls = []
    ticker.set_step_hook(lambda now: calls.append(("hook", now)))
    ticker.every("a", 20, lambda now: calls.append(("a", now)))
    ticker.every("b", 30, lambda now: calls.append(("b", now)))

    instants = ticker.advance(60)

    # 20, 30, 40, 60
    assert instants == 4
    assert calls[:2] == [("hook", 20), ("a", 20)]
    assert calls.count(("hook", 60)) == 1
    assert calls.index(("hook", 60)) < calls.index(("a", 60))


def test_fractional_deltas_accumulate():
    ticker = Ticker()
    fired = []
    ticker.every("tick", 20, fired.append)

    for _ in range(6):
        ticker.advance(16.5)

    assert fired == [20, 40, 60, 80]
    assert ticker.now_ms == pytest.approx(99.0)


def test_large_delta_catches_up_every_period():
    ticker = Ticker()
    fired = []
    ticker.every("tick", 20, fired.append)

    ticker.advance(1000)

    assert len(fired) == 50
    assert fired[-1] == 1000


def test_stop_prevents_further_firing():
    ticker = Ticker()
    fired = []
    ticker.every("tick", 20, fired.append)
    ticker.advance(20)

    ticker.stop()

    assert ticker.advance(100) == 0
    assert fired == [20]
    assert ticker.stopped
    assert ticker.activity_names == []


def test_activity_can_stop_the_ticker_mid_instant():
    ticker = Ticker()
    fired = []
    ticker.every("stopper", 20, lambda now: ticker.stop())
    ticker.every("after", 20, fired.append)

    ticker.advance(100)

    assert fired == []


def test_invalid_arguments_raise():
    ticker = Ticker()
    with pytest.raises(ValueError):
        ticker.every("bad", 0, lambda now: None)
    with pytest.raises(ValueError):
        ticker.advance(-1)
