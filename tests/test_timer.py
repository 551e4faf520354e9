import pytest

from engine.timer import StepTimer


def test_tick_fires_after_delay_and_rearms(loop):
    ticks = []
    timer = StepTimer(loop)
    timer.schedule(True, 200, lambda: ticks.append(loop.time()))

    assert loop.advance(0.1) == 0
    assert loop.advance(0.1) == 1
    assert ticks == [pytest.approx(0.2)]
    assert timer.active

    loop.advance(0.2)
    assert len(ticks) == 2


def test_schedule_false_stops_everything(loop):
    ticks = []
    timer = StepTimer(loop)
    timer.schedule(True, 100, lambda: ticks.append(1))
    timer.schedule(False, 0, None)

    loop.advance(1.0)
    assert ticks == []
    assert not timer.active
    assert loop.pending == []


def test_reschedule_replaces_previous_chain(loop):
    first, second = [], []
    timer = StepTimer(loop)
    timer.schedule(True, 100, lambda: first.append(1))
    timer.schedule(True, 300, lambda: second.append(1))

    loop.advance(0.1)
    assert first == [] and second == []
    loop.advance(0.2)
    assert second == [1]
    assert len(loop.pending) == 1


def test_cancel_inside_tick_suppresses_rearm(loop):
    timer = StepTimer(loop)
    calls = []

    def tick():
        calls.append(1)
        if len(calls) == 3:
            timer.cancel()

    timer.schedule(True, 50, tick)
    loop.run_until_idle()

    assert len(calls) == 3
    assert not timer.active


def test_stale_callback_is_ignored(loop):
    timer = StepTimer(loop)
    calls = []
    timer.schedule(True, 50, lambda: calls.append(1))
    stale = loop.pending[0]
    timer.cancel()

    # a callback that slipped past cancellation still carries the old generation
    stale.callback(*stale.args)
    assert calls == []


def test_exception_in_tick_stops_timer(loop):
    timer = StepTimer(loop)

    def boom():
        raise RuntimeError("tick failed")

    timer.schedule(True, 50, boom)
    with pytest.raises(RuntimeError):
        loop.advance(0.05)
    assert not timer.active
    assert loop.pending == []


def test_step_once_cancels_then_calls(loop):
    timer = StepTimer(loop)
    timer.schedule(True, 50, lambda: None)
    assert timer.step_once(lambda: "stepped") == "stepped"
    assert not timer.active
