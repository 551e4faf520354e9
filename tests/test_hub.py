import threading

import pytest

from engine import SessionHub
from errors import UnknownSession


@pytest.fixture
def hub():
    hub = SessionHub()
    yield hub
    hub.shutdown()


def test_call_runs_on_loop_thread(hub):
    name = hub.call(lambda: threading.current_thread().name)
    assert name == "session-hub"


def test_call_reraises(hub):
    def boom():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        hub.call(boom)


def test_create_get_close(hub):
    sid = hub.create("bubble_sort", {"seed": 3})
    session = hub.get(sid)
    assert sid in hub.ids()
    assert session.timer.loop is hub.loop

    hub.close(sid)
    assert session.closed
    with pytest.raises(UnknownSession):
        hub.get(sid)


def test_playing_session_finishes_on_the_loop(hub):
    sid = hub.create("bubble_sort", {"values": [3, 1, 2], "delay_ms": 10})
    session = hub.get(sid)
    done = threading.Event()
    session.on_change = lambda state: state.is_done and done.set()

    assert hub.call(session.play)
    assert done.wait(timeout=5)
    assert hub.call(lambda: session.algo_state.arr) == (1, 2, 3)


def test_racing_closes_leave_exactly_one_winner(hub):
    sid = hub.create("bubble_sort", {"seed": 3})
    barrier = threading.Barrier(2)
    outcomes = []

    def close():
        barrier.wait()
        try:
            hub.close(sid)
            outcomes.append("closed")
        except UnknownSession:
            outcomes.append("unknown")

    threads = [threading.Thread(target=close) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert sorted(outcomes) == ["closed", "unknown"]
    assert sid not in hub.ids()


def test_close_twice_is_unknown_session(hub):
    sid = hub.create("bubble_sort", {"seed": 3})
    hub.close(sid)
    with pytest.raises(UnknownSession):
        hub.close(sid)
