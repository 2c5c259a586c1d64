import io
import threading
import time

import pytest

from dtsched.server import (
    EventScheduler,
    compare_times,
    echo_response,
    validate_response,
)


def _oneshot(clid, sec, usec, host="10.0.0.1", service="DTS-ALARM", port=4000):
    return f"OneShot|{clid}|{sec}|{usec}|{host}|{service}|{port}"


def _repeat(clid, msecs, repeats, host="10.0.0.1", service="DTS-ALARM", port=4000):
    return f"Repeat|{clid}|{msecs}|{repeats}|{host}|{service}|{port}"


def _svid(resp):
    assert resp[0] == "1"
    assert len(resp) == 9
    return int(resp[1:])


def test_echo_response_prefixes_success():
    assert echo_response("hello there\n") == "1hello there\n"


@pytest.mark.parametrize(
    "query",
    [
        _oneshot(1010, 100, 0),
        _repeat(1020, 1000, 5),
        "Cancel|3",
    ],
)
def test_validate_accepts_well_formed(query):
    assert validate_response(query) == "1" + query


@pytest.mark.parametrize(
    "query",
    [
        "OneShot|1010|100|0|10.0.0.1|DTS-ALARM",
        "Cancel",
        "Cancel|3|4",
        "Bogus|1|2",
        "",
    ],
)
def test_validate_rejects_malformed(query):
    assert validate_response(query) == "0" + query


def test_validate_skips_empty_fields():
    query = "Cancel||7"
    assert validate_response(query) == "1" + query


def test_compare_times_orders_by_seconds_then_microseconds():
    assert compare_times((1, 999999), (2, 0)) == -1
    assert compare_times((2, 0), (1, 999999)) == 1
    assert compare_times((5, 10), (5, 20)) == -1
    assert compare_times((5, 20), (5, 10)) == 1
    assert compare_times((5, 10), (5, 10)) == 0


def test_server_ids_increase_from_one():
    sched = EventScheduler()
    first = _svid(sched.handle_query(_oneshot(1010, 100, 0)))
    second = _svid(sched.handle_query(_repeat(1020, 1000, 3)))
    third = _svid(sched.handle_query("Cancel|99"))
    assert first == 1
    assert [second, third] == [first + 1, first + 2]


@pytest.mark.parametrize(
    "query",
    ["", "Nope|1", "OneShot|1|2|3", "Cancel", _oneshot("x", 1, 0)],
)
def test_bad_queries_answer_zero(query):
    assert EventScheduler().handle_query(query) == "0"


def test_oneshot_fires_once_when_due():
    sched = EventScheduler()
    sched.handle_query(_oneshot(1010, 100, 500, host="1.2.3.4", port=5000))
    assert sched.tick((100, 499)) == []
    fired = sched.tick((100, 500))
    assert [e.clid for e in fired] == [1010]
    assert str(fired[0]) == "1010|1.2.3.4|DTS-ALARM|5000"
    assert fired[0].oneshot
    assert sched.tick((200, 0)) == []


def test_events_fire_in_time_order():
    sched = EventScheduler()
    sched.handle_query(_oneshot(3, 30, 0))
    sched.handle_query(_oneshot(1, 10, 0))
    sched.handle_query(_oneshot(2, 20, 0))
    assert [e.clid for e in sched.tick((40, 0))] == [1, 2, 3]


def test_repeat_fires_requested_number_of_times():
    sched = EventScheduler()
    sched.handle_query(_repeat(1020, 1000, 3))
    counts = []
    for now in [(1, 0), (1, 500000), (2, 0), (3, 0), (4, 0), (10, 0)]:
        counts.append(len(sched.tick(now)))
    assert sum(counts) == 3
    assert counts[1] == 0


def test_repeat_reschedules_interval_after_now():
    sched = EventScheduler()
    sched.handle_query(_repeat(7, 250, 2))
    assert len(sched.tick((50, 900000))) == 1
    assert sched.tick((51, 149999)) == []
    assert len(sched.tick((51, 150000))) == 1


def test_cancel_prevents_firing():
    sched = EventScheduler()
    svid = _svid(sched.handle_query(_oneshot(1010, 100, 0)))
    cancel_id = _svid(sched.handle_query(f"Cancel|{svid}"))
    assert cancel_id == svid + 1
    assert sched.tick((200, 0)) == []


def test_cancel_stops_a_repeat():
    sched = EventScheduler()
    svid = _svid(sched.handle_query(_repeat(5, 100, 10)))
    assert len(sched.tick((1, 0))) == 1
    sched.handle_query(f"Cancel|{svid}")
    assert sched.tick((5, 0)) == []
    assert sched.tick((50, 0)) == []


def test_cancel_of_unknown_id_still_succeeds():
    sched = EventScheduler()
    resp = sched.handle_query("Cancel|12345")
    assert _svid(resp) == 1


def test_run_reports_fired_events_until_stopped():
    out = io.StringIO()
    sched = EventScheduler(clock=lambda: (10**9, 0), out=out)
    sched.handle_query(_oneshot(4242, 1, 0, host="127.0.0.1", port=6000))
    stop = threading.Event()
    worker = threading.Thread(target=sched.run, args=(stop,))
    worker.start()
    deadline = time.monotonic() + 5
    while "Event fired" not in out.getvalue() and time.monotonic() < deadline:
        time.sleep(0.01)
    stop.set()
    worker.join(timeout=5)
    assert not worker.is_alive()
    assert out.getvalue().splitlines() == [
        "Event fired: 4242|127.0.0.1|DTS-ALARM|6000"
    ]