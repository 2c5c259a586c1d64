"""Scheduling service for one-shot and repeating timer events.

Queries are ``|``-separated commands:

* ``OneShot|clid|sec|usec|host|service|port`` fires once at the given time;
* ``Repeat|clid|msecs|repeats|host|service|port`` fires ``repeats`` times,
  ``msecs`` milliseconds apart;
* ``Cancel|svid`` cancels a previously registered event.

A successful registration is answered with ``1`` followed by the server id
as eight digits; a malformed query is answered with ``0``.
"""

from __future__ import annotations

import re
import sys
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from dtsched.fifo import Queue
from dtsched.prioqueue import PrioQueue

SERVICE = "DTS"
PORT = 19999
TICK_SECONDS = 0.01
USEC_PER_SEC = 1_000_000

Timeval = tuple[int, int]

_INT = re.compile(r"\s*([+-]?\d+)")
_ARITY = {"OneShot": 7, "Repeat": 7, "Cancel": 2}


def _scan_int(text: str) -> int | None:
    """Read a leading integer the way a numeric scan would; None if absent."""
    match = _INT.match(text)
    return int(match.group(1)) if match else None


def _words(query: str) -> list[str]:
    """Split on ``|``, skipping empty fields."""
    return [word for word in query.split("|") if word]


def _well_formed(words: list[str]) -> bool:
    return bool(words) and _ARITY.get(words[0]) == len(words)


def _normalize(sec: int, usec: int) -> Timeval:
    """Carry whole seconds out of ``usec`` while it exceeds one second."""
    if usec > USEC_PER_SEC:
        carry = (usec - 1) // USEC_PER_SEC
        sec += carry
        usec -= carry * USEC_PER_SEC
    return sec, usec


def _now() -> Timeval:
    sec, usec = divmod(time.time_ns() // 1000, USEC_PER_SEC)
    return sec, usec


def echo_response(query: str) -> str:
    """Answer every query with success, echoing it back."""
    return "1" + query


def validate_response(query: str) -> str:
    """Echo the query, prefixed with ``1`` if well formed and ``0`` if not."""
    status = "1" if _well_formed(_words(query)) else "0"
    return status + query


def compare_times(t1: Timeval, t2: Timeval) -> int:
    """Compare two (seconds, microseconds) times; return -1, 0 or 1."""
    sec1, usec1 = t1
    sec2, usec2 = t2
    if sec1 != sec2:
        return -1 if sec1 < sec2 else 1
    if usec1 != usec2:
        return -1 if usec1 < usec2 else 1
    return 0


@dataclass
class Event:
    """A registered timer event."""

    id: int
    clid: int
    host: str
    service: str
    port: int
    repeat: bool = False
    interval: int = 0
    num_repeats: int = 0
    cancelled: bool = False

    @property
    def oneshot(self) -> bool:
        return not self.repeat

    def __str__(self) -> str:
        return f"{self.clid}|{self.host}|{self.service}|{self.port}"


class EventScheduler:
    """Holds pending events in time order and fires them when due."""

    def __init__(
        self,
        clock: Callable[[], Timeval] | None = None,
        out: TextIO | None = None,
    ) -> None:
        self._clock = clock if clock is not None else _now
        self._out = out
        self._queue: PrioQueue[Timeval, Event] = PrioQueue(compare_times)
        self._events: dict[int, Event] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _allocate_id(self) -> int:
        svid = self._next_id
        self._next_id += 1
        return svid

    def _register(self, when: Timeval, event: Event) -> int:
        self._queue.insert(when, event)
        self._events[event.id] = event
        return event.id

    def _one_shot(self, words: list[str]) -> int | None:
        clid, sec, usec, port = (
            _scan_int(words[i]) for i in (1, 2, 3, 6)
        )
        if None in (clid, sec, usec, port):
            return None
        event = Event(
            id=self._allocate_id(),
            clid=clid,
            host=words[4],
            service=words[5],
            port=port,
        )
        return self._register((sec, usec), event)

    def _repeat(self, words: list[str]) -> int | None:
        clid, msecs, repeats, port = (
            _scan_int(words[i]) for i in (1, 2, 3, 6)
        )
        if None in (clid, msecs, repeats, port):
            return None
        event = Event(
            id=self._allocate_id(),
            clid=clid,
            host=words[4],
            service=words[5],
            port=port,
            repeat=True,
            interval=msecs,
            num_repeats=repeats,
        )
        # The first firing is scheduled at the interval measured from the
        # epoch, so it is due on the next tick.
        return self._register(_normalize(0, msecs * 1000), event)

    def _cancel(self, words: list[str]) -> int:
        target = _scan_int(words[1])
        event = self._events.get(target if target is not None else 0)
        if event is not None:
            event.cancelled = True
        return self._allocate_id()

    def handle_query(self, query: str) -> str:
        """Process one query and return the response to send back."""
        words = _words(query)
        if not _well_formed(words):
            return "0"
        handler = {
            "OneShot": self._one_shot,
            "Repeat": self._repeat,
            "Cancel": self._cancel,
        }[words[0]]
        with self._lock:
            svid = handler(words)
        return "0" if not svid else f"1{svid:08d}"

    def _forget(self, event: Event) -> None:
        self._events.pop(event.id, None)

    def tick(self, now: Timeval) -> list[Event]:
        """Fire every event due at or before ``now``; return those fired."""
        with self._lock:
            due: Queue[Event] = Queue()
            while self._queue:
                when, event = self._queue.min()
                if compare_times(when, now) > 0:
                    break
                self._queue.remove_min()
                due.enqueue(event)

            fired: list[Event] = []
            again: Queue[Event] = Queue()
            for event in due:
                if event.cancelled:
                    self._forget(event)
                    continue
                fired.append(event)
                if event.repeat and event.num_repeats > 1:
                    event.num_repeats -= 1
                    again.enqueue(event)
                else:
                    self._forget(event)

            for event in again:
                if event.cancelled:
                    self._forget(event)
                    continue
                later = _normalize(now[0], now[1] + event.interval * 1000)
                self._queue.insert(later, event)
        return fired

    def run(self, stop: threading.Event) -> None:
        """Tick every few milliseconds until ``stop`` is set, reporting firings."""
        while not stop.wait(TICK_SECONDS):
            out = self._out if self._out is not None else sys.stdout
            for event in self.tick(self._clock()):
                print(f"Event fired: {event}", file=out, flush=True)