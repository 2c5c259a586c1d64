"""Building queries for the scheduling service and reporting on replies."""

from __future__ import annotations

import math
import re

HOST = "localhost"
PORT = 19999
SERVICE = "DTS"
ALARM_SERVICE = "DTS-ALARM"

DEFAULT_ONESHOT_SECS = 5
DEFAULT_REPEAT_MSECS = 1000
DEFAULT_REPEATS = 5

_INT = re.compile(r"\s*([+-]?\d+)")


class ServerError(RuntimeError):
    """The service answered a query with an error."""


def _scan_int(text: str, default: int) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else default


def build_query(
    line: str,
    local_id: int,
    ipaddr: str,
    port: int,
    now: tuple[int, int],
) -> str:
    """Turn a command line into a query for the service.

    ``now`` is the current (seconds, microseconds) time; ``ipaddr`` and
    ``port`` name where timer events should be delivered.  Raises ValueError
    for an unknown command or a Cancel without exactly one event id.
    """
    newline = line.rfind("\n")
    text = line[:newline] if newline >= 0 else line
    words = [word for word in text.split(" ") if word]
    command = words[0] if words else ""

    if command == "OneShot":
        secs = DEFAULT_ONESHOT_SECS
        if len(words) > 1:
            secs = _scan_int(words[1], secs)
        sec, usec = now
        return (
            f"OneShot|{local_id}|{sec + secs}|{usec}|{ipaddr}"
            f"|{ALARM_SERVICE}|{port}"
        )
    if command == "Repeat":
        msecs = DEFAULT_REPEAT_MSECS
        repeats = DEFAULT_REPEATS
        if len(words) > 1:
            msecs = _scan_int(words[1], msecs)
            if len(words) > 2:
                repeats = _scan_int(words[2], repeats)
        return (
            f"Repeat|{local_id}|{msecs}|{repeats}|{ipaddr}"
            f"|{ALARM_SERVICE}|{port}"
        )
    if command == "Cancel":
        if len(words) != 2:
            raise ValueError("Cancel requires a event id")
        return f"Cancel|{words[1]}"
    raise ValueError(f"illegal command - {text}")


def parse_response(resp: str) -> str:
    """Return the payload of a successful reply.

    Raises ServerError if the reply does not start with ``1``.
    """
    if not resp.startswith("1"):
        raise ServerError("DTS server returned ERR")
    return resp[1:]


def format_timing(count: int, msec: int) -> str:
    """Summarise ``count`` calls that took ``msec`` milliseconds in total."""
    if count:
        per_call = msec / count
    else:
        per_call = math.nan if msec == 0 else math.inf
    secs, millis = divmod(msec, 1000)
    return (
        f"{count} lines Echo'd in {secs}.{millis:03d} seconds, "
        f"{per_call:.3f}ms/call"
    )