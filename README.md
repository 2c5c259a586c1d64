# dtsched

`dtsched` is a small library for scheduling timer events. It holds the request
handling of a delayed-timer service, helpers for building that service's
requests, and the container types the scheduler is built on.

## Containers

| Module              | Class       | Purpose                                        |
|---------------------|-------------|------------------------------------------------|
| `dtsched.fifo`      | `Queue`     | First-in, first-out queue                      |
| `dtsched.stack`     | `Stack`     | Last-in, first-out stack                       |
| `dtsched.prioqueue` | `PrioQueue` | Priority queue ordered by a comparator         |
| `dtsched.listmap`   | `ListMap`   | Map whose keys are matched by a comparator     |
| `dtsched.strmap`    | `StrMap`    | Map with string keys, in insertion order       |

Each container supports `len()` and iteration over a snapshot of its
contents. Taking from an empty `Queue`, `Stack` or `PrioQueue` raises
`IndexError`.

```python
from dtsched.fifo import Queue
from dtsched.stack import Stack

q = Queue()
q.enqueue("a")
q.enqueue("b")
q.front()      # "a"
q.dequeue()    # "a"
len(q)         # 1

s = Stack()
s.push(1)
s.push(2)
s.to_list()    # [2, 1], from top to bottom
s.pop()        # 2
```

`PrioQueue` takes an optional comparator `cmp(p1, p2)` that returns a
negative number, zero or a positive number. Without one, priorities are
compared with `<` and `>`. Entries of equal priority come out in the order
they were inserted. `to_list()` returns the values in priority order.

```python
from dtsched.prioqueue import PrioQueue

pq = PrioQueue()
pq.insert(5, "later")
pq.insert(1, "sooner")
pq.min()         # (1, "sooner")
pq.remove_min()  # (1, "sooner")
```

`ListMap` takes an optional comparator in the same way and treats two keys as
the same when it returns zero, so keys need not be hashable. `StrMap` accepts
only `str` keys and raises `TypeError` for others. Both maps provide `get`,
`put`, `put_unique`, `remove`, `clear`, `keys` and `entries`, and support
`in`. `get` and `remove` raise `KeyError` for a missing key; `put_unique`
returns `False` instead of overwriting. Iterating over either map yields its
entries (`Entry` or `StrEntry`, with `key` and `value` fields).

## Scheduling service

`dtsched.server` handles queries of three shapes, with fields separated by
`|`:

- `OneShot|clid|sec|usec|host|service|port` fires once at the given time;
- `Repeat|clid|msecs|repeats|host|service|port` fires `repeats` times,
  `msecs` milliseconds apart;
- `Cancel|svid` cancels an event registered earlier.

Functions and classes:

- `echo_response(query)` answers any query with `"1"` followed by the query.
- `validate_response(query)` answers with `"1"` or `"0"`, for a well-formed
  or malformed query, followed by the query.
- `compare_times(t1, t2)` orders `(seconds, microseconds)` pairs, returning
  -1, 0 or 1.
- `Event` is a registered event; `str(event)` gives
  `clid|host|service|port`.
- `EventScheduler(clock=None, out=None)` keeps pending events in time order.
  - `handle_query(query)` registers a request and returns `"1"` followed by
    the server id as eight digits, or `"0"` for a malformed query. Each
    accepted query, `Cancel` included, uses a new id.
  - `tick(now)` fires every event due at or before `now` and returns the
    fired events. Repeating events with repeats left are rescheduled at
    `now` plus their interval; cancelled events are dropped without firing.
  - `run(stop)` calls `tick` with the clock's time every 10 ms until the
    `threading.Event` `stop` is set, printing `Event fired: ...` for each
    firing to `out` (standard output by default).

```python
from dtsched.server import EventScheduler

sched = EventScheduler()
sched.handle_query("OneShot|1010|100|0|127.0.0.1|DTS-ALARM|5000")  # "100000001"
[str(e) for e in sched.tick((100, 0))]  # ["1010|127.0.0.1|DTS-ALARM|5000"]
```

## Client helpers

`dtsched.client` builds requests and reads replies.

- `build_query(line, local_id, ipaddr, port, now)` turns a command line into
  a query. Accepted lines are `OneShot [secs]` (default 5 seconds after
  `now`), `Repeat [msecs [repeats]]` (defaults 1000 and 5) and
  `Cancel <id>`. Events are addressed to the service `DTS-ALARM` at
  `ipaddr:port`. An unknown command, or `Cancel` without exactly one id,
  raises `ValueError`.
- `parse_response(resp)` returns the text after a leading `"1"`, or raises
  `ServerError`.
- `format_timing(count, msec)` gives a line such as
  `3 lines Echo'd in 1.500 seconds, 500.000ms/call`.

## What this package does not do

The package has no network layer. It does not listen on a port, connect to a
service or deliver events to clients; `EventScheduler.run` only prints the
events it fires. There are no command-line programs. Wiring queries and
replies to a transport is left to the caller.

## Running the tests

Install the package with the `test` extra, then run `pytest`.