"""A generic priority queue ordered by a three-way comparator."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Iterator
from functools import cmp_to_key
from typing import Any, Generic, TypeVar

P = TypeVar("P")
V = TypeVar("V")

Comparator = Callable[[Any, Any], int]


def _natural_cmp(p1: Any, p2: Any) -> int:
    return (p1 > p2) - (p1 < p2)


class PrioQueue(Generic[P, V]):
    """Priority queue of (priority, value) pairs, smallest priority first.

    ``cmp(p1, p2)`` returns a negative number, zero or a positive number when
    ``p1`` is less than, equal to or greater than ``p2``.  When it is omitted,
    priorities are compared with the ordinary ``<`` and ``>`` operators.
    Entries with equal priorities leave in the order they were inserted.
    """

    __slots__ = ("_cmp", "_key", "_entries")

    def __init__(self, cmp: Comparator | None = None) -> None:
        self._cmp: Comparator = cmp if cmp is not None else _natural_cmp
        self._key = cmp_to_key(self._cmp)
        self._entries: list[tuple[Any, P, V]] = []

    @property
    def cmp(self) -> Comparator:
        """The comparator used to order priorities."""
        return self._cmp

    def insert(self, priority: P, value: V) -> None:
        """Insert ``value`` with the given ``priority``.

        The new entry goes after every entry whose priority is not greater,
        so entries of equal priority keep their insertion order.
        """
        key = self._key(priority)
        index = bisect_right(self._entries, key, key=lambda entry: entry[0])
        self._entries.insert(index, (key, priority, value))

    def min(self) -> tuple[P, V]:
        """Return the (priority, value) pair with the smallest priority.

        Raises IndexError if the queue is empty.
        """
        if not self._entries:
            raise IndexError("min of empty priority queue")
        _, priority, value = self._entries[0]
        return priority, value

    def remove_min(self) -> tuple[P, V]:
        """Remove and return the (priority, value) pair with the smallest priority.

        Raises IndexError if the queue is empty.
        """
        if not self._entries:
            raise IndexError("remove_min from empty priority queue")
        _, priority, value = self._entries.pop(0)
        return priority, value

    def clear(self) -> None:
        """Remove every entry; the queue is empty afterwards."""
        self._entries.clear()

    def to_list(self) -> list[V]:
        """Return the values from smallest to largest priority."""
        return [value for _, _, value in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[V]:
        """Iterate over a snapshot of the values in priority order."""
        return iter(self.to_list())

    def __repr__(self) -> str:
        pairs = [(priority, value) for _, priority, value in self._entries]
        return f"{type(self).__name__}({pairs!r})"