"""A generic map whose keys are matched by a three-way comparator."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")

Comparator = Callable[[Any, Any], int]


def _natural_cmp(k1: Any, k2: Any) -> int:
    return (k1 > k2) - (k1 < k2)


@dataclass(frozen=True)
class Entry(Generic[K, V]):
    """A (key, value) pair held by a map."""

    key: K
    value: V


class ListMap(Generic[K, V]):
    """Map that keeps its entries in insertion order.

    Two keys are the same key when ``cmp(k1, k2)`` returns zero.  When
    ``cmp`` is omitted, keys are compared with ``<`` and ``>``.  Lookups scan
    the entries in order, so keys need not be hashable.  Iterating over the
    map yields its entries.
    """

    __slots__ = ("_cmp", "_entries")

    def __init__(self, cmp: Comparator | None = None) -> None:
        self._cmp: Comparator = cmp if cmp is not None else _natural_cmp
        self._entries: list[Entry[K, V]] = []

    @property
    def cmp(self) -> Comparator:
        """The comparator used to match keys."""
        return self._cmp

    def _find(self, key: Any) -> int | None:
        for index, entry in enumerate(self._entries):
            if self._cmp(entry.key, key) == 0:
                return index
        return None

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not None

    def get(self, key: K) -> V:
        """Return the value stored under ``key``.

        Raises KeyError if the key is not in the map.
        """
        index = self._find(key)
        if index is None:
            raise KeyError(key)
        return self._entries[index].value

    def put(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``.

        If a matching key is present, both its key and value are replaced
        and the entry keeps its position; otherwise the entry is appended.
        """
        index = self._find(key)
        if index is None:
            self._entries.append(Entry(key, value))
        else:
            self._entries[index] = Entry(key, value)

    def put_unique(self, key: K, value: V) -> bool:
        """Store ``value`` under ``key`` only if the key is absent.

        Returns True if the entry was stored, False if the key was present.
        """
        if self._find(key) is not None:
            return False
        self._entries.append(Entry(key, value))
        return True

    def remove(self, key: K) -> None:
        """Remove the entry stored under ``key``.

        Raises KeyError if the key is not in the map.
        """
        index = self._find(key)
        if index is None:
            raise KeyError(key)
        del self._entries[index]

    def clear(self) -> None:
        """Remove every entry; the map is empty afterwards."""
        self._entries.clear()

    def keys(self) -> list[K]:
        """Return the keys in insertion order."""
        return [entry.key for entry in self._entries]

    def entries(self) -> list[Entry[K, V]]:
        """Return the entries in insertion order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry[K, V]]:
        """Iterate over a snapshot of the entries in insertion order."""
        return iter(self.entries())

    def __repr__(self) -> str:
        pairs = [(entry.key, entry.value) for entry in self._entries]
        return f"{type(self).__name__}({pairs!r})"