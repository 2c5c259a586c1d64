"""A map keyed by strings, kept in insertion order."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class StrEntry(Generic[V]):
    """A (key, value) pair held by a string-keyed map."""

    key: str
    value: V


def _check_key(key: object) -> str:
    if not isinstance(key, str):
        raise TypeError(f"StrMap keys must be str, not {type(key).__name__}")
    return key


class StrMap(Generic[V]):
    """Map from strings to values that keeps entries in insertion order.

    Replacing the value of an existing key leaves the entry in its place.
    Iterating over the map yields its entries.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, V] = {}

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._data

    def get(self, key: str) -> V:
        """Return the value stored under ``key``.

        Raises KeyError if the key is not in the map.
        """
        try:
            return self._data[key]
        except KeyError:
            raise KeyError(key) from None

    def put(self, key: str, value: V) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self._data[_check_key(key)] = value

    def put_unique(self, key: str, value: V) -> bool:
        """Store ``value`` under ``key`` only if the key is absent.

        Returns True if the entry was stored, False if the key was present.
        """
        _check_key(key)
        if key in self._data:
            return False
        self._data[key] = value
        return True

    def remove(self, key: str) -> None:
        """Remove the entry stored under ``key``.

        Raises KeyError if the key is not in the map.
        """
        try:
            del self._data[key]
        except KeyError:
            raise KeyError(key) from None

    def clear(self) -> None:
        """Remove every entry; the map is empty afterwards."""
        self._data.clear()

    def keys(self) -> list[str]:
        """Return the keys in insertion order."""
        return list(self._data)

    def entries(self) -> list[StrEntry[V]]:
        """Return the entries in insertion order."""
        return [StrEntry(key, value) for key, value in self._data.items()]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[StrEntry[V]]:
        """Iterate over a snapshot of the entries in insertion order."""
        return iter(self.entries())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"