"""A generic last-in, first-out stack."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Stack(Generic[T]):
    """LIFO stack: the last element pushed is the first popped."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = []
        for item in items:
            self.push(item)

    def push(self, element: T) -> None:
        """Push ``element`` onto the top of the stack."""
        self._items.append(element)

    def pop(self) -> T:
        """Remove and return the top element.

        Raises IndexError if the stack is empty.
        """
        if not self._items:
            raise IndexError("pop from empty stack")
        return self._items.pop()

    def peek(self) -> T:
        """Return the top element without removing it.

        Raises IndexError if the stack is empty.
        """
        if not self._items:
            raise IndexError("peek at empty stack")
        return self._items[-1]

    def clear(self) -> None:
        """Remove every element; the stack is empty afterwards."""
        self._items.clear()

    def to_list(self) -> list[T]:
        """Return the elements from top to bottom."""
        return self._items[::-1]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate from top to bottom over a snapshot of the stack."""
        return iter(self.to_list())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"