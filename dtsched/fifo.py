"""A generic first-in, first-out queue."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Queue(Generic[T]):
    """FIFO queue: elements leave in the order they were enqueued."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: deque[T] = deque(items)

    def enqueue(self, element: T) -> None:
        """Append ``element`` to the tail of the queue."""
        self._items.append(element)

    def front(self) -> T:
        """Return the head of the queue without removing it.

        Raises IndexError if the queue is empty.
        """
        if not self._items:
            raise IndexError("front of empty queue")
        return self._items[0]

    def dequeue(self) -> T:
        """Remove and return the head of the queue.

        Raises IndexError if the queue is empty.
        """
        if not self._items:
            raise IndexError("dequeue from empty queue")
        return self._items.popleft()

    def clear(self) -> None:
        """Remove every element; the queue is empty afterwards."""
        self._items.clear()

    def to_list(self) -> list[T]:
        """Return the elements in order, from head to tail."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        # Iterate over a snapshot so the queue may change during iteration.
        return iter(self.to_list())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"