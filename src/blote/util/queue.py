"""Fixed-length FIFO queue backed by a circular array.

The queue never grows: once ``capacity`` items are held, ``insert``
fails instead of evicting the oldest entry.  Callers that want a
"keep the most recent N" buffer must ``remove()`` first.

Internally two indices walk around a fixed-size list:

- ``front`` — slot of the oldest item (next to be removed).
- ``rear``  — slot of the newest item (last inserted).

Both wrap modulo ``capacity``.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class QueueError(Exception):
    """Raised when peeking/removing from an empty queue or inserting into a full one."""


class FixedLengthQueue(Generic[T]):
    """A first-in-first-out collection whose capacity never changes."""

    def __init__(self, capacity: int) -> None:
        """Create an empty queue.

        Args:
            capacity: Maximum number of items the queue can hold.

        Raises:
            ValueError: If capacity is not a positive integer.

        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            msg = f"capacity must be a positive integer (got {capacity!r})"
            raise ValueError(msg)

        self._slots: list[T | None] = [None] * capacity
        self._front = 0
        self._rear = -1
        self._count = 0

    @property
    def capacity(self) -> int:
        """Return the maximum number of items."""
        return len(self._slots)

    @property
    def count(self) -> int:
        """Return the number of items currently held."""
        return self._count

    def is_empty(self) -> bool:
        """Return True if the queue holds no items."""
        return self._count == 0

    def is_full(self) -> bool:
        """Return True if the queue is at capacity."""
        return self._count == len(self._slots)

    def peek(self) -> T:
        """Return the item at the front without removing it.

        Raises:
            QueueError: If the queue is empty.

        """
        if self.is_empty():
            msg = "queue is empty"
            raise QueueError(msg)
        return self._slots[self._front]  # type: ignore[return-value]

    def insert(self, item: T) -> None:
        """Append an item at the rear.

        Raises:
            QueueError: If the queue is full.

        """
        if self.is_full():
            msg = "queue is full"
            raise QueueError(msg)
        self._rear = (self._rear + 1) % len(self._slots)
        self._slots[self._rear] = item
        self._count += 1

    def remove(self) -> T:
        """Remove and return the item at the front.

        Raises:
            QueueError: If the queue is empty.

        """
        if self.is_empty():
            msg = "queue is empty"
            raise QueueError(msg)
        item = self._slots[self._front]
        self._slots[self._front] = None
        self._front = (self._front + 1) % len(self._slots)
        self._count -= 1
        return item  # type: ignore[return-value]

    def __len__(self) -> int:
        """Return the number of items currently held."""
        return self._count

    def __iter__(self) -> Iterator[T]:
        """Yield the held items from front to rear.

        Each call starts a fresh pass, so the queue can be iterated
        any number of times.
        """
        index = self._front
        for _ in range(self._count):
            yield self._slots[index]  # type: ignore[misc]
            index = (index + 1) % len(self._slots)

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"FixedLengthQueue({list(self)!r}, capacity={self.capacity})"
