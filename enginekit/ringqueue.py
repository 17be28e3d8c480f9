"""A bounded first-in first-out queue that refuses items when full."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

from enginekit.mathutil import is_power_of_two

T = TypeVar("T")


class RingQueue(Generic[T]):
    """FIFO queue with a fixed, power-of-two capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity == 0:
            raise ValueError("capacity cannot be zero")
        if not is_power_of_two(capacity):
            raise ValueError("capacity must be a power of two")
        self._capacity = capacity
        self._items: Deque[T] = deque()

    def push(self, value: T) -> bool:
        """Append ``value``; return False and leave the queue unchanged if full."""
        if self.full():
            return False
        self._items.append(value)
        return True

    def pop(self) -> T:
        """Remove and return the front item."""
        if not self._items:
            raise IndexError("pop from an empty RingQueue")
        return self._items.popleft()

    def front(self) -> T:
        if not self._items:
            raise IndexError("front of an empty RingQueue")
        return self._items[0]

    def back(self) -> T:
        if not self._items:
            raise IndexError("back of an empty RingQueue")
        return self._items[-1]

    def clear(self) -> None:
        self._items.clear()

    def full(self) -> bool:
        return len(self._items) == self._capacity

    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))