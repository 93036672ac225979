"""
Fixed-capacity moving average.

Used to smooth power, current and voltage readings from the board
power sensor while the sampling loop runs.
"""

from typing import List, Optional, Union

from .errors import InvalidState


Number = Union[int, float]


def _truncating_div(total: int, count: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(total) // count
    return -quotient if total < 0 else quotient


class MovingAverageBuffer:
    """
    Circular buffer keeping a running sum of its valid samples.

    Until the buffer first fills, the average is taken over the samples
    pushed so far rather than over the full capacity.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidState(f"moving average capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._slots: List[Number] = [0] * capacity
        self._cursor = 0
        self._length = 0
        self._sum: Number = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def sum(self) -> Number:
        return self._sum

    @property
    def average(self) -> Optional[Number]:
        """Current average, or None when nothing has been pushed."""
        if self._length == 0:
            return None
        return self._divide(self._sum, self._length)

    def __len__(self) -> int:
        return self._length

    def push(self, value: Number) -> Number:
        """Store a sample, evicting the oldest once full, and return the new average."""
        old = self._slots[self._cursor] if self._length == self._capacity else 0
        self._slots[self._cursor] = value
        self._sum += value - old

        self._cursor = (self._cursor + 1) % self._capacity
        if self._length < self._capacity:
            self._length += 1

        return self._divide(self._sum, self._length)

    def values(self) -> List[Number]:
        """Valid samples, oldest first."""
        if self._length < self._capacity:
            return self._slots[:self._length]
        return self._slots[self._cursor:] + self._slots[:self._cursor]

    def clear(self):
        self._slots = [0] * self._capacity
        self._cursor = 0
        self._length = 0
        self._sum = 0

    @staticmethod
    def _divide(total: Number, count: int) -> Number:
        if isinstance(total, int):
            return _truncating_div(total, count)
        return total / count
