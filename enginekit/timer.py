"""A monotonic stopwatch for frame timing."""

from __future__ import annotations

import time


class Timer:
    """Measures seconds elapsed since the last mark."""

    def __init__(self) -> None:
        self._last = time.perf_counter()

    def mark(self) -> float:
        """Return seconds since the previous mark and start a new interval."""
        old = self._last
        self._last = time.perf_counter()
        return self._last - old

    def peek(self) -> float:
        """Return seconds since the previous mark without resetting."""
        return time.perf_counter() - self._last