"""
Clocks - Wall-clock time sources for playback.

The coordinator never counts ticks. It asks a clock for "now" and
computes elapsed time as a difference, so late or skipped ticks
cannot shift element boundaries.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Monotonic time source in seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Real clock backed by ``time.perf_counter``."""

    def now(self) -> float:
        return time.perf_counter()


class ManualClock:
    """Clock that only moves when told to.

    Example:
        clock = ManualClock()
        clock.advance(0.25)
        clock.now()  # 0.25
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._lock = threading.Lock()

    def now(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> float:
        """Move forward by ``seconds`` and return the new time."""
        if seconds < 0:
            raise ValueError(f"ManualClock cannot go backwards, got {seconds}")
        with self._lock:
            self._now += seconds
            return self._now

    def set(self, value: float) -> None:
        with self._lock:
            if value < self._now:
                raise ValueError(f"ManualClock cannot go backwards: {value} < {self._now}")
            self._now = value
