"""
Tickers - Periodic sampling loops.

A ticker calls one callback at a fixed cadence while running. It knows
nothing about time inside the sequence; the callback reads the clock.

    ThreadTicker  - daemon thread, Event.wait() between ticks
    ManualTicker  - ticks only when the host calls tick()

Both make start() and stop() idempotent, and stop() is safe to call
from inside the callback.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


@runtime_checkable
class Ticker(Protocol):
    """Periodic task driving the sampling loop."""

    @property
    def is_running(self) -> bool:
        ...

    def set_callback(self, callback: TickCallback) -> None:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...


class ThreadTicker:
    """Background thread ticker.

    Each start() gets its own stop event, so a thread that is still
    unwinding from a previous run can never be revived by a later
    start(). stop() only signals; it never joins, because the thread
    may be waiting on a lock held by the caller. Use join() at
    shutdown.

    Args:
        interval: Seconds between ticks (default ~60 Hz).
        name: Thread name.
    """

    def __init__(
        self,
        interval: float = 0.016,
        name: str = "morse-playback-ticker",
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self._interval = interval
        self._name = name
        self._callback: TickCallback | None = None
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._stop_event.set()
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return not self._stop_event.is_set()

    def set_callback(self, callback: TickCallback) -> None:
        self._callback = callback

    def start(self) -> None:
        with self._lock:
            if not self._stop_event.is_set():
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                daemon=True,
                name=self._name,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()

    def stop(self) -> None:
        with self._lock:
            self._stop_event.set()

    def join(self, timeout: float | None = 2.0) -> None:
        """Stop and wait for the current thread to exit."""
        self.stop()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            callback = self._callback
            if callback is None:
                continue
            try:
                callback()
            except Exception:
                logger.error("Tick callback failed; stopping %s", self._name)
                stop_event.set()
                raise


class ManualTicker:
    """Ticker driven explicitly by the host (frame callback, tests).

    Example:
        ticker = ManualTicker()
        coordinator = PlaybackCoordinator(ticker=ticker, clock=clock)
        coordinator.play()
        clock.advance(0.05)
        ticker.tick()
    """

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self._running = False
        self.start_count = 0
        self.stop_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def set_callback(self, callback: TickCallback) -> None:
        self._callback = callback

    def start(self) -> None:
        if not self._running:
            self._running = True
            self.start_count += 1

    def stop(self) -> None:
        if self._running:
            self._running = False
            self.stop_count += 1

    def tick(self) -> bool:
        """Fire one tick. Returns False if the ticker is stopped."""
        if not self._running or self._callback is None:
            return False
        self._callback()
        return True
