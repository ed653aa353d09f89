"""
Shared fixtures for playback tests.

Provides:
    - A logger that writes to memory instead of stderr
    - Deterministic clock and ticker
    - A recording haptic sink
    - A coordinator wired to all of the above
"""

from __future__ import annotations

import io

import pytest

from morse_haptic.monitoring import LogLevel, StructuredLogger
from morse_haptic.playback import ManualClock, ManualTicker, PlaybackCoordinator
from morse_haptic.testing import HapticMock


@pytest.fixture
def log_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_output: io.StringIO) -> StructuredLogger:
    return StructuredLogger(level=LogLevel.DEBUG, output=log_output)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def sink() -> HapticMock:
    return HapticMock()


@pytest.fixture
def coordinator(sink, clock, ticker, logger) -> PlaybackCoordinator:
    return PlaybackCoordinator(sink=sink, clock=clock, ticker=ticker, logger=logger)
