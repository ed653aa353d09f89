"""
Morse Haptic - Testing Utilities

Components:
    HapticMock   - Recording haptic sink with failure injection
    MockConfig   - Mock configuration
    CallRecord   - One recorded sink call

Usage:
    from morse_haptic.testing import HapticMock
    from morse_haptic.playback import ManualClock, ManualTicker, PlaybackCoordinator

    mock = HapticMock()
    clock = ManualClock()
    ticker = ManualTicker()
    coordinator = PlaybackCoordinator(sink=mock, clock=clock, ticker=ticker)
"""

from morse_haptic.testing.mock import (
    HapticMock,
    MockConfig,
    CallRecord,
)

__all__ = [
    "HapticMock",
    "MockConfig",
    "CallRecord",
]
