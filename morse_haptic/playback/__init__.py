"""
Playback module - Transport state machine and real-time sampling.

Key Components:
    PlaybackCoordinator - Owns session state; play/pause/stop/loop
    PlaybackState       - IDLE, PLAYING, PAUSED, FINISHED
    Clock               - Wall-clock time source (MonotonicClock, ManualClock)
    Ticker              - Periodic sampling loop (ThreadTicker, ManualTicker)

Example:
    from morse_haptic.playback import PlaybackCoordinator

    with PlaybackCoordinator() as coordinator:
        coordinator.input_text = "CQ CQ"
        coordinator.wpm = 18
        coordinator.play()
"""

from morse_haptic.playback.states import (
    PlaybackState,
    VALID_TRANSITIONS,
    is_valid_transition,
)
from morse_haptic.playback.clock import (
    Clock,
    MonotonicClock,
    ManualClock,
)
from morse_haptic.playback.ticker import (
    Ticker,
    ThreadTicker,
    ManualTicker,
)
from morse_haptic.playback.coordinator import (
    PlaybackCoordinator,
    PlaybackEvent,
    PlaybackSnapshot,
    Listener,
)

__all__ = [
    # States
    "PlaybackState",
    "VALID_TRANSITIONS",
    "is_valid_transition",
    # Time
    "Clock",
    "MonotonicClock",
    "ManualClock",
    "Ticker",
    "ThreadTicker",
    "ManualTicker",
    # Coordinator
    "PlaybackCoordinator",
    "PlaybackEvent",
    "PlaybackSnapshot",
    "Listener",
]
