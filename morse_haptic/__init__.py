"""
Morse Haptic - Text to precisely-timed Morse playback.

Architecture:
    text + TimingConfig → Encoder → MorseSequence → PlaybackCoordinator
                                                     ├─▶ HapticSink (tactile)
                                                     └─▶ listeners / snapshot() (visual)

Public API (stable):
    PlaybackCoordinator - Session state machine. play/pause/stop/loop/speed.
    encode              - encode("SOS", TimingConfig(wpm=12)) -> MorseSequence
    to_display_string   - to_display_string("SOS") -> "··· −−− ···"
    TimingConfig        - WPM timing (unit = 60 / (50 * wpm) seconds)
    PlaybackConfig      - Host wiring: speed, tick cadence, loop, logging

Submodules:
    encoding    - MorseSignal, TimedElement, MorseSequence, MorseEncoder
    playback    - PlaybackState, Clock, Ticker, PlaybackCoordinator
    haptics     - HapticSink protocol, pattern building, reference sinks
    monitoring  - StructuredLogger
    testing     - HapticMock

Example:
    from morse_haptic import PlaybackCoordinator
    from morse_haptic.haptics import EnvelopeHapticSink

    coordinator = PlaybackCoordinator(sink=EnvelopeHapticSink())
    coordinator.subscribe(lambda event, snapshot: print(snapshot.progress))

    coordinator.input_text = "Hello world"
    coordinator.wpm = 15
    coordinator.is_looping = True
    coordinator.play()
"""

__version__ = "1.0.0"

from morse_haptic.errors import (
    MorseHapticError,
    InvalidTimingConfigError,
    InvalidTransitionError,
    HapticError,
    EmptyPatternError,
    SinkUnavailableError,
)

from morse_haptic.encoding import (
    MorseSignal,
    TimingConfig,
    TimedElement,
    MorseSequence,
    EMPTY_SEQUENCE,
    MorseEncoder,
    encode,
    signals_for,
    to_display_string,
)

from morse_haptic.config import (
    PlaybackConfig,
    WPM_MIN,
    WPM_MAX,
    clamp_wpm,
)

from morse_haptic.haptics import (
    HapticSink,
    HapticPattern,
)

from morse_haptic.playback import (
    PlaybackCoordinator,
    PlaybackState,
    PlaybackEvent,
    PlaybackSnapshot,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "MorseHapticError",
    "InvalidTimingConfigError",
    "InvalidTransitionError",
    "HapticError",
    "EmptyPatternError",
    "SinkUnavailableError",
    # Encoding
    "MorseSignal",
    "TimingConfig",
    "TimedElement",
    "MorseSequence",
    "EMPTY_SEQUENCE",
    "MorseEncoder",
    "encode",
    "signals_for",
    "to_display_string",
    # Config
    "PlaybackConfig",
    "WPM_MIN",
    "WPM_MAX",
    "clamp_wpm",
    # Haptics
    "HapticSink",
    "HapticPattern",
    # Playback
    "PlaybackCoordinator",
    "PlaybackState",
    "PlaybackEvent",
    "PlaybackSnapshot",
]
