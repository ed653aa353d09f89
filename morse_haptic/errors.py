"""
Morse Haptic Errors - Domain-specific error types.

Error hierarchy:
    MorseHapticError (base)
    ├── InvalidTimingConfigError
    ├── InvalidTransitionError
    └── HapticError
        ├── EmptyPatternError
        └── SinkUnavailableError

Haptic errors are never fatal to playback. The coordinator logs them
and keeps its own clock running.
"""

from __future__ import annotations

from typing import Any


class MorseHapticError(Exception):
    """Base error for all morse_haptic errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidTimingConfigError(MorseHapticError, ValueError):
    """
    Raised when a timing configuration cannot produce finite durations.

    Words-per-minute must be a finite number greater than zero. The
    3-25 WPM slider range is a UI concern and is not enforced here.
    """

    def __init__(
        self,
        wpm: Any,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        msg = message or f"wpm must be a finite number > 0, got {wpm!r}"
        super().__init__(msg, details)
        self.wpm = wpm


class InvalidTransitionError(MorseHapticError):
    """
    Raised when the playback state machine is asked to make a move
    outside its transition table (e.g. PAUSED -> FINISHED).

    This indicates a coordinator bug, not bad user input.
    """

    def __init__(
        self,
        from_state: str,
        to_state: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"Invalid transition from {from_state} to {to_state}",
            details,
        )
        self.from_state = from_state
        self.to_state = to_state


class HapticError(MorseHapticError):
    """Base error for haptic sink failures."""


class EmptyPatternError(HapticError):
    """
    Raised by a sink's build step when the sequence has nothing to feel.

    A sequence made only of gaps (or no elements at all) has no
    audible signals and therefore no pattern.
    """

    def __init__(
        self,
        message: str = "Cannot create an empty haptic pattern",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class SinkUnavailableError(HapticError):
    """
    Raised when no haptic capability is present.

    Examples:
    - Device without haptic hardware
    - Sink closed or never started
    """

    def __init__(
        self,
        message: str = "Haptic engine is not available on this device",
        sink_name: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.sink_name = sink_name
