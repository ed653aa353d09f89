"""
Morse signals and WPM timing.

One time unit is the length of a dot. Everything else is an integer
multiple of it:

    dot          1 unit    (audible)
    dash         3 units   (audible)
    element gap  1 unit    between dots/dashes inside a character
    letter gap   3 units   between characters
    word gap     7 units   between words

Speed is given in words per minute, calibrated against the reference
word "PARIS", which is exactly 50 units long. A unit therefore lasts
60 / (50 * wpm) seconds.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from morse_haptic.errors import InvalidTimingConfigError


# Units per reference word ("PARIS" including its trailing word gap)
PARIS_UNITS = 50


class MorseSignal(str, Enum):
    """A single Morse signal element."""
    DOT = "dot"
    DASH = "dash"
    ELEMENT_GAP = "elementGap"
    LETTER_GAP = "letterGap"
    WORD_GAP = "wordGap"

    @property
    def is_audible(self) -> bool:
        """Only dots and dashes produce output."""
        return self in (MorseSignal.DOT, MorseSignal.DASH)

    @property
    def is_gap(self) -> bool:
        return not self.is_audible

    @property
    def unit_duration(self) -> float:
        """Duration in units (1 unit = dot duration)."""
        return _UNIT_DURATIONS[self]

    @property
    def haptic_intensity(self) -> float:
        """Haptic intensity (0..1)."""
        return _HAPTIC_PARAMS[self][0]

    @property
    def haptic_sharpness(self) -> float:
        """Haptic sharpness (0..1)."""
        return _HAPTIC_PARAMS[self][1]


_UNIT_DURATIONS: dict[MorseSignal, float] = {
    MorseSignal.DOT: 1.0,
    MorseSignal.DASH: 3.0,
    MorseSignal.ELEMENT_GAP: 1.0,
    MorseSignal.LETTER_GAP: 3.0,
    MorseSignal.WORD_GAP: 7.0,
}

# (intensity, sharpness)
_HAPTIC_PARAMS: dict[MorseSignal, tuple[float, float]] = {
    MorseSignal.DOT: (0.5, 0.4),
    MorseSignal.DASH: (1.0, 0.7),
    MorseSignal.ELEMENT_GAP: (0.0, 0.0),
    MorseSignal.LETTER_GAP: (0.0, 0.0),
    MorseSignal.WORD_GAP: (0.0, 0.0),
}


@dataclass(frozen=True)
class TimingConfig:
    """Speed configuration for encoding.

    Fields:
        wpm: Words per minute. Must be finite and > 0.

    Out-of-range but positive values (e.g. 60 WPM) are accepted;
    clamping to a slider range is the caller's job (see
    ``morse_haptic.config.clamp_wpm``).

    Example:
        >>> TimingConfig(wpm=10).unit_duration
        0.12
    """
    wpm: float

    SLOW: ClassVar[TimingConfig]
    MEDIUM: ClassVar[TimingConfig]
    FAST: ClassVar[TimingConfig]
    DEFAULT: ClassVar[TimingConfig]

    def __post_init__(self) -> None:
        # Any real number (numpy scalars, Fraction) is stored as a float
        if isinstance(self.wpm, bool) or not isinstance(self.wpm, numbers.Real):
            raise InvalidTimingConfigError(self.wpm)
        wpm = float(self.wpm)
        if not math.isfinite(wpm) or wpm <= 0:
            raise InvalidTimingConfigError(self.wpm)
        object.__setattr__(self, "wpm", wpm)

    @property
    def unit_duration(self) -> float:
        """Base unit duration in seconds."""
        return 60.0 / (PARIS_UNITS * self.wpm)

    @property
    def dot_duration(self) -> float:
        return self.unit_duration

    @property
    def dash_duration(self) -> float:
        return self.unit_duration * 3.0

    @property
    def element_gap_duration(self) -> float:
        return self.unit_duration

    @property
    def letter_gap_duration(self) -> float:
        return self.unit_duration * 3.0

    @property
    def word_gap_duration(self) -> float:
        return self.unit_duration * 7.0

    def duration_for(self, signal: MorseSignal) -> float:
        """Duration of a signal in seconds."""
        return self.unit_duration * signal.unit_duration

    def with_wpm(self, wpm: float) -> TimingConfig:
        return TimingConfig(wpm=wpm)


TimingConfig.SLOW = TimingConfig(wpm=5)
TimingConfig.MEDIUM = TimingConfig(wpm=12)
TimingConfig.FAST = TimingConfig(wpm=20)
TimingConfig.DEFAULT = TimingConfig(wpm=10)
