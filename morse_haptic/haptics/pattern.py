"""
Haptic Patterns - Timed tactile events built from a Morse sequence.

A pattern is what a haptic sink actually plays. Building it is pure:
the sink decides how to drive hardware from the events.

Shape of each signal:
    dot       sharp transient at onset, plus a soft sustain for the
              dot's length when it is long enough to feel (> 20ms)
    dash      transient at onset, then a continuous buzz for the rest
              of the dash at full strength
    word gap  faint "breath" tap at the midpoint so long silences
              keep some presence

Letter and element gaps produce nothing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from morse_haptic.encoding import MorseSequence, MorseSignal
from morse_haptic.errors import EmptyPatternError


SUSTAIN_MIN_DURATION = 0.02
SUSTAIN_INTENSITY_SCALE = 0.6
SUSTAIN_SHARPNESS_SCALE = 0.5
DASH_ONSET = 0.01
BREATH_INTENSITY = 0.08
BREATH_SHARPNESS = 0.1

# How long a transient tap occupies when rendered as an envelope
TRANSIENT_DURATION = 0.01


class HapticEventType(str, Enum):
    """Kind of haptic event."""
    TRANSIENT = "transient"
    CONTINUOUS = "continuous"


@dataclass(frozen=True)
class HapticEvent:
    """A single tactile event, relative to pattern start."""
    event_type: HapticEventType
    time: float
    intensity: float
    sharpness: float
    duration: float = 0.0

    @property
    def end_time(self) -> float:
        if self.event_type is HapticEventType.TRANSIENT:
            return self.time + TRANSIENT_DURATION
        return self.time + self.duration


@dataclass(frozen=True)
class HapticPattern:
    """Events to play, ordered by time.

    Fields:
        events: Haptic events sorted by start time.
        duration: Length of the source sequence in seconds.
        source_text: Text the sequence was encoded from.
    """
    events: tuple[HapticEvent, ...]
    duration: float
    source_text: str = ""

    def __len__(self) -> int:
        return len(self.events)

    @property
    def transients(self) -> tuple[HapticEvent, ...]:
        return tuple(e for e in self.events if e.event_type is HapticEventType.TRANSIENT)

    @property
    def continuous(self) -> tuple[HapticEvent, ...]:
        return tuple(e for e in self.events if e.event_type is HapticEventType.CONTINUOUS)


def build_pattern(sequence: MorseSequence, breath: bool = True) -> HapticPattern:
    """Build a haptic pattern from a Morse sequence.

    Args:
        sequence: Encoded sequence.
        breath: Add faint taps in the middle of word gaps.

    Returns:
        HapticPattern with events sorted by time.

    Raises:
        EmptyPatternError: If the sequence has no audible elements.
    """
    if not sequence.visible_elements:
        raise EmptyPatternError(
            details={"source_text": sequence.source_text, "elements": len(sequence)},
        )

    events: list[HapticEvent] = []

    for element in sequence.elements:
        signal = element.signal

        if signal is MorseSignal.DOT:
            events.append(HapticEvent(
                event_type=HapticEventType.TRANSIENT,
                time=element.start_time,
                intensity=signal.haptic_intensity,
                sharpness=signal.haptic_sharpness,
            ))
            if element.duration > SUSTAIN_MIN_DURATION:
                events.append(HapticEvent(
                    event_type=HapticEventType.CONTINUOUS,
                    time=element.start_time,
                    intensity=signal.haptic_intensity * SUSTAIN_INTENSITY_SCALE,
                    sharpness=signal.haptic_sharpness * SUSTAIN_SHARPNESS_SCALE,
                    duration=element.duration,
                ))

        elif signal is MorseSignal.DASH:
            events.append(HapticEvent(
                event_type=HapticEventType.TRANSIENT,
                time=element.start_time,
                intensity=signal.haptic_intensity,
                sharpness=signal.haptic_sharpness,
            ))
            body = element.duration - DASH_ONSET
            if body > 0:
                events.append(HapticEvent(
                    event_type=HapticEventType.CONTINUOUS,
                    time=element.start_time + DASH_ONSET,
                    intensity=signal.haptic_intensity,
                    sharpness=signal.haptic_sharpness,
                    duration=body,
                ))

        elif signal is MorseSignal.WORD_GAP and breath:
            events.append(HapticEvent(
                event_type=HapticEventType.TRANSIENT,
                time=element.start_time + element.duration * 0.5,
                intensity=BREATH_INTENSITY,
                sharpness=BREATH_SHARPNESS,
            ))

    events.sort(key=lambda e: e.time)

    return HapticPattern(
        events=tuple(events),
        duration=sequence.total_duration,
        source_text=sequence.source_text,
    )


def render_envelope(pattern: HapticPattern, sample_rate: int = 1000) -> np.ndarray:
    """Render a pattern to an intensity envelope.

    Args:
        pattern: Pattern to render.
        sample_rate: Envelope samples per second.

    Returns:
        float32 array covering the pattern duration, values in [0, 1].
        Where events overlap the strongest one wins.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be > 0, got {sample_rate}")

    num_samples = max(1, int(math.ceil(pattern.duration * sample_rate)))
    envelope = np.zeros(num_samples, dtype=np.float32)

    for event in pattern.events:
        start = int(round(event.time * sample_rate))
        end = max(start + 1, int(round(event.end_time * sample_rate)))
        start = min(start, num_samples)
        end = min(end, num_samples)
        if start >= end:
            continue
        np.maximum(envelope[start:end], event.intensity, out=envelope[start:end])

    return envelope
