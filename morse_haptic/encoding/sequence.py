"""
Timed Sequence - Signals placed on a timeline.

A MorseSequence is the complete, time-stamped rendering of one
text/config pairing. It is built once by the encoder and never
mutated; a new text or speed produces a new sequence.

Invariants enforced:
    1. No overlap ever - each element starts where the previous ended
    2. No holes - the first element starts at 0 and gaps are real elements
    3. total_duration is the end time of the last element (0 if empty)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence
from uuid import uuid4

from morse_haptic.encoding.signals import MorseSignal


@dataclass(frozen=True)
class TimedElement:
    """A signal element positioned in time.

    Fields:
        signal: Which signal this is.
        start_time: Seconds from the start of the sequence.
        duration: Seconds.
        character: Source character, None for letter/word gaps.
        character_index: Index in the flattened character stream
            (spaces included), used for highlighting.
        id: Unique within a sequence; fresh on every encode.
    """
    signal: MorseSignal
    start_time: float
    duration: float
    character: str | None = None
    character_index: int = 0
    id: str = field(default_factory=lambda: str(uuid4()), compare=False)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def contains(self, time: float) -> bool:
        """Whether ``time`` falls in [start_time, end_time)."""
        return self.start_time <= time < self.end_time


@dataclass(frozen=True)
class MorseSequence:
    """A complete Morse code sequence with timing information."""
    elements: tuple[TimedElement, ...] = ()
    total_duration: float = 0.0
    source_text: str = ""

    @classmethod
    def empty(cls) -> MorseSequence:
        """The distinguished "nothing to play" sequence."""
        return EMPTY_SEQUENCE

    @property
    def is_empty(self) -> bool:
        return not self.elements

    @property
    def visible_elements(self) -> tuple[TimedElement, ...]:
        """Only the audible (non-gap) elements, in order."""
        return tuple(e for e in self.elements if e.signal.is_audible)

    def __len__(self) -> int:
        return len(self.elements)

    def element_index_at(self, time: float) -> int | None:
        """Index of the first element whose interval contains ``time``.

        Returns None before the first element, at or after
        total_duration, or when the sequence is empty.
        """
        for index, element in enumerate(self.elements):
            if element.contains(time):
                return index
        return None


EMPTY_SEQUENCE = MorseSequence(elements=(), total_duration=0.0, source_text="")


def validate_contiguous(
    elements: Sequence[TimedElement],
    tolerance: float = 1e-9,
) -> bool:
    """Validate that elements form a gapless, non-overlapping timeline.

    Args:
        elements: Sequence of TimedElement instances

    Returns:
        True if contiguous, raises AssertionError otherwise
    """
    cursor = 0.0
    for index, element in enumerate(elements):
        assert math.isclose(element.start_time, cursor, abs_tol=tolerance), (
            f"Element {index} starts at {element.start_time}, expected {cursor}"
        )
        cursor = element.end_time
    return True


def total_duration_ms(sequence: MorseSequence) -> int:
    """Total duration in whole milliseconds (rounded)."""
    return int(round(sequence.total_duration * 1000))
