"""
Morse Encoder - Text to timed signal sequence.

The encoder is pure: same text and config in, same timeline out
(element ids aside). It has no knowledge of playback.

Gap placement is positional: a letter gap follows every character
that is not the last *position* in its word, whether or not the next
position holds a character the table knows. "A#B" therefore encodes
as A, letter gap, B; "AB#" ends with a trailing letter gap after B.
Unknown characters themselves contribute no elements and do not
advance the character index.
"""

from __future__ import annotations

from typing import Mapping

from morse_haptic.encoding.sequence import EMPTY_SEQUENCE, MorseSequence, TimedElement
from morse_haptic.encoding.signals import MorseSignal, TimingConfig


_DOT = MorseSignal.DOT
_DASH = MorseSignal.DASH

DOT_GLYPH = "\u00b7"
DASH_GLYPH = "\u2212"
WORD_SEPARATOR = "/"


MORSE_TABLE: dict[str, tuple[MorseSignal, ...]] = {
    "A": (_DOT, _DASH),
    "B": (_DASH, _DOT, _DOT, _DOT),
    "C": (_DASH, _DOT, _DASH, _DOT),
    "D": (_DASH, _DOT, _DOT),
    "E": (_DOT,),
    "F": (_DOT, _DOT, _DASH, _DOT),
    "G": (_DASH, _DASH, _DOT),
    "H": (_DOT, _DOT, _DOT, _DOT),
    "I": (_DOT, _DOT),
    "J": (_DOT, _DASH, _DASH, _DASH),
    "K": (_DASH, _DOT, _DASH),
    "L": (_DOT, _DASH, _DOT, _DOT),
    "M": (_DASH, _DASH),
    "N": (_DASH, _DOT),
    "O": (_DASH, _DASH, _DASH),
    "P": (_DOT, _DASH, _DASH, _DOT),
    "Q": (_DASH, _DASH, _DOT, _DASH),
    "R": (_DOT, _DASH, _DOT),
    "S": (_DOT, _DOT, _DOT),
    "T": (_DASH,),
    "U": (_DOT, _DOT, _DASH),
    "V": (_DOT, _DOT, _DOT, _DASH),
    "W": (_DOT, _DASH, _DASH),
    "X": (_DASH, _DOT, _DOT, _DASH),
    "Y": (_DASH, _DOT, _DASH, _DASH),
    "Z": (_DASH, _DASH, _DOT, _DOT),
    "0": (_DASH, _DASH, _DASH, _DASH, _DASH),
    "1": (_DOT, _DASH, _DASH, _DASH, _DASH),
    "2": (_DOT, _DOT, _DASH, _DASH, _DASH),
    "3": (_DOT, _DOT, _DOT, _DASH, _DASH),
    "4": (_DOT, _DOT, _DOT, _DOT, _DASH),
    "5": (_DOT, _DOT, _DOT, _DOT, _DOT),
    "6": (_DASH, _DOT, _DOT, _DOT, _DOT),
    "7": (_DASH, _DASH, _DOT, _DOT, _DOT),
    "8": (_DASH, _DASH, _DASH, _DOT, _DOT),
    "9": (_DASH, _DASH, _DASH, _DASH, _DOT),
    ".": (_DOT, _DASH, _DOT, _DASH, _DOT, _DASH),
    ",": (_DASH, _DASH, _DOT, _DOT, _DASH, _DASH),
    "?": (_DOT, _DOT, _DASH, _DASH, _DOT, _DOT),
    "'": (_DOT, _DASH, _DASH, _DASH, _DASH, _DOT),
    "!": (_DASH, _DOT, _DASH, _DOT, _DASH, _DASH),
    "/": (_DASH, _DOT, _DOT, _DASH, _DOT),
    "(": (_DASH, _DOT, _DASH, _DASH, _DOT),
    ")": (_DASH, _DOT, _DASH, _DASH, _DOT, _DASH),
    "&": (_DOT, _DASH, _DOT, _DOT, _DOT),
    ":": (_DASH, _DASH, _DASH, _DOT, _DOT, _DOT),
    ";": (_DASH, _DOT, _DASH, _DOT, _DASH, _DOT),
    "=": (_DASH, _DOT, _DOT, _DOT, _DASH),
    "+": (_DOT, _DASH, _DOT, _DASH, _DOT),
    "-": (_DASH, _DOT, _DOT, _DOT, _DOT, _DASH),
    "\"": (_DOT, _DASH, _DOT, _DOT, _DASH, _DOT),
    "@": (_DOT, _DASH, _DASH, _DOT, _DASH, _DOT),
}


class MorseEncoder:
    """Converts text to Morse display strings and timed sequences.

    Args:
        table: Character to signal mapping. Keys must be uppercase.

    Example:
        encoder = MorseEncoder()
        seq = encoder.encode("SOS", TimingConfig.DEFAULT)
        len(seq.visible_elements)  # 9
    """

    def __init__(self, table: Mapping[str, tuple[MorseSignal, ...]] | None = None):
        self._table = dict(MORSE_TABLE if table is None else table)

    @property
    def table(self) -> Mapping[str, tuple[MorseSignal, ...]]:
        return self._table

    def signals_for(self, character: str) -> tuple[MorseSignal, ...] | None:
        """Morse pattern for a single character (case-insensitive)."""
        return self._table.get(character.upper())

    def to_display_string(self, text: str) -> str:
        """Render text as dot/dash glyphs for display.

        Characters are separated by single spaces, words by "/".
        Unknown characters are dropped.
        """
        tokens: list[str] = []

        for char in text.upper():
            if char == " ":
                tokens.append(WORD_SEPARATOR)
                continue
            signals = self._table.get(char)
            if signals is None:
                continue
            tokens.append("".join(
                DOT_GLYPH if signal is MorseSignal.DOT else DASH_GLYPH
                for signal in signals
            ))

        return " ".join(tokens)

    def encode(self, text: str, config: TimingConfig) -> MorseSequence:
        """Convert text to a timed Morse sequence.

        Args:
            text: Source text. Case is ignored.
            config: Timing configuration (WPM).

        Returns:
            A MorseSequence whose elements tile [0, total_duration)
            with no gaps or overlaps. Empty text yields EMPTY_SEQUENCE.
        """
        upper = text.upper()
        if not upper:
            return EMPTY_SEQUENCE

        elements: list[TimedElement] = []
        cursor = 0.0
        char_index = 0

        # str.split(" ") keeps empty words, which word gaps depend on
        words = upper.split(" ")

        for word_idx, word in enumerate(words):
            for letter_idx, char in enumerate(word):
                signals = self._table.get(char)
                if signals is None:
                    continue

                for signal_idx, signal in enumerate(signals):
                    duration = config.duration_for(signal)
                    elements.append(TimedElement(
                        signal=signal,
                        start_time=cursor,
                        duration=duration,
                        character=char,
                        character_index=char_index,
                    ))
                    cursor += duration

                    if signal_idx < len(signals) - 1:
                        gap = config.element_gap_duration
                        elements.append(TimedElement(
                            signal=MorseSignal.ELEMENT_GAP,
                            start_time=cursor,
                            duration=gap,
                            character=char,
                            character_index=char_index,
                        ))
                        cursor += gap

                char_index += 1

                if letter_idx < len(word) - 1:
                    gap = config.letter_gap_duration
                    elements.append(TimedElement(
                        signal=MorseSignal.LETTER_GAP,
                        start_time=cursor,
                        duration=gap,
                        character_index=char_index,
                    ))
                    cursor += gap

            if word_idx < len(words) - 1:
                char_index += 1  # the space
                gap = config.word_gap_duration
                elements.append(TimedElement(
                    signal=MorseSignal.WORD_GAP,
                    start_time=cursor,
                    duration=gap,
                    character_index=char_index,
                ))
                cursor += gap

        return MorseSequence(
            elements=tuple(elements),
            total_duration=cursor,
            source_text=text,
        )


_default_encoder = MorseEncoder()


def signals_for(character: str) -> tuple[MorseSignal, ...] | None:
    """Morse pattern for a single character, or None if unknown."""
    return _default_encoder.signals_for(character)


def to_display_string(text: str) -> str:
    """Render text as a dot/dash display string."""
    return _default_encoder.to_display_string(text)


def encode(text: str, config: TimingConfig | None = None) -> MorseSequence:
    """Encode text with the default table.

    Args:
        text: Source text.
        config: Timing configuration (default: TimingConfig.DEFAULT).
    """
    return _default_encoder.encode(text, config or TimingConfig.DEFAULT)
