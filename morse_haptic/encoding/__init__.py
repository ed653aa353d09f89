"""
Encoding module - Text to timed Morse signal sequences.

The encoder is a leaf: it depends on nothing in playback or haptics.
"""

from morse_haptic.encoding.signals import (
    MorseSignal,
    TimingConfig,
    PARIS_UNITS,
)

from morse_haptic.encoding.sequence import (
    TimedElement,
    MorseSequence,
    EMPTY_SEQUENCE,
    validate_contiguous,
    total_duration_ms,
)

from morse_haptic.encoding.encoder import (
    MorseEncoder,
    MORSE_TABLE,
    DOT_GLYPH,
    DASH_GLYPH,
    WORD_SEPARATOR,
    encode,
    signals_for,
    to_display_string,
)

__all__ = [
    # Signals
    "MorseSignal",
    "TimingConfig",
    "PARIS_UNITS",
    # Sequence
    "TimedElement",
    "MorseSequence",
    "EMPTY_SEQUENCE",
    "validate_contiguous",
    "total_duration_ms",
    # Encoder
    "MorseEncoder",
    "MORSE_TABLE",
    "DOT_GLYPH",
    "DASH_GLYPH",
    "WORD_SEPARATOR",
    "encode",
    "signals_for",
    "to_display_string",
]
