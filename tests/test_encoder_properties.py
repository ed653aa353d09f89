"""
Property-Based Encoder Tests - Invariants across random text.

Uses Hypothesis to generate text and speeds and verify that the
encoded timeline holds its invariants in every case.

Invariants tested:
    1. Contiguity - every element starts where the previous ended
    2. Total duration equals the sum of element durations
    3. Determinism - identical input gives an identical timeline
    4. Every duration is an integer number of units
    5. character_index never decreases
"""

import math

from hypothesis import given, settings, strategies as st

from morse_haptic.encoding import (
    MORSE_TABLE,
    MorseSignal,
    TimingConfig,
    encode,
    to_display_string,
)


# =============================================================================
# Hypothesis Strategies
# =============================================================================

morse_alphabet = "".join(MORSE_TABLE) + "abcxyz "

# Mostly encodable text with some unknown characters mixed in
text_strategy = st.text(
    alphabet=st.sampled_from(list(morse_alphabet) + ["#", "é", "\t", "~"]),
    max_size=40,
)

config_strategy = st.builds(
    TimingConfig,
    wpm=st.floats(min_value=3, max_value=25, allow_nan=False, allow_infinity=False),
)


# =============================================================================
# Property Tests
# =============================================================================

class TestContiguity:
    """Property: the timeline has no holes and no overlaps."""

    @given(text_strategy, config_strategy)
    @settings(max_examples=200)
    def test_elements_tile_timeline(self, text, config):
        sequence = encode(text, config)
        cursor = 0.0
        for element in sequence.elements:
            assert element.start_time == cursor
            cursor = element.end_time
        assert sequence.total_duration == cursor


class TestDuration:
    """Property: duration is fully accounted for."""

    @given(text_strategy, config_strategy)
    @settings(max_examples=200)
    def test_total_is_sum_of_durations(self, text, config):
        sequence = encode(text, config)
        total = math.fsum(e.duration for e in sequence.elements)
        assert math.isclose(sequence.total_duration, total, rel_tol=1e-9, abs_tol=1e-12)

    @given(text_strategy, config_strategy)
    @settings(max_examples=100)
    def test_durations_match_signal_units(self, text, config):
        sequence = encode(text, config)
        for element in sequence.elements:
            assert element.duration == config.duration_for(element.signal)


class TestDeterminism:
    """Property: same input, same timeline."""

    @given(text_strategy, config_strategy)
    @settings(max_examples=100)
    def test_encode_twice(self, text, config):
        first = encode(text, config)
        second = encode(text, config)
        assert first.elements == second.elements
        assert first.total_duration == second.total_duration


class TestStructure:
    """Property: structural rules of the encoding."""

    @given(text_strategy, config_strategy)
    @settings(max_examples=100)
    def test_character_index_non_decreasing(self, text, config):
        indices = [e.character_index for e in encode(text, config).elements]
        assert indices == sorted(indices)

    @given(text_strategy)
    @settings(max_examples=100)
    def test_word_gap_count(self, text):
        sequence = encode(text, TimingConfig.DEFAULT)
        word_gaps = sum(1 for e in sequence.elements if e.signal is MorseSignal.WORD_GAP)
        expected = text.count(" ") if text else 0
        assert word_gaps == expected

    @given(text_strategy)
    @settings(max_examples=100)
    def test_visible_count_matches_display(self, text):
        sequence = encode(text, TimingConfig.DEFAULT)
        glyphs = sum(1 for c in to_display_string(text) if c in "·−")
        assert len(sequence.visible_elements) == glyphs

    @given(text_strategy)
    @settings(max_examples=100)
    def test_gaps_never_adjacent_to_element_gap(self, text):
        """Element gaps only sit between two signals of one character."""
        elements = encode(text, TimingConfig.DEFAULT).elements
        for index, element in enumerate(elements):
            if element.signal is MorseSignal.ELEMENT_GAP:
                assert elements[index - 1].signal.is_audible
                assert elements[index + 1].signal.is_audible
