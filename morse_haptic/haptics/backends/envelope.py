"""
Envelope Sink - Software haptic renderer.

Renders the pattern to an intensity envelope with numpy and follows
its own clock through it. Useful as a stand-in for hardware, to drive
an on-screen vibration meter, or to modulate an audio sidetone.
"""

from __future__ import annotations

import logging

import numpy as np

from morse_haptic.haptics.base import BaseHapticSink, CompletionStatus
from morse_haptic.haptics.pattern import HapticPattern, render_envelope
from morse_haptic.playback.clock import Clock, MonotonicClock


logger = logging.getLogger(__name__)


class EnvelopeHapticSink(BaseHapticSink):
    """Software sink that tracks position through a rendered envelope.

    The sink has no thread of its own; call poll() periodically to
    detect the natural end and fire the completion handler.

    Args:
        clock: Time source (default: MonotonicClock).
        sample_rate: Envelope resolution in samples per second.
    """

    def __init__(self, clock: Clock | None = None, sample_rate: int = 1000):
        super().__init__()
        self._clock = clock or MonotonicClock()
        self._sample_rate = sample_rate
        self._pattern: HapticPattern | None = None
        self._envelope: np.ndarray | None = None
        self._started_at = 0.0
        self._paused_at: float | None = None

    @property
    def name(self) -> str:
        return "envelope"

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def pattern(self) -> HapticPattern | None:
        return self._pattern

    @property
    def envelope(self) -> np.ndarray | None:
        return self._envelope

    @property
    def is_playing(self) -> bool:
        return self._pattern is not None and self._paused_at is None

    @property
    def is_paused(self) -> bool:
        return self._pattern is not None and self._paused_at is not None

    @property
    def position(self) -> float:
        """Seconds into the current pattern (0 when stopped)."""
        if self._pattern is None:
            return 0.0
        now = self._paused_at if self._paused_at is not None else self._clock.now()
        return max(0.0, now - self._started_at)

    def play(self, pattern: HapticPattern) -> None:
        self._envelope = render_envelope(pattern, self._sample_rate)
        self._pattern = pattern
        self._started_at = self._clock.now()
        self._paused_at = None
        logger.debug(
            "Playing pattern: %d events, %.3fs", len(pattern), pattern.duration,
        )

    def pause(self) -> None:
        if self.is_playing:
            self._paused_at = self._clock.now()

    def resume(self) -> None:
        if self.is_paused:
            self._started_at += self._clock.now() - self._paused_at
            self._paused_at = None

    def stop(self) -> None:
        self._pattern = None
        self._envelope = None
        self._paused_at = None

    def current_intensity(self) -> float:
        """Envelope value at the current position, 0.0 when silent."""
        if self._envelope is None:
            return 0.0
        index = int(self.position * self._sample_rate)
        if index >= len(self._envelope):
            return 0.0
        return float(self._envelope[index])

    def poll(self) -> bool:
        """Check for natural completion.

        Returns:
            True if the pattern just finished (handler was notified).
        """
        if not self.is_playing:
            return False
        if self.position < self._pattern.duration:
            return False
        self.stop()
        self._notify_completion(CompletionStatus.FINISHED)
        return True
