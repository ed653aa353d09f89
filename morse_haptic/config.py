"""
Playback configuration for Morse Haptic.

Defines speed bounds for UI callers and the knobs a host uses to wire
up a coordinator.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal

from morse_haptic.encoding import TimingConfig


WPM_MIN = 3.0
"""Slowest speed offered by speed controls."""

WPM_MAX = 25.0
"""Fastest speed offered by speed controls."""


def clamp_wpm(wpm: float, minimum: float = WPM_MIN, maximum: float = WPM_MAX) -> float:
    """Clamp a slider value into the supported WPM range."""
    return max(minimum, min(maximum, float(wpm)))


def wpm_from_fraction(fraction: float) -> float:
    """Map a 0..1 slider position to WPM (clamped)."""
    fraction = max(0.0, min(1.0, fraction))
    return WPM_MIN + fraction * (WPM_MAX - WPM_MIN)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class PlaybackConfig:
    """Configuration for a playback coordinator.

    Args:
        wpm: Initial speed in words per minute.
            Defaults to $MORSE_HAPTIC_WPM or 10.
        tick_interval_ms: Sampling cadence of the playback loop.
            Defaults to $MORSE_HAPTIC_TICK_MS or 16 (~60 Hz).
        loop: Start with looping enabled.
        log_level: Level for the structured logger.
        json_logs: Emit JSON log lines (vs. human-readable).

    Example:
        config = PlaybackConfig(wpm=18, loop=True)
        coordinator = PlaybackCoordinator.from_config(config, sink=sink)
    """

    wpm: float = field(default_factory=lambda: _env_float("MORSE_HAPTIC_WPM", 10.0))
    """Initial words per minute."""

    tick_interval_ms: float = field(
        default_factory=lambda: _env_float("MORSE_HAPTIC_TICK_MS", 16.0)
    )
    """Milliseconds between playback samples."""

    loop: bool = False
    """Restart automatically at the end of the sequence."""

    log_level: Literal["debug", "info", "warning", "error", "critical"] = "info"

    json_logs: bool = True

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.tick_interval_ms < 1:
            raise ValueError("tick_interval_ms must be >= 1ms")
        # Raises InvalidTimingConfigError for wpm <= 0
        TimingConfig(wpm=self.wpm)

    @property
    def timing_config(self) -> TimingConfig:
        return TimingConfig(wpm=self.wpm)

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0
