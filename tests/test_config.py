"""
Tests for playback configuration and speed bounds.
"""

import pytest

from morse_haptic.config import (
    WPM_MAX,
    WPM_MIN,
    PlaybackConfig,
    clamp_wpm,
    wpm_from_fraction,
)
from morse_haptic.encoding import TimingConfig
from morse_haptic.errors import InvalidTimingConfigError
from morse_haptic.monitoring import LogLevel
from morse_haptic.playback import ManualClock, PlaybackCoordinator, PlaybackState, ThreadTicker
from morse_haptic.testing import HapticMock


class TestWpmBounds:
    """Tests for slider helpers."""

    def test_bounds(self):
        assert WPM_MIN == 3
        assert WPM_MAX == 25

    @pytest.mark.parametrize("raw,expected", [
        (1, 3.0),
        (3, 3.0),
        (12.5, 12.5),
        (25, 25.0),
        (40, 25.0),
    ])
    def test_clamp(self, raw, expected):
        assert clamp_wpm(raw) == expected

    def test_clamp_custom_range(self):
        assert clamp_wpm(50, minimum=5, maximum=40) == 40

    def test_fraction(self):
        assert wpm_from_fraction(0.0) == WPM_MIN
        assert wpm_from_fraction(1.0) == WPM_MAX
        assert wpm_from_fraction(0.5) == pytest.approx(14.0)
        assert wpm_from_fraction(-1.0) == WPM_MIN
        assert wpm_from_fraction(2.0) == WPM_MAX


class TestPlaybackConfig:
    """Tests for PlaybackConfig."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MORSE_HAPTIC_WPM", raising=False)
        monkeypatch.delenv("MORSE_HAPTIC_TICK_MS", raising=False)

        config = PlaybackConfig()
        assert config.wpm == 10.0
        assert config.tick_interval_ms == 16.0
        assert config.tick_interval_s == pytest.approx(0.016)
        assert not config.loop
        assert config.timing_config == TimingConfig.DEFAULT

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("MORSE_HAPTIC_WPM", "18")
        monkeypatch.setenv("MORSE_HAPTIC_TICK_MS", "8")

        config = PlaybackConfig()
        assert config.wpm == 18.0
        assert config.tick_interval_ms == 8.0

    def test_blank_env_uses_default(self, monkeypatch):
        monkeypatch.setenv("MORSE_HAPTIC_WPM", "  ")
        assert PlaybackConfig().wpm == 10.0

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("MORSE_HAPTIC_WPM", "fast")
        with pytest.raises(ValueError, match="MORSE_HAPTIC_WPM"):
            PlaybackConfig()

    def test_explicit_beats_env(self, monkeypatch):
        monkeypatch.setenv("MORSE_HAPTIC_WPM", "18")
        assert PlaybackConfig(wpm=7).wpm == 7

    def test_invalid_wpm(self):
        with pytest.raises(InvalidTimingConfigError):
            PlaybackConfig(wpm=0)

    def test_invalid_tick_interval(self):
        with pytest.raises(ValueError, match="tick_interval_ms"):
            PlaybackConfig(tick_interval_ms=0.5)


class TestFromConfig:
    """Tests for PlaybackCoordinator.from_config."""

    def test_wires_config(self, logger):
        config = PlaybackConfig(wpm=18, tick_interval_ms=20, loop=True)
        coordinator = PlaybackCoordinator.from_config(
            config, sink=HapticMock(), clock=ManualClock(), logger=logger,
        )

        assert coordinator.wpm == 18
        assert coordinator.is_looping
        assert coordinator.playback_state is PlaybackState.IDLE
        assert isinstance(coordinator._ticker, ThreadTicker)
        assert coordinator._ticker.interval == pytest.approx(0.02)
        coordinator.close()

    def test_logger_from_config(self):
        config = PlaybackConfig(wpm=10, log_level="warning", json_logs=False)
        coordinator = PlaybackCoordinator.from_config(config, sink=HapticMock())

        assert coordinator._log.level is LogLevel.WARNING
        assert not coordinator._log._json_format
        coordinator.close()
