"""
Tests for clocks, tickers and the transport state table.
"""

import threading
import time

import pytest

from morse_haptic.encoding import TimingConfig
from morse_haptic.playback import (
    VALID_TRANSITIONS,
    Clock,
    ManualClock,
    ManualTicker,
    MonotonicClock,
    PlaybackCoordinator,
    PlaybackEvent,
    PlaybackState,
    ThreadTicker,
    Ticker,
    is_valid_transition,
)


class TestPlaybackState:
    """Tests for the transport state table."""

    def test_labels(self):
        assert PlaybackState.IDLE.label == "Ready"
        assert PlaybackState.PLAYING.label == "Playing"
        assert PlaybackState.PAUSED.label == "Paused"
        assert PlaybackState.FINISHED.label == "Complete"

    def test_is_active(self):
        assert PlaybackState.PLAYING.is_active
        assert PlaybackState.PAUSED.is_active
        assert not PlaybackState.IDLE.is_active
        assert not PlaybackState.FINISHED.is_active

    def test_every_state_can_stop(self):
        for state in PlaybackState:
            assert is_valid_transition(state, PlaybackState.IDLE)

    def test_pause_only_from_playing(self):
        sources = [s for s in PlaybackState if PlaybackState.PAUSED in VALID_TRANSITIONS[s]]
        assert sources == [PlaybackState.PLAYING]

    def test_finished_only_from_playing(self):
        assert not is_valid_transition(PlaybackState.PAUSED, PlaybackState.FINISHED)
        assert not is_valid_transition(PlaybackState.IDLE, PlaybackState.FINISHED)


class TestClocks:
    """Tests for clock implementations."""

    def test_protocol(self):
        assert isinstance(MonotonicClock(), Clock)
        assert isinstance(ManualClock(), Clock)

    def test_monotonic_moves_forward(self):
        clock = MonotonicClock()
        first = clock.now()
        second = clock.now()
        assert second >= first

    def test_manual_advance(self):
        clock = ManualClock(start=2.0)
        assert clock.advance(0.5) == 2.5
        assert clock.now() == 2.5

    def test_manual_set(self):
        clock = ManualClock()
        clock.set(4.0)
        assert clock.now() == 4.0

    def test_manual_never_goes_back(self):
        clock = ManualClock(start=1.0)
        with pytest.raises(ValueError):
            clock.advance(-0.1)
        with pytest.raises(ValueError):
            clock.set(0.5)


class TestManualTicker:
    """Tests for ManualTicker."""

    def test_protocol(self):
        assert isinstance(ManualTicker(), Ticker)

    def test_ticks_only_while_running(self):
        ticker = ManualTicker()
        calls = []
        ticker.set_callback(lambda: calls.append(1))

        assert not ticker.tick()
        ticker.start()
        assert ticker.tick()
        ticker.stop()
        assert not ticker.tick()
        assert calls == [1]

    def test_start_stop_idempotent(self):
        ticker = ManualTicker()
        ticker.start()
        ticker.start()
        ticker.stop()
        ticker.stop()
        assert ticker.start_count == 1
        assert ticker.stop_count == 1


class TestThreadTicker:
    """Tests for ThreadTicker against real time."""

    def test_protocol(self):
        assert isinstance(ThreadTicker(), Ticker)

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            ThreadTicker(interval=0)

    def test_ticks_until_stopped(self):
        ticker = ThreadTicker(interval=0.005)
        ticked = threading.Event()
        ticker.set_callback(ticked.set)

        ticker.start()
        assert ticker.is_running
        assert ticked.wait(timeout=2.0)

        ticker.join()
        assert not ticker.is_running

    def test_start_is_idempotent(self):
        ticker = ThreadTicker(interval=0.005)
        ticker.set_callback(lambda: None)
        ticker.start()
        first = ticker._thread
        ticker.start()
        assert ticker._thread is first
        ticker.join()

    def test_stop_from_callback(self):
        ticker = ThreadTicker(interval=0.005)
        count = []

        def callback():
            count.append(1)
            ticker.stop()

        ticker.set_callback(callback)
        ticker.start()

        deadline = time.monotonic() + 2.0
        while ticker.is_running and time.monotonic() < deadline:
            time.sleep(0.005)

        ticker.join()
        assert not ticker.is_running
        assert len(count) == 1

    def test_restart_after_stop(self):
        ticker = ThreadTicker(interval=0.005)
        ticked = threading.Event()
        ticker.set_callback(ticked.set)

        ticker.start()
        ticker.stop()
        ticked.clear()
        ticker.start()
        assert ticked.wait(timeout=2.0)
        ticker.join()


class TestRealTimePlayback:
    """End-to-end run on the real clock and a thread ticker."""

    def test_plays_to_completion(self):
        finished = threading.Event()
        coordinator = PlaybackCoordinator(
            ticker=ThreadTicker(interval=0.005),
            timing_config=TimingConfig(wpm=25),
        )

        def on_change(event, snapshot):
            if event is PlaybackEvent.STATE_CHANGED and snapshot.state is PlaybackState.FINISHED:
                finished.set()

        coordinator.subscribe(on_change)
        coordinator.input_text = "E"

        with coordinator:
            coordinator.play()
            assert finished.wait(timeout=2.0)
            assert coordinator.progress == 1.0
            assert coordinator.current_time == pytest.approx(60 / (50 * 25))
