"""
Playback Coordinator - Single source of truth for a Morse session.

The coordinator owns the text, the timing config, the encoded sequence
and the transport state. It drives a periodic sampling loop that reads
a wall clock, resolves the active element and handles finish/loop.

Timing model:
    On start or resume the coordinator records

        reference = clock.now() - paused_time

    and every tick sets current_time = clock.now() - reference. Pausing
    stores current_time in paused_time, so pause/resume never loses or
    double-counts time, and a late tick cannot move an element boundary.

Threading model:
    Every public method takes one re-entrant lock, so commands from a
    UI thread and ticks from the ticker thread are applied one at a
    time. Listeners run under that lock on whichever thread caused the
    change; they may call back into the coordinator.

Haptics are best-effort. A missing sink, an empty pattern or a sink
exception is logged and playback carries on timing-only.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from morse_haptic.config import PlaybackConfig
from morse_haptic.errors import InvalidTransitionError
from morse_haptic.encoding import (
    EMPTY_SEQUENCE,
    MorseEncoder,
    MorseSequence,
    TimedElement,
    TimingConfig,
)
from morse_haptic.haptics.base import HapticSink, SinkCompletion
from morse_haptic.monitoring.logging import LogLevel, StructuredLogger, get_logger
from morse_haptic.playback.clock import Clock, MonotonicClock
from morse_haptic.playback.states import PlaybackState, is_valid_transition
from morse_haptic.playback.ticker import ThreadTicker, Ticker


class PlaybackEvent(Enum):
    """What changed, as reported to listeners."""
    SEQUENCE_CHANGED = "sequence_changed"
    STATE_CHANGED = "state_changed"
    TICK = "tick"
    LOOPED = "looped"


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Everything a renderer needs for one frame."""
    state: PlaybackState
    current_time: float
    progress: float
    active_element_index: int | None
    active_character: str | None
    total_duration: float
    is_looping: bool
    display_string: str

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING


Listener = Callable[[PlaybackEvent, PlaybackSnapshot], None]


class PlaybackCoordinator:
    """Synchronizes haptic and visual playback of a Morse sequence.

    Args:
        sink: Haptic sink, or None for timing-only playback.
        clock: Time source (default: MonotonicClock).
        ticker: Sampling loop (default: ThreadTicker at ~60 Hz).
        timing_config: Initial speed (default: TimingConfig.DEFAULT).
        encoder: Encoder to use (default: standard table).
        logger: Structured logger (default: global logger).
        is_looping: Initial loop flag.

    Example:
        coordinator = PlaybackCoordinator(sink=EnvelopeHapticSink())
        coordinator.subscribe(lambda event, snap: render(snap))

        coordinator.input_text = "SOS"
        coordinator.play()
        ...
        coordinator.close()
    """

    def __init__(
        self,
        sink: HapticSink | None = None,
        clock: Clock | None = None,
        ticker: Ticker | None = None,
        timing_config: TimingConfig | None = None,
        encoder: MorseEncoder | None = None,
        logger: StructuredLogger | None = None,
        is_looping: bool = False,
    ):
        self._sink = sink
        self._clock = clock or MonotonicClock()
        self._ticker = ticker or ThreadTicker()
        self._encoder = encoder or MorseEncoder()
        self._log = logger or get_logger()

        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

        # Inputs
        self._input_text = ""
        self._timing_config = timing_config or TimingConfig.DEFAULT
        self._is_looping = is_looping

        # Derived session state
        self._display_string = ""
        self._sequence: MorseSequence = EMPTY_SEQUENCE
        self._state = PlaybackState.IDLE
        self._current_time = 0.0
        self._active_index: int | None = None

        # Clock bookkeeping
        self._reference = 0.0
        self._paused_time = 0.0

        self._ticker.set_callback(self.tick)

        if sink is None or not sink.supports_haptics:
            self._log.info(
                "haptics_unavailable",
                "No haptic capability; playback is timing-only",
                sink=sink.name if sink is not None else None,
            )
        if sink is not None:
            sink.set_completion_handler(self._on_sink_completion)

    @classmethod
    def from_config(
        cls,
        config: PlaybackConfig,
        sink: HapticSink | None = None,
        clock: Clock | None = None,
        logger: StructuredLogger | None = None,
    ) -> PlaybackCoordinator:
        """Build a coordinator with a ThreadTicker at the configured cadence.

        Without an explicit logger, one is created from the config's
        log_level and json_logs settings.
        """
        if logger is None:
            logger = StructuredLogger(
                level=LogLevel(config.log_level),
                json_format=config.json_logs,
            )
        return cls(
            sink=sink,
            clock=clock,
            ticker=ThreadTicker(interval=config.tick_interval_s),
            timing_config=config.timing_config,
            logger=logger,
            is_looping=config.loop,
        )

    # =========================================================================
    # Inputs
    # =========================================================================

    @property
    def input_text(self) -> str:
        with self._lock:
            return self._input_text

    @input_text.setter
    def input_text(self, text: str) -> None:
        with self._lock:
            if text == self._input_text:
                return
            self._input_text = text
            self._reencode()

    @property
    def timing_config(self) -> TimingConfig:
        with self._lock:
            return self._timing_config

    @timing_config.setter
    def timing_config(self, config: TimingConfig) -> None:
        with self._lock:
            if config == self._timing_config:
                return
            self._timing_config = config
            self._reencode()

    @property
    def wpm(self) -> float:
        return self.timing_config.wpm

    @wpm.setter
    def wpm(self, value: float) -> None:
        # Validates before touching any state
        self.timing_config = TimingConfig(wpm=value)

    @property
    def is_looping(self) -> bool:
        with self._lock:
            return self._is_looping

    @is_looping.setter
    def is_looping(self, value: bool) -> None:
        with self._lock:
            if value == self._is_looping:
                return
            self._is_looping = value
            self._notify(PlaybackEvent.STATE_CHANGED)

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def sequence(self) -> MorseSequence:
        with self._lock:
            return self._sequence

    @property
    def display_string(self) -> str:
        with self._lock:
            return self._display_string

    @property
    def playback_state(self) -> PlaybackState:
        with self._lock:
            return self._state

    @property
    def current_time(self) -> float:
        with self._lock:
            return self._current_time

    @property
    def active_element_index(self) -> int | None:
        with self._lock:
            return self._active_index

    @property
    def active_element(self) -> TimedElement | None:
        with self._lock:
            if self._active_index is None:
                return None
            return self._sequence.elements[self._active_index]

    @property
    def active_character(self) -> str | None:
        element = self.active_element
        return element.character if element is not None else None

    @property
    def progress(self) -> float:
        """Fraction of the sequence played, always in [0, 1]."""
        with self._lock:
            return self._progress_locked()

    @property
    def can_play(self) -> bool:
        with self._lock:
            return not self._sequence.is_empty

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._state is PlaybackState.PLAYING

    def is_element_active(self, index: int) -> bool:
        with self._lock:
            return self._active_index == index

    def is_element_past(self, index: int) -> bool:
        """Whether the element at ``index`` has fully played in this run."""
        with self._lock:
            if self._state is not PlaybackState.PLAYING:
                return False
            if not 0 <= index < len(self._sequence.elements):
                return False
            return self._current_time > self._sequence.elements[index].end_time

    def snapshot(self) -> PlaybackSnapshot:
        """Consistent view of the session for polling renderers."""
        with self._lock:
            return self._snapshot_locked()

    # =========================================================================
    # Transport
    # =========================================================================

    def play(self) -> None:
        """Start, restart or resume playback. No-op on an empty sequence."""
        with self._lock:
            if self._sequence.is_empty:
                return

            if self._state in (PlaybackState.IDLE, PlaybackState.FINISHED):
                self._start_playback(0.0)
            elif self._state is PlaybackState.PAUSED:
                self._resume_playback()
            else:
                return

            self._notify(PlaybackEvent.STATE_CHANGED)

    def pause(self) -> None:
        """Freeze playback at the current instant. Only valid while playing."""
        with self._lock:
            if self._state is not PlaybackState.PLAYING:
                return

            # Sample now so the frozen time matches where the sink paused
            elapsed = min(
                self._clock.now() - self._reference,
                self._sequence.total_duration,
            )
            self._current_time = max(self._current_time, elapsed)
            self._active_index = self._sequence.element_index_at(self._current_time)
            self._paused_time = self._current_time

            self._transition(PlaybackState.PAUSED)
            self._ticker.stop()
            self._sink_call("pause")
            self._notify(PlaybackEvent.STATE_CHANGED)

    def stop(self) -> None:
        """Return to IDLE at time 0 from any state."""
        with self._lock:
            was = self._state
            self._stop_playback()
            if was is not PlaybackState.IDLE:
                self._notify(PlaybackEvent.STATE_CHANGED)

    def toggle_play_pause(self) -> None:
        with self._lock:
            if self._state is PlaybackState.PLAYING:
                self.pause()
            else:
                self.play()

    def tick(self) -> None:
        """Sample the clock once.

        Called by the ticker; hosts with their own frame callback may
        call it directly.
        """
        with self._lock:
            if self._state is not PlaybackState.PLAYING:
                return

            elapsed = self._clock.now() - self._reference
            self._current_time = elapsed
            self._active_index = self._sequence.element_index_at(elapsed)

            total = self._sequence.total_duration
            if elapsed < total:
                self._notify(PlaybackEvent.TICK)
                return

            if self._is_looping:
                self._sink_call("stop")
                self._start_playback(0.0)
                self._log.playback_looped(total_duration=total)
                self._notify(PlaybackEvent.LOOPED)
            else:
                self._current_time = total
                self._active_index = None
                self._transition(PlaybackState.FINISHED)
                self._ticker.stop()
                self._sink_call("stop")
                self._notify(PlaybackEvent.STATE_CHANGED)

    # =========================================================================
    # Observation
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Stop playback, detach from the sink and join the ticker."""
        self.stop()
        if self._sink is not None:
            self._sink.set_completion_handler(None)
        join = getattr(self._ticker, "join", None)
        if join is not None:
            join()

    def __enter__(self) -> PlaybackCoordinator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # =========================================================================
    # Internals (lock held)
    # =========================================================================

    def _reencode(self) -> None:
        if self._state is not PlaybackState.IDLE:
            self._stop_playback()

        self._display_string = self._encoder.to_display_string(self._input_text)
        self._sequence = self._encoder.encode(self._input_text, self._timing_config)
        self._current_time = 0.0
        self._paused_time = 0.0
        self._active_index = None

        self._log.sequence_encoded(
            text_length=len(self._input_text),
            elements=len(self._sequence),
            total_duration=self._sequence.total_duration,
            wpm=self._timing_config.wpm,
        )
        self._notify(PlaybackEvent.SEQUENCE_CHANGED)

    def _start_playback(self, at: float) -> None:
        self._current_time = at
        self._paused_time = at
        self._active_index = self._sequence.element_index_at(at)
        self._transition(PlaybackState.PLAYING)

        if at == 0.0:
            self._start_haptics()

        self._reference = self._clock.now() - self._paused_time
        self._ticker.start()

    def _resume_playback(self) -> None:
        self._transition(PlaybackState.PLAYING)
        self._sink_call("resume")
        self._reference = self._clock.now() - self._paused_time
        self._ticker.start()

    def _stop_playback(self) -> None:
        self._transition(PlaybackState.IDLE)
        self._ticker.stop()
        self._sink_call("stop")
        self._current_time = 0.0
        self._paused_time = 0.0
        self._active_index = None

    def _transition(self, to_state: PlaybackState) -> None:
        from_state = self._state
        if not is_valid_transition(from_state, to_state):
            self._log.invalid_transition(from_state.value, to_state.value)
            raise InvalidTransitionError(from_state.value, to_state.value)
        self._state = to_state
        if from_state is not to_state:
            self._log.playback_transition(
                from_state=from_state.value,
                to_state=to_state.value,
                current_time=self._current_time,
            )

    def _start_haptics(self) -> None:
        sink = self._sink
        if sink is None or not sink.supports_haptics:
            return
        try:
            pattern = sink.build_pattern(self._sequence)
            sink.play(pattern)
        except Exception as e:
            self._log.haptic_error(e, operation="play", sink=sink.name)

    def _sink_call(self, operation: str) -> None:
        sink = self._sink
        if sink is None:
            return
        try:
            getattr(sink, operation)()
        except Exception as e:
            self._log.haptic_error(e, operation=operation, sink=sink.name)

    def _on_sink_completion(self, completion: SinkCompletion) -> None:
        # Informational only; finish detection is time-based
        sink_name = self._sink.name if self._sink is not None else ""
        self._log.haptic_completion(completion.status.value, sink=sink_name)
        if completion.error is not None:
            self._log.haptic_error(completion.error, operation="completion", sink=sink_name)

    def _progress_locked(self) -> float:
        total = self._sequence.total_duration
        if total <= 0:
            return 0.0
        return min(self._current_time / total, 1.0)

    def _snapshot_locked(self) -> PlaybackSnapshot:
        active_character = None
        if self._active_index is not None:
            active_character = self._sequence.elements[self._active_index].character
        return PlaybackSnapshot(
            state=self._state,
            current_time=self._current_time,
            progress=self._progress_locked(),
            active_element_index=self._active_index,
            active_character=active_character,
            total_duration=self._sequence.total_duration,
            is_looping=self._is_looping,
            display_string=self._display_string,
        )

    def _notify(self, event: PlaybackEvent) -> None:
        if not self._listeners:
            return
        snapshot = self._snapshot_locked()
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception as e:
                self._log.listener_error(e, playback_event=event.value)
