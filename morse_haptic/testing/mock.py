"""
Haptic Mock - Recording haptic sink for testing.

Features:
    - Call recording
    - Failure injection per operation
    - Manual completion notices
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from morse_haptic.encoding import MorseSequence
from morse_haptic.errors import SinkUnavailableError
from morse_haptic.haptics.base import BaseHapticSink, CompletionStatus
from morse_haptic.haptics.pattern import HapticPattern


@dataclass
class CallRecord:
    """Record of a mock sink call."""

    method: str
    timestamp: float = field(default_factory=time.time)
    sequence: MorseSequence | None = None
    pattern: HapticPattern | None = None
    result: Any = None
    error: Exception | None = None


@dataclass
class MockConfig:
    """Configuration for the mock sink."""

    supports_haptics: bool = True

    # Failure injection: exception raised from the named operation
    fail_build: Exception | None = None
    fail_play: Exception | None = None
    fail_pause: Exception | None = None
    fail_resume: Exception | None = None
    fail_stop: Exception | None = None


class HapticMock(BaseHapticSink):
    """
    Mock haptic sink for testing.

    Example:
        mock = HapticMock()
        coordinator = PlaybackCoordinator(sink=mock, ...)
        coordinator.input_text = "SOS"
        coordinator.play()

        assert mock.methods == ["build_pattern", "play"]

        # Inject failures
        mock.configure(fail_build=EmptyPatternError())
    """

    def __init__(self, config: MockConfig | None = None, **kwargs: Any):
        super().__init__()
        self._config = config or MockConfig(**kwargs)
        self._calls: list[CallRecord] = []
        self._current: HapticPattern | None = None
        self._paused = False

    @property
    def name(self) -> str:
        return "mock"

    @property
    def supports_haptics(self) -> bool:
        return self._config.supports_haptics

    @property
    def calls(self) -> list[CallRecord]:
        return self._calls

    @property
    def methods(self) -> list[str]:
        """Method names in call order."""
        return [call.method for call in self._calls]

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def last_call(self) -> CallRecord | None:
        return self._calls[-1] if self._calls else None

    @property
    def current_pattern(self) -> HapticPattern | None:
        return self._current

    @property
    def is_playing(self) -> bool:
        return self._current is not None and not self._paused

    @property
    def is_paused(self) -> bool:
        return self._current is not None and self._paused

    def count(self, method: str) -> int:
        return sum(1 for call in self._calls if call.method == method)

    def configure(self, **kwargs: Any) -> None:
        """Update mock configuration."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)

    def reset(self) -> None:
        """Clear all call records."""
        self._calls.clear()

    def build_pattern(self, sequence: MorseSequence) -> HapticPattern:
        record = CallRecord(method="build_pattern", sequence=sequence)
        self._calls.append(record)
        try:
            if not self._config.supports_haptics:
                raise SinkUnavailableError(sink_name=self.name)
            if self._config.fail_build is not None:
                raise self._config.fail_build
            pattern = super().build_pattern(sequence)
        except Exception as e:
            record.error = e
            raise
        record.result = pattern
        return pattern

    def play(self, pattern: HapticPattern) -> None:
        self._record("play", self._config.fail_play, pattern=pattern)
        self._current = pattern
        self._paused = False

    def pause(self) -> None:
        self._record("pause", self._config.fail_pause)
        if self._current is not None:
            self._paused = True

    def resume(self) -> None:
        self._record("resume", self._config.fail_resume)
        self._paused = False

    def stop(self) -> None:
        self._record("stop", self._config.fail_stop)
        self._current = None
        self._paused = False

    def complete(self, error: Exception | None = None) -> None:
        """Simulate the sink finishing (or failing) on its own."""
        self._current = None
        self._paused = False
        status = CompletionStatus.ERRORED if error else CompletionStatus.FINISHED
        self._notify_completion(status, error)

    def _record(
        self,
        method: str,
        failure: Exception | None,
        pattern: HapticPattern | None = None,
    ) -> None:
        record = CallRecord(method=method, pattern=pattern)
        self._calls.append(record)
        if failure is not None:
            record.error = failure
            raise failure

    def assert_called(self, method: str) -> None:
        assert self.count(method) > 0, f"{method} was not called. Calls: {self.methods}"

    def assert_not_called(self, method: str) -> None:
        assert self.count(method) == 0, f"{method} was called. Calls: {self.methods}"
