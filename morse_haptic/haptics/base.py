"""
Haptic Sink - The seam between playback and tactile hardware.

The coordinator never talks to hardware. It talks to a sink that can
build a pattern from a sequence and play, pause, resume and stop it.

SINK CONTRACT:
    Sinks MUST:
        - Raise EmptyPatternError from build_pattern() when the sequence
          has no audible elements
        - Raise SinkUnavailableError when there is no haptic capability
        - Treat pause(), resume() and stop() as no-ops when idle
        - Report natural completion or failure through the completion
          handler, if one is set

    Sinks MUST NOT:
        - Decide when playback is finished for the coordinator
          (finish detection is time-based on the coordinator side)
        - Mutate the sequence
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, runtime_checkable

from morse_haptic.encoding import MorseSequence
from morse_haptic.haptics.pattern import HapticPattern, build_pattern


class CompletionStatus(Enum):
    """How a sink's playback ended."""
    FINISHED = "finished"
    ERRORED = "errored"


@dataclass(frozen=True)
class SinkCompletion:
    """Completion notice from a sink."""
    status: CompletionStatus
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is CompletionStatus.FINISHED


CompletionHandler = Callable[[SinkCompletion], None]


@runtime_checkable
class HapticSink(Protocol):
    """Protocol for haptic output sinks."""

    @property
    def name(self) -> str:
        """Sink identifier (e.g., 'envelope', 'null')."""
        ...

    @property
    def supports_haptics(self) -> bool:
        """Whether this sink can produce output at all."""
        ...

    def build_pattern(self, sequence: MorseSequence) -> HapticPattern:
        ...

    def play(self, pattern: HapticPattern) -> None:
        ...

    def pause(self) -> None:
        ...

    def resume(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def set_completion_handler(self, handler: CompletionHandler | None) -> None:
        ...


class BaseHapticSink(ABC):
    """Base class for haptic sinks with common functionality."""

    def __init__(self) -> None:
        self._completion_handler: CompletionHandler | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Sink identifier."""
        ...

    @property
    def supports_haptics(self) -> bool:
        return True

    def build_pattern(self, sequence: MorseSequence) -> HapticPattern:
        """Build the default Morse pattern. Override for custom shapes."""
        return build_pattern(sequence)

    @abstractmethod
    def play(self, pattern: HapticPattern) -> None:
        """Start playing a pattern from its beginning."""
        ...

    @abstractmethod
    def pause(self) -> None:
        ...

    @abstractmethod
    def resume(self) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop and discard any in-flight pattern."""
        ...

    def set_completion_handler(self, handler: CompletionHandler | None) -> None:
        self._completion_handler = handler

    def _notify_completion(
        self,
        status: CompletionStatus,
        error: Exception | None = None,
    ) -> None:
        handler = self._completion_handler
        if handler is not None:
            handler(SinkCompletion(status=status, error=error))
