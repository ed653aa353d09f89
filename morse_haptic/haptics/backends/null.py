"""
Null Sink - For devices without haptic hardware.

Playback runs timing/visual-only against this sink.
"""

from __future__ import annotations

from morse_haptic.encoding import MorseSequence
from morse_haptic.errors import SinkUnavailableError
from morse_haptic.haptics.base import BaseHapticSink
from morse_haptic.haptics.pattern import HapticPattern


class NullHapticSink(BaseHapticSink):
    """Sink with no haptic capability.

    build_pattern() and play() raise SinkUnavailableError; the other
    control calls do nothing.
    """

    @property
    def name(self) -> str:
        return "null"

    @property
    def supports_haptics(self) -> bool:
        return False

    def build_pattern(self, sequence: MorseSequence) -> HapticPattern:
        raise SinkUnavailableError(sink_name=self.name)

    def play(self, pattern: HapticPattern) -> None:
        raise SinkUnavailableError(sink_name=self.name)

    def pause(self) -> None:
        pass

    def resume(self) -> None:
        pass

    def stop(self) -> None:
        pass
