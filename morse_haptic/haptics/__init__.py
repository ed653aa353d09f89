"""
Haptics module - Tactile output seam.

The playback coordinator depends only on the HapticSink protocol.
Concrete sinks own their hardware lifecycle.

Example:
    from morse_haptic.haptics import EnvelopeHapticSink, build_pattern

    sink = EnvelopeHapticSink()
    sink.play(sink.build_pattern(sequence))
"""

from morse_haptic.haptics.pattern import (
    HapticEvent,
    HapticEventType,
    HapticPattern,
    build_pattern,
    render_envelope,
)
from morse_haptic.haptics.base import (
    HapticSink,
    BaseHapticSink,
    CompletionStatus,
    SinkCompletion,
    CompletionHandler,
)
from morse_haptic.haptics.backends import (
    NullHapticSink,
    EnvelopeHapticSink,
)

__all__ = [
    # Patterns
    "HapticEvent",
    "HapticEventType",
    "HapticPattern",
    "build_pattern",
    "render_envelope",
    # Sink protocol
    "HapticSink",
    "BaseHapticSink",
    "CompletionStatus",
    "SinkCompletion",
    "CompletionHandler",
    # Backends
    "NullHapticSink",
    "EnvelopeHapticSink",
]
