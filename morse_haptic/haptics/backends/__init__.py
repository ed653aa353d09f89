"""
Haptic sink backends.

    NullHapticSink      - no hardware; playback runs timing-only
    EnvelopeHapticSink  - software renderer backed by a numpy envelope
"""

from morse_haptic.haptics.backends.null import NullHapticSink
from morse_haptic.haptics.backends.envelope import EnvelopeHapticSink

__all__ = [
    "NullHapticSink",
    "EnvelopeHapticSink",
]
