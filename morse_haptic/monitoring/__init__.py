"""
Monitoring for Morse Haptic.

Structured logging for playback transitions and sink failures.

Example:
    from morse_haptic.monitoring import configure_logging

    configure_logging(level="debug", json_format=False)
"""

from morse_haptic.monitoring.logging import (
    StructuredLogger,
    LogLevel,
    LogRecord,
    configure_logging,
    get_logger,
)

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "LogRecord",
    "configure_logging",
    "get_logger",
]
