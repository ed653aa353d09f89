"""
Structured logging for Morse Haptic.

Every playback-relevant happening is logged as a named event with
structured fields, so a session can be replayed from its log:

    sequence_encoded      text or speed produced a new timeline
    playback_transition   state machine moved between states
    playback_looped       sequence restarted at its end
    haptic_error          a sink call failed (playback carries on)
    haptic_completion     a sink reported it finished on its own
    listener_error        a change listener raised

Records go to stderr as JSON lines by default, or as human-readable
lines for local debugging.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, TextIO
import threading


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def numeric(self) -> int:
        """Get numeric log level."""
        return {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
            "critical": logging.CRITICAL,
        }[self.value]


@dataclass
class LogRecord:
    """A structured log record.

    Attributes:
        level: Log level.
        event: Event name/type.
        message: Human-readable message.
        timestamp: Unix timestamp.
        data: Additional structured data.
        logger_name: Name of the emitting logger.
        thread_name: Thread that emitted the record (UI or ticker).
    """

    level: str
    event: str
    message: str = ""
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)

    # Context fields (set by logger)
    logger_name: str = ""
    thread_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Flatten to a dictionary, with data fields at the top level."""
        d = asdict(self)
        d.update(d.pop("data", {}))
        return d

    def to_json(self) -> str:
        """Convert to a JSON string. Non-JSON values are stringified."""
        return json.dumps(self.to_dict(), default=str)


class StructuredLogger:
    """Structured logging with JSON output.

    Provides machine-parseable playback logs:
    - JSON format by default
    - Contextual data binding
    - Event-based logging with playback convenience methods
    - Safe to call from the ticker thread and the UI thread at once

    Example:
        logger = StructuredLogger("morse_haptic")

        logger.info(
            "playback_transition",
            message="idle -> playing",
            from_state="idle",
            to_state="playing",
        )

        # Output (JSON):
        # {"level": "info", "event": "playback_transition",
        #  "message": "idle -> playing", "from_state": "idle", ...}

        # Bind session context to every record
        wrist_logger = logger.bind(session="left-wrist")
        wrist_logger.info("sequence_encoded", elements=17)
        # All records include session="left-wrist"
    """

    def __init__(
        self,
        name: str = "morse_haptic",
        level: LogLevel = LogLevel.INFO,
        output: TextIO | None = None,
        json_format: bool = True,
    ):
        """Initialize the logger.

        Args:
            name: Logger name.
            level: Minimum log level.
            output: Output stream (default: stderr at emit time).
            json_format: Output as JSON (vs. human-readable).
        """
        self.name = name
        self._level = level
        self._output = output
        self._json_format = json_format

        # Bound context
        self._context: dict[str, Any] = {}

        # Thread safety
        self._lock = threading.Lock()

    @property
    def level(self) -> LogLevel:
        """Minimum level that is emitted."""
        return self._level

    def bind(self, **context: Any) -> StructuredLogger:
        """Create a new logger with bound context.

        Args:
            **context: Context to bind to all log records.

        Returns:
            New logger with bound context. The original is unchanged.
        """
        new_logger = StructuredLogger(
            name=self.name,
            level=self._level,
            output=self._output,
            json_format=self._json_format,
        )
        new_logger._context = {**self._context, **context}
        return new_logger

    def _log(
        self,
        level: LogLevel,
        event: str,
        message: str = "",
        **data: Any,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level.
            event: Event name.
            message: Human-readable message.
            **data: Additional data.
        """
        if level.numeric < self._level.numeric:
            return

        record = LogRecord(
            level=level.value,
            event=event,
            message=message,
            data={**self._context, **data},
            logger_name=self.name,
            thread_name=threading.current_thread().name,
        )

        self._emit(record)

    def _emit(self, record: LogRecord) -> None:
        """Emit a log record.

        Args:
            record: Log record to emit.
        """
        with self._lock:
            if self._json_format:
                line = record.to_json()
            else:
                line = self._format_human(record)

            print(line, file=self._output or sys.stderr)

    def _format_human(self, record: LogRecord) -> str:
        """Format record for human reading.

        Args:
            record: Log record.

        Returns:
            Formatted string.
        """
        timestamp = time.strftime(
            "%Y-%m-%d %H:%M:%S",
            time.localtime(record.timestamp),
        )

        parts = [
            f"[{timestamp}]",
            f"[{record.level.upper()}]",
            f"[{record.event}]",
        ]

        if record.message:
            parts.append(record.message)

        if record.data:
            data_str = " ".join(f"{k}={v}" for k, v in record.data.items())
            parts.append(f"({data_str})")

        return " ".join(parts)

    def debug(self, event: str, message: str = "", **data: Any) -> None:
        """Log at DEBUG level."""
        self._log(LogLevel.DEBUG, event, message, **data)

    def info(self, event: str, message: str = "", **data: Any) -> None:
        """Log at INFO level."""
        self._log(LogLevel.INFO, event, message, **data)

    def warning(self, event: str, message: str = "", **data: Any) -> None:
        """Log at WARNING level."""
        self._log(LogLevel.WARNING, event, message, **data)

    def error(self, event: str, message: str = "", **data: Any) -> None:
        """Log at ERROR level."""
        self._log(LogLevel.ERROR, event, message, **data)

    def critical(self, event: str, message: str = "", **data: Any) -> None:
        """Log at CRITICAL level."""
        self._log(LogLevel.CRITICAL, event, message, **data)

    # Playback events

    def sequence_encoded(
        self,
        text_length: int,
        elements: int,
        total_duration: float,
        wpm: float,
        **extra: Any,
    ) -> None:
        """Log a new timeline from a text or speed change."""
        self.debug(
            "sequence_encoded",
            f"Encoded {elements} elements ({total_duration:.3f}s)",
            text_length=text_length,
            elements=elements,
            total_duration=total_duration,
            wpm=wpm,
            **extra,
        )

    def playback_transition(
        self,
        from_state: str,
        to_state: str,
        current_time: float = 0.0,
        **extra: Any,
    ) -> None:
        """Log a state machine transition."""
        self.debug(
            "playback_transition",
            f"{from_state} -> {to_state}",
            from_state=from_state,
            to_state=to_state,
            current_time=current_time,
            **extra,
        )

    def playback_looped(self, total_duration: float, **extra: Any) -> None:
        """Log a loop restart."""
        self.debug(
            "playback_looped",
            "Restarting sequence",
            total_duration=total_duration,
            **extra,
        )

    def haptic_error(
        self,
        error: Exception,
        operation: str,
        sink: str = "",
        **extra: Any,
    ) -> None:
        """Log a non-fatal sink failure."""
        self.warning(
            "haptic_error",
            str(error),
            error_type=type(error).__name__,
            operation=operation,
            sink=sink,
            **extra,
        )

    def haptic_completion(self, status: str, sink: str = "", **extra: Any) -> None:
        """Log a sink's own completion notice."""
        self.debug(
            "haptic_completion",
            f"Sink reported {status}",
            status=status,
            sink=sink,
            **extra,
        )

    def listener_error(self, error: Exception, **extra: Any) -> None:
        """Log a change listener that raised."""
        self.error(
            "listener_error",
            str(error),
            error_type=type(error).__name__,
            **extra,
        )

    def invalid_transition(self, from_state: str, to_state: str, **extra: Any) -> None:
        """Log a rejected state machine transition."""
        self.error(
            "invalid_transition",
            f"Invalid transition from {from_state} to {to_state}",
            from_state=from_state,
            to_state=to_state,
            **extra,
        )


# Global logger instance
_global_logger: StructuredLogger | None = None


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> StructuredLogger:
    """Configure global logging.

    Args:
        level: Log level.
        output: Output stream.
        json_format: Use JSON format.

    Returns:
        Configured logger.
    """
    global _global_logger

    if isinstance(level, str):
        level = LogLevel(level.lower())

    _global_logger = StructuredLogger(
        name="morse_haptic",
        level=level,
        output=output,
        json_format=json_format,
    )

    return _global_logger


def get_logger(name: str = "morse_haptic") -> StructuredLogger:
    """Get the global logger, creating it on first use."""
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name)

    return _global_logger
