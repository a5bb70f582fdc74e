"""
Scan Logger module for the doppelganger scanner.

Provides structured logging with dual-format output (JSON and human-readable
text) and a minimum severity threshold. Entries are written to stderr by
default so they never mix with the results printed on stdout.
"""

import json
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TextIO

from .enums import LogLevel


@dataclass
class LogEntry:
    """Represents a single log entry with all metadata."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)


class ScanLogger:
    """
    Structured logger with dual-format output.

    Supports:
    - JSON and human-readable text output formats
    - A minimum level; entries below it are dropped
    - Full error context logging
    """

    def __init__(
        self,
        output_format: str = "text",
        level: LogLevel = LogLevel.INFO,
        output_stream: Optional[TextIO] = None,
    ):
        """
        Initialize the scan logger.

        Args:
            output_format: Output format - 'json', 'text', or 'both'
            level: Minimum level that gets written
            output_stream: Output stream for log entries (defaults to sys.stderr)
        """
        if output_format not in ("json", "text", "both"):
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._level = level
        self._output_stream = output_stream or sys.stderr
        self._entries: list[LogEntry] = []  # Store entries for testing
        self._lock = threading.Lock()

    @classmethod
    def from_names(
        cls,
        output_format: str = "text",
        level: str = "info",
        output_stream: Optional[TextIO] = None,
    ) -> "ScanLogger":
        """Build a logger from configuration strings such as 'debug'."""
        try:
            log_level = LogLevel(level.lower())
        except ValueError:
            raise ValueError(f"Invalid log level: {level}")
        return cls(output_format=output_format, level=log_level, output_stream=output_stream)

    @property
    def output_format(self) -> str:
        """Get the current output format."""
        return self._output_format

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def entries(self) -> list[LogEntry]:
        """Get all written entries (for testing)."""
        with self._lock:
            return self._entries.copy()

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.severity >= self._level.severity

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an entry in the configured format(s).

        Args:
            level: Log severity level
            component: Component name generating the log
            message: Human-readable log message
            data: Optional additional data to include

        Returns:
            The created LogEntry, or None if the level is filtered out
        """
        if not self.is_enabled_for(level):
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=dict(data or {}),
        )

        with self._lock:
            self._entries.append(entry)
            self._output_entry(entry)

        return entry

    def debug(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, component, message, data)

    def warn(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, component, message, data)

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[BaseException] = None,
        level: LogLevel = LogLevel.ERROR,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an error with full context.

        Args:
            component: Component name generating the log
            message: Human-readable error message
            error: Optional exception object
            level: Severity; absorbed per-candidate errors use DEBUG
            additional_data: Optional additional context data

        Returns:
            The created LogEntry, or None if the level is filtered out
        """
        data = additional_data.copy() if additional_data else {}

        if error is not None:
            data["error_message"] = str(error)
            data["error_type"] = type(error).__name__
            code = getattr(error, "code", None)
            if code is not None:
                data["error_code"] = code

        return self.log(level, component, message, data)

    def _output_entry(self, entry: LogEntry) -> None:
        if self._output_format in ("json", "both"):
            self._output_stream.write(self._format_json(entry) + "\n")

        if self._output_format in ("text", "both"):
            self._output_stream.write(self._format_text(entry) + "\n")

        self._output_stream.flush()

    def _format_json(self, entry: LogEntry) -> str:
        obj = {
            "timestamp": entry.timestamp,
            "level": entry.level.value,
            "component": entry.component,
            "message": entry.message,
            "data": entry.data,
        }
        return json.dumps(obj, ensure_ascii=False, default=str)

    def _format_text(self, entry: LogEntry) -> str:
        # Format: [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}
        parts = [
            f"[{entry.timestamp}]",
            entry.level.value.upper(),
            f"[{entry.component}]",
            entry.message,
        ]

        if entry.data:
            parts.append(json.dumps(entry.data, ensure_ascii=False, default=str))

        return " ".join(parts)

    def get_json_output(self, entry: LogEntry) -> str:
        """Get JSON output for an entry (for testing)."""
        return self._format_json(entry)

    def get_text_output(self, entry: LogEntry) -> str:
        """Get text output for an entry (for testing)."""
        return self._format_text(entry)

    def clear_entries(self) -> None:
        """Clear all stored log entries (for testing)."""
        with self._lock:
            self._entries.clear()
