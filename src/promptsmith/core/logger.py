"""Structured JSON logging for PromptSmith.

Console output is always on; a rotating log file is added only when a log
directory is configured.
"""

import json
import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


class PromptSmithLogger:
    """Structured JSON logger with optional rotation and timing utilities.

    Supports structured key-value logging and operation timing.
    """

    log_dir: Path | None
    log_file: Path | None

    def __init__(
        self,
        log_dir: str | None = None,
        max_bytes: int = 5 * 1024 * 1024,  # 5MB
        backup_count: int = 3,
        level: str | None = None,
    ) -> None:
        """Initialize logger.

        Args:
            log_dir: Directory for log files, reads PROMPTSMITH_LOG_DIR env if not provided.
                When neither is set, only the console handler is installed.
            max_bytes: Maximum size before rotation (default 5MB)
            backup_count: Number of backup files to keep (default 3)
            level: Log level (DEBUG/INFO/WARN/ERROR), reads PROMPTSMITH_LOG_LEVEL env if not provided
        """
        self._logger = logging.getLogger("promptsmith")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

        resolved_dir = log_dir or os.environ.get("PROMPTSMITH_LOG_DIR")
        if resolved_dir:
            self.log_dir = Path(resolved_dir).expanduser()
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / "promptsmith.log"

            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setFormatter(JSONFormatter())
            self._logger.addHandler(file_handler)
        else:
            self.log_dir = None
            self.log_file = None

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(JSONFormatter())
        self._logger.addHandler(console_handler)

        log_level = level or os.environ.get("PROMPTSMITH_LOG_LEVEL", "WARNING")
        self.set_level(log_level)

        self._timers: dict[str, float] = {}

    def set_level(self, level: str) -> None:
        """Set logging level.

        Args:
            level: One of DEBUG, INFO, WARN/WARNING, ERROR
        """
        level_upper = level.upper()
        if level_upper == "WARN":
            level_upper = "WARNING"

        numeric_level = getattr(logging, level_upper, logging.INFO)
        self._logger.setLevel(numeric_level)

    def debug(self, msg: str, **kv: Any) -> None:
        """Log debug message with optional key-value pairs."""
        self._logger.debug(msg, extra={"kv": kv})

    def info(self, msg: str, **kv: Any) -> None:
        """Log info message with optional key-value pairs."""
        self._logger.info(msg, extra={"kv": kv})

    def warn(self, msg: str, **kv: Any) -> None:
        """Log warning message with optional key-value pairs."""
        self._logger.warning(msg, extra={"kv": kv})

    def error(self, msg: str, **kv: Any) -> None:
        """Log error message with optional key-value pairs."""
        self._logger.error(msg, extra={"kv": kv})

    @contextmanager
    def operation(self, operation_name: str, **kv: Any) -> Iterator[None]:
        """Context manager for operation timing.

        Logs operation start and end (with duration) at debug level.

        Args:
            operation_name: Name of the operation
            **kv: Additional key-value pairs to include

        Example:
            with logger.operation("render", format="toon"):
                ...
        """
        start_time = time.time()
        self.debug(f"{operation_name}_start", **kv)

        try:
            yield
        finally:
            duration_ms = (time.time() - start_time) * 1000
            self.debug(f"{operation_name}_end", duration_ms=duration_ms, **kv)

    def start_timer(self, label: str) -> None:
        """Start a named timer."""
        self._timers[label] = time.time()

    def end_timer(self, label: str, **kv: Any) -> float:
        """End a named timer and log the duration.

        Args:
            label: Timer label/name
            **kv: Additional key-value pairs to include in log

        Returns:
            Duration in milliseconds

        Raises:
            KeyError: If timer was not started
        """
        if label not in self._timers:
            raise KeyError(f"Timer '{label}' not started")

        start_time = self._timers.pop(label)
        duration_ms = (time.time() - start_time) * 1000

        self.debug(f"timer_{label}", duration_ms=duration_ms, **kv)

        return duration_ms


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        dt = datetime.fromtimestamp(record.created, tz=UTC)
        timestamp = dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        log_data = {
            "timestamp": timestamp,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if hasattr(record, "kv") and record.kv:
            log_data.update(record.kv)

        return json.dumps(log_data, default=str)
