"""
System Reporter - Centralized logging for demoapp.

Console logging by default, optional file logging, optional JSON lines.
The active level can be changed at runtime when a reloaded configuration
carries a new ``log_level``.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

LOG_FORMATS = ("text", "json")

# Names accepted from flags and config files (Go-style "warn" included)
LEVELS: Dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_level(name: str) -> int:
    """
    Convert a level name to a logging level.

    Args:
        name: Level name (case-insensitive)

    Returns:
        Python logging level

    Raises:
        ValueError: If the name is not a known level
    """
    try:
        return LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Invalid log level {name!r}. Must be one of: {sorted(LEVELS)}"
        ) from None


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per line with a consistent schema.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            log_data["component"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class SystemReporter:
    """
    Logger with context tags and verbose filtering.

    Verbose Levels:
        0 = Critical only (always visible)
        1 = Important messages (default)
        2 = Detailed information
        3 = Debug/verbose
    """

    def __init__(
        self,
        name: str = "demoapp",
        log_file: Optional[str] = None,
        level: int = logging.INFO,
        verbose: int = 1,
        log_format: str = "text",
    ) -> None:
        """
        Initialize SystemReporter.

        Args:
            name: Logger name
            log_file: Optional log file path. If None, logs to stdout only.
            level: Python logging level
            verbose: Verbosity filter (0-3)
            log_format: "text" or "json"
        """
        if log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log format {log_format!r}. Must be one of: {LOG_FORMATS}"
            )

        self.name = name
        self.verbose = verbose
        self.log_format = log_format

        self._init_logger(name, log_file, level)

    def _init_logger(self, name: str, log_file: Optional[str], level: int) -> None:
        """
        Initialize logger with console and optional file handler.

        Args:
            name: Logger name
            log_file: Log file path (None = stdout only)
            level: Python logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.handlers.clear()
        self.logger.propagate = False

        if self.log_format == "json":
            formatter: logging.Formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(os.path.abspath(log_file))
            os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def set_verbose(self, level: int) -> None:
        """Update verbosity level."""
        self.verbose = max(0, min(3, level))
        self.info(
            f"Verbosity set to {self.verbose}",
            context="SystemReporter",
            verbose_level=0,
        )

    def set_level(self, name: str) -> None:
        """
        Change the active log level.

        Args:
            name: Level name such as "debug" or "warn"

        Raises:
            ValueError: If the level name is unknown
        """
        self.logger.setLevel(parse_level(name))

    @property
    def level_name(self) -> str:
        """Name of the active log level, lowercase."""
        return logging.getLevelName(self.logger.level).lower()

    def _should_log(self, verbose_level: int) -> bool:
        """Check if message should be logged."""
        return self.verbose >= verbose_level

    def _log(
        self, level: int, msg: str, context: str, exc_info: bool = False
    ) -> None:
        if self.log_format == "json":
            self.logger.log(level, msg, extra={"context": context}, exc_info=exc_info)
        else:
            self.logger.log(level, f"[{context}] {msg}", exc_info=exc_info)

    # Core logging methods
    def debug(self, msg: str, context: str = "system", verbose_level: int = 3) -> None:
        """Log debug message."""
        if self._should_log(verbose_level):
            self._log(logging.DEBUG, msg, context)

    def info(self, msg: str, context: str = "system", verbose_level: int = 1) -> None:
        """Log info message."""
        if self._should_log(verbose_level):
            self._log(logging.INFO, msg, context)

    def warning(
        self, msg: str, context: str = "system", verbose_level: int = 1
    ) -> None:
        """Log warning message."""
        if self._should_log(verbose_level):
            self._log(logging.WARNING, msg, context)

    def error(
        self,
        msg: str,
        context: str = "system",
        verbose_level: int = 0,
        exc_info: bool = False,
    ) -> None:
        """Log error message, optionally with the current traceback."""
        if self._should_log(verbose_level):
            self._log(logging.ERROR, msg, context, exc_info=exc_info)

    def critical(
        self, msg: str, context: str = "system", verbose_level: int = 0
    ) -> None:
        """Log critical message."""
        if self._should_log(verbose_level):
            self._log(logging.CRITICAL, msg, context)
