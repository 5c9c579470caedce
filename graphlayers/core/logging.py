"""Structured logging configuration for graphlayers.

The library itself only ever calls :func:`get_logger`; nothing is configured
on import. Applications (and tests) that want output call
:func:`setup_logging`, which provides:

- JSON structured logging for machine parsing
- Colored console output for development
- An optional rotating file handler (10MB max, 5 backups)
- Context propagation through ``extra={"context": {...}}``
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import ClassVar

from graphlayers.core.config import settings

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


class LogLevel(str, Enum):
    """Log level enumeration for type-safe log level configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Format:
        {
            "timestamp": "2025-01-12T10:30:45.123Z",
            "level": "DEBUG",
            "logger": "graphlayers.algorithms.coffman_graham",
            "message": "Layering computed",
            "context": {
                "element_count": 18,
                "layer_count": 6
            }
        }
    """

    def __init__(
        self,
        service_name: str = "graphlayers",
        service_version: str = "0.1.0",
    ) -> None:
        """Initialize JSON formatter.

        Args:
            service_name: Name reported in every entry
            service_version: Version reported in every entry
        """
        super().__init__()
        self.service_name = service_name
        self.service_version = service_version

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.service_version,
        }

        if hasattr(record, "context"):
            log_entry["context"] = record.context

        if record.exc_info:
            log_entry["exception"] = {  # type: ignore[assignment]
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # Source location for ERROR and above
        if record.levelno >= logging.ERROR:
            log_entry["source"] = {  # type: ignore[assignment]
                "function": record.funcName,
                "line": record.lineno,
                "file": record.pathname,
                "process": record.process,
                "thread": record.thread,
            }

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ColoredConsoleFormatter(logging.Formatter):
    """Colored console formatter for development environments.

    Colors:
        DEBUG: Cyan
        INFO: Green
        WARNING: Yellow
        ERROR: Red
        CRITICAL: Red background
    """

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, fmt: str | None = None) -> None:
        super().__init__(
            fmt=fmt or settings.LOG_FORMAT,
            datefmt=_DATE_FORMAT,
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors.

        The record is copied first so other handlers still see the plain
        level name and message.
        """
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"

        if getattr(record, "context", None):
            record.msg = f"{record.msg} | Context: {json.dumps(record.context, default=str)}"

        return super().format(record)


def _file_handler(path: Path, enable_json: bool) -> RotatingFileHandler:
    """Rotating file handler that records every level."""
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    if enable_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _console_formatter(enable_json: bool) -> logging.Formatter:
    # DEBUG mode wins over JSON so local runs stay readable
    if settings.DEBUG:
        return ColoredConsoleFormatter()
    if enable_json:
        return JSONFormatter()
    return logging.Formatter(settings.LOG_FORMAT, datefmt=_DATE_FORMAT)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    logger_name: str = "graphlayers",
    enable_json: bool | None = None,
    enable_console: bool = True,
) -> logging.Logger:
    """Configure the graphlayers logger hierarchy.

    Sets up:
    - The ``graphlayers`` logger with a configurable level
    - A console handler (colored in DEBUG mode, JSON or plain otherwise)
    - A rotating file handler when a log file is given or configured

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to settings.LOG_LEVEL
        log_file: Path to log file. Defaults to settings.LOG_FILE; no file
                  handler is created when both are unset
        logger_name: Logger to configure
        enable_json: Use JSON formatting. Defaults to settings.LOG_JSON_FORMAT
        enable_console: Enable console output handler

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.debug("Solving", extra={"context": {"max_layer_size": 3}})
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL
    if log_file is None:
        log_file = settings.LOG_FILE
    if enable_json is None:
        enable_json = settings.LOG_JSON_FORMAT

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        logger.addHandler(_file_handler(Path(log_file), enable_json))

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(_console_formatter(enable_json))
        logger.addHandler(console_handler)

    logger.debug(
        f"Logging initialized - Level: {log_level}, File: {log_file}",
        extra={
            "context": {
                "log_level": log_level,
                "log_file": log_file,
            }
        },
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance

    Examples:
        >>> from graphlayers.core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("Building graph")
    """
    return logging.getLogger(name)


__all__ = [
    "ColoredConsoleFormatter",
    "JSONFormatter",
    "LogLevel",
    "get_logger",
    "setup_logging",
]
