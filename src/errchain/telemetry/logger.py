"""
Structured logging for errchain.

Provides JSON and text formatters that expose error chain fields (code,
client message, operations) for any exception attached to a log record.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from errchain.traversal import client_message, error_code, operations

_FORMATS = ("json", "text")


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


@dataclass
class LoggingConfig:
    """Configuration for errchain loggers.

    Attributes:
        level: Minimum level emitted
        format: Output format ('json' or 'text')
        include_timestamp: Whether JSON records carry a timestamp
    """

    level: LogLevel = LogLevel.INFO
    format: str = "text"
    include_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.format not in _FORMATS:
            raise ValueError(
                f"Unknown log format {self.format!r}; expected one of {_FORMATS}"
            )

    @classmethod
    def from_env(cls) -> LoggingConfig:
        """Create configuration from environment variables.

        Reads ERRCHAIN_LOG_LEVEL and ERRCHAIN_LOG_FORMAT.

        Raises:
            ValueError: If a variable holds an unknown value
        """
        level_str = os.getenv("ERRCHAIN_LOG_LEVEL", "INFO").upper()
        try:
            level = LogLevel(level_str)
        except ValueError:
            raise ValueError(
                f"ERRCHAIN_LOG_LEVEL: unknown level {level_str!r}"
            ) from None

        fmt = os.getenv("ERRCHAIN_LOG_FORMAT", "text").lower()
        if fmt not in _FORMATS:
            raise ValueError(f"ERRCHAIN_LOG_FORMAT: unknown format {fmt!r}")

        return cls(level=level, format=fmt)


def chain_fields(err: BaseException) -> dict[str, Any]:
    """Collect the log fields describing an error chain.

    Args:
        err: Any exception

    Returns:
        Dict with 'operations', plus 'error_code' and 'client_message'
        when they are non-empty
    """
    fields: dict[str, Any] = {}
    if code := error_code(err):
        fields["error_code"] = code
    if msg := client_message(err):
        fields["client_message"] = msg
    fields["operations"] = operations(err)
    return fields


def _record_error(record: logging.LogRecord) -> BaseException | None:
    if record.exc_info and isinstance(record.exc_info[1], BaseException):
        return record.exc_info[1]
    return None


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(self, include_timestamp: bool = True) -> None:
        """Initialize formatter.

        Args:
            include_timestamp: Whether to include timestamp
        """
        super().__init__()
        self._include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self._include_timestamp:
            log_data["timestamp"] = time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            ) + f".{int(record.msecs):03d}Z"

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if err := _record_error(record):
            log_data["error"] = str(err)
            log_data.update(chain_fields(err))
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        result = super().format(record)

        fields: dict[str, Any] = dict(getattr(record, "extra_fields", {}))
        if err := _record_error(record):
            fields.update(chain_fields(err))
            fields["operations"] = ">".join(fields["operations"])
        if fields:
            # Traceback, if any, stays on the lines after the header.
            head, sep, rest = result.partition("\n")
            field_str = " ".join(f"{k}={v}" for k, v in fields.items())
            result = f"{head} | {field_str}{sep}{rest}"

        return result


class ChainLogger:
    """Logger with structured fields and error chain support.

    Example:
        >>> logger = ChainLogger.get_logger("myapp.repo")
        >>> logger.log_error("Lookup failed", err, user_id=42)
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.INFO
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        config: LoggingConfig | None = None,
        stream: Any = None,
    ) -> None:
        """Configure global logging settings.

        Args:
            config: Logging configuration (default: LoggingConfig.from_env())
            stream: Output stream (default: stderr)
        """
        config = config or LoggingConfig.from_env()
        cls._level = config.level

        formatter: logging.Formatter
        if config.format == "json":
            formatter = JsonFormatter(include_timestamp=config.include_timestamp)
        else:
            formatter = TextFormatter()

        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(formatter)
        cls._handler.setLevel(config.level.to_logging_level())

        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(cls._handler)
            logger.setLevel(config.level.to_logging_level())

    @classmethod
    def get_logger(cls, name: str) -> ChainLogger:
        """Get or create a logger.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            logger.setLevel(cls._level.to_logging_level())

            if cls._handler:
                logger.handlers.clear()
                logger.addHandler(cls._handler)
            elif not logger.handlers:
                handler = logging.StreamHandler(sys.stderr)
                handler.setFormatter(TextFormatter())
                logger.addHandler(handler)

            logger.propagate = False
            cls._loggers[name] = logger

        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize with underlying logger."""
        self._logger = logger

    def _log(
        self, level: int, msg: str, exc_info: Any = False, **kwargs: Any
    ) -> None:
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log the exception being handled, with its chain fields."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)

    def log_error(
        self,
        msg: str,
        err: BaseException,
        level: LogLevel = LogLevel.ERROR,
        **kwargs: Any,
    ) -> None:
        """Log a specific exception, raised or not.

        Args:
            msg: Log message
            err: Exception whose chain fields are attached
            level: Log level
            **kwargs: Extra structured fields
        """
        exc_info = (type(err), err, err.__traceback__)
        self._log(level.to_logging_level(), msg, exc_info=exc_info, **kwargs)


def get_logger(name: str) -> ChainLogger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return ChainLogger.get_logger(name)
