"""
Telemetry module for errchain.

Provides structured logging that surfaces error chain fields.
"""

from errchain.telemetry.logger import (
    ChainLogger,
    JsonFormatter,
    LoggingConfig,
    LogLevel,
    TextFormatter,
    chain_fields,
    get_logger,
)

__all__ = [
    "ChainLogger",
    "JsonFormatter",
    "LogLevel",
    "LoggingConfig",
    "TextFormatter",
    "chain_fields",
    "get_logger",
]
