"""
Logging for reqkit.

Example:
    >>> from reqkit.core.logging import LoggingConfig, HTTPClientLogger
    >>> logger = HTTPClientLogger(LoggingConfig.create(level="DEBUG", format="colored"))
    >>> logger.info("Request started", method="GET", url="https://api.example.com")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import HTTPClientLogger, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    correlation_scope,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "HTTPClientLogger",
    "get_logger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "correlation_scope",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
