"""
Logging configuration for reqkit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Configuration for client logging.

    Attributes:
        level: Log level
        format: Output format (json, text, colored)
        enable_console: Log to stdout
        enable_file: Log to a rotating file
        file_path: Log file (required when enable_file=True)
        max_bytes: File size before rotation
        backup_count: Rotated files to keep
        enable_correlation_id: Add the per-request correlation id to records
        extra_fields: Static fields added to every record

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = 5
    enable_correlation_id: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(f"backup_count must be >= 0, got {self.backup_count}")

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        extra_fields: Optional[Dict[str, Any]] = None,
        **kwargs: Any
    ) -> "LoggingConfig":
        """
        Create LoggingConfig from string values.

        Raises:
            ValueError: Unknown level or format
        """
        return cls(
            level=LogLevel(str(level).upper()),
            format=LogFormat(str(format).lower()),
            extra_fields=dict(extra_fields or {}),
            **kwargs
        )
