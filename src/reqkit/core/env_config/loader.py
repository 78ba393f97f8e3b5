"""
Load client configuration from environment variables and .env files.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..config import RequestOptions
from ..logging.config import LoggingConfig
from .validator import ClientSettings


@dataclass(frozen=True)
class ClientConfig:
    """
    Опции клиента и (опционально) конфигурация логов.

    Example:
        >>> config = load_from_env()
        >>> client = config.create_client()
    """
    options: RequestOptions
    logging: Optional[LoggingConfig] = None

    def create_client(self, **kwargs: Any):
        """HTTPClient с этими опциями; kwargs передаются в конструктор."""
        from ..http_client import HTTPClient

        kwargs.setdefault('logging', self.logging)
        return HTTPClient(self.options, **kwargs)


def load_from_env(env_file: Optional[str] = '.env', **overrides: Any) -> ClientConfig:
    """
    Load ClientConfig from REQKIT_* environment variables.

    Priority (highest to lowest):
    1. **overrides (ClientSettings field names)
    2. Environment variables (REQKIT_*)
    3. env_file
    4. Defaults

    Args:
        env_file: Path to .env file (None disables it)
        **overrides: Explicit values, e.g. base="https://api.example.com"

    Raises:
        pydantic.ValidationError: Invalid value

    Example:
        >>> config = load_from_env(timeout=5)
        >>> config.options.timeout
        5
    """
    settings = ClientSettings(_env_file=env_file, **overrides)
    return ClientConfig(
        options=settings.to_request_options(),
        logging=settings.to_logging_config(),
    )
