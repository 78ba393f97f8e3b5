"""
Client configuration from environment variables, .env and config files.

Example:
    >>> from reqkit.core.env_config import load_from_env, ConfigFileLoader
    >>> client = load_from_env().create_client()
    >>> client = ConfigFileLoader.from_file("reqkit.yaml").create_client()
"""

from .loader import ClientConfig, load_from_env
from .validator import ClientSettings
from .file_loader import ConfigFileLoader, ConfigValidationError

__all__ = [
    "ClientConfig",
    "load_from_env",
    "ClientSettings",
    "ConfigFileLoader",
    "ConfigValidationError",
]
