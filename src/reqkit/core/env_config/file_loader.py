"""
Configuration file loader for YAML and JSON files.

File layout (the top-level "reqkit" section is optional):

    reqkit:
      base: https://api.example.com
      timeout: 10
      type: json
      headers:
        X-Api-Version: "2"
      auth: {username: alice, password: secret, type: digest}
      cookie_jar: /var/lib/app/cookies.txt
      logging:
        level: DEBUG
        format: json
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..config import RequestOptions
from ..exceptions import ConfigurationError
from ..logging import LoggingConfig
from .loader import ClientConfig

CONFIG_FILE_ENV = "REQKIT_CONFIG_FILE"
SECTION = "reqkit"


class ConfigValidationError(ConfigurationError):
    """Raised when configuration file is invalid."""


class ConfigFileLoader:
    """
    Загрузчик конфигурации из файлов.

    Examples:
        >>> config = ConfigFileLoader.from_yaml("reqkit.yaml")
        >>> config = ConfigFileLoader.from_file("reqkit.json")  # по расширению
        >>> client = config.create_client()
    """

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> ClientConfig:
        """
        Загрузить конфиг из YAML файла.

        Raises:
            ConfigValidationError: Файл не найден, пустой или невалидный
        """
        path = ConfigFileLoader._existing(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax in {path}: {e}")

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_json(path: Union[str, Path]) -> ClientConfig:
        """
        Загрузить конфиг из JSON файла.

        Raises:
            ConfigValidationError: Файл не найден, пустой или невалидный
        """
        path = ConfigFileLoader._existing(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON syntax in {path}: {e}")

        return ConfigFileLoader._build_config(data, str(path))

    @staticmethod
    def from_file(path: Union[str, Path]) -> ClientConfig:
        """
        Автоопределение формата по расширению (.yaml, .yml, .json).

        Raises:
            ConfigValidationError: Неподдерживаемое расширение
        """
        suffix = Path(path).suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path)
        if suffix == ".json":
            return ConfigFileLoader.from_json(path)

        raise ConfigValidationError(
            f"Unsupported config file format: {suffix}. "
            f"Supported formats: .yaml, .yml, .json"
        )

    @staticmethod
    def from_env_path() -> Optional[ClientConfig]:
        """Загрузить из пути в REQKIT_CONFIG_FILE; None если переменная не задана."""
        config_path = os.environ.get(CONFIG_FILE_ENV)
        if not config_path:
            return None
        return ConfigFileLoader.from_file(config_path)

    @staticmethod
    def _existing(path: Union[str, Path]) -> Path:
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Config file not found: {path}")
        return path

    @staticmethod
    def _build_config(data: Any, source: str) -> ClientConfig:
        if not data:
            raise ConfigValidationError(f"Empty config file: {source}")

        if isinstance(data, dict) and SECTION in data:
            data = data[SECTION]

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Config must be a dictionary, got {type(data).__name__} in {source}"
            )

        config_data: Dict[str, Any] = dict(data)
        logging_data = config_data.pop("logging", None)

        if logging_data is not None and not isinstance(logging_data, dict):
            raise ConfigValidationError(f"logging must be a dictionary in {source}")

        for key in ("headers", "query", "cookies", "transport"):
            if key in config_data and not isinstance(config_data[key], dict):
                raise ConfigValidationError(f"{key} must be a dictionary in {source}")

        try:
            options = RequestOptions.create(**config_data)
            logging_cfg = LoggingConfig.create(**logging_data) if logging_data else None
        except (ValueError, TypeError) as e:
            raise ConfigValidationError(f"Invalid config in {source}: {e}")

        return ClientConfig(options=options, logging=logging_cfg)
