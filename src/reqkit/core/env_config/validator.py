"""
Pydantic settings for environment configuration.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import AuthConfig, ProxyConfig, RequestOptions
from ..logging.config import LoggingConfig

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


class ClientSettings(BaseSettings):
    """
    Опции клиента из переменных окружения.

    Reads from:
    1. Аргументы конструктора
    2. Переменные окружения (REQKIT_*)
    3. .env файл
    4. Defaults (None = не задано, см. RequestOptions.with_defaults)

    Example .env file:
        REQKIT_BASE=https://api.example.com
        REQKIT_TIMEOUT=10
        REQKIT_TYPE=json
        REQKIT_COOKIE_JAR=/var/lib/app/cookies.txt
        REQKIT_HEADERS={"X-Api-Version": "2"}
        REQKIT_AUTH_USERNAME=alice
        REQKIT_AUTH_PASSWORD=secret
        REQKIT_LOG_ENABLED=true
        REQKIT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='REQKIT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    type: Optional[Literal["json", "xml"]] = None
    timeout: Optional[int] = Field(default=None, gt=0, description="Seconds")
    redirect: Optional[bool] = None
    cookie_jar: Union[bool, str, None] = Field(
        default=None,
        description="true/false or a cookie file path"
    )
    http_errors: Optional[bool] = None
    verbose: Optional[bool] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None

    # Auth
    auth_username: Optional[str] = None
    auth_password: Optional[str] = None
    auth_type: Literal["basic", "digest", "ntlm", "any"] = "basic"

    # Proxy
    proxy: Optional[str] = None
    proxy_username: Optional[str] = None
    proxy_password: Optional[str] = None

    # Logging
    log_enabled: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text", "colored"] = "text"
    log_enable_console: bool = True
    log_enable_file: bool = False
    log_file_path: Optional[str] = None
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)
    log_enable_correlation_id: bool = True

    @field_validator('cookie_jar', mode='before')
    @classmethod
    def parse_cookie_jar(cls, v: Any) -> Any:
        """Строки true/false -> bool, остальное - путь к файлу."""
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            if not v.strip():
                return None
        return v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v

    def to_request_options(self) -> RequestOptions:
        """RequestOptions из заданных настроек."""
        auth = None
        if self.auth_username is not None:
            auth = AuthConfig(self.auth_username, self.auth_password, self.auth_type)

        proxy = None
        if self.proxy:
            proxy = ProxyConfig(self.proxy, self.proxy_username, self.proxy_password)

        return RequestOptions(
            base=self.base,
            headers=self.headers or None,
            type=self.type,
            auth=auth,
            proxy=proxy,
            timeout=self.timeout,
            redirect=self.redirect,
            cookie_jar=self.cookie_jar,
            http_errors=self.http_errors,
            verbose=self.verbose,
            user_agent=self.user_agent,
            referer=self.referer,
        )

    def to_logging_config(self) -> Optional[LoggingConfig]:
        """LoggingConfig если логирование включено (REQKIT_LOG_ENABLED)."""
        if not self.log_enabled:
            return None

        return LoggingConfig.create(
            level=self.log_level,
            format=self.log_format,
            enable_console=self.log_enable_console,
            enable_file=self.log_enable_file,
            file_path=self.log_file_path,
            max_bytes=self.log_max_bytes,
            backup_count=self.log_backup_count,
            enable_correlation_id=self.log_enable_correlation_id,
        )
