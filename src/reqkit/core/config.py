"""
Система конфигурации запросов reqkit.

Все конфиги immutable (frozen dataclasses). Опции клиента (defaults) и опции
конкретного вызова имеют один тип - RequestOptions - и объединяются через
merge_options().
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Union
from types import MappingProxyType

from requests.structures import CaseInsensitiveDict

AUTH_TYPES = ('basic', 'digest', 'ntlm', 'any')
CONTENT_TYPES = ('json', 'xml')

DEFAULT_TIMEOUT = 30
DEFAULT_REDIRECT = True
DEFAULT_COOKIE_JAR = True
DEFAULT_HTTP_ERRORS = True
DEFAULT_VERBOSE = False

# Ключи, которые объединяются поэлементно, а не заменяются целиком
MAP_FIELDS = ('headers', 'cookies', 'transport')


def _freeze_dict(d: Optional[Mapping[Any, Any]]) -> Mapping[Any, Any]:
    """
    Convert mapping to immutable MappingProxyType (insertion order preserved).

    Example:
        >>> frozen = _freeze_dict({"page": 1})
        >>> frozen["page"] = 2  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


def _freeze_headers(d: Mapping[str, str]) -> Mapping[str, str]:
    """Immutable case-insensitive view of headers."""
    return MappingProxyType(CaseInsensitiveDict(d))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# AUTH CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class AuthConfig:
    """
    Учетные данные для аутентификации.

    Args:
        username: Имя пользователя
        password: Пароль
        type: Схема (basic, digest, ntlm, any)

    Examples:
        >>> AuthConfig("user", "secret")
        >>> AuthConfig("user", "secret", type="digest")
    """
    username: Optional[str] = None
    password: Optional[str] = None
    type: str = 'basic'

    def __post_init__(self):
        """Валидация."""
        scheme = (self.type or 'basic').lower()
        if scheme not in AUTH_TYPES:
            raise ValueError(
                f"auth type must be one of {', '.join(AUTH_TYPES)}, got '{self.type}'"
            )
        object.__setattr__(self, 'type', scheme)

    @property
    def credentials(self) -> str:
        """Строка user:password."""
        return f"{self.username or ''}:{self.password or ''}"

    @classmethod
    def coerce(cls, value: Any) -> Optional['AuthConfig']:
        """Принимает AuthConfig, dict или кортеж (username, password[, type])."""
        if value is None or isinstance(value, AuthConfig):
            return value
        if isinstance(value, Mapping):
            return cls(
                username=value.get('username'),
                password=value.get('password'),
                type=value.get('type') or 'basic'
            )
        if isinstance(value, (tuple, list)):
            return cls(*value)
        raise ValueError(f"auth must be AuthConfig, dict or tuple, got {type(value).__name__}")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PROXY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ProxyConfig:
    """
    Прокси сервер.

    Args:
        proxy: Адрес прокси (host:port или URL)
        username: Имя пользователя (опционально)
        password: Пароль (опционально)

    Examples:
        >>> ProxyConfig("proxy.example.com:8080")
        >>> ProxyConfig("http://proxy.example.com:8080", "user", "secret")
    """
    proxy: str
    username: Optional[str] = None
    password: Optional[str] = None

    def __post_init__(self):
        """Валидация."""
        if not self.proxy:
            raise ValueError("proxy address must not be empty")

    @classmethod
    def coerce(cls, value: Any) -> Optional['ProxyConfig']:
        """Принимает ProxyConfig, dict или строку адреса."""
        if value is None or isinstance(value, ProxyConfig):
            return value
        if isinstance(value, str):
            return cls(proxy=value)
        if isinstance(value, Mapping):
            return cls(
                proxy=value.get('proxy'),
                username=value.get('username'),
                password=value.get('password')
            )
        raise ValueError(f"proxy must be ProxyConfig, dict or str, got {type(value).__name__}")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REQUEST OPTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RequestOptions:
    """
    Опции запроса. None означает "не задано".

    Args:
        base: Базовый URL, к которому дописывается путь
        query: Query параметры (порядок вставки сохраняется)
        headers: Заголовки (ключи без учета регистра)
        cookies: Куки для отправки (name -> value)
        fields: Поля тела запроса (значение, "@path" или HttpFile)
        type: Тип контента: json или xml
        auth: AuthConfig
        proxy: ProxyConfig
        timeout: Таймаут (сек, положительное целое)
        redirect: Следовать за редиректами
        cookie_jar: False - выключено, True - в памяти, str - путь к файлу
        http_errors: Бросать ClientError/ServerError на 4xx/5xx
        verbose: Подробный лог транспорта
        user_agent: Заголовок User-Agent
        referer: Заголовок Referer
        transport: Сырые опции транспорта, применяются последними

    Examples:
        >>> RequestOptions(base="https://api.example.com", timeout=10)
        >>> RequestOptions.create(auth=("user", "secret"), type="json")
    """
    base: Optional[str] = None
    query: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, str]] = None
    cookies: Optional[Mapping[str, str]] = None
    fields: Optional[Mapping[str, Any]] = None
    type: Optional[str] = None
    auth: Optional[AuthConfig] = None
    proxy: Optional[ProxyConfig] = None
    timeout: Optional[int] = None
    redirect: Optional[bool] = None
    cookie_jar: Union[bool, str, None] = None
    http_errors: Optional[bool] = None
    verbose: Optional[bool] = None
    user_agent: Optional[str] = None
    referer: Optional[str] = None
    transport: Optional[Mapping[Any, Any]] = None

    def __post_init__(self):
        """Валидация и заморозка вложенных словарей."""
        if self.query is not None:
            object.__setattr__(self, 'query', _freeze_dict(self.query))
        if self.headers is not None:
            object.__setattr__(self, 'headers', _freeze_headers(self.headers))
        if self.cookies is not None:
            object.__setattr__(self, 'cookies', _freeze_dict(self.cookies))
        if self.fields is not None:
            object.__setattr__(self, 'fields', _freeze_dict(self.fields))
        if self.transport is not None:
            object.__setattr__(self, 'transport', _freeze_dict(self.transport))

        object.__setattr__(self, 'auth', AuthConfig.coerce(self.auth))
        object.__setattr__(self, 'proxy', ProxyConfig.coerce(self.proxy))

        if self.type is not None:
            content_type = str(self.type).lower()
            if content_type == 'none':
                content_type = None
            elif content_type not in CONTENT_TYPES:
                raise ValueError(f"type must be json or xml, got '{self.type}'")
            object.__setattr__(self, 'type', content_type)

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
                raise ValueError("timeout must be an integer number of seconds")
            if self.timeout <= 0:
                raise ValueError("timeout must be positive")

        if self.cookie_jar is not None and not isinstance(self.cookie_jar, (bool, str)):
            raise ValueError("cookie_jar must be a bool or a file path")
        if isinstance(self.cookie_jar, str) and not self.cookie_jar:
            raise ValueError("cookie_jar file path must not be empty")

    @classmethod
    def create(cls, **kwargs: Any) -> 'RequestOptions':
        """
        Удобный конструктор из keyword аргументов или распакованного dict.

        Raises:
            TypeError: Если передан неизвестный ключ

        Example:
            >>> RequestOptions.create(**{"base": "https://api.example.com", "timeout": 5})
        """
        known = {f.name for f in fields(cls)}
        unknown = set(kwargs) - known
        if unknown:
            raise TypeError(f"Unknown request option(s): {', '.join(sorted(unknown))}")
        return cls(**kwargs)

    def with_defaults(self) -> 'RequestOptions':
        """Заполнить незаданные ключи документированными значениями по умолчанию."""
        return replace(
            self,
            timeout=DEFAULT_TIMEOUT if self.timeout is None else self.timeout,
            redirect=DEFAULT_REDIRECT if self.redirect is None else self.redirect,
            cookie_jar=DEFAULT_COOKIE_JAR if self.cookie_jar is None else self.cookie_jar,
            http_errors=DEFAULT_HTTP_ERRORS if self.http_errors is None else self.http_errors,
            verbose=DEFAULT_VERBOSE if self.verbose is None else self.verbose,
        )

    @property
    def jar_mode(self) -> str:
        """off, memory или file."""
        if self.cookie_jar is False:
            return 'off'
        if isinstance(self.cookie_jar, str):
            return 'file'
        return 'memory'

    def to_dict(self) -> Dict[str, Any]:
        """Заданные ключи как обычный dict (для логов и отладки)."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Mapping):
                value = dict(value)
            result[f.name] = value
        return result

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MERGE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _merge_maps(base: Optional[Mapping], override: Optional[Mapping], case_insensitive: bool = False):
    if base is None and override is None:
        return None
    result: Mapping = CaseInsensitiveDict() if case_insensitive else {}
    result.update(base or {})
    result.update(override or {})
    return result


def combine_options(
    defaults: Optional[RequestOptions],
    override: Optional[RequestOptions] = None
) -> RequestOptions:
    """
    Наложить override на defaults без подстановки значений по умолчанию.

    Незаданные в обоих ключи остаются None.
    """
    defaults = defaults or RequestOptions()
    override = override or RequestOptions()

    values: Dict[str, Any] = {}
    for f in fields(RequestOptions):
        base_value = getattr(defaults, f.name)
        override_value = getattr(override, f.name)
        if f.name in MAP_FIELDS:
            values[f.name] = _merge_maps(
                base_value,
                override_value,
                case_insensitive=(f.name == 'headers')
            )
        else:
            values[f.name] = override_value if override_value is not None else base_value

    return RequestOptions(**values)


def merge_options(
    defaults: Optional[RequestOptions],
    override: Optional[RequestOptions] = None
) -> RequestOptions:
    """
    Объединить опции клиента и опции вызова в эффективную конфигурацию.

    Скалярные ключи: значение вызова, если задано, иначе значение клиента,
    иначе значение по умолчанию. Словари (headers, cookies, transport)
    объединяются по ключам, значение вызова побеждает.

    Args:
        defaults: Опции клиента
        override: Опции вызова

    Returns:
        Новый RequestOptions без незаданных ключей со значениями по умолчанию

    Example:
        >>> defaults = RequestOptions(headers={"Accept": "text/html", "X-A": "1"})
        >>> merged = merge_options(defaults, RequestOptions(headers={"accept": "*/*"}))
        >>> dict(merged.headers)
        {'accept': '*/*', 'X-A': '1'}
    """
    return combine_options(defaults, override).with_defaults()


def coerce_options(options: Union[RequestOptions, Mapping[str, Any], None] = None,
                   **kwargs: Any) -> RequestOptions:
    """
    RequestOptions из объекта, dict и/или keyword аргументов.

    Keyword аргументы накладываются поверх options (как через combine_options).

    Raises:
        TypeError: Неизвестный ключ или неподдерживаемый тип options
    """
    if options is None:
        options = RequestOptions()
    elif isinstance(options, Mapping):
        options = RequestOptions.create(**options)
    elif not isinstance(options, RequestOptions):
        raise TypeError(f"options must be RequestOptions or dict, got {type(options).__name__}")

    if kwargs:
        options = combine_options(options, RequestOptions.create(**kwargs))
    return options
