"""
Cookie jar for reqkit.

Parses Set-Cookie header lines into Cookie objects and keeps them per client
instance so they are sent back on later requests.
"""

from dataclasses import dataclass, field
from http.cookiejar import http2time
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import quote, unquote

SET_COOKIE_PREFIX = 'Set-Cookie: '

# Атрибуты, которые хранятся в отдельных полях Cookie
_KNOWN_ATTRIBUTES = ('expires', 'path', 'domain')


@dataclass(frozen=True)
class Cookie:
    """
    Cookie.

    Attributes:
        name: Имя (идентичность куки)
        value: Значение (percent-decoded)
        expires: Время истечения (unix timestamp) или None
        path: Атрибут Path
        domain: Атрибут Domain
        attributes: Остальные атрибуты key=value (ключ в нижнем регистре)
        flags: Атрибуты без значения (Secure, HttpOnly) в порядке появления
    """
    name: str
    value: str
    expires: Optional[int] = None
    path: Optional[str] = None
    domain: Optional[str] = None
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    flags: Tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.attributes, dict):
            object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, 'flags', tuple(self.flags))

    def has_flag(self, flag: str) -> bool:
        """Case-insensitive check for a bare attribute like HttpOnly."""
        return flag.lower() in (f.lower() for f in self.flags)

    def to_header_pair(self) -> str:
        """name=value, percent-encoded, for the Cookie request header."""
        return f"{quote(self.name, safe='')}={quote(self.value, safe='')}"


def parse_set_cookie(value: str) -> Cookie:
    """
    Разобрать значение заголовка Set-Cookie.

    Args:
        value: Строка после "Set-Cookie: ", например "sid=abc; Path=/; HttpOnly"

    Returns:
        Cookie

    Example:
        >>> cookie = parse_set_cookie("sid=abc123; Path=/; HttpOnly")
        >>> cookie.name, cookie.value, cookie.path, cookie.flags
        ('sid', 'abc123', '/', ('HttpOnly',))
    """
    parts = value.split('; ')
    name, _, raw_value = parts[0].partition('=')

    known: Dict[str, Optional[str]] = {}
    attributes: Dict[str, str] = {}
    flags: List[str] = []

    for attr in parts[1:]:
        if '=' in attr:
            key, attr_value = attr.split('=', 1)
            key = key.lower()
            if key in _KNOWN_ATTRIBUTES:
                known[key] = attr_value
            else:
                attributes[key] = attr_value
        elif attr:
            flags.append(attr)

    expires = None
    if known.get('expires'):
        parsed = http2time(known['expires'])
        expires = int(parsed) if parsed is not None else None

    return Cookie(
        name=name,
        value=unquote(raw_value),
        expires=expires,
        path=known.get('path'),
        domain=known.get('domain'),
        attributes=attributes,
        flags=tuple(flags),
    )


def absorb(lines: List[str]) -> Tuple[Dict[str, Cookie], List[str]]:
    """
    Извлечь Set-Cookie строки из списка строк заголовков.

    Сравнение префикса чувствительно к регистру ("Set-Cookie: "). При
    повторяющихся именах побеждает последняя кука.

    Args:
        lines: Строки блока заголовков

    Returns:
        (куки по имени, оставшиеся строки без Set-Cookie)
    """
    cookies: Dict[str, Cookie] = {}
    remaining: List[str] = []

    for line in lines:
        if line.startswith(SET_COOKIE_PREFIX):
            cookie = parse_set_cookie(line[len(SET_COOKIE_PREFIX):])
            cookies[cookie.name] = cookie
        else:
            remaining.append(line)

    return cookies, remaining


class CookieJar:
    """
    In-memory хранилище кук клиента (name -> Cookie).

    Куки не удаляются автоматически, в том числе истекшие: очистка
    выполняется только явно через remove() или clear().

    Not thread-safe: один экземпляр клиента на поток.

    Example:
        >>> jar = CookieJar()
        >>> jar.set_value("sid", "abc123")
        >>> jar.to_header()
        'sid=abc123'
    """

    def __init__(self, cookies: Optional[Mapping[str, Cookie]] = None):
        self._cookies: Dict[str, Cookie] = dict(cookies or {})

    def set(self, cookie: Cookie) -> None:
        """Сохранить куку, заменив куку с тем же именем."""
        self._cookies[cookie.name] = cookie

    def set_value(self, name: str, value: str) -> None:
        """Сохранить куку только с именем и значением."""
        self.set(Cookie(name=name, value=str(value)))

    def update(self, cookies: Mapping[str, Cookie]) -> None:
        """Сохранить несколько кук (последняя побеждает)."""
        for cookie in cookies.values():
            self.set(cookie)

    def get(self, name: str) -> Optional[Cookie]:
        return self._cookies.get(name)

    def remove(self, name: str) -> None:
        self._cookies.pop(name, None)

    def clear(self) -> None:
        self._cookies.clear()

    def items(self):
        return self._cookies.items()

    def as_dict(self) -> Dict[str, Cookie]:
        """Копия содержимого."""
        return dict(self._cookies)

    def to_header(self, extra: Optional[Mapping[str, str]] = None) -> str:
        """
        Значение заголовка Cookie.

        Args:
            extra: Куки вызова; переопределяют куки с тем же именем

        Returns:
            "a=1; b=2" или пустая строка
        """
        pairs: Dict[str, str] = {}
        for name, cookie in self._cookies.items():
            pairs[name] = cookie.to_header_pair()
        for name, value in (extra or {}).items():
            pairs[name] = Cookie(name=name, value=str(value)).to_header_pair()
        return '; '.join(pairs.values())

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookies)

    def __repr__(self) -> str:
        return f"CookieJar({list(self._cookies)})"
