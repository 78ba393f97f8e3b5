"""
Normalized response and the parser that builds it from a RawResponse.
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .cookies import Cookie, absorb
from .error_handler import REASON_PHRASES
from .transport import RawResponse

HEADER_ENCODING = 'iso-8859-1'


@dataclass(frozen=True)
class Response:
    """
    HTTP response. Immutable.

    Attributes:
        status_code: HTTP status
        headers: Headers in original case, one value per name (last wins).
            Status lines are kept with a None value.
        cookies: Cookies set by the response (name -> Cookie)
        body: Raw body bytes

    Example:
        >>> response = client.get("/users")
        >>> response.status_code
        200
        >>> response.json()
        {'users': []}
    """
    status_code: int
    headers: Mapping[str, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))
    cookies: Mapping[str, Cookie] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes = b''

    def __post_init__(self):
        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))
        if isinstance(self.cookies, dict):
            object.__setattr__(self, 'cookies', MappingProxyType(dict(self.cookies)))
        if isinstance(self.body, str):
            object.__setattr__(self, 'body', self.body.encode('utf-8'))

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def cookie(self, name: str) -> Optional[Cookie]:
        return self.cookies.get(name)

    @property
    def ok(self) -> bool:
        """True для статусов < 400."""
        return self.status_code < 400

    @property
    def reason(self) -> str:
        """Reason phrase из последней статусной строки, иначе из таблицы."""
        status_lines = [name for name, value in self.headers.items() if value is None and name.startswith('HTTP/')]
        if status_lines:
            parts = status_lines[-1].split(' ', 2)
            if len(parts) == 3:
                return parts[2]
        return REASON_PHRASES.get(self.status_code, '')

    @property
    def encoding(self) -> str:
        content_type = self.header('Content-Type') or ''
        for param in content_type.split(';')[1:]:
            key, _, value = param.strip().partition('=')
            if key.lower() == 'charset' and value:
                return value.strip('"\'')
        return 'utf-8'

    @property
    def text(self) -> str:
        """Тело как строка (charset из Content-Type, иначе utf-8)."""
        try:
            return self.body.decode(self.encoding, errors='replace')
        except LookupError:
            return self.body.decode('utf-8', errors='replace')

    def json(self) -> Any:
        """
        Тело как JSON.

        Raises:
            ValueError: Если тело не является валидным JSON
        """
        return json.loads(self.text)

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"


class ResponseParser:
    """Builds Response objects from raw transport output."""

    def parse(self, raw: RawResponse) -> Tuple[Response, Dict[str, Cookie]]:
        """
        Разобрать RawResponse.

        Блок заголовков отделяется от тела по header_size. Set-Cookie строки
        извлекаются до разбора остальных заголовков и в headers не попадают.

        Args:
            raw: Ответ транспорта

        Returns:
            (Response, куки ответа)
        """
        if raw.payload is None:
            return Response(status_code=raw.status_code), {}

        lines, body = self.split(raw.payload, raw.header_size)
        cookies, lines = absorb(lines)
        headers = self.normalize_headers(lines)

        response = Response(
            status_code=raw.status_code,
            headers=headers,
            cookies=cookies,
            body=body,
        )
        return response, cookies

    @staticmethod
    def split(payload: bytes, header_size: int) -> Tuple[List[str], bytes]:
        """Split payload into header lines and body."""
        header_block = payload[:header_size].decode(HEADER_ENCODING).strip()
        body = payload[header_size:]
        lines = [line for line in header_block.split('\r\n') if line]
        return lines, body

    @staticmethod
    def normalize_headers(lines: List[str]) -> Dict[str, Optional[str]]:
        """
        Parse header lines.

        Each line splits on the first ':'; the value is stripped. Lines
        without ':' (status lines) are kept with a None value. A repeated
        name keeps its last value.

        Example:
            >>> ResponseParser.normalize_headers(['X-Test:  value  '])
            {'X-Test': 'value'}
        """
        result: Dict[str, Optional[str]] = {}
        for line in lines:
            if ':' in line:
                name, value = line.split(':', 1)
                result[name] = value.strip()
            else:
                result[line] = None
        return result
