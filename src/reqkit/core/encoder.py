# src/reqkit/core/encoder.py
"""
Request encoder: headers, cookies and body for an outbound request.
"""

import json
from typing import Any, List, Mapping, Optional, Tuple

from requests.structures import CaseInsensitiveDict
from urllib3 import encode_multipart_formdata

from .config import RequestOptions
from .cookies import CookieJar
from .files import is_file_reference, to_http_file
from .transport import PreparedRequest, apply_overrides
from .utils import encode_form

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'
JSON_CONTENT_TYPE = 'application/json'

# Методы, которые передают поля в теле запроса
BODY_METHODS = ('POST', 'PUT', 'PATCH')


class RequestEncoder:
    """
    Строит PreparedRequest из метода, URL и эффективных опций.

    Порядок:
        1. Заголовки вызова, User-Agent, Referer
        2. Cookie (jar + куки вызова; куки вызова запоминаются в jar)
        3. Content-Type/Accept для type=json|xml
        4. Тело: multipart > json > form-urlencoded
        5. Директивы транспорта, затем сырые overrides (последними)
    """

    def encode(
        self,
        method: str,
        url: str,
        options: RequestOptions,
        jar: Optional[CookieJar] = None
    ) -> PreparedRequest:
        """
        Закодировать запрос.

        Args:
            method: HTTP метод
            url: Готовый URL (см. build_url)
            options: Эффективные опции (после merge_options)
            jar: Cookie jar клиента

        Returns:
            PreparedRequest

        Raises:
            FileNotFoundError: Если файл из поля "@path" не существует
        """
        method = method.upper()
        headers = self.build_headers(options, jar)

        body = None
        if method in BODY_METHODS or (method == 'DELETE' and options.fields):
            body = self.encode_body(options, headers)

        prepared = PreparedRequest(
            method=method,
            url=url,
            headers=headers,
            body=body,
            fetch_body=(method != 'HEAD'),
            timeout=options.timeout,
            allow_redirects=bool(options.redirect),
            auth=options.auth,
            proxy=options.proxy,
            cookie_file=options.cookie_jar if options.jar_mode == 'file' else None,
            verbose=bool(options.verbose),
        )

        return apply_overrides(prepared, options.transport)

    def build_headers(self, options: RequestOptions, jar: Optional[CookieJar] = None) -> CaseInsensitiveDict:
        """Заголовки запроса (без Content-Type тела)."""
        headers = CaseInsensitiveDict(options.headers or {})

        if options.user_agent:
            headers.setdefault('User-Agent', options.user_agent)
        if options.referer:
            headers.setdefault('Referer', options.referer)

        cookie_header = self.build_cookie_header(options, jar)
        if cookie_header:
            headers['Cookie'] = cookie_header

        if options.type:
            content_type = f"application/{options.type}"
            headers.setdefault('Content-Type', content_type)
            headers.setdefault('Accept', content_type)

        return headers

    def build_cookie_header(self, options: RequestOptions, jar: Optional[CookieJar] = None) -> str:
        """
        Значение заголовка Cookie.

        В режиме in-memory отправляются все куки jar. Куки вызова
        переопределяют куки jar с тем же именем и запоминаются в jar
        для следующих запросов.
        """
        call_cookies = options.cookies or {}

        if jar is not None and options.jar_mode == 'memory':
            header = jar.to_header(extra=call_cookies)
        else:
            header = CookieJar().to_header(extra=call_cookies)

        if jar is not None:
            for name, value in call_cookies.items():
                jar.set_value(name, value)

        return header

    def encode_body(self, options: RequestOptions, headers: CaseInsensitiveDict) -> Optional[bytes]:
        """
        Закодировать поля тела.

        Только одна кодировка на запрос: multipart, если хотя бы одно поле -
        файл; иначе JSON при type=json; иначе form-urlencoded.
        """
        fields = options.fields
        if not fields:
            return None

        if any(is_file_reference(value) for value in fields.values()):
            body, content_type = encode_multipart_formdata(self._multipart_fields(fields))
            headers['Content-Type'] = content_type
            return body

        if options.type == 'json':
            headers.setdefault('Content-Type', JSON_CONTENT_TYPE)
            return json.dumps(dict(fields), separators=(',', ':')).encode('utf-8')

        headers.setdefault('Content-Type', FORM_CONTENT_TYPE)
        return encode_form(fields).encode('ascii')

    @staticmethod
    def _multipart_fields(fields: Mapping[str, Any]) -> List[Tuple[str, Any]]:
        parts: List[Tuple[str, Any]] = []
        for name, value in fields.items():
            if is_file_reference(value):
                parts.append((name, to_http_file(value).as_multipart()))
            elif isinstance(value, (list, tuple)):
                parts.extend((name, str(item)) for item in value)
            else:
                parts.append((name, '' if value is None else str(value)))
        return parts
