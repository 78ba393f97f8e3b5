# src/reqkit/core/http_client.py

import os
import time
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from ..utils.sanitizer import mask_url
from .config import RequestOptions, coerce_options, merge_options
from .cookies import Cookie, CookieJar
from .encoder import RequestEncoder
from .error_handler import ErrorHandler
from .exceptions import HTTPClientException, HTTPError
from .files import HttpFile
from .invoker import TransportInvoker
from .logging import HTTPClientLogger, LoggingConfig, correlation_scope
from .requests_transport import RequestsTransport
from .response import Response, ResponseParser
from .transport import Transport
from .utils import build_url

OptionsLike = Union[RequestOptions, Mapping[str, Any], None]


class HTTPClient:
    """
    HTTP клиент.

    Опции клиента (defaults) объединяются с опциями каждого вызова:
    скалярные ключи вызова побеждают, headers/cookies/transport
    объединяются по ключам.

    Конвейер запроса:
        merge_options -> build_url -> RequestEncoder (+ CookieJar)
        -> TransportInvoker -> ResponseParser (обновляет CookieJar)
        -> ErrorHandler

    Example:
        >>> with HTTPClient(base="https://api.example.com", type="json") as client:
        ...     response = client.post("/users", fields={"name": "alice"})
        ...     response.json()

    Features:
        - Cookie jar в памяти или в файле (cookie_jar=<путь>)
        - Multipart загрузка файлов через "@path" или HttpFile
        - basic/digest/ntlm/any аутентификация, прокси
        - Подменяемый транспорт (по умолчанию RequestsTransport)
        - Структурные логи с correlation id (при заданном LoggingConfig)

    Not thread-safe: cookie jar общий для всех запросов экземпляра.
    """

    def __init__(
        self,
        options: OptionsLike = None,
        transport: Optional[Transport] = None,
        logging: Optional[LoggingConfig] = None,
        **defaults: Any
    ):
        """
        Args:
            options: RequestOptions или dict с опциями клиента
            transport: Транспорт (по умолчанию RequestsTransport)
            logging: LoggingConfig; без него клиент не пишет собственных логов
            **defaults: Опции клиента keyword аргументами (поверх options)

        Raises:
            TypeError: Неизвестная опция
            ValueError: Невалидное значение опции
        """
        self._defaults = coerce_options(options, **defaults)
        self._jar = CookieJar()

        self._logger: Optional[HTTPClientLogger] = None
        if logging is not None:
            self._logger = HTTPClientLogger(config=logging, name=self._logger_name())

        if transport is None:
            transport = RequestsTransport(logger=self._logger)

        self._invoker = TransportInvoker(transport)
        self._encoder = RequestEncoder()
        self._parser = ResponseParser()
        self._error_handler = ErrorHandler()

    def _logger_name(self) -> str:
        """reqkit или reqkit.<host> если задан base."""
        if self._defaults.base:
            host = urlparse(self._defaults.base).netloc
            if host:
                return f"reqkit.{host}"
        return "reqkit"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """
        Освободить транспорт и закрыть обработчики логов.

        Cleanup order:
            1. Logger handlers
            2. Transport
        """
        if self._logger is not None:
            self._logger.close()
        self._invoker.close()

    # ==================== Запросы ====================

    def request(self, method: str, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        """
        Выполнить запрос.

        Args:
            method: HTTP метод
            url: Путь (дописывается к base) или полный URL
            options: Опции вызова (RequestOptions или dict)
            **kwargs: Опции вызова keyword аргументами

        Returns:
            Response

        Raises:
            ConnectionError: DNS/connect ошибка или таймаут (TimeoutError)
            TooManyRedirectsError: Превышен лимит редиректов
            RequestError: Прочие ошибки транспорта
            ClientError: 4xx при http_errors=True
            ServerError: 5xx при http_errors=True
            FileNotFoundError: Файл для загрузки не найден
        """
        return self._send(method, url, coerce_options(options, **kwargs))

    def get(self, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        """
        GET запрос.

        Example:
            >>> client.get("/search", query={"q": "python", "page": 2})
        """
        return self.request("GET", url, options, **kwargs)

    def head(self, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        """HEAD запрос. Тело ответа не читается."""
        return self.request("HEAD", url, options, **kwargs)

    def post(self, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        """
        POST запрос.

        Example:
            >>> client.post("/upload", fields={"title": "cv", "file": "@/tmp/cv.pdf"})
        """
        return self.request("POST", url, options, **kwargs)

    def put(self, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        return self.request("PUT", url, options, **kwargs)

    def patch(self, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        return self.request("PATCH", url, options, **kwargs)

    def delete(self, url: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        return self.request("DELETE", url, options, **kwargs)

    def download(self, url: str, file_path: str, options: OptionsLike = None, **kwargs: Any) -> Response:
        """
        GET с потоковой записью тела в файл.

        Тело в памяти не держится: Response.body пустой, заголовки и куки
        разобраны как обычно. Тело пишется в "<file_path>.part" и заменяет
        file_path только после успешного ответа; при ошибке .part удаляется,
        а прежний файл остается как был.

        Example:
            >>> client.download("/reports/2024.csv", "/tmp/2024.csv")
        """
        part_path = f"{file_path}.part"
        try:
            response = self._send("GET", url, coerce_options(options, **kwargs), sink=part_path)
        except HTTPClientException:
            if os.path.exists(part_path):
                os.remove(part_path)
            raise

        if os.path.exists(part_path):
            os.replace(part_path, file_path)
        return response

    def _send(self, method: str, url: str, call: RequestOptions, sink: Optional[str] = None) -> Response:
        effective = merge_options(self._defaults, call)
        method = method.upper()
        full_url = build_url(url, effective.base, effective.query)

        with correlation_scope() as correlation_id:
            if self._logger:
                self._logger.info(
                    "Request started",
                    method=method,
                    url=mask_url(full_url),
                    correlation_id=correlation_id,
                    timeout=effective.timeout,
                )

            start_time = time.time()

            try:
                prepared = self._encoder.encode(method, full_url, effective, self._jar)
                if sink is not None:
                    prepared.sink = sink

                raw = self._invoker.send(prepared)
                response, cookies = self._parser.parse(raw)

                # Куки запоминаются до классификации: ответ с ошибкой тоже их ставит
                if effective.jar_mode == 'memory':
                    self._jar.update(cookies)

                if effective.http_errors:
                    self._error_handler.handle_http_error(response.status_code, full_url, response)

            except HTTPClientException as e:
                if self._logger:
                    self._logger.error(
                        "Request failed",
                        method=method,
                        url=mask_url(full_url),
                        correlation_id=correlation_id,
                        error_type=type(e).__name__,
                        error=str(e),
                        status_code=e.status_code,
                        duration_ms=round((time.time() - start_time) * 1000, 2),
                        http_error=isinstance(e, HTTPError),
                    )
                raise

            if self._logger:
                self._logger.info(
                    "Request completed",
                    method=method,
                    url=mask_url(full_url),
                    correlation_id=correlation_id,
                    status_code=response.status_code,
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )

        return response

    # ==================== Куки ====================

    def cookies(self, name: Optional[str] = None) -> Union[Cookie, Dict[str, Cookie], None]:
        """
        Куки из jar.

        Args:
            name: Имя куки; без него возвращаются все куки

        Returns:
            Cookie (или None, если такой нет) либо dict name -> Cookie
        """
        if name is not None:
            return self._jar.get(name)
        return self._jar.as_dict()

    @property
    def cookie_jar(self) -> CookieJar:
        return self._jar

    def clear_cookies(self) -> None:
        self._jar.clear()

    # ==================== Прочее ====================

    @staticmethod
    def file(path: str) -> HttpFile:
        """
        Файл для multipart поля.

        Raises:
            FileNotFoundError: Если файла нет

        Example:
            >>> client.post("/upload", fields={"avatar": HTTPClient.file("me.png")})
        """
        return HttpFile.from_path(path)

    @property
    def defaults(self) -> RequestOptions:
        """Опции клиента (read-only)."""
        return self._defaults

    @property
    def transport(self) -> Transport:
        return self._invoker.transport
