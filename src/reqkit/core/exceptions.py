"""
Иерархия исключений reqkit.

Классификация:
- TransportError - ответ не получен (сеть, DNS, таймаут, редиректы)
- HTTPError - получен ответ со статусом 4xx/5xx
- FileNotFoundError - файл для загрузки не найден
"""

from typing import Any, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPClientException(Exception):
    """Базовое исключение reqkit."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT ERRORS (ответ не получен)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(HTTPClientException):
    """
    Ошибка транспорта до получения HTTP ответа.

    Args:
        message: Сообщение транспорта (как есть)
        status_code: Синтетический статус (500 или 504)
        url: URL запроса
        code: Код ошибки транспорта
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        url: Optional[str] = None,
        code: Optional[str] = None
    ):
        self.url = url
        self.code = code
        super().__init__(message, status_code)

class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Could not resolve host
    - Could not resolve proxy
    """
    pass

class TimeoutError(ConnectionError):
    """Таймаут запроса. Синтетический статус 504."""

    def __init__(
        self,
        message: str,
        status_code: int = 504,
        url: Optional[str] = None,
        code: Optional[str] = None
    ):
        super().__init__(message, status_code, url, code)

class TooManyRedirectsError(TransportError):
    """Превышен лимит редиректов."""
    pass

class RequestError(TransportError):
    """Любая другая ошибка транспорта."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ERRORS (4xx / 5xx)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPError(HTTPClientException):
    """
    Базовая HTTP ошибка.

    Args:
        message: Сообщение вида "404 Not Found"
        status_code: HTTP статус
        url: URL
        response: Разобранный Response (тело, заголовки, куки)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        response: Any = None
    ):
        self.url = url
        self.response = response
        super().__init__(message, status_code)

class ClientError(HTTPError):
    """4xx ошибка клиента."""
    pass

class BadRequestError(ClientError):
    """400 Bad Request."""
    pass

class UnauthorizedError(ClientError):
    """401 Unauthorized."""
    pass

class ForbiddenError(ClientError):
    """403 Forbidden."""
    pass

class NotFoundError(ClientError):
    """404 Not Found."""
    pass

class TooManyRequestsError(ClientError):
    """
    429 Rate Limit.

    `retry_after` содержит значение заголовка Retry-After, если он был.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 429,
        url: Optional[str] = None,
        response: Any = None
    ):
        super().__init__(message, status_code, url, response)
        self.retry_after = response.header('Retry-After') if response is not None else None

class ServerError(HTTPError):
    """5xx ошибка сервера."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СПЕЦИАЛЬНЫЕ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FileNotFoundError(HTTPClientException):
    """
    Файл для загрузки не найден.

    Args:
        path: Путь к файлу
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} could not be found")

class ConfigurationError(HTTPClientException):
    """Ошибка конфигурации."""
    pass
