# src/reqkit/core/error_handler.py

from typing import Dict, Optional, Type

from .exceptions import (
    BadRequestError,
    ClientError,
    ForbiddenError,
    HTTPError,
    NotFoundError,
    ServerError,
    TooManyRequestsError,
    UnauthorizedError,
)

# Используется только для сообщений об ошибках
REASON_PHRASES: Dict[int, str] = {
    400: 'Bad Request',
    401: 'Unauthorized',
    402: 'Payment Required',
    403: 'Forbidden',
    404: 'Not Found',
    405: 'Method Not Allowed',
    406: 'Not Acceptable',
    407: 'Proxy Authentication Required',
    408: 'Request Timeout',
    409: 'Conflict',
    410: 'Gone',
    411: 'Length Required',
    412: 'Precondition Failed',
    413: 'Payload Too Large',
    414: 'Request-URI Too Long',
    415: 'Unsupported Media Type',
    416: 'Requested Range Not Satisfiable',
    417: 'Expectation Failed',
    418: "I'm a teapot",
    421: 'Misdirected Request',
    422: 'Unprocessable Entity',
    423: 'Locked',
    424: 'Failed Dependency',
    426: 'Upgrade Required',
    428: 'Precondition Required',
    429: 'Too Many Requests',
    431: 'Request Header Fields Too Large',
    444: 'Connection Closed Without Response',
    451: 'Unavailable For Legal Reasons',
    499: 'Client Closed Request',
    500: 'Internal Server Error',
    501: 'Not Implemented',
    502: 'Bad Gateway',
    503: 'Service Unavailable',
    504: 'Gateway Timeout',
    505: 'HTTP Version Not Supported',
    506: 'Variant Also Negotiates',
    507: 'Insufficient Storage',
    508: 'Loop Detected',
    510: 'Not Extended',
    511: 'Network Authentication Required',
    599: 'Network Connect Timeout Error',
}

_CLIENT_ERRORS: Dict[int, Type[ClientError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: TooManyRequestsError,
}


def status_message(status_code: int) -> str:
    """
    "<code> <Reason>" или "HTTP Error <code>" для кодов вне таблицы.

    Examples:
        >>> status_message(404)
        '404 Not Found'
        >>> status_message(419)
        'HTTP Error 419'
    """
    if status_code in REASON_PHRASES:
        return f"{status_code} {REASON_PHRASES[status_code]}"
    return f"HTTP Error {status_code}"


class ErrorHandler:
    """Класс для классификации HTTP ошибок по статус коду"""

    @staticmethod
    def classify(status_code: int, url: Optional[str] = None, response=None) -> Optional[HTTPError]:
        """
        Вернуть ошибку для статусов 400-599, иначе None.

        Args:
            status_code: HTTP статус
            url: URL запроса
            response: Разобранный Response

        Returns:
            ClientError (или подкласс) для 4xx, ServerError для 5xx, иначе None
        """
        if not 400 <= status_code <= 599:
            return None

        message = status_message(status_code)

        if status_code <= 499:
            error_class = _CLIENT_ERRORS.get(status_code, ClientError)
            return error_class(message, status_code, url, response)

        return ServerError(message, status_code, url, response)

    @staticmethod
    def handle_http_error(status_code: int, url: Optional[str] = None, response=None) -> None:
        """Бросить ошибку для 4xx/5xx статусов"""
        error = ErrorHandler.classify(status_code, url, response)
        if error is not None:
            raise error
