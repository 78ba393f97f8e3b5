# src/reqkit/core/invoker.py
"""
Transport invoker: hands prepared requests to the transport and maps
transport failures to reqkit exceptions.
"""

from typing import Optional

from .exceptions import (
    ConnectionError,
    RequestError,
    TimeoutError,
    TooManyRedirectsError,
    TransportError,
)
from .transport import FailureCode, PreparedRequest, RawResponse, Transport, TransportFailure

CONNECTION_FAILURES = (
    FailureCode.COULDNT_RESOLVE_HOST,
    FailureCode.COULDNT_RESOLVE_PROXY,
    FailureCode.COULDNT_CONNECT,
)


def classify_transport_failure(failure: TransportFailure, url: Optional[str] = None) -> TransportError:
    """
    Конвертировать TransportFailure в наше исключение.

    - resolve host/proxy, connect -> ConnectionError (статус 500)
    - timeout -> TimeoutError, подкласс ConnectionError (статус 504)
    - too many redirects -> TooManyRedirectsError (статус 500)
    - остальное -> RequestError (статус 500)

    Examples:
        >>> failure = TransportFailure(FailureCode.COULDNT_CONNECT, "Connection refused")
        >>> error = classify_transport_failure(failure, "https://example.com")
        >>> assert isinstance(error, ConnectionError)
        >>> error.status_code
        500
    """
    code = failure.code
    code_value = getattr(code, 'value', code)

    if code == FailureCode.OPERATION_TIMEDOUT:
        return TimeoutError(failure.message, 504, url, code_value)

    if code in CONNECTION_FAILURES:
        return ConnectionError(failure.message, 500, url, code_value)

    if code == FailureCode.TOO_MANY_REDIRECTS:
        return TooManyRedirectsError(failure.message, 500, url, code_value)

    return RequestError(failure.message, 500, url, code_value)


class TransportInvoker:
    """
    Sends prepared requests through a transport.

    Example:
        >>> invoker = TransportInvoker(RequestsTransport())
        >>> raw = invoker.send(prepared)
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def send(self, request: PreparedRequest) -> RawResponse:
        """
        Send request.

        Raises:
            ConnectionError: DNS/connect/timeout failure
            TooManyRedirectsError: Redirect limit exceeded
            RequestError: Any other transport failure
        """
        try:
            return self.transport.send(request)
        except TransportFailure as failure:
            raise classify_transport_failure(failure, request.url) from failure

    def close(self) -> None:
        self.transport.close()
