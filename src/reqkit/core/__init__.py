"""Core reqkit модули."""

from .config import (
    AuthConfig,
    ProxyConfig,
    RequestOptions,
    coerce_options,
    combine_options,
    merge_options,
)
from .cookies import Cookie, CookieJar, absorb, parse_set_cookie
from .encoder import RequestEncoder
from .error_handler import ErrorHandler, REASON_PHRASES, status_message
from .exceptions import (
    HTTPClientException,
    TransportError,
    ConnectionError,
    TimeoutError,
    TooManyRedirectsError,
    RequestError,
    HTTPError,
    ClientError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    TooManyRequestsError,
    ServerError,
    FileNotFoundError,
    ConfigurationError,
)
from .files import HttpFile
from .http_client import HTTPClient
from .invoker import TransportInvoker, classify_transport_failure
from .requests_transport import RequestsTransport
from .response import Response, ResponseParser
from .transport import (
    FailureCode,
    PreparedRequest,
    RawResponse,
    Transport,
    TransportFailure,
    TransportOption,
)
from .utils import build_url, encode_form

__all__ = [
    # Config
    "AuthConfig",
    "ProxyConfig",
    "RequestOptions",
    "coerce_options",
    "combine_options",
    "merge_options",
    # Pipeline
    "HTTPClient",
    "RequestEncoder",
    "TransportInvoker",
    "ResponseParser",
    "ErrorHandler",
    "build_url",
    "encode_form",
    "classify_transport_failure",
    "status_message",
    "REASON_PHRASES",
    # Data
    "Cookie",
    "CookieJar",
    "absorb",
    "parse_set_cookie",
    "HttpFile",
    "Response",
    # Transport
    "Transport",
    "RequestsTransport",
    "PreparedRequest",
    "RawResponse",
    "TransportFailure",
    "TransportOption",
    "FailureCode",
    # Exceptions
    "HTTPClientException",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "TooManyRedirectsError",
    "RequestError",
    "HTTPError",
    "ClientError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "TooManyRequestsError",
    "ServerError",
    "FileNotFoundError",
    "ConfigurationError",
]
