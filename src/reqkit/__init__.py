"""reqkit - configurable HTTP request client with a pluggable transport."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.http_client import HTTPClient
from .core.config import AuthConfig, ProxyConfig, RequestOptions, merge_options
from .core.cookies import Cookie, CookieJar
from .core.files import HttpFile
from .core.response import Response
from .core.transport import (
    FailureCode,
    PreparedRequest,
    RawResponse,
    Transport,
    TransportFailure,
    TransportOption,
)
from .core.requests_transport import RequestsTransport
from .core.exceptions import (
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
from .core.logging import LoggingConfig
from .core.env_config import ConfigFileLoader, load_from_env

# NullHandler: без настройки логов со стороны приложения reqkit молчит
logging.getLogger('reqkit').addHandler(logging.NullHandler())

try:
    __version__ = version("reqkit")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "HTTPClient",
    "RequestOptions",
    "AuthConfig",
    "ProxyConfig",
    "merge_options",
    "Response",
    "Cookie",
    "CookieJar",
    "HttpFile",

    # Transport
    "Transport",
    "RequestsTransport",
    "PreparedRequest",
    "RawResponse",
    "TransportFailure",
    "TransportOption",
    "FailureCode",

    # Configuration
    "LoggingConfig",
    "ConfigFileLoader",
    "load_from_env",

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
