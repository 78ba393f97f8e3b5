"""
Transport abstraction.

The transport is the collaborator that actually talks to the network: it takes
a PreparedRequest and returns a RawResponse, or raises TransportFailure with a
native error code and message. TransportInvoker maps failures to reqkit errors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

from requests.structures import CaseInsensitiveDict

from .config import AuthConfig, ProxyConfig
from .exceptions import ConfigurationError


class FailureCode(str, Enum):
    """Native failure codes reported by transports."""
    COULDNT_RESOLVE_HOST = "couldnt_resolve_host"
    COULDNT_RESOLVE_PROXY = "couldnt_resolve_proxy"
    COULDNT_CONNECT = "couldnt_connect"
    OPERATION_TIMEDOUT = "operation_timedout"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    SSL_ERROR = "ssl_error"
    ERROR = "error"


class TransportFailure(Exception):
    """
    Transport-level failure (no HTTP response obtained).

    Args:
        code: FailureCode
        message: Native error message
    """

    def __init__(self, code: FailureCode, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class TransportOption(IntEnum):
    """
    Symbolic and numeric keys for raw transport overrides.

    Names map onto PreparedRequest directives; MAX_REDIRECTS and CERT are
    passed to the transport as extra keywords.
    """
    URL = 1
    METHOD = 2
    HEADERS = 3
    BODY = 4
    FETCH_BODY = 5
    TIMEOUT = 6
    ALLOW_REDIRECTS = 7
    VERIFY = 8
    AUTH = 9
    PROXY = 10
    COOKIE_FILE = 11
    VERBOSE = 12
    SINK = 13
    MAX_REDIRECTS = 14
    CERT = 15


@dataclass
class PreparedRequest:
    """
    Fully resolved request ready for dispatch.

    Attributes:
        method: HTTP method
        url: Final URL (query included)
        headers: Request headers
        body: Encoded body or None
        fetch_body: False for HEAD
        timeout: Seconds
        allow_redirects: Follow Location headers
        verify: Verify TLS certificates
        auth: Credentials for the transport to apply
        proxy: Proxy address and credentials
        cookie_file: Path of a transport-managed cookie file
        verbose: Log request/response details
        sink: Path to stream the body into instead of memory
        extra: Transport-specific keywords from raw overrides
    """
    method: str
    url: str
    headers: MutableMapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: Optional[bytes] = None
    fetch_body: bool = True
    timeout: int = 30
    allow_redirects: bool = True
    verify: Union[bool, str] = True
    auth: Optional[AuthConfig] = None
    proxy: Optional[ProxyConfig] = None
    cookie_file: Optional[str] = None
    verbose: bool = False
    sink: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RawResponse:
    """
    What a transport returns.

    Attributes:
        status_code: Final HTTP status
        payload: Header block followed by body, or None when there is no
            text payload (for example a body written elsewhere)
        header_size: Length of the header block at the start of payload
    """
    status_code: int
    payload: Optional[bytes]
    header_size: int = 0


_DIRECTIVES = frozenset(f.name for f in fields(PreparedRequest)) - {'extra'}


def normalize_option_key(key: Any) -> str:
    """
    Resolve a raw override key to a directive or keyword name.

    Accepts a TransportOption, its integer value, its name (case-insensitive,
    optional "OPT_" prefix) or any other string, returned unchanged.

    Raises:
        ConfigurationError: For unknown integer keys

    Examples:
        >>> normalize_option_key(TransportOption.VERIFY)
        'verify'
        >>> normalize_option_key(8)
        'verify'
        >>> normalize_option_key('OPT_MAX_REDIRECTS')
        'max_redirects'
    """
    if isinstance(key, TransportOption):
        return key.name.lower()
    if isinstance(key, int) and not isinstance(key, bool):
        try:
            return TransportOption(key).name.lower()
        except ValueError:
            raise ConfigurationError(f"Unknown transport option code: {key}")
    if isinstance(key, str):
        name = key.upper()
        if name.startswith('OPT_'):
            name = name[4:]
        if name in TransportOption.__members__:
            return name.lower()
        return key
    raise ConfigurationError(f"Invalid transport option key: {key!r}")


def apply_overrides(prepared: PreparedRequest, overrides: Optional[Mapping[Any, Any]]) -> PreparedRequest:
    """
    Apply raw overrides last, replacing any synthesized directive.

    Keys that are not PreparedRequest directives land in `extra`.
    """
    for key, value in (overrides or {}).items():
        name = normalize_option_key(key)
        if name == 'headers':
            value = CaseInsensitiveDict(value)
        if name in _DIRECTIVES:
            setattr(prepared, name, value)
        else:
            prepared.extra[name] = value
    return prepared


class Transport(ABC):
    """Base class for transports."""

    @abstractmethod
    def send(self, request: PreparedRequest) -> RawResponse:
        """
        Send request synchronously.

        Raises:
            TransportFailure: If no HTTP response was obtained
        """

    def close(self) -> None:
        """Release resources."""
