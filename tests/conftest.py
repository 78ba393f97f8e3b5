"""
Pytest configuration and fixtures for reqkit tests.
"""

from typing import List, Optional, Sequence, Union

import pytest
import responses as responses_lib

from reqkit.core.http_client import HTTPClient
from reqkit.core.logging.config import LoggingConfig
from reqkit.core.logging.filters import clear_correlation_id
from reqkit.core.transport import PreparedRequest, RawResponse, Transport, TransportFailure


class RecordingTransport(Transport):
    """
    Transport stub: remembers every PreparedRequest and replays queued
    RawResponse objects or TransportFailure exceptions in order.
    """

    def __init__(self):
        self.requests: List[PreparedRequest] = []
        self.queue: List[Union[RawResponse, TransportFailure]] = []
        self.closed = False

    def reply(self, status: int = 200, headers: Sequence[str] = (), body: bytes = b'',
              status_line: Optional[str] = None) -> 'RecordingTransport':
        lines = [status_line or f"HTTP/1.1 {status} OK", *headers]
        head = ('\r\n'.join(lines) + '\r\n\r\n').encode('iso-8859-1')
        self.queue.append(RawResponse(status_code=status, payload=head + body, header_size=len(head)))
        return self

    def fail(self, failure: TransportFailure) -> 'RecordingTransport':
        self.queue.append(failure)
        return self

    @property
    def last(self) -> PreparedRequest:
        return self.requests[-1]

    def send(self, request: PreparedRequest) -> RawResponse:
        self.requests.append(request)
        item = self.queue.pop(0) if self.queue else RawResponse(200, b'', 0)
        if isinstance(item, TransportFailure):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def transport():
    """RecordingTransport instance."""
    return RecordingTransport()


@pytest.fixture
def client(base_url):
    """HTTPClient on the default requests transport."""
    client = HTTPClient(base=base_url, timeout=10)
    yield client
    client.close()


@pytest.fixture
def fake_client(base_url, transport):
    """HTTPClient on RecordingTransport."""
    client = HTTPClient(base=base_url, transport=transport)
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """Console-less DEBUG logging config."""
    return LoggingConfig.create(level="DEBUG", enable_console=False)


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(tmp_path / "reqkit.log")
    )


@pytest.fixture(autouse=True)
def _reset_correlation_id():
    clear_correlation_id()
    yield
    clear_correlation_id()
