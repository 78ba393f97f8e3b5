"""
Tests for HTTPClient.

Most tests run on RecordingTransport (fake_client fixture); the requests
based transport is covered end to end with the responses library.
"""

import json
from unittest.mock import Mock

import pytest
import responses

from reqkit.core.config import RequestOptions
from reqkit.core.exceptions import (
    ClientError,
    ConnectionError,
    FileNotFoundError,
    NotFoundError,
    ServerError,
    TimeoutError,
)
from reqkit.core.files import HttpFile
from reqkit.core.http_client import HTTPClient
from reqkit.core.requests_transport import RequestsTransport
from reqkit.core.transport import FailureCode, TransportFailure


class TestHTTPClientInit:
    """Test HTTPClient initialization."""

    def test_defaults_from_kwargs(self, base_url):
        client = HTTPClient(base=base_url, timeout=10)
        assert client.defaults.base == base_url
        assert client.defaults.timeout == 10
        client.close()

    def test_defaults_from_dict_and_kwargs(self, base_url):
        client = HTTPClient({"base": base_url, "timeout": 10}, timeout=20)
        assert client.defaults.timeout == 20
        client.close()

    def test_defaults_from_request_options(self, base_url):
        client = HTTPClient(RequestOptions(base=base_url, type="json"))
        assert client.defaults.type == "json"
        client.close()

    def test_unknown_option(self):
        with pytest.raises(TypeError, match="base_url"):
            HTTPClient(base_url="https://api.example.com")

    def test_invalid_option(self):
        with pytest.raises(ValueError):
            HTTPClient(timeout=0)

    def test_default_transport(self, base_url):
        client = HTTPClient(base=base_url)
        assert isinstance(client.transport, RequestsTransport)
        client.close()

    def test_no_logger_without_config(self, fake_client):
        assert fake_client._logger is None


class TestHTTPClientContextManager:
    """Test HTTPClient as context manager."""

    def test_close_closes_transport(self, base_url, transport):
        with HTTPClient(base=base_url, transport=transport) as client:
            client.get("/ping")
        assert transport.closed


class TestRequests:
    """Запросы через RecordingTransport."""

    def test_get_builds_url_from_base(self, fake_client, transport):
        fake_client.get("/users")

        assert transport.last.method == "GET"
        assert transport.last.url == "https://api.example.com/users"
        assert transport.last.timeout == 30
        assert transport.last.allow_redirects is True
        assert transport.last.body is None

    def test_query(self, fake_client, transport):
        fake_client.get("/search", query={"q": "a b", "page": 2})
        assert transport.last.url == "https://api.example.com/search?q=a+b&page=2"

    def test_call_query_replaces_default(self, base_url, transport):
        client = HTTPClient(base=base_url, query={"key": "1"}, transport=transport)
        client.get("/a")
        assert transport.last.url.endswith("/a?key=1")
        client.get("/a", query={"page": 2})
        assert transport.last.url.endswith("/a?page=2")

    @pytest.mark.parametrize("method", ["get", "head", "post", "put", "patch", "delete"])
    def test_method_helpers(self, fake_client, transport, method):
        getattr(fake_client, method)("/x")
        assert transport.last.method == method.upper()

    def test_head_does_not_fetch_body(self, fake_client, transport):
        fake_client.head("/x")
        assert transport.last.fetch_body is False

    def test_lowercase_method(self, fake_client, transport):
        fake_client.request("options", "/x")
        assert transport.last.method == "OPTIONS"

    def test_post_form(self, fake_client, transport):
        fake_client.post("/form", fields={"a": "1", "b": "2"})

        assert transport.last.body == b"a=1&b=2"
        assert transport.last.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_post_json(self, base_url, transport):
        client = HTTPClient(base=base_url, type="json", transport=transport)
        client.post("/users", fields={"name": "alice"})

        assert json.loads(transport.last.body) == {"name": "alice"}
        assert transport.last.headers["Accept"] == "application/json"

    def test_post_multipart(self, fake_client, transport, tmp_path):
        upload = tmp_path / "cv.txt"
        upload.write_bytes(b"resume")

        fake_client.post("/upload", fields={"title": "cv", "file": f"@{upload}"})

        assert transport.last.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'filename="cv.txt"' in transport.last.body
        assert b"resume" in transport.last.body

    def test_missing_upload(self, fake_client, transport):
        with pytest.raises(FileNotFoundError):
            fake_client.post("/upload", fields={"file": "@/nonexistent/cv.pdf"})
        assert transport.requests == []

    def test_headers_merged_with_defaults(self, base_url, transport):
        client = HTTPClient(base=base_url, headers={"X-A": "1", "X-B": "1"}, transport=transport)
        client.get("/x", headers={"x-b": "2"})

        assert transport.last.headers["X-A"] == "1"
        assert transport.last.headers["X-B"] == "2"

    def test_call_options_override_client(self, base_url, transport):
        client = HTTPClient(base=base_url, timeout=10, redirect=False, transport=transport)
        client.get("/x", timeout=5)

        assert transport.last.timeout == 5
        assert transport.last.allow_redirects is False

    def test_options_positional(self, fake_client, transport):
        fake_client.get("/x", {"timeout": 7})
        assert transport.last.timeout == 7

    def test_unknown_call_option(self, fake_client):
        with pytest.raises(TypeError):
            fake_client.get("/x", params={"a": 1})

    def test_transport_overrides_last(self, fake_client, transport):
        fake_client.get("/x", timeout=5, transport={"timeout": 99, "max_redirects": 3})

        assert transport.last.timeout == 99
        assert transport.last.extra == {"max_redirects": 3}


class TestResponses:
    """Разбор ответа и HTTP ошибки."""

    def test_response_parsed(self, fake_client, transport):
        transport.reply(200, ["Content-Type: application/json"], b'{"id": 1}')

        response = fake_client.get("/users/1")

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/json"
        assert response.json() == {"id": 1}

    def test_not_found_raises(self, fake_client, transport):
        transport.reply(404, status_line="HTTP/1.1 404 Not Found")

        with pytest.raises(NotFoundError) as exc_info:
            fake_client.get("/missing")

        error = exc_info.value
        assert isinstance(error, ClientError)
        assert str(error) == "404 Not Found"
        assert error.status_code == 404
        assert error.url == "https://api.example.com/missing"
        assert error.response.status_code == 404

    def test_unknown_status_message(self, fake_client, transport):
        transport.reply(419)
        with pytest.raises(ClientError, match="HTTP Error 419"):
            fake_client.get("/x")

    def test_server_error(self, fake_client, transport):
        transport.reply(503)
        with pytest.raises(ServerError):
            fake_client.get("/x")

    def test_http_errors_disabled(self, fake_client, transport):
        transport.reply(404, body=b"nope")

        response = fake_client.get("/missing", http_errors=False)

        assert response.status_code == 404
        assert response.body == b"nope"

    def test_connection_failure(self, fake_client, transport):
        transport.fail(TransportFailure(FailureCode.COULDNT_CONNECT, "Connection refused"))

        with pytest.raises(ConnectionError) as exc_info:
            fake_client.get("/x")

        assert exc_info.value.url == "https://api.example.com/x"

    def test_timeout(self, fake_client, transport):
        transport.fail(TransportFailure(FailureCode.OPERATION_TIMEDOUT, "timed out"))

        with pytest.raises(TimeoutError) as exc_info:
            fake_client.get("/x")

        assert exc_info.value.status_code == 504


class TestCookies:
    """Cookie jar клиента."""

    def test_response_cookie_sent_back(self, fake_client, transport):
        transport.reply(200, ["Set-Cookie: sid=abc123; Path=/; HttpOnly"])
        fake_client.get("/login")
        fake_client.get("/profile")

        assert transport.last.headers["Cookie"] == "sid=abc123"
        assert fake_client.cookies("sid").value == "abc123"
        assert fake_client.cookies("sid").has_flag("HttpOnly")

    def test_cookies_absorbed_on_error_response(self, fake_client, transport):
        transport.reply(401, ["Set-Cookie: attempt=1"])

        with pytest.raises(ClientError):
            fake_client.get("/login")

        assert fake_client.cookies("attempt").value == "1"

    def test_call_cookies_remembered(self, fake_client, transport):
        fake_client.get("/a", cookies={"lang": "en"})
        assert transport.last.headers["Cookie"] == "lang=en"

        fake_client.get("/b")
        assert transport.last.headers["Cookie"] == "lang=en"

    def test_call_cookie_overrides_jar(self, fake_client, transport):
        transport.reply(200, ["Set-Cookie: lang=de"])
        fake_client.get("/a")
        fake_client.get("/b", cookies={"lang": "en"})
        assert transport.last.headers["Cookie"] == "lang=en"

    def test_jar_off(self, base_url, transport):
        client = HTTPClient(base=base_url, cookie_jar=False, transport=transport)
        transport.reply(200, ["Set-Cookie: sid=1"])

        client.get("/a")
        client.get("/b", cookies={"lang": "en"})

        assert transport.last.headers["Cookie"] == "lang=en"
        assert client.cookies("sid") is None

    def test_jar_file_goes_to_transport(self, base_url, transport, tmp_path):
        cookie_file = str(tmp_path / "cookies.txt")
        client = HTTPClient(base=base_url, cookie_jar=cookie_file, transport=transport)
        transport.reply(200, ["Set-Cookie: sid=1"])

        client.get("/a")

        assert transport.last.cookie_file == cookie_file
        assert client.cookies() == {}

    def test_all_cookies_and_clear(self, fake_client, transport):
        transport.reply(200, ["Set-Cookie: a=1", "Set-Cookie: b=2"])
        fake_client.get("/a")

        assert sorted(fake_client.cookies()) == ["a", "b"]
        assert len(fake_client.cookie_jar) == 2

        fake_client.clear_cookies()
        assert fake_client.cookies() == {}


class TestDownload:
    """Tests for HTTPClient.download."""

    def test_sink_passed_to_transport(self, fake_client, transport, tmp_path):
        target = str(tmp_path / "report.csv")
        transport.reply(200, ["Content-Type: text/csv"])

        response = fake_client.download("/report.csv", target)

        assert transport.last.sink == target + ".part"
        assert response.body == b""
        assert response.headers["Content-Type"] == "text/csv"

    def test_partial_file_removed_on_error(self, fake_client, transport, tmp_path):
        target = tmp_path / "report.csv"
        (tmp_path / "report.csv.part").write_bytes(b"partial")
        transport.reply(404)

        with pytest.raises(NotFoundError):
            fake_client.download("/report.csv", str(target))

        assert not (tmp_path / "report.csv.part").exists()
        assert not target.exists()

    def test_existing_file_kept_on_connection_error(self, fake_client, transport, tmp_path):
        target = tmp_path / "report.csv"
        target.write_text("previous good copy")
        transport.fail(TransportFailure(FailureCode.COULDNT_CONNECT, "Connection refused"))

        with pytest.raises(ConnectionError):
            fake_client.download("/report.csv", str(target))

        assert target.read_text() == "previous good copy"

    def test_part_file_replaces_target_on_success(self, fake_client, transport, tmp_path):
        target = tmp_path / "report.csv"
        target.write_text("old")
        (tmp_path / "report.csv.part").write_text("new")
        transport.reply(200)

        fake_client.download("/report.csv", str(target))

        assert target.read_text() == "new"
        assert not (tmp_path / "report.csv.part").exists()


def test_file_helper(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(b"png")

    http_file = HTTPClient.file(str(path))

    assert isinstance(http_file, HttpFile)
    assert http_file.mime_type == "image/png"

    with pytest.raises(FileNotFoundError):
        HTTPClient.file(str(tmp_path / "missing.png"))


class TestLogging:
    """Логи клиента при заданном LoggingConfig."""

    def test_logger_named_after_host(self, base_url, transport, logging_config):
        client = HTTPClient(base=base_url, transport=transport, logging=logging_config)
        assert client._logger.name == "reqkit.api.example.com"
        client.close()

    def test_started_and_completed(self, base_url, transport, logging_config):
        client = HTTPClient(base=base_url, transport=transport, logging=logging_config)
        client._logger.info = Mock()

        client.get("/test", query={"api_key": "s3cr3t"})

        calls = client._logger.info.call_args_list
        assert [c[0][0] for c in calls] == ["Request started", "Request completed"]
        started, completed = calls[0][1], calls[1][1]
        assert started["method"] == "GET"
        assert "s3cr3t" not in started["url"]
        assert completed["status_code"] == 200
        assert "duration_ms" in completed
        # Один correlation id на запрос
        assert started["correlation_id"] == completed["correlation_id"]
        client.close()

    def test_failed_request_logged(self, base_url, transport, logging_config):
        client = HTTPClient(base=base_url, transport=transport, logging=logging_config)
        client._logger.error = Mock()
        transport.reply(500)

        with pytest.raises(ServerError):
            client.get("/test")

        message, fields = client._logger.error.call_args[0][0], client._logger.error.call_args[1]
        assert message == "Request failed"
        assert fields["error_type"] == "ServerError"
        assert fields["status_code"] == 500
        assert fields["http_error"] is True
        client.close()

    def test_json_log_file(self, base_url, transport, logging_config_with_file):
        client = HTTPClient(base=base_url, transport=transport, logging=logging_config_with_file)
        client.get("/test", headers={"Authorization": "Bearer t"})
        client.close()

        with open(logging_config_with_file.file_path, encoding="utf-8") as f:
            records = [json.loads(line) for line in f]

        assert [r["message"] for r in records] == ["Request started", "Request completed"]
        assert records[0]["logger"] == "reqkit.api.example.com"
        assert records[0]["correlation_id"] == records[1]["correlation_id"]
        assert "Bearer t" not in json.dumps(records)


class TestRequestsTransportEndToEnd:
    """HTTPClient на RequestsTransport, HTTP замокан responses."""

    @responses.activate
    def test_get_json(self, client, base_url):
        responses.add(responses.GET, f"{base_url}/users/1", json={"id": 1}, status=200)

        response = client.get("/users/1", query={"expand": "all"})

        assert response.json() == {"id": 1}
        assert responses.calls[0].request.url == f"{base_url}/users/1?expand=all"

    @responses.activate
    def test_cookie_round_trip(self, client, base_url):
        responses.add(responses.POST, f"{base_url}/login", status=200, headers={"Set-Cookie": "sid=abc123; Path=/"})
        responses.add(responses.GET, f"{base_url}/me", json={"name": "alice"}, status=200)

        client.post("/login", fields={"user": "alice"})
        client.get("/me")

        assert responses.calls[0].request.body == b"user=alice"
        assert responses.calls[1].request.headers["Cookie"] == "sid=abc123"

    @responses.activate
    def test_not_found(self, client, base_url):
        responses.add(responses.GET, f"{base_url}/missing", json={"error": "not found"}, status=404)

        with pytest.raises(NotFoundError, match="404 Not Found") as exc_info:
            client.get("/missing")

        assert exc_info.value.response.json() == {"error": "not found"}

    @responses.activate
    def test_download(self, client, base_url, tmp_path):
        responses.add(responses.GET, f"{base_url}/file.bin", body=b"\x00\x01" * 1000, status=200)
        target = tmp_path / "file.bin"

        client.download("/file.bin", str(target))

        assert target.read_bytes() == b"\x00\x01" * 1000
        assert not (tmp_path / "file.bin.part").exists()

    @responses.activate
    def test_download_error_keeps_existing_file(self, client, base_url, tmp_path):
        responses.add(responses.GET, f"{base_url}/file.bin", body=b"not here", status=404)
        target = tmp_path / "file.bin"
        target.write_bytes(b"previous good copy")

        with pytest.raises(NotFoundError):
            client.download("/file.bin", str(target))

        assert target.read_bytes() == b"previous good copy"
        assert list(tmp_path.iterdir()) == [target]
