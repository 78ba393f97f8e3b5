"""
Tests for log formatters.

Tests JSONFormatter, TextFormatter, ColoredFormatter, and get_formatter.
"""

import json
import logging
import sys

import pytest

from reqkit.core.logging.formatters import (
    ColoredFormatter,
    JSONFormatter,
    TextFormatter,
    extra_fields,
    get_formatter,
)


def make_record(msg="Request completed", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="reqkit",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_skips_standard_attributes():
    record = make_record(method="GET", status_code=200)
    assert extra_fields(record) == {"method": "GET", "status_code": 200}


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_format(self):
        data = json.loads(JSONFormatter().format(make_record("Test message")))

        assert data["level"] == "INFO"
        assert data["logger"] == "reqkit"
        assert data["message"] == "Test message"
        assert data["timestamp"].endswith("+00:00")

    def test_extra_fields(self):
        record = make_record(method="GET", url="https://api.example.com", status_code=200)
        data = json.loads(JSONFormatter().format(record))

        assert data["method"] == "GET"
        assert data["status_code"] == 200

    def test_non_serializable_values(self):
        """Непосериализуемые значения превращаются в строки."""
        data = json.loads(JSONFormatter().format(make_record(path=object())))
        assert data["path"].startswith("<object object")

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record("Failed", level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_format(self):
        output = TextFormatter().format(make_record(method="GET", status_code=200))

        assert "[INFO] [reqkit] Request completed" in output
        assert output.endswith("method=GET status_code=200")

    def test_no_extra_fields(self):
        output = TextFormatter().format(make_record("Plain"))
        assert output.endswith("Plain")


class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_colors_level(self):
        record = make_record(level=logging.ERROR)
        output = ColoredFormatter().format(record)

        assert "\033[31mERROR\033[0m" in output
        # Запись не изменяется
        assert record.levelname == "ERROR"


class TestGetFormatter:
    """Tests for get_formatter."""

    @pytest.mark.parametrize("name,formatter_class", [
        ("json", JSONFormatter),
        ("TEXT", TextFormatter),
        ("colored", ColoredFormatter),
    ])
    def test_known(self, name, formatter_class):
        assert type(get_formatter(name)) is formatter_class

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
