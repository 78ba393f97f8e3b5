"""Тесты для ключей overrides транспорта."""

import pytest

from reqkit.core.exceptions import ConfigurationError
from reqkit.core.transport import (
    PreparedRequest,
    Transport,
    TransportOption,
    apply_overrides,
    normalize_option_key,
)


class TestNormalizeOptionKey:
    """Tests for normalize_option_key."""

    @pytest.mark.parametrize("key", [
        TransportOption.VERIFY,
        8,
        "verify",
        "VERIFY",
        "opt_verify",
        "OPT_VERIFY",
    ])
    def test_equivalent_forms(self, key):
        assert normalize_option_key(key) == "verify"

    def test_unknown_string_passes_through(self):
        assert normalize_option_key("stream_hook") == "stream_hook"

    def test_unknown_integer(self):
        with pytest.raises(ConfigurationError, match="12345"):
            normalize_option_key(12345)

    def test_bool_is_not_an_option_code(self):
        with pytest.raises(ConfigurationError):
            normalize_option_key(True)


class TestApplyOverrides:
    """Tests for apply_overrides."""

    def test_directives_and_extra(self):
        prepared = PreparedRequest(method="GET", url="https://example.com")

        apply_overrides(prepared, {
            TransportOption.URL: "https://other.example.com",
            "allow_redirects": False,
            "params": {"debug": "1"},
        })

        assert prepared.url == "https://other.example.com"
        assert prepared.allow_redirects is False
        assert prepared.extra == {"params": {"debug": "1"}}

    def test_none_overrides(self):
        prepared = PreparedRequest(method="GET", url="https://example.com")
        assert apply_overrides(prepared, None) is prepared


def test_transport_is_abstract():
    with pytest.raises(TypeError):
        Transport()
