"""
Tests for Origin header resolution.

Validates absolute-URI parsing, the no-origin sentinel for absent or
malformed headers, and per-request memoisation on RequestContext.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from cors_rules import origin as origin_module
from cors_rules.origin import NO_ORIGIN, NoOrigin, ParsedOrigin, RequestContext, resolve_origin


class TestResolveOrigin:
    def test_parses_https_origin(self) -> None:
        result = resolve_origin("https://example.com")
        assert result == ParsedOrigin(original="https://example.com", scheme="https", host="example.com")

    def test_keeps_port_in_original_but_not_host(self) -> None:
        result = resolve_origin("http://localhost:3000")
        assert isinstance(result, ParsedOrigin)
        assert result.host == "localhost"
        assert result.original == "http://localhost:3000"

    def test_lowercases_scheme_and_host(self) -> None:
        result = resolve_origin("HTTPS://Example.COM")
        assert result.scheme == "https"
        assert result.host == "example.com"
        assert result.original == "HTTPS://Example.COM"

    def test_original_is_exact_value_received(self) -> None:
        result = resolve_origin("  https://example.com ")
        assert result.original == "  https://example.com "
        assert result.host == "example.com"

    def test_ipv6_host_keeps_brackets(self) -> None:
        result = resolve_origin("https://[::1]:80")
        assert isinstance(result, ParsedOrigin)
        assert result.host == "[::1]"

    def test_ipv6_host_lowercased(self) -> None:
        assert resolve_origin("http://[2001:DB8::1]").host == "[2001:db8::1]"

    @pytest.mark.parametrize(
        "raw",
        [None, "", "   ", "null", "example.com", "not a url", "https://", "http://example.com:abc",
         "http://example.com:99999", "https://exa mple.com", "https://example.com\tx", "https://[::1"],
    )
    def test_unparsable_values_resolve_to_no_origin(self, raw: str | None) -> None:
        assert resolve_origin(raw) is NO_ORIGIN


class TestNoOrigin:
    def test_singleton(self) -> None:
        assert NoOrigin() is NO_ORIGIN

    def test_falsy_and_schemeless(self) -> None:
        assert not NO_ORIGIN
        assert NO_ORIGIN.scheme == ""

    def test_never_equal_to_a_parsed_origin(self) -> None:
        parsed = resolve_origin("http://example.com")
        assert parsed != NO_ORIGIN
        assert NO_ORIGIN != parsed


class TestRequestContext:
    def test_exposes_preflight_headers(self) -> None:
        ctx = RequestContext(
            "OPTIONS",
            {
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "X-Custom",
            },
        )
        assert ctx.is_preflight
        assert ctx.request_method == "PUT"
        assert ctx.request_headers == "X-Custom"

    def test_preflight_method_is_case_sensitive(self) -> None:
        assert not RequestContext("options", {}).is_preflight

    def test_missing_origin(self) -> None:
        ctx = RequestContext("GET", {})
        assert ctx.origin_header is None
        assert ctx.origin is NO_ORIGIN

    def test_origin_is_parsed_once(self) -> None:
        ctx = RequestContext("GET", {"Origin": "https://example.com"})
        with patch.object(origin_module, "resolve_origin", wraps=resolve_origin) as spy:
            first = ctx.origin
            second = ctx.origin
        assert first is second
        assert spy.call_count == 1
