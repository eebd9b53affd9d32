"""Shared fixtures for cors-rules tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make helpers in this module importable from test files.
sys.path.append(str(Path(__file__).resolve().parent))

# Set env vars before any cors_rules import.
os.environ.setdefault("CORS_LOG_LEVEL", "DEBUG")
os.environ.setdefault("CORS_LOG_JSON", "false")

from cors_rules.config import get_settings
from cors_rules.models import CorsRule, RuleSet
from cors_rules.origin import RequestContext


def make_rule(domain: str = "example.com", policy: str = "ALLOW", **overrides) -> CorsRule:
    """Helper to create a CorsRule for tests."""
    return CorsRule(domain=domain, policy=policy, **overrides)


def make_context(
    origin: str | None = "https://example.com",
    method: str = "GET",
    **extra_headers: str,
) -> RequestContext:
    """Helper to create a RequestContext from plain header values."""
    headers: dict[str, str] = {}
    if origin is not None:
        headers["Origin"] = origin
    headers.update(extra_headers)
    return RequestContext(method, headers)


# ─── Fixtures ────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def api_rule() -> CorsRule:
    return make_rule(
        "app.example.com",
        require_https=True,
        expose_headers="X-Request-Id, X-Total-Count",
        max_age=600,
        allow_credentials=True,
        allow_methods="GET,POST",
        allow_headers="Content-Type, Authorization",
    )


@pytest.fixture()
def wildcard_rule() -> CorsRule:
    return make_rule("*", allow_methods="GET", max_age=60)


@pytest.fixture()
def rule_set(api_rule: CorsRule, wildcard_rule: CorsRule) -> RuleSet:
    return RuleSet([api_rule, make_rule("partner.example.org"), wildcard_rule])
