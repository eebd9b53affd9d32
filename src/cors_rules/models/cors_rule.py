"""
CORS rule model for cors-rules.

Defines the Pydantic model for a single domain-based CORS rule as it
appears in the rule store (hyphenated keys such as ``require-https``),
and the origin-matching predicate evaluated against each request.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from cors_rules.origin import NoOrigin, ParsedOrigin

WILDCARD_DOMAIN = "*"


class CorsPolicy(str, enum.Enum):
    """Known rule policies. Only ``ALLOW`` has an effect."""

    ALLOW = "ALLOW"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CorsRule(BaseModel):
    """A configured (domain, policy, header options) rule.

    Attributes:
        domain: Host name this rule targets, or ``"*"`` for every request.
        policy: Raw policy string; only ``"ALLOW"`` (case-sensitive) applies headers.
        require_https: Reject origins whose scheme is not ``https``.
        expose_headers: Comma-separated header names the browser may read.
        max_age: Preflight only; seconds the preflight result may be cached.
        allow_credentials: Whether the resource request may carry credentials.
        allow_methods: Preflight only; comma-separated allowed methods.
        allow_headers: Preflight only; comma-separated allowed header names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    domain: str = Field(..., min_length=1, description="Target host name or '*'.")
    policy: str = Field(..., description="Rule policy; 'ALLOW' is the only effective value.")
    require_https: bool = Field(
        default=False,
        alias="require-https",
        description="Only match https origins.",
    )
    expose_headers: str | None = Field(
        default=None,
        alias="expose-headers",
        description="Access-Control-Expose-Headers value.",
    )
    max_age: int | None = Field(
        default=None,
        alias="max-age",
        description="Access-Control-Max-Age value in seconds.",
    )
    allow_credentials: bool | None = Field(
        default=None,
        alias="allow-credentials",
        description="Access-Control-Allow-Credentials value.",
    )
    allow_methods: str | None = Field(
        default=None,
        alias="allow-methods",
        description="Access-Control-Allow-Methods value.",
    )
    allow_headers: str | None = Field(
        default=None,
        alias="allow-headers",
        description="Access-Control-Allow-Headers value.",
    )

    @property
    def is_wildcard(self) -> bool:
        return self.domain == WILDCARD_DOMAIN

    @property
    def allows(self) -> bool:
        """``True`` when the policy is exactly ``ALLOW``."""
        return self.policy == CorsPolicy.ALLOW.value

    @property
    def exposed_headers(self) -> str | None:
        return None if _is_blank(self.expose_headers) else self.expose_headers

    @property
    def allowed_methods(self) -> str | None:
        return None if _is_blank(self.allow_methods) else self.allow_methods

    @property
    def allowed_headers(self) -> str | None:
        return None if _is_blank(self.allow_headers) else self.allow_headers

    def is_match(self, origin: ParsedOrigin | NoOrigin) -> bool:
        """Return whether a request with *origin* is targeted by this rule.

        The checks short-circuit in a fixed order: the wildcard matches
        everything (including requests without an ``Origin``), then an
        insecure origin is rejected for ``require_https`` rules, then the
        host is compared case-insensitively.

        Args:
            origin: The request's resolved origin.
        """
        if self.is_wildcard:
            return True
        if self.require_https and origin.scheme != "https":
            return False
        if isinstance(origin, ParsedOrigin):
            return self.domain.casefold() == origin.host.casefold()
        return False
