"""
Origin header resolution for cors-rules.

Parses the raw ``Origin`` request header into a canonical form used by
every rule check of a request. Unparsable or missing origins degrade to
the :data:`NO_ORIGIN` sentinel instead of raising.

The parsed value is memoised on a :class:`RequestContext`, an explicit
per-request object created by the middleware and discarded with the
request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property
from urllib.parse import urlsplit

ORIGIN_HEADER = "Origin"
REQUEST_METHOD_HEADER = "Access-Control-Request-Method"
REQUEST_HEADERS_HEADER = "Access-Control-Request-Headers"


@dataclass(frozen=True)
class ParsedOrigin:
    """An ``Origin`` header value that parsed as an absolute URI.

    Attributes:
        original: The exact header value received.
        scheme: Lower-cased URI scheme (``http``, ``https``, …).
        host: Lower-cased host name, without port; IPv6 literals
              keep their brackets (``[::1]``).
    """

    original: str
    scheme: str
    host: str


class NoOrigin:
    """Sentinel type for a missing or unparsable ``Origin`` header."""

    _instance: NoOrigin | None = None

    original = ""
    scheme = ""
    host = ""

    def __new__(cls) -> NoOrigin:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_ORIGIN"

    def __bool__(self) -> bool:
        return False


NO_ORIGIN = NoOrigin()


def resolve_origin(raw: str | None) -> ParsedOrigin | NoOrigin:
    """Parse a raw ``Origin`` header value.

    Args:
        raw: Header value, or ``None`` when the header is absent.

    Returns:
        A :class:`ParsedOrigin` when *raw* is an absolute URI with a
        scheme and host, otherwise :data:`NO_ORIGIN`.
    """
    if raw is None:
        return NO_ORIGIN
    value = raw.strip()
    if not value:
        return NO_ORIGIN
    # urlsplit silently drops tabs and newlines; reject inner whitespace first.
    if any(char.isspace() for char in value):
        return NO_ORIGIN

    try:
        parts = urlsplit(value)
        # Accessing .port validates it; a bad port raises ValueError.
        _ = parts.port
    except ValueError:
        return NO_ORIGIN

    if not parts.scheme or not parts.hostname:
        return NO_ORIGIN

    host = parts.hostname.lower()
    if ":" in host:
        # IPv6 literals keep their brackets, as written in an authority.
        host = f"[{host}]"

    return ParsedOrigin(
        original=raw,
        scheme=parts.scheme.lower(),
        host=host,
    )


class RequestContext:
    """Per-request view over the fields CORS processing needs.

    Args:
        method: HTTP request method, as sent by the client.
        headers: Request headers. Lookups are expected to be
                 case-insensitive (starlette ``Headers`` is); plain dicts
                 must use the canonical header names.
    """

    def __init__(self, method: str, headers: Mapping[str, str]) -> None:
        self.method = method
        self._headers = headers

    @property
    def origin_header(self) -> str | None:
        return self._headers.get(ORIGIN_HEADER)

    @property
    def request_method(self) -> str | None:
        """``Access-Control-Request-Method`` of a preflight, if any."""
        return self._headers.get(REQUEST_METHOD_HEADER)

    @property
    def request_headers(self) -> str | None:
        """``Access-Control-Request-Headers`` of a preflight, if any."""
        return self._headers.get(REQUEST_HEADERS_HEADER)

    @property
    def is_preflight(self) -> bool:
        # Exact, case-sensitive comparison.
        return self.method == "OPTIONS"

    @cached_property
    def origin(self) -> ParsedOrigin | NoOrigin:
        """The resolved origin, parsed once per context."""
        return resolve_origin(self.origin_header)
