"""
Request logging middleware for cors-rules.

Binds the request's method, path and origin into structlog contextvars
for the duration of the request, so filter events logged further down
carry them, and emits one ``http_request`` line with the CORS outcome.
Registered outermost, it also sees preflights answered by the CORS
middleware.
"""

from __future__ import annotations

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cors_rules.origin import ORIGIN_HEADER
from cors_rules.request_filter import ALLOW_ORIGIN

logger = structlog.get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request together with the CORS headers it left with."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        with structlog.contextvars.bound_contextvars(
            method=request.method,
            path=request.url.path,
            origin=request.headers.get(ORIGIN_HEADER),
        ):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

            allowed = response.headers.get(ALLOW_ORIGIN)
            logger.info(
                "http_request",
                status=response.status_code,
                cors_allowed_origin=allowed,
                preflight=request.method == "OPTIONS" and allowed is not None,
                duration_ms=elapsed_ms,
            )
        return response
