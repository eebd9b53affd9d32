"""
CORS middleware for cors-rules.

Runs the :class:`RequestFilter` on every HTTP request. Preflight requests
matching an ``ALLOW`` rule are answered here with an empty ``204``;
everything else continues down the stack and receives the decided
headers on its response.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cors_rules.config import get_settings
from cors_rules.models import RuleSet
from cors_rules.origin import RequestContext
from cors_rules.request_filter import RequestFilter

logger = structlog.get_logger(__name__)


class CorsRuleMiddleware(BaseHTTPMiddleware):
    """Apply the first matching CORS rule to each request."""

    def __init__(self, app: ASGIApp, rule_set: RuleSet) -> None:
        super().__init__(app)
        self.request_filter = RequestFilter(rule_set)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        context = RequestContext(request.method, request.headers)
        decision = self.request_filter.evaluate(context)

        if decision is None:
            return await call_next(request)

        if decision.short_circuit:
            # ASGI carries no reason phrase; the server derives "No Content".
            response = Response(status_code=decision.status_code)
            decision.apply_to(response.headers)
            return response

        response = await call_next(request)
        decision.apply_to(response.headers)
        return response


def add_cors(app: FastAPI, rule_set: RuleSet | None = None) -> None:
    """Attach the CORS rule middleware to *app*.

    Args:
        app: The application to wire.
        rule_set: Rules to enforce; defaults to the ``CORS_RULES`` setting.
    """
    if rule_set is None:
        rule_set = get_settings().rule_set()
    app.add_middleware(CorsRuleMiddleware, rule_set=rule_set)
    logger.info("cors_rules_loaded", rule_count=len(rule_set), domains=list(rule_set.domains))
