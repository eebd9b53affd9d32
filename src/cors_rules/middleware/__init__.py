"""ASGI middleware wiring the CORS filter into a host application."""

from cors_rules.middleware.cors import CorsRuleMiddleware, add_cors
from cors_rules.middleware.logging import LoggingMiddleware

__all__ = [
    "CorsRuleMiddleware",
    "LoggingMiddleware",
    "add_cors",
]
