"""
Host application entry point for cors-rules.

Creates a FastAPI app with the CORS rule filter, request logging and a
health endpoint. Rules are loaded once here and stay read-only for the
life of the process.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI

from cors_rules import health
from cors_rules.config import Settings, get_settings
from cors_rules.logging import configure_logging
from cors_rules.middleware.cors import add_cors
from cors_rules.middleware.logging import LoggingMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info("cors_service_ready", rule_count=len(app.state.rule_set))
    yield
    logger.info("cors_service_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    rule_set = settings.rule_set()

    app = FastAPI(title="cors-rules", version="0.1.0", lifespan=lifespan)
    app.state.rule_set = rule_set
    app.include_router(health.router)

    # ── Middleware (last added runs outermost) ──
    add_cors(app, rule_set)
    app.add_middleware(LoggingMiddleware)

    return app


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        create_app(_settings),
        host=_settings.host,
        port=_settings.port,
        log_level=_settings.log_level.lower(),
    )
