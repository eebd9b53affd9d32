"""
Health check endpoint for cors-rules.

Exposes a /health endpoint returning service status and the number of
loaded CORS rules.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> JSONResponse:
    """Return service health status."""
    rule_set = getattr(request.app.state, "rule_set", None)
    return JSONResponse(
        status_code=200,
        content={
            "service": "cors-rules",
            "status": "healthy",
            "rule_count": len(rule_set) if rule_set is not None else 0,
        },
    )
