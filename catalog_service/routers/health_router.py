"""
Health check router.

Provides liveness and readiness probes plus cache statistics.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import settings
from ..database import check_database
from ..dependencies import get_cache_backend

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str = settings.SERVICE_NAME
    version: str = settings.SERVICE_VERSION


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness probe - returns 200 if the process is running",
)
async def health_check():
    return HealthResponse(status="healthy", timestamp=_now())


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    responses={503: {"description": "Database unavailable"}},
)
async def readiness_check():
    """
    Readiness check.

    The database is required. The cache is reported but never blocks
    readiness, since the service degrades to uncached reads without it.
    """
    cache = get_cache_backend()
    checks = {
        "database": "healthy" if settings.STORE_BACKEND == "memory" or check_database() else "unhealthy",
        "cache": "disabled" if cache is None else ("healthy" if cache.is_available() else "degraded"),
    }
    ready = checks["database"] == "healthy"

    body = ReadinessResponse(ready=ready, checks=checks, timestamp=_now())
    if not ready:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump())
    return body


@router.get("/cache/stats", summary="Cache statistics")
async def cache_stats():
    cache = get_cache_backend()
    if cache is None:
        return {"enabled": False}
    return {"enabled": True, **(await cache.get_stats())}
