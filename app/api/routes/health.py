"""
Health Check Routes
Health, readiness, and liveness endpoints.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.infrastructure.redis.connection import check_redis_health

settings = get_settings()
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> JSONResponse:
    """Basic health check."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "healthy", "service": settings.APP_NAME},
    )


@router.get("/health/live")
async def liveness_check() -> JSONResponse:
    """Liveness check - service is running."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "alive"},
    )


@router.get("/health/ready")
async def readiness_check() -> JSONResponse:
    """Readiness check - binding store reachable."""
    checks = {"redis": await check_redis_health()}

    if all(checks.values()):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "ready", "checks": checks},
        )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "checks": checks},
    )
