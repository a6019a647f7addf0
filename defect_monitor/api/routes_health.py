"""
Health check endpoints.

Provides health monitoring for the service:
- Basic health status
- Record store connectivity
- Configuration
"""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from defect_monitor import __version__
from defect_monitor.core.config import StoreConfigurationError, get_settings
from defect_monitor.core.database import get_db
from defect_monitor.services.record_store import BACKEND_ERRORS

router = APIRouter()

SERVICE_NAME = "defect-monitor-api"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("", summary="Basic Health Check")
@router.get("/", summary="Basic Health Check", include_in_schema=False)
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        dict: Basic service status and metadata
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": _timestamp(),
        "environment": get_settings().environment
    }


@router.get("/detailed", summary="Detailed Health Check")
async def detailed_health_check(db: AsyncSession = Depends(get_db)):
    """
    Detailed health check with record store connectivity test.

    Returns 200 when healthy or degraded (store unreachable), 503 when the
    configuration itself is broken.
    """
    settings = get_settings()
    health_data = {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "timestamp": _timestamp(),
        "environment": settings.environment,
        "checks": {}
    }

    try:
        result = await db.execute(text("SELECT 1"))
        if result.scalar() != 1:
            raise RuntimeError("Unexpected health check response")
        health_data["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except (*BACKEND_ERRORS, RuntimeError) as e:
        health_data["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {e}"
        }
        health_data["status"] = "degraded"

    try:
        settings.store_url()
        health_data["checks"]["configuration"] = {
            "status": "healthy",
            "message": "Configuration loaded successfully"
        }
    except StoreConfigurationError as e:
        health_data["checks"]["configuration"] = {
            "status": "unhealthy",
            "message": f"Configuration error: {e}"
        }
        health_data["status"] = "unhealthy"

    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE
        if health_data["status"] == "unhealthy"
        else status.HTTP_200_OK
    )
    return JSONResponse(status_code=status_code, content=health_data)


@router.get("/ready", summary="Readiness Check")
async def readiness_check(db: AsyncSession = Depends(get_db)) -> Dict[str, str]:
    """
    Readiness probe: can the service reach the record store?

    Raises:
        HTTPException: 503 if the store is unreachable
    """
    try:
        await db.execute(text("SELECT 1"))
    except BACKEND_ERRORS as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "status": "not_ready",
                "message": f"Service not ready: {e}"
            }
        )

    return {
        "status": "ready",
        "message": "Service is ready to accept traffic"
    }


@router.get("/live", summary="Liveness Check")
async def liveness_check() -> Dict[str, str]:
    """Liveness probe; does not touch the record store."""
    return {
        "status": "alive",
        "message": "Service is running"
    }
