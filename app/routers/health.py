# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers,
# plus the plain /test greeting used to check connectivity from the site.
# =============================================================================

import os
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import StorageDep

router = APIRouter()

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class GreetingResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    storage: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/test", response_model=GreetingResponse)
async def test_endpoint():
    """Connectivity check for the frontend."""
    return GreetingResponse(message=f"Hello from {settings.SERVICE_NAME}")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(storage: StorageDep):
    """
    Readiness check endpoint.

    The service can accept submissions only while the storage root
    exists and is writable.
    """
    if not storage.root.is_dir():
        storage_status = "unhealthy: storage root missing"
    elif not os.access(storage.root, os.W_OK):
        storage_status = "unhealthy: storage root not writable"
    else:
        storage_status = "healthy"

    return ReadinessResponse(
        status="ready" if storage_status == "healthy" else "degraded",
        checks=ChecksResponse(storage=storage_status),
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
