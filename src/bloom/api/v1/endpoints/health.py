"""
Health Check Endpoints

Provides system health endpoints for:
- Load balancer health checks
- Kubernetes probes
- Monitoring systems
"""

from fastapi import APIRouter
from pydantic import BaseModel

from bloom import __version__
from bloom.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns 200 if application is running. The check-in core holds
    no external connections, so health and readiness coincide.
    """
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.env,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_check() -> HealthResponse:
    """
    Kubernetes liveness probe.

    Returns 200 if application process is alive.
    """
    settings = get_settings()

    return HealthResponse(
        status="alive",
        version=__version__,
        environment=settings.env,
    )
