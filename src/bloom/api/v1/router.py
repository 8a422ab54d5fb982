"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from bloom.api.v1.endpoints.health import router as health_router
from bloom.api.v1.endpoints.checkin import router as checkin_router
from bloom.api.v1.endpoints.clinical import router as clinical_router

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    checkin_router,
    prefix="/checkin",
    tags=["Check-In"],
)

api_router.include_router(
    clinical_router,
    prefix="/clinical",
    tags=["Clinical"],
)
