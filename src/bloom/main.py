"""
Bloom FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (startup/shutdown)
- CORS configuration
- Error handling middleware and domain error handlers
- Router registration
- Metrics endpoint

This is the production entry point for the Bloom check-in backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloom import __version__
from bloom.config import get_settings
from bloom.config.logging_config import configure_logging, get_logger
from bloom.api.v1.router import api_router
from bloom.api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from bloom.infrastructure.metrics import metrics_router, update_system_info
from bloom.infrastructure.monitoring import init_sentry
from bloom.services.checkin import CheckInRegistry

# Initialize settings and logging
settings = get_settings()
configure_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of all services.
    """
    logger.info(
        "Starting Bloom application",
        env=settings.env,
        version=__version__,
    )

    try:
        init_sentry(
            dsn=settings.sentry.dsn.get_secret_value(),
            environment=settings.env,
            traces_sample_rate=settings.sentry.traces_sample_rate,
        )
        update_system_info(settings.env)

        yield

    finally:
        logger.info(
            "Shutting down Bloom application",
            open_sessions=CheckInRegistry.active_count(),
        )
        CheckInRegistry.clear()
        logger.info("Bloom application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Bloom API",
        description="Age-adaptive emotion check-ins for children - Backend API",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handling middleware
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    # Register API routers
    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "Bloom API",
            "version": __version__,
            "status": "operational",
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bloom.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
