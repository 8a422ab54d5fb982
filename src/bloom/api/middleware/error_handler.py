"""
Error Handler Middleware

Provides consistent error handling and response formatting.
Logs errors with correlation IDs for debugging.
"""

import traceback
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from bloom.config.logging_config import get_logger, bind_correlation_id, clear_context
from bloom.domain.exceptions import (
    CheckInError,
    FeatureNotAvailableError,
    InvalidPayloadError,
    InvalidPromptResponseError,
    SessionClosedError,
    SessionNotFoundError,
    UnknownCatalogItemError,
)
from bloom.infrastructure.metrics import track_policy_violation
from bloom.infrastructure.monitoring import capture_exception_with_context

logger = get_logger(__name__)


# Domain error -> HTTP status
ERROR_STATUS: dict[type[CheckInError], int] = {
    FeatureNotAvailableError: 403,
    SessionNotFoundError: 404,
    SessionClosedError: 409,
    UnknownCatalogItemError: 422,
    InvalidPayloadError: 422,
    InvalidPromptResponseError: 422,
}


def status_for(error: CheckInError) -> int:
    """HTTP status for a domain error, 400 when unmapped."""
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def checkin_error_handler(request: Request, exc: CheckInError) -> JSONResponse:
    """Render domain errors as JSON bodies."""
    code = status_for(exc)

    if isinstance(exc, FeatureNotAvailableError):
        track_policy_violation(exc.feature)

    logger.info(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        status_code=code,
    )
    return JSONResponse(status_code=code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Install domain error handlers on the application."""
    app.add_exception_handler(CheckInError, checkin_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - Consistent error response format
    - Error logging with context
    - Sentry reporting for unhandled exceptions
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with error handling."""

        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
        bind_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            logger.error(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
                error_message=str(e),
                traceback=traceback.format_exc(),
            )
            capture_exception_with_context(
                e,
                extra={"path": request.url.path, "correlation_id": correlation_id},
            )

            # Return sanitized error response
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "correlation_id": correlation_id,
                    "message": "An unexpected error occurred. Please try again.",
                },
                headers={"X-Correlation-ID": correlation_id},
            )

        finally:
            clear_context()
