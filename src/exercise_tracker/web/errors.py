"""Global exception handlers.

Every failure leaves the API as ``{"error": message}``. Storage failures and
unexpected exceptions use generic messages; details only reach the logs.
"""

import logging

import pydantic
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..errors import ExerciseTrackerError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ExerciseTrackerError)
    async def tracker_error_handler(request: Request, exc: ExerciseTrackerError):
        """Handle domain and storage errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={"path": request.url.path, "status": exc.http_status},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(pydantic.ValidationError)
    async def schema_error_handler(request: Request, exc: pydantic.ValidationError):
        """Report the first failing field of a request schema."""
        message = exc.errors()[0]["msg"]
        logger.warning(
            f"Validation error: {message}",
            extra={"path": request.url.path, "status": status.HTTP_400_BAD_REQUEST},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all that never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
