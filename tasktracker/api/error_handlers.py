"""Error Handlers - global exception handlers for the task tracker API.

Invariants:
    - TaskTrackerError -> structured JSON with error code, message, severity
    - AuthenticationError responses carry `WWW-Authenticate: Bearer`
    - RequestValidationError (undecodable body/params) -> 400 with field-level details
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TaskTrackerError), decoding (Pydantic), catch-all
    - 4xx logged at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from tasktracker.core.errors import (
    AuthenticationError, ErrorSeverity, RequirementsError, TaskTrackerError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TaskTrackerError)
    async def task_tracker_error_handler(request: Request, exc: TaskTrackerError):
        """Handle all task tracker domain/infrastructure errors."""
        extra = {"error_code": exc.code, "path": request.url.path}
        if isinstance(exc, RequirementsError):
            extra["record"] = exc.record
            extra["violation_count"] = len(exc.violations)
        rejected_at = getattr(exc, "rejected_at", None)
        if rejected_at is not None:
            extra["stage"] = rejected_at.value
        headers = None
        if isinstance(exc, AuthenticationError):
            extra["reason"] = exc.reason
            headers = {"WWW-Authenticate": "Bearer"}
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(level, f"TaskTrackerError: {exc.message}", extra=extra)

        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic decoding errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured decoding error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
