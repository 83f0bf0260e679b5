"""Error response format and exception handlers.

Maps the task tracker's exception hierarchy onto structured JSON error
responses.
"""

from enum import StrEnum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from task_tracker.exceptions import (
    ExportError,
    OperationCancelledError,
    RepositoryError,
    TaskNotFoundError,
    TaskTrackerError,
    TaskValidationError,
)
from task_tracker.utils.logging import get_logger

logger = get_logger("api")

# Non-standard "client closed request" status, as used by nginx
HTTP_499_CLIENT_CLOSED_REQUEST = 499


class ErrorCode(StrEnum):
    """Machine-readable error codes for API consumers."""

    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUEST_CANCELLED = "REQUEST_CANCELLED"
    STORAGE_ERROR = "STORAGE_ERROR"
    EXPORT_ERROR = "EXPORT_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Structured error response format."""

    code: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class ErrorWrapper(BaseModel):
    """Wrapper for error response."""

    error: ErrorResponse


_STATUS_BY_ERROR: dict[type[TaskTrackerError], tuple[int, ErrorCode]] = {
    TaskNotFoundError: (status.HTTP_404_NOT_FOUND, ErrorCode.TASK_NOT_FOUND),
    OperationCancelledError: (HTTP_499_CLIENT_CLOSED_REQUEST, ErrorCode.REQUEST_CANCELLED),
    RepositoryError: (status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.STORAGE_ERROR),
    ExportError: (status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.EXPORT_ERROR),
    TaskValidationError: (status.HTTP_422_UNPROCESSABLE_ENTITY, ErrorCode.VALIDATION_ERROR),
}


def error_body(
    code: ErrorCode,
    message: str,
    request_id: str | None = None,
    details: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    """Build the JSON body shared by every error response."""
    error_details = [ErrorDetail(**d) for d in details] if details else None
    return ErrorWrapper(
        error=ErrorResponse(
            code=code,
            message=message,
            details=error_details,
            request_id=request_id,
        )
    ).model_dump()


def get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


async def task_tracker_exception_handler(
    request: Request, exc: TaskTrackerError
) -> JSONResponse:
    """Handle task tracker exceptions."""
    status_code, code = _STATUS_BY_ERROR.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_ERROR)
    )
    if status_code >= 500:
        logger.error("Request failed: %s", exc.message, extra={"error": exc.to_dict()})
    details = None
    if isinstance(exc, TaskValidationError) and exc.field:
        details = [{"field": exc.field, "message": exc.message}]
    return JSONResponse(
        status_code=status_code,
        content=error_body(code, exc.message, get_request_id(request), details),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    details = []
    for error in exc.errors():
        # Extract field name from location tuple
        loc = error.get("loc", ())
        field = ".".join(str(x) for x in loc[1:]) if len(loc) > 1 else str(loc[0])
        details.append({"field": field, "message": error.get("msg", "Invalid value")})

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            get_request_id(request),
            details,
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unexpected error: %r", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            ErrorCode.INTERNAL_ERROR,
            "An unexpected error occurred",
            get_request_id(request),
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(TaskTrackerError, task_tracker_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
