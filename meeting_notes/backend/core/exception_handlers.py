"""
Exception Handlers.

Translate note errors, request validation failures and unexpected
exceptions into the ErrorResponse envelope. The HTTP status is chosen
by error category, never by message text:

    NotFoundError       -> 404
    ValidationError     -> 400   (also malformed requests)
    NoteOperationError  -> 500   (storage failures)

Usage:
    from meeting_notes.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meeting_notes.backend.core.exceptions import (
    ApplicationError,
    NoteOperationError,
    NotFoundError,
    ValidationError,
)
from meeting_notes.backend.core.logging import get_logger
from meeting_notes.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

# Subclasses inherit the status of their nearest mapped ancestor
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    NoteOperationError: 500,
}


def status_for_exception(exc: ApplicationError) -> int:
    """Resolve the HTTP status for an application error via its MRO."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    """Prefer the ID bound by RequestContextMiddleware, then the raw header."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is not None:
        return request_id
    return request.headers.get("x-request-id")


def _error_response(
    status_code: int,
    code: str,
    message: str,
    request_id: str | None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Render an ApplicationError with the status of its category."""
    status_code = status_for_exception(exc)
    request_id = _get_request_id(request)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Note request failed",
        code=exc.code,
        error=exc.message,
        status=status_code,
        path=request.url.path,
        method=request.method,
        request_id=request_id,
    )

    details = exc.details if isinstance(exc, ValidationError) and exc.details else None
    return _error_response(status_code, exc.code, exc.message, request_id, details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Malformed bodies, non-integer ids and unparsable query values are
    all client errors and return 400 in the ErrorResponse format.
    """
    request_id = _get_request_id(request)
    errors = exc.errors()

    logger.warning(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        error_count=len(errors),
        request_id=request_id,
    )

    field_errors = [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in errors
    ]
    return _error_response(
        400,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        request_id,
        {"validation_errors": field_errors},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log the traceback and return a generic 500 without internal details."""
    request_id = _get_request_id(request)

    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        exception_type=type(exc).__name__,
        request_id=request_id,
    )

    return _error_response(500, "SYS_INTERNAL_ERROR", "An unexpected error occurred", request_id)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on a FastAPI application."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
