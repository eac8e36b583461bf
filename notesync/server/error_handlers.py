"""Error Handlers — every failure leaves the notes API as the same error envelope.

Invariants:
    - Body is always {"error": {"code", "message", "category", "severity", ...}},
      the shape NotesApiClient reads error.message from
    - NotesError → its own http_status; AuthError adds WWW-Authenticate: Bearer
    - Request validation → 400 VALIDATION_ERROR with per-field details, field names
      without the "body"/"path"/"query" location prefix
    - Starlette HTTP errors (unknown route, wrong method) → envelope, same status
    - Anything else → 500 INTERNAL_ERROR, message never includes the exception text
    - 5xx outcomes log at error level with traceback; caller mistakes at warning

Design Decisions:
    - Validation summary message names the first failing field, so a client that
      only shows error.message still tells the user what to fix
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notesync.core.errors import (
    AuthError, ErrorCategory, ErrorSeverity, NotesError,
)

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "path", "query", "header"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(NotesError, _notes_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


def envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def _notes_error_handler(request: Request, exc: NotesError):
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "status_code": exc.http_status,
            "path": request.url.path,
            "note_id": exc.context.note_id,
        },
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": field_name(e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    message = "Invalid request data"
    if details:
        message = f"Invalid {details[0]['field']}: {details[0]['message']}"
    logger.warning(
        f"Rejected {request.method} {request.url.path}: {message}",
        extra={
            "error_code": "VALIDATION_ERROR",
            "status_code": status.HTTP_400_BAD_REQUEST,
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope(
            "VALIDATION_ERROR", message,
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
            details=details,
        ),
    )


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        f"HTTP {exc.status_code} on {request.method} {request.url.path}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(
            f"HTTP_{exc.status_code}", str(exc.detail),
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        ),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"status_code": 500, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.SERVER, ErrorSeverity.CRITICAL,
        ),
    )


def field_name(loc) -> str:
    """("body", "password") → "password"; keeps nested paths dotted."""
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts)
