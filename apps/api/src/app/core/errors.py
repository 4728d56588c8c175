"""
Error Handling

Domain exceptions raised by services, translation of database driver
failures into application error codes, and the exception handlers that
render every failure in the API error envelope:

    {"error": {"code": "...", "message": "...", "timestamp": "...", "details": ...}}
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for service layer errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        details: Any = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input fails a business validation rule."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class NotFoundError(AppError):
    """Raised when a requested record does not exist."""

    def __init__(self, message: str, error_code: str = "DB_NOT_FOUND"):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status.HTTP_404_NOT_FOUND,
        )


class DuplicateEntryError(AppError):
    """Raised when a record would violate a uniqueness rule."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="DB_DUPLICATE_ENTRY",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class ForbiddenError(AppError):
    """Raised when the caller may not act on a resource."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message=message,
            error_code="AUTH_FORBIDDEN",
            status_code=status.HTTP_403_FORBIDDEN,
        )


class DatabaseError(AppError):
    """A database driver failure translated to an application code."""


# PostgreSQL SQLSTATE -> (application code, HTTP status)
DB_ERROR_CODES: dict[str, tuple[str, int]] = {
    "23505": ("DB_DUPLICATE_ENTRY", status.HTTP_400_BAD_REQUEST),
    "23503": ("DB_FOREIGN_KEY_VIOLATION", status.HTTP_400_BAD_REQUEST),
    "23502": ("DB_NULL_VIOLATION", status.HTTP_400_BAD_REQUEST),
    "23514": ("DB_INVALID_VALUE", status.HTTP_400_BAD_REQUEST),
    "22001": ("DB_DATA_TOO_LONG", status.HTTP_400_BAD_REQUEST),
    "22P02": ("DB_INVALID_VALUE", status.HTTP_400_BAD_REQUEST),
    "22007": ("DB_INVALID_VALUE", status.HTTP_400_BAD_REQUEST),
    "22008": ("DB_INVALID_VALUE", status.HTTP_400_BAD_REQUEST),
    "55P03": ("DB_LOCK_TIMEOUT", status.HTTP_503_SERVICE_UNAVAILABLE),
    "40P01": ("DB_DEADLOCK", status.HTTP_503_SERVICE_UNAVAILABLE),
    "08001": ("DB_CONNECTION_ERROR", status.HTTP_503_SERVICE_UNAVAILABLE),
    "08004": ("DB_CONNECTION_ERROR", status.HTTP_503_SERVICE_UNAVAILABLE),
    "08003": ("DB_CONNECTION_LOST", status.HTTP_503_SERVICE_UNAVAILABLE),
    "08006": ("DB_CONNECTION_LOST", status.HTTP_503_SERVICE_UNAVAILABLE),
    "57014": ("DB_CONNECTION_TIMEOUT", status.HTTP_503_SERVICE_UNAVAILABLE),
}

DEFAULT_DB_ERROR = ("DB_QUERY_ERROR", status.HTTP_500_INTERNAL_SERVER_ERROR)

DB_ERROR_MESSAGES = {
    "DB_DUPLICATE_ENTRY": "A record with these values already exists",
    "DB_FOREIGN_KEY_VIOLATION": "Referenced record does not exist or is still in use",
    "DB_NULL_VIOLATION": "A required field is missing",
    "DB_INVALID_VALUE": "A field contains an invalid value",
    "DB_DATA_TOO_LONG": "A field value is too long",
    "DB_LOCK_TIMEOUT": "The database is busy, please retry",
    "DB_DEADLOCK": "The database is busy, please retry",
    "DB_CONNECTION_ERROR": "Could not connect to the database",
    "DB_CONNECTION_LOST": "Lost connection to the database",
    "DB_CONNECTION_TIMEOUT": "The database did not respond in time",
    "DB_QUERY_ERROR": "Database query failed",
}


def _sqlstate(exc: BaseException) -> str | None:
    """Extract the SQLSTATE from a SQLAlchemy-wrapped driver error."""
    orig = getattr(exc, "orig", None)
    for source in (orig, exc):
        if source is None:
            continue
        code = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if code:
            return str(code)
    return None


def map_db_error(exc: BaseException) -> tuple[str, int]:
    """
    Translate a database failure into an application code and HTTP status.

    Args:
        exc: A ``DBAPIError`` or a raw connection failure

    Returns:
        Tuple of (error code, HTTP status)
    """
    orig = getattr(exc, "orig", None)
    for candidate in (exc, orig):
        if isinstance(candidate, ConnectionRefusedError):
            return "DB_CONNECTION_ERROR", status.HTTP_503_SERVICE_UNAVAILABLE
        if isinstance(candidate, TimeoutError):
            return "DB_CONNECTION_TIMEOUT", status.HTTP_503_SERVICE_UNAVAILABLE

    sqlstate = _sqlstate(exc)
    if sqlstate is None:
        return DEFAULT_DB_ERROR
    return DB_ERROR_CODES.get(sqlstate, DEFAULT_DB_ERROR)


def database_error_from(exc: BaseException) -> DatabaseError:
    """Build a ``DatabaseError`` for a driver failure."""
    code, status_code = map_db_error(exc)
    return DatabaseError(
        message=DB_ERROR_MESSAGES.get(code, DB_ERROR_MESSAGES["DB_QUERY_ERROR"]),
        error_code=code,
        status_code=status_code,
    )


HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "AUTH_UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "AUTH_FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_429_TOO_MANY_REQUESTS: "RATE_LIMIT_EXCEEDED",
}


def error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    """Build the error envelope."""
    error: dict[str, Any] = {
        "code": code,
        "message": message,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return {"error": error}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, exc.details),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        code = detail["error"]
        message = detail.get("message", "")
        extra = {k: v for k, v in detail.items() if k not in ("error", "message")}
        details = extra or None
    else:
        code = HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
        message = detail if isinstance(detail, str) else "Request failed"
        details = None
        if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
            message = f"Route {request.method} {request.url.path} not found"

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, message, details),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Validation failed for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VALIDATION_ERROR", "Request validation failed", exc.errors()),
    )


async def database_exception_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    error = database_error_from(exc)
    logger.error(
        f"Database error on {request.method} {request.url.path}: {error.error_code} ({exc.orig})"
    )
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error.error_code, error.message),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    details = str(exc) if settings.is_development else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred", details),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every error handler to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DBAPIError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "DuplicateEntryError",
    "ForbiddenError",
    "DatabaseError",
    "DB_ERROR_CODES",
    "map_db_error",
    "database_error_from",
    "error_body",
    "register_exception_handlers",
]
