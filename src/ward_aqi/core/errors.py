"""Database error classification and the application-wide error handler."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)


def db_error_status(error: BaseException | None) -> int:
    """Map a database failure onto the HTTP status the API should answer with.

    Connection, authentication, pool and missing-schema failures mean the
    database is unavailable (503); constraint violations are bad input (400);
    everything else is unexpected (500).
    """
    if error is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(error, IntegrityError):
        return status.HTTP_400_BAD_REQUEST

    if isinstance(error, (OperationalError, InterfaceError, PoolTimeoutError)):
        return status.HTTP_503_SERVICE_UNAVAILABLE

    # Undefined table: the server is up but the schema was never created
    if isinstance(error, ProgrammingError):
        message = str(error.orig).lower() if error.orig is not None else str(error).lower()
        if "doesn't exist" in message or "no such table" in message or "undefined" in message:
            return status.HTTP_503_SERVICE_UNAVAILABLE

    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return status.HTTP_503_SERVICE_UNAVAILABLE

    if isinstance(error, OSError):
        return status.HTTP_503_SERVICE_UNAVAILABLE

    return status.HTTP_500_INTERNAL_SERVER_ERROR


def is_database_unavailable(error: BaseException) -> bool:
    """Return True if the error means the database cannot be reached."""
    return db_error_status(error) == status.HTTP_503_SERVICE_UNAVAILABLE


async def sqlalchemy_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn an uncaught database error into a JSON error response."""
    status_code = db_error_status(exc)
    logger.error(
        f"[{request.method} {request.url.path}] Database error: "
        f"{exc.__class__.__name__} -> {status_code}"
    )

    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        detail = "Database unavailable"
    elif status_code == status.HTTP_400_BAD_REQUEST:
        detail = "Request conflicts with existing data"
    else:
        detail = "Internal server error"

    return JSONResponse(status_code=status_code, content={"detail": detail})
