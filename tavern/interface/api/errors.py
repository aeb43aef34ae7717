"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from tavern.domain.error import (
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from tavern.persistence.database import Transaction

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """Convert an error raised by a use case into an HTTP exception.

    Domain errors keep their message; anything else (store, file system,
    bugs) is logged and surfaces as a generic 500.

    Args:
        error: The raised error
        action: What the request tried to do, e.g. "delete comment"

    Returns:
        HTTPException with appropriate status code
    """
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            logfire.warn(
                f"Request rejected: {action}",
                error=str(error),
                status_code=status_code,
            )
            return HTTPException(status_code=status_code, detail=str(error))

    logfire.error(
        f"Request failed: {action}",
        error=str(error),
        error_type=type(error).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


async def rollback_on_error(request: Request, exc: StarletteHTTPException) -> Response:
    """Answer an HTTP error and discard the request's uncommitted writes.

    The error response is produced while the request container is still
    open, so the session provider sees no exception. Flagging the
    transaction makes it roll back instead of committing.
    """
    container = getattr(request.state, "dishka_container", None)
    if exc.status_code >= 400 and container is not None:
        transaction = await container.get(Transaction)
        transaction.mark_rollback_only()
    return await http_exception_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Install the HTTP error handler on ``app``."""
    app.add_exception_handler(StarletteHTTPException, rollback_on_error)
