"""Interface layer errors and their HTTP mapping.

Domain and utility errors are translated to HTTP responses here, once,
instead of in every route.
"""

import logfire
import pydantic
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from stackit.domain.error import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from stackit.persistence.database import TransactionOutcome
from stackit.util.error import JWTError


class InterfaceError(Exception):
    """Base interface error."""

    pass


# Most specific first; the first matching class wins
ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (JWTError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DomainError, status.HTTP_400_BAD_REQUEST),
]


def status_for(error: Exception) -> int:
    """HTTP status code for a domain or utility error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def fail_transaction(request: Request, reason: str) -> None:
    """Mark the request's transaction failed so its session rolls back."""
    container = getattr(request.state, "dishka_container", None)
    if container is None:
        return
    outcome = await container.get(TransactionOutcome)
    outcome.mark_failed(reason)


async def handle_application_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain or JWT error as `{"detail": ...}`."""
    status_code = status_for(exc)
    await fail_transaction(request, type(exc).__name__)
    logfire.warn(
        "Request failed",
        path=request.url.path,
        method=request.method,
        status_code=status_code,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def handle_model_validation_error(
    request: Request, exc: pydantic.ValidationError
) -> JSONResponse:
    """Render entity validation failures (e.g. a too-short title) as 400."""
    messages = [f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()]
    await fail_transaction(request, "ValidationError")
    logfire.warn(
        "Entity validation failed", path=request.url.path, errors=messages
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or str(exc)},
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Fail the transaction, then render the error as FastAPI does by default."""
    await fail_transaction(request, f"HTTP {exc.status_code}")
    return await http_exception_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_application_error)
    app.add_exception_handler(JWTError, handle_application_error)
    app.add_exception_handler(pydantic.ValidationError, handle_model_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
