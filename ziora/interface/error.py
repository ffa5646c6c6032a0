"""Request-boundary error handling.

Domain errors raised anywhere below a route are turned into the JSON error
envelope the web client expects: ``{"success": false, "error": message}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ziora.domain.error import (
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from ziora.util.jwt import JWTError

# Most specific first; the first matching class wins
STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (JWTError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (DomainError, status.HTTP_400_BAD_REQUEST),
]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def status_for(error: Exception) -> int:
    """HTTP status for an error raised while handling a request."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_known_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_for(exc)
    logfire.warn(
        "Request failed",
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return error_response(status_code, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request"
    logfire.warn("Malformed request", path=request.url.path, error=message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception(
        "Unhandled error", path=request.url.path, error_type=type(exc).__name__
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error envelope on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_known_error)
    app.add_exception_handler(JWTError, handle_known_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
