"""Service error taxonomy and the handlers that map it to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base for errors that terminate a request with a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)


class BadRequest(ServiceError):
    """Malformed or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class Unauthenticated(ServiceError):
    """Missing or malformed credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidToken(Unauthenticated):
    """Token failed signature, expiry or claims verification."""

    default_message = "Invalid or expired token."


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden."


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Conflict(ServiceError):
    """Uniqueness violation. Status is set from CONFLICT_STATUS_CODE by the handler."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already registered."


class InternalError(ServiceError):
    pass


class ConfigurationError(InternalError):
    """Server is missing required configuration (e.g. the token signing secret)."""

    default_message = "Server configuration error."


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = exc.status_code
    if isinstance(exc, Conflict):
        status_code = request.app.state.settings.CONFLICT_STATUS_CODE
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request body.",
            "errors": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "Database error on %s %s: %s", request.method, request.url.path, exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error mapping on the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
