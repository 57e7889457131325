"""
Exception handlers.

Maps the GatehouseError hierarchy to HTTP statuses and the standard error
body. Internal failures are logged in full and answered with a generic
message; outside production the body also carries the exception repr.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.config import Settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    GatehouseError,
    NotFoundError,
    ValidationError,
)

from ..models.errors import ErrorResponse, ValidationErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "Internal server error"

# Checked in order; anything not listed is a 500.
STATUS_BY_ERROR: list[tuple[type[GatehouseError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
]


def status_for(exc: GatehouseError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _field_name(loc: tuple) -> str:
    # ("body", "email") -> "email"; ("query", "page") -> "page"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach the application's exception handlers."""

    def internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        body = ErrorResponse(message=INTERNAL_MESSAGE, error="INTERNAL_ERROR")
        if not settings.is_production:
            body.details = {"exception": repr(exc)}
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )

    @app.exception_handler(GatehouseError)
    async def handle_gatehouse_error(request: Request, exc: GatehouseError) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            return internal_error(request, exc)

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        body = ErrorResponse(
            message=exc.message,
            error=exc.code,
            details=exc.details or None,
        )
        return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = {_field_name(tuple(err["loc"])): err["msg"] for err in exc.errors()}
        body = ValidationErrorResponse(details=fields)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        return internal_error(request, exc)
