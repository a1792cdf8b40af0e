"""Conversion of application errors into JSON error responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studio_api.domain.errors import (
    AuthenticationRequiredError,
    ConversionFailedError,
    InvalidCredentialsError,
    InvalidInputError,
    LengthRequiredError,
    PersistenceError,
    RateLimitExceededError,
    StudioError,
)

_logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[StudioError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    LengthRequiredError: status.HTTP_411_LENGTH_REQUIRED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    RateLimitExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConversionFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers so every failure reaches the caller as ``{"error": ...}``."""

    @app.exception_handler(StudioError)
    async def handle_studio_error(request: Request, exc: StudioError) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            _logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return error_response(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        _logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )
