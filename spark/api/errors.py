"""
API error taxonomy and the uniform ``{"error": message}`` envelope.

Handlers raise ApiError subclasses; the exception handlers registered here
render them, request validation failures, and anything unexpected.
"""

import logging
from typing import Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base exception rendered as an error envelope."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(ApiError):
    """Missing or invalid caller identity."""
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFound(ApiError):
    """Row absent or not owned by the caller."""
    status_code = 404


class BadRequest(ApiError):
    """Missing or empty required field."""
    status_code = 400


class Conflict(ApiError):
    """Write rejected by a uniqueness rule, e.g. a duplicate completion."""
    status_code = 400


class UpstreamFailure(ApiError):
    """Store error; the store's message is passed through."""
    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def validation_message(exc: Union[RequestValidationError, ValidationError]) -> str:
    """First validation error as a readable sentence."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    message = str(first.get("msg", "Invalid request"))
    if message.startswith("Value error, "):
        return message[len("Value error, "):]

    location = [
        str(part) for part in first.get("loc", ())
        if part != "body" and not isinstance(part, int)
    ]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as an error envelope."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(400, validation_message(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return error_response(500, "Internal server error")
