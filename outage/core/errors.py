from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base for errors that end a request with a JSON ``{"error": ...}`` body."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    message = "Invalid request"


class AuthError(ServiceError):
    status_code = 401
    message = "Authentication required"


class ForbiddenError(ServiceError):
    status_code = 403
    message = "Access denied"


class RateLimitError(ServiceError):
    status_code = 429
    message = "You can only report once every 24 hours."


class ConflictError(ServiceError):
    status_code = 400
    message = "Already exists"


class StorageError(ServiceError):
    status_code = 500
    message = "Database error"


def error_response(exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed path=%s error=%s", request.url.path, exc.__cause__ or exc)
    return error_response(exc)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request.invalid path=%s errors=%s", request.url.path, exc.errors())
    return error_response(ValidationError())


async def _storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("request.storage_failed path=%s error=%s", request.url.path, exc)
    return error_response(StorageError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _storage_error_handler)  # type: ignore[arg-type]
