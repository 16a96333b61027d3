"""Translate domain errors into HTTP responses."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    TaskManagerError,
    ValidationError,
)
from ..schemas.error import ErrorResponse, FieldErrorOut

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

STATUS_BY_ERROR = [
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (InvalidCredentialsError, HTTPStatus.UNAUTHORIZED),
    (ForbiddenError, HTTPStatus.FORBIDDEN),
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (DuplicateEmailError, HTTPStatus.CONFLICT),
]


def _status_for(exc: TaskManagerError) -> HTTPStatus:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return HTTPStatus.BAD_REQUEST


def _respond(request: Request, status: HTTPStatus, message: str, errors=None) -> JSONResponse:
    body = ErrorResponse(
        status=status.value,
        error=status.phrase,
        message=message,
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status.value,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def handle_domain_error(request: Request, exc: TaskManagerError) -> JSONResponse:
    errors = None
    if isinstance(exc, ValidationError):
        errors = [FieldErrorOut(field=e.field, message=e.message) for e in exc.errors]
    return _respond(request, _status_for(exc), exc.message, errors)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        # loc is ("body" | "query" | "path", field, ...)
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors.append(FieldErrorOut(field=".".join(location) or "request", message=error.get("msg", "")))
    message = ", ".join(f"{e.field}: {e.message}" for e in errors)
    return _respond(request, HTTPStatus.BAD_REQUEST, message, errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _respond(request, HTTPStatus.INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskManagerError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
