"""Mapping of domain and utility errors onto HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from invitely.domain.error import (
    ConflictError,
    DomainError,
    InvalidCredentialsError,
    NotAuthorizedError,
    NotFoundError,
)
from invitely.interface.api.envelope import failure
from invitely.util.jwt import JWTError


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(error, InvalidCredentialsError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, NotAuthorizedError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_400_BAD_REQUEST


def validation_message(error: RequestValidationError) -> str:
    """Flatten request validation errors into ``"body.title: Field required, ..."``."""
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        messages.append(f"{location}: {detail.get('msg')}")
    return ", ".join(messages)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logfire.warn("Request validation failed", path=request.url.path, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=failure(message)
    )


async def _domain_error_handler(request: Request, exc: DomainError):
    code = status_for(exc)
    logfire.warn(
        "Domain error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        status_code=code,
    )
    return JSONResponse(status_code=code, content=failure(str(exc)))


async def _jwt_error_handler(request: Request, exc: JWTError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED, content=failure(str(exc))
    )


async def _unexpected_error_handler(request: Request, exc: Exception):
    logfire.error(
        "Unexpected error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure("Internal server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into an error envelope."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(JWTError, _jwt_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
