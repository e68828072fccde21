"""
Domain errors and their HTTP mapping.

Services raise these; the API layer turns every error (domain, HTTP and
request-validation) into a JSON body of the form {"error": "<message>"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed input: bad id, start >= end, missing field, bad transition."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """Write would violate a uniqueness or non-overlap rule."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(DomainError):
    """Persistence or downstream failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(message: str, details: Any = None) -> dict:
    body: dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    if first.get("type") == "missing":
        return "Missing required fields"
    if loc and loc[0] == "id":
        return "Invalid id"
    field = ".".join(loc)
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(_error_body(exc.message), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            _error_body(message),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {k: e[k] for k in ("loc", "msg", "type") if k in e}
            for e in exc.errors()
        ]
        return JSONResponse(
            _error_body(_describe_validation(exc), details),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            _error_body("Internal server error"),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
