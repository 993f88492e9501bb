"""Custom HTTP exceptions and the handlers that render them.

Every error leaves the API as ``{"error": "<message>"}`` with the status
code of the exception that produced it.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    """Raised when a payload or parameter fails validation."""

    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class Unauthorized(HTTPException):
    """Raised when no valid identity accompanies a request that needs one."""

    def __init__(
        self,
        detail: str = "Unauthorized",
        headers: dict[str, str] | None = None,
    ) -> None:
        if headers is None:
            headers = {"WWW-Authenticate": "Bearer"}
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers=headers,
        )


class Forbidden(HTTPException):
    """Raised when the requester may not access the resource."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundError(HTTPException):
    """Raised when a resource is not found."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class InternalError(HTTPException):
    """Raised when a primary store operation fails."""

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


def first_error_message(errors: list[dict]) -> str:
    """Pick the client-facing message from a list of pydantic errors.

    Messages raised by our own validators come through as
    ``"Value error, <message>"``; those are returned bare. Anything else
    (type errors, missing fields) is prefixed with its field path.
    """
    if not errors:
        return "Invalid request"

    error = errors[0]
    message = str(error.get("msg", "Invalid request"))
    if error.get("type") == "value_error":
        return message.removeprefix("Value error, ")

    # Strip request-location and union-tag segments from the path
    loc = [
        str(part)
        for part in error.get("loc", ())
        if part not in ("body", "query", "path") and part not in ("daily", "guide")
    ]
    return f"{'.'.join(loc)}: {message}" if loc else message


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=headers,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST, first_error_message(list(exc.errors()))
    )


async def pydantic_validation_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST, first_error_message(exc.errors())
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the ``{"error": ...}`` handlers to an application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
