from collections.abc import Mapping, Sequence
from typing import Any
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel

from bookstore.core.logging import get_logger


class BookstoreError(Exception):
    """Base for errors raised by repositories and services."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


class NotFoundError(BookstoreError):
    status_code: int = HTTP_404_NOT_FOUND


class InvalidRequestError(BookstoreError):
    """Input is well-formed but refers to something that does not exist."""
    status_code: int = HTTP_400_BAD_REQUEST


class ConflictError(BookstoreError):
    status_code: int = HTTP_409_CONFLICT


class BusinessRuleError(BookstoreError):
    status_code: int = HTTP_400_BAD_REQUEST


class PersistenceError(BookstoreError):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""
    error: str


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _summarize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> str:
    """Flatten pydantic errors into one human readable line."""

    if any(error.get("type") == "json_invalid" for error in errors):
        return "Invalid JSON payload"

    parts: list[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        msg = str(error.get("msg", "invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)

    if not parts:
        return "Invalid request data"
    return "Invalid request data: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception."""

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(
        request: Request, exc: BookstoreError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s: %s", type(exc).__name__, exc.message, exc_info=exc.__cause__)
        else:
            logger.warning("%s: %s", type(exc).__name__, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error %s on %s %s", exc.status_code, request.method, request.url.path)
        message = exc.detail if isinstance(exc.detail, str) and exc.detail else "HTTP error"
        return _error_response(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        message = _summarize_validation_errors(exc.errors())
        logger.info("Validation error: %s", message)
        return _error_response(HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        return _error_response(HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
