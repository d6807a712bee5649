"""
Error types and the global exception handlers.

Every error response has the same body: {"message": "<human text>"}.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import settings

INVALID_REQUEST_MESSAGE = "Invalid request data."

INTERNAL_ERROR_MESSAGE = "Internal server error."

# Connection refused/reset surfaces as OSError before asyncpg wraps anything;
# command_timeout raises asyncio.TimeoutError (not an OSError before 3.11).
STORE_EXCEPTIONS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """
    A query or connection failure, carrying the user-facing message.
    """

    def __init__(self, message: str, *, detail: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """
    Re-raise database failures inside the block as `StoreError(message)`.
    """
    try:
        yield
    except STORE_EXCEPTIONS as exc:
        raise StoreError(message, detail=str(exc)) from exc


def error_message(exc: StoreError) -> str:
    if settings.expose_error_details() and exc.detail:
        return f"{exc.message} {exc.detail}"
    return exc.message


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "store_error method=%s path=%s message=%r detail=%r",
            request.method,
            request.url.path,
            exc.message,
            exc.detail,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": error_message(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(
            "invalid_request method=%s path=%s errors=%s",
            request.method,
            request.url.path,
            [".".join(str(part) for part in e["loc"]) for e in exc.errors()],
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": INVALID_REQUEST_MESSAGE},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_error method=%s path=%s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": INTERNAL_ERROR_MESSAGE},
        )
