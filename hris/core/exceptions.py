"""
Domain errors and global exception handlers (no stack traces reach clients).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class HRISError(Exception):
    """Base class for errors that map onto a client-facing status code."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class NotFoundError(HRISError):
    status_code = 404


class PermissionDeniedError(HRISError):
    status_code = 403

    def __init__(self, message: str = "You do not have permission to access this page"):
        super().__init__(message)


class InvalidTransitionError(HRISError):
    status_code = 409


class DuplicateEmailError(HRISError):
    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, status_code=400)


class PrivilegedFunctionError(HRISError):
    """A privileged remote function refused or failed; its message is kept verbatim."""

    status_code = 502


def _error_body(detail: object) -> dict:
    return {"detail": detail, "success": False}


async def _hris_error_handler(_request: Request, exc: HRISError) -> JSONResponse:
    if exc.status_code == 403:
        logger.warning("Access denied: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def _rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded: %s", exc.detail)
    return JSONResponse(
        status_code=429,
        content=_error_body(f"Rate limit exceeded: {exc.detail}"),
    )


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Database integrity error: %s", exc, exc_info=True)
    return JSONResponse(status_code=409, content=_error_body("Database constraint violation"))


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return JSONResponse(status_code=500, content=_error_body("Internal database error"))


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(HRISError, _hris_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
