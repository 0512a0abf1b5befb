"""
Action errors and global exception handlers.

Every failure leaves the service as a well-formed envelope:
``{"success": false, "error": "...", "timestamp": "..."}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from app.schemas.envelope import failure

logger = logging.getLogger(__name__)


class ActionError(Exception):
    """Base class for errors raised while routing or running an action."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownActionError(ActionError):
    def __init__(self, action: str | None, valid: list[str]):
        self.action = action
        super().__init__(
            f"Invalid action '{action or ''}'. Valid actions: {', '.join(valid)}"
        )


class MalformedBodyError(ActionError):
    pass


def _envelope_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=failure(error).to_wire(),
    )


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return _envelope_response(exc.status_code, str(exc.detail))


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Request validation failed: %s", exc.errors())
    return _envelope_response(422, "Invalid request parameters")


async def _rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded: %s", exc.detail)
    return _envelope_response(429, f"Rate limit exceeded: {exc.detail}")


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _envelope_response(500, "Internal database error")


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _envelope_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
