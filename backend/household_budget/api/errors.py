"""
Mapping of domain errors onto HTTP responses.

Every error body has the shape ``{"error": {"code": ..., "details": {...}}}``;
``details`` is omitted when there is nothing to report.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from ulid import ULID

from ..domain.errors import (
    BudgetError,
    ConflictError,
    DomainValidationError,
    NotFoundError,
    RepositoryError,
)

logger = structlog.get_logger(__name__)


class BadRequestError(Exception):
    """Malformed request input that never reaches the domain."""

    def __init__(self, reason: str, code: str = "BAD_REQUEST"):
        self.reason = reason
        self.code = code
        super().__init__(reason)


def parse_id(value: str) -> ULID:
    """Parse a path or body identifier, rejecting anything that is not a ULID."""
    try:
        return ULID.from_str(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"invalid id: '{value}'") from None


def error_body(code: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code}
    if details:
        error["details"] = details
    return {"error": error}


def status_for(error: BudgetError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, DomainValidationError):
        return 422
    return 500


async def budget_error_handler(request: Request, exc: BudgetError) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, RepositoryError) or status_code == 500:
        # Store causes stay in the logs
        logger.error(
            "repository_error",
            error_type=type(exc).__name__,
            cause=getattr(exc, "cause", str(exc)),
            path=request.url.path,
        )
        return JSONResponse(status_code=500, content=error_body("INTERNAL_ERROR"))

    logger.info("request_rejected", code=exc.code, status=status_code, path=request.url.path)
    return JSONResponse(status_code=status_code, content=error_body(exc.code, exc.details))


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content=error_body(exc.code, {"reason": exc.reason}))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or wrongly typed fields."""
    errors = exc.errors()
    reason = "invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        reason = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=400, content=error_body("BAD_REQUEST", {"reason": reason}))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BudgetError, budget_error_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
