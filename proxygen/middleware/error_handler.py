"""Global error hierarchy and FastAPI exception handlers.

All service-specific errors extend ProxygenError. The FastAPI exception
handlers catch these errors (plus Pydantic's RequestValidationError and
unhandled exceptions) and return a consistent JSON envelope:
{ ok: false, error, ...details }.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ProxygenError(Exception):
    """Base error for all proxygen-specific errors."""

    status_code: int = 500
    message: str = "Internal error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class SourceFetchError(ProxygenError):
    """A remote proxy source could not be retrieved or decoded."""

    status_code = 500
    message = "Failed to fetch proxy source"


class EmptyResultError(ProxygenError):
    """The effective proxy list is empty after normalization."""

    status_code = 400
    message = "Proxy list is empty"


class SourceConfigError(ProxygenError):
    """The configured source set is inconsistent (unknown members, cycles)."""

    status_code = 500
    message = "Invalid proxy source configuration"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _envelope(status_code: int, error: str, extra: dict | None = None) -> JSONResponse:
    """Build a JSON error response."""
    content: dict = {"ok": False, "error": error}
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def _proxygen_error_handler(_request: Request, exc: ProxygenError) -> JSONResponse:
    """Handle ProxygenError subclasses."""
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.__class__.__name__, exc.message)
    return _envelope(exc.status_code, exc.message, extra=exc.details or None)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError (422)."""
    field_errors = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return _envelope(422, "Validation error", extra={"fields": field_errors})


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log traceback, return 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _envelope(500, f"Internal error: {exc}")


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(ProxygenError, _proxygen_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
