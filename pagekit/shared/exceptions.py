"""Custom exception hierarchy and handlers."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PaginationError(Exception):
    """Base pagination exception."""

    status_code = 400
    code = "pagination_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidConfigurationError(PaginationError):
    """Raised when pagination or sort is set to an unsupported value."""

    status_code = 500
    code = "invalid_configuration"


class InvalidQueryError(PaginationError):
    """Raised when a provider query cannot be executed as a select statement."""

    status_code = 500
    code = "invalid_query"


class ReadOnlyViolationError(PaginationError):
    """Raised when a computed pagination field is deleted."""

    status_code = 500
    code = "read_only_property"

    def __init__(self, owner: str, name: str) -> None:
        self.owner = owner
        self.name = name
        super().__init__(f"Property {owner}.{name} is read-only")


async def pagination_exception_handler(_: Request, exc: PaginationError) -> JSONResponse:
    """Handle pagination exceptions in unified shape."""
    if exc.status_code >= 500:
        logger.error("Pagination misconfiguration: %s", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def register_exception_handlers(app) -> None:
    """Register pagination exception handlers on a FastAPI app."""
    app.add_exception_handler(PaginationError, pagination_exception_handler)
