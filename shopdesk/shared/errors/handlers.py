"""
Centralized error handlers for FastAPI.

Maps exceptions that escape the normal result flow to HTTP responses:
authentication failures, persistence outages and anything unexpected.
Recoverable shop failures never reach this module; they are handled
by the failure taxonomy inside the controller.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shopdesk.domain.shops.errors import ShopDomainError, ShopPersistenceError
from shopdesk.shared.security.auth import API_KEY_HEADER, AuthenticationError

logger = logging.getLogger(__name__)

HTTP_401 = 401
HTTP_500 = 500
HTTP_503 = 503


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None


def _error_response(
    status_code: int,
    error: str,
    detail: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle missing or unknown API keys."""
        return _error_response(
            HTTP_401,
            "Authentication required",
            exc.message,
            headers={"WWW-Authenticate": API_KEY_HEADER},
        )

    @app.exception_handler(ShopPersistenceError)
    async def handle_persistence(
        _request: Request, exc: ShopPersistenceError
    ) -> JSONResponse:
        """Handle an unavailable shop store."""
        logger.error("Shop store unavailable: %s", exc.operation)
        return _error_response(HTTP_503, "Service temporarily unavailable")

    @app.exception_handler(ShopDomainError)
    async def handle_shop_domain(
        _request: Request, exc: ShopDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled shops domain errors."""
        logger.error("Unhandled shops domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
