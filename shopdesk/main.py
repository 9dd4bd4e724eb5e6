"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health, shops)
- Error handlers (centralized exception-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Database schema creation on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from shopdesk.core.config import settings
from shopdesk.infrastructure.shops.schema import ensure_schema
from shopdesk.interfaces.health import router as health_router
from shopdesk.interfaces.shops.dependencies import get_db_engine
from shopdesk.interfaces.shops.router import router as shops_router
from shopdesk.shared.errors.handlers import register_error_handlers
from shopdesk.shared.logging import configure_logging
from shopdesk.shared.security.headers import SecurityHeadersMiddleware
from shopdesk.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the shop tables exist."""
    ensure_schema(get_db_engine())
    if not settings.api_keys:
        logger.warning("No API keys configured; every shop request will be rejected.")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(
        level=settings.log_level,
        secrets=settings.api_keys.keys(),
        log_sql=settings.debug,
    )

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(shops_router)

    return app


app = create_app()
