"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status and version.
Exempt from rate limiting so probes are never throttled.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shopdesk.core.config import settings
from shopdesk.shared.security.rate_limiting import limiter

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
@limiter.exempt
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)
