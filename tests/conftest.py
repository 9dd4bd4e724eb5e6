"""
Pytest configuration and fixtures shared by the shop tests.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from shopdesk.application.shops.dtos import ShopDto
from shopdesk.domain.caller import Caller
from shopdesk.infrastructure.shops.schema import ensure_schema
from shopdesk.shared.security.rate_limiting import limiter


@pytest.fixture(autouse=True)
def no_rate_limit():
    """Keep the shared limiter out of the way of ordinary tests."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with the shop schema."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def admin() -> Caller:
    return Caller(name="admin", permissions=frozenset({"shops.*"}))


@pytest.fixture
def nobody() -> Caller:
    return Caller(name="nobody", permissions=frozenset())


@pytest.fixture
def make_dto():
    """Factory for ShopDto snapshots."""

    def _make(
        shop_id: int = 1, title: str = "Acme", url: str = "https://acme.test"
    ) -> ShopDto:
        return ShopDto(
            id=shop_id,
            title=title,
            url=url,
            created_at=datetime(2024, 1, shop_id % 28 + 1, 12, 0, tzinfo=timezone.utc),
        )

    return _make
