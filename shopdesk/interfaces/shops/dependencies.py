"""
Dependency injection for the shops bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into the service and controller via constructor injection.
These are the composition root for the shops context.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from shopdesk.application.shops.shop_service import ShopService
from shopdesk.core.config import settings
from shopdesk.domain.shops.policies import PermissionPolicy
from shopdesk.domain.shops.ports import AuthorizationPort
from shopdesk.infrastructure.shops.shop_repository import SqlShopRepository
from shopdesk.interfaces.pages import PageRenderer
from shopdesk.interfaces.shops.controller import ShopController


@lru_cache
def get_db_engine() -> Engine:
    """Build the process-wide SQLAlchemy engine from application settings."""
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.database_url, pool_pre_ping=True, connect_args=connect_args
    )


def get_shop_service() -> ShopService:
    """Build ShopService with its infrastructure dependencies."""
    return ShopService(
        repository=SqlShopRepository(engine=get_db_engine()),
        per_page=settings.shops_per_page,
    )


def get_authorization() -> AuthorizationPort:
    return PermissionPolicy()


def get_shop_controller(
    service: ShopService = Depends(get_shop_service),
    policy: AuthorizationPort = Depends(get_authorization),
) -> ShopController:
    """Build the ShopController for one request."""
    return ShopController(service=service, policy=policy)


@lru_cache
def get_page_renderer() -> PageRenderer:
    return PageRenderer(
        version=settings.asset_version,
        title=settings.project_name,
        entry=settings.frontend_entry,
    )
