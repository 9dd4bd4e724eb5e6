"""
Adapter: Shop persistence.

Implements the ShopRepository port on top of a SQLAlchemy engine.
Database faults are translated into ShopPersistenceError so that the
application layer never sees driver exceptions.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shopdesk.domain.shops.entities import Shop
from shopdesk.domain.shops.errors import DuplicateShopUrlError, ShopPersistenceError
from shopdesk.domain.shops.ports import ShopRepository
from shopdesk.infrastructure.shops.schema import shops_table

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

# Largest value a signed 64-bit INTEGER column can hold.
MAX_ROW_ID = 2**63 - 1


def _like_pattern(query: str) -> str:
    """Turn free text into a LIKE pattern matching it literally anywhere."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _is_storable_id(shop_id: int) -> bool:
    return 1 <= shop_id <= MAX_ROW_ID


def _to_shop(row: Row) -> Shop:
    return Shop(
        id=row.id,
        title=row.title,
        url=row.url,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlShopRepository(ShopRepository):
    """Stores shops in the ``shops`` table.

    Implements the ShopRepository port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def search(
        self, query: Optional[str], offset: int, limit: int
    ) -> tuple[list[Shop], int]:
        """Return one slice of matching shops, newest first, and the match count.

        Args:
            query: Text matched case-insensitively against title and URL.
                Wildcard characters in it are matched literally.
            offset: Number of matching shops to skip.
            limit: Maximum number of shops to return.
        """
        condition = None
        if query:
            pattern = _like_pattern(query)
            condition = or_(
                shops_table.c.title.ilike(pattern, escape=LIKE_ESCAPE),
                shops_table.c.url.ilike(pattern, escape=LIKE_ESCAPE),
            )

        count_stmt = select(func.count()).select_from(shops_table)
        rows_stmt = (
            select(shops_table)
            .order_by(shops_table.c.created_at.desc(), shops_table.c.id.desc())
            .offset(offset)
            .limit(limit)
        )
        if condition is not None:
            count_stmt = count_stmt.where(condition)
            rows_stmt = rows_stmt.where(condition)

        try:
            with self._engine.connect() as conn:
                total = conn.execute(count_stmt).scalar_one()
                rows = (
                    conn.execute(rows_stmt).fetchall() if offset <= MAX_ROW_ID else []
                )
        except SQLAlchemyError as exc:
            raise ShopPersistenceError("search", str(exc.__class__.__name__)) from exc

        return [_to_shop(row) for row in rows], total

    def get_by_id(self, shop_id: int) -> Optional[Shop]:
        if not _is_storable_id(shop_id):
            return None
        stmt = select(shops_table).where(shops_table.c.id == shop_id)
        return self._fetch_one("get_by_id", stmt)

    def find_by_url(self, url: str) -> Optional[Shop]:
        stmt = select(shops_table).where(shops_table.c.url == url)
        return self._fetch_one("find_by_url", stmt)

    def add(self, title: str, url: str) -> Shop:
        """Insert a shop and return it with its generated id.

        Raises:
            DuplicateShopUrlError: If the URL is already stored.
            ShopPersistenceError: On any other database failure.
        """
        now = datetime.now(timezone.utc)
        stmt = insert(shops_table).values(
            title=title, url=url, created_at=now, updated_at=now
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
                shop_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            raise DuplicateShopUrlError(url) from exc
        except SQLAlchemyError as exc:
            logger.exception("Insert into shops failed")
            raise ShopPersistenceError("add", "the shop could not be saved") from exc

        return Shop(id=shop_id, title=title, url=url, created_at=now, updated_at=now)

    def update(
        self, shop_id: int, title: Optional[str], url: Optional[str]
    ) -> Optional[Shop]:
        """Update the non-None fields of a shop.

        Raises:
            DuplicateShopUrlError: If the new URL belongs to another shop.
            ShopPersistenceError: On any other database failure.
        """
        if not _is_storable_id(shop_id):
            return None

        values: dict[str, Any] = {"updated_at": datetime.now(timezone.utc)}
        if title is not None:
            values["title"] = title
        if url is not None:
            values["url"] = url

        stmt = update(shops_table).where(shops_table.c.id == shop_id).values(**values)
        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    return None
                row = conn.execute(
                    select(shops_table).where(shops_table.c.id == shop_id)
                ).one()
        except IntegrityError as exc:
            raise DuplicateShopUrlError(url or "") from exc
        except SQLAlchemyError as exc:
            logger.exception("Update of shop %d failed", shop_id)
            raise ShopPersistenceError("update", "the shop could not be saved") from exc

        return _to_shop(row)

    def delete(self, shop_id: int) -> bool:
        if not _is_storable_id(shop_id):
            return False
        stmt = delete(shops_table).where(shops_table.c.id == shop_id)
        try:
            with self._engine.begin() as conn:
                deleted = conn.execute(stmt).rowcount > 0
        except SQLAlchemyError as exc:
            logger.exception("Delete of shop %d failed", shop_id)
            raise ShopPersistenceError("delete", "the shop could not be removed") from exc
        return deleted

    def _fetch_one(self, operation: str, stmt) -> Optional[Shop]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise ShopPersistenceError(operation, str(exc.__class__.__name__)) from exc
        return _to_shop(row) if row is not None else None
