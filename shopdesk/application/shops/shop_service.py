"""
Service: Shop administration operations.

Operations: list, get_by_id, create, update, delete.
Every operation except list returns a typed Result; failures are
tagged with one FailureKind and never raised.
Side effects: create, update and delete write to the ShopRepository.
"""

import logging
from typing import Optional

from shopdesk.application.shops.dtos import ShopDto
from shopdesk.domain.shops.errors import DuplicateShopUrlError, ShopPersistenceError
from shopdesk.domain.shops.ports import ShopRepository
from shopdesk.shared.pagination import Page
from shopdesk.shared.results import Failure, FailureKind, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 15
DUPLICATE_URL_MESSAGE = "A shop with this URL already exists."


class ShopService:
    """Orchestrates shop reads and writes over a ShopRepository.

    Input arriving here has already been validated at the boundary.
    The only rule checked here is that no two shops share a URL, since
    that needs the store.
    """

    def __init__(
        self, repository: ShopRepository, per_page: int = DEFAULT_PER_PAGE
    ) -> None:
        """Initialize the service.

        Args:
            repository: Persistence port for shops.
            per_page: Number of shops per listing page.
        """
        self._repository = repository
        self._per_page = per_page

    def list(self, search_query: Optional[str] = None, page: int = 1) -> Page[ShopDto]:
        """Return one page of shops, optionally filtered by a search text.

        Args:
            search_query: Untrusted text matched against title and URL.
                Blank text is treated as no filter.
            page: 1-based page index. Pages past the end are empty.

        Returns:
            A page of ShopDto, newest first.
        """
        query = search_query.strip() if search_query else None
        query = query or None
        per_page = self._per_page
        offset = (page - 1) * per_page

        shops, total = self._repository.search(query, offset=offset, limit=per_page)
        logger.debug(
            "Listed shops: page=%d, returned=%d, total=%d", page, len(shops), total
        )
        return Page.of(
            (ShopDto.from_entity(shop) for shop in shops),
            page=page,
            per_page=per_page,
            total=total,
        )

    def get_by_id(self, shop_id: int) -> Result[ShopDto]:
        """Return the shop with the given id.

        Failure cases: NOT_FOUND.
        """
        shop = self._repository.get_by_id(shop_id)
        if shop is None:
            logger.info("Shop not found: id=%d", shop_id)
            return Failure(FailureKind.NOT_FOUND, f"Shop {shop_id} does not exist")
        return Ok(ShopDto.from_entity(shop))

    def create(self, title: str, url: str) -> Result[None]:
        """Register a new shop.

        Failure cases: VALIDATION_FAILED (URL taken), NOT_CREATED.
        """
        try:
            if self._repository.find_by_url(url) is not None:
                return Failure.validation({"url": (DUPLICATE_URL_MESSAGE,)})
            shop = self._repository.add(title=title, url=url)
        except DuplicateShopUrlError:
            return Failure.validation({"url": (DUPLICATE_URL_MESSAGE,)})
        except ShopPersistenceError as exc:
            logger.error("Shop not created: %s", exc.message)
            return Failure(FailureKind.NOT_CREATED, exc.reason)

        logger.info("Shop created: id=%d", shop.id)
        return Ok(None)

    def update(
        self, shop_id: int, title: Optional[str] = None, url: Optional[str] = None
    ) -> Result[None]:
        """Change the title and/or URL of a shop. None leaves a field unchanged.

        Failure cases: VALIDATION_FAILED (URL taken), NOT_UPDATED.
        """
        try:
            if url is not None:
                owner = self._repository.find_by_url(url)
                if owner is not None and owner.id != shop_id:
                    return Failure.validation({"url": (DUPLICATE_URL_MESSAGE,)})
            shop = self._repository.update(shop_id, title=title, url=url)
        except DuplicateShopUrlError:
            return Failure.validation({"url": (DUPLICATE_URL_MESSAGE,)})
        except ShopPersistenceError as exc:
            logger.error("Shop not updated: id=%d, %s", shop_id, exc.message)
            return Failure(FailureKind.NOT_UPDATED, exc.reason)

        if shop is None:
            logger.warning("Shop vanished before update: id=%d", shop_id)
            return Failure(FailureKind.NOT_UPDATED, f"shop {shop_id} no longer exists")

        logger.info("Shop updated: id=%d", shop_id)
        return Ok(None)

    def delete(self, shop_id: int) -> Result[None]:
        """Remove a shop.

        Failure cases: NOT_DELETED.
        """
        try:
            deleted = self._repository.delete(shop_id)
        except ShopPersistenceError as exc:
            logger.error("Shop not deleted: id=%d, %s", shop_id, exc.message)
            return Failure(FailureKind.NOT_DELETED, exc.reason)

        if not deleted:
            logger.warning("Shop vanished before delete: id=%d", shop_id)
            return Failure(FailureKind.NOT_DELETED, f"shop {shop_id} no longer exists")

        logger.info("Shop deleted: id=%d", shop_id)
        return Ok(None)
