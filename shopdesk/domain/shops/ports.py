"""
Port interfaces (ABCs) for the shops bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from shopdesk.domain.caller import Caller
from shopdesk.domain.shops.entities import Shop, ShopAbility


class ShopRepository(ABC):
    """Port for storing and retrieving shops.

    Adapters raise ShopPersistenceError when the store itself fails.
    """

    @abstractmethod
    def search(
        self, query: Optional[str], offset: int, limit: int
    ) -> tuple[list[Shop], int]:
        """Return one slice of shops matching ``query`` and the total match count.

        Args:
            query: Text matched against title and URL, or None for all shops.
            offset: Number of matching shops to skip.
            limit: Maximum number of shops to return.

        Returns:
            The shops in the slice, newest first, and the total number of matches.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, shop_id: int) -> Optional[Shop]:
        """Return the shop with this id, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def find_by_url(self, url: str) -> Optional[Shop]:
        """Return the shop registered under this URL, if any."""
        raise NotImplementedError

    @abstractmethod
    def add(self, title: str, url: str) -> Shop:
        """Persist a new shop and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, shop_id: int, title: Optional[str], url: Optional[str]
    ) -> Optional[Shop]:
        """Change the given fields of a shop. None fields are left as they are.

        Returns:
            The updated shop, or None when no shop has this id.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, shop_id: int) -> bool:
        """Remove a shop. Returns False when no shop had this id."""
        raise NotImplementedError


class AuthorizationPort(ABC):
    """Port deciding whether a caller may perform an action on shops."""

    @abstractmethod
    def allows(
        self, caller: Caller, ability: ShopAbility, subject: Any = None
    ) -> bool:
        """Return True if ``caller`` may perform ``ability``.

        Args:
            caller: The authenticated caller.
            ability: The action being attempted.
            subject: A specific shop, or None for the shop class as a whole.
        """
        raise NotImplementedError
