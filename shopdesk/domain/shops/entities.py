"""
Domain entities for the shops bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

TITLE_MAX_LENGTH = 255
URL_MAX_LENGTH = 2048


class ShopAbility(str, Enum):
    """Actions a caller may be authorized to perform on shops."""

    VIEW_ANY = "viewAny"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Shop:
    """A shop registered in the administration catalog.

    Attributes:
        id: Identifier assigned by the persistence layer.
        title: Human readable shop name.
        url: Address of the shop's storefront.
        created_at: When the shop was first stored.
        updated_at: When the shop was last modified.
    """

    id: int
    title: str
    url: str
    created_at: datetime
    updated_at: datetime
