"""
Data Transfer Objects for the shops application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime

from shopdesk.domain.shops.entities import Shop


@dataclass(frozen=True)
class ShopDto:
    """Read-only snapshot of a shop handed to the interface layer.

    Attributes:
        id: Shop identifier.
        title: Shop name.
        url: Storefront address.
        created_at: When the shop was created.
    """

    id: int
    title: str
    url: str
    created_at: datetime

    @classmethod
    def from_entity(cls, shop: Shop) -> "ShopDto":
        return cls(
            id=shop.id,
            title=shop.title,
            url=shop.url,
            created_at=shop.created_at,
        )
