"""
Pagination primitives shared by every list endpoint.

A Page is an immutable slice of an ordered collection plus the metadata
describing where the slice sits in that collection. Projection maps every
item of a page through a caller-supplied function and keeps the metadata.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of an ordered collection.

    Attributes:
        items: The records on this page, in collection order.
        page: 1-based index of this page.
        per_page: Maximum number of records per page.
        total: Number of records in the whole collection.
    """

    items: tuple[T, ...]
    page: int
    per_page: int
    total: int

    def __post_init__(self) -> None:
        # Accept any iterable (lists from repositories) but store a tuple.
        object.__setattr__(self, "items", tuple(self.items))
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {self.per_page}")
        if self.total < 0:
            raise ValueError(f"total must be >= 0, got {self.total}")
        if len(self.items) > self.per_page:
            raise ValueError(
                f"page holds {len(self.items)} items but per_page is {self.per_page}"
            )

    @classmethod
    def of(
        cls, items: Iterable[T], page: int, per_page: int, total: int
    ) -> "Page[T]":
        """Build a page from any iterable of items."""
        return cls(items=tuple(items), page=page, per_page=per_page, total=total)

    @property
    def last_page(self) -> int:
        """Index of the last page; an empty collection still has page 1."""
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def offset(self) -> int:
        """Number of records that precede this page in the collection."""
        return (self.page - 1) * self.per_page

    @property
    def from_item(self) -> int | None:
        """1-based position of the first item on this page."""
        if not self.items:
            return None
        return self.offset + 1

    @property
    def to_item(self) -> int | None:
        """1-based position of the last item on this page."""
        if not self.items:
            return None
        return self.offset + len(self.items)

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Return a new page with ``fn`` applied once to every item.

        Ordering and metadata are preserved and this page is left untouched.
        """
        return Page(
            items=tuple(fn(item) for item in self.items),
            page=self.page,
            per_page=self.per_page,
            total=self.total,
        )


def output_paginated_list(page: Page[T], fn: Callable[[T], Any]) -> dict[str, Any]:
    """Project a page into the plain payload consumed by list pages.

    Args:
        page: Page of domain records.
        fn: Pure function turning one record into its output shape.

    Returns:
        ``{"data": [...], "meta": {...}}`` with every item projected.
    """
    projected = page.map(fn)
    return {
        "data": list(projected.items),
        "meta": {
            "current_page": projected.page,
            "per_page": projected.per_page,
            "total": projected.total,
            "last_page": projected.last_page,
            "from": projected.from_item,
            "to": projected.to_item,
        },
    }
