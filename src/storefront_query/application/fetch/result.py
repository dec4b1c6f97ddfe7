"""Application fetch – Product, Pagination and ProductPage."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Mapping

__all__ = ["Pagination", "Product", "ProductPage"]


@dataclasses.dataclass(frozen=True)
class Product:
    """Catalog entry as returned by the content repository.

    ``attributes`` keeps the raw payload for fields this core does not model
    (images, variants, SEO metadata, ...).
    """

    id: int
    name: str
    slug: str
    price: float
    description: str = ""
    short_description: str | None = None
    category: str | None = None
    brand: str | None = None
    average_rating: float | None = None
    review_count: int = 0
    stock_quantity: int = 0
    featured: bool = False
    trending: bool = False
    trending_score: float | None = None
    created_at: str | None = None
    attributes: Mapping[str, Any] = dataclasses.field(default_factory=dict, compare=False, repr=False)

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0


@dataclasses.dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    page_count: int
    total: int

    @classmethod
    def for_total(cls, page: int, page_size: int, total: int) -> "Pagination":
        page_count = math.ceil(total / page_size) if page_size > 0 and total > 0 else 0
        return cls(page=page, page_size=page_size, page_count=page_count, total=total)


@dataclasses.dataclass(frozen=True)
class ProductPage:
    """One page of results. An empty page is a normal, displayable outcome."""

    items: tuple[Product, ...]
    pagination: Pagination

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def has_next(self) -> bool:
        return self.pagination.page < self.pagination.page_count

    @property
    def next_page(self) -> int | None:
        """Page number to request for "load more", or ``None`` on the last page."""
        return self.pagination.page + 1 if self.has_next else None
