"""Application filters – FilterState value object and its facet vocabulary."""
from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import Any

from storefront_query.kernel.types import Slug

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Facet",
    "FilterState",
    "Flag",
    "PriceRange",
    "Sort",
    "SortDirection",
    "SortField",
]

DEFAULT_PAGE_SIZE = 12
MIN_RATING = 1
MAX_RATING = 5


class SortField(str, Enum):
    CREATED_AT = "createdAt"
    PRICE = "price"
    RATING = "rating"
    TREND_SCORE = "trendScore"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Flag(str, Enum):
    """Boolean facets: either set (``True``) or absent."""

    IN_STOCK = "inStock"
    FEATURED = "featured"
    TRENDING = "trending"

    @property
    def attribute(self) -> str:
        return _FLAG_ATTRIBUTES[self]


class Facet(str, Enum):
    """Closed set of removable facets (one per filter chip)."""

    CATEGORY = "category"
    BRAND = "brand"
    PRICE_RANGE = "priceRange"
    RATING = "rating"
    IN_STOCK = "inStock"
    FEATURED = "featured"
    TRENDING = "trending"
    SEARCH = "searchQuery"

    @property
    def attribute(self) -> str:
        return _FACET_ATTRIBUTES[self]


_FLAG_ATTRIBUTES: dict[Flag, str] = {
    Flag.IN_STOCK: "in_stock",
    Flag.FEATURED: "featured",
    Flag.TRENDING: "trending",
}

_FACET_ATTRIBUTES: dict[Facet, str] = {
    Facet.CATEGORY: "category",
    Facet.BRAND: "brand",
    Facet.PRICE_RANGE: "price_range",
    Facet.RATING: "rating_floor",
    Facet.IN_STOCK: "in_stock",
    Facet.FEATURED: "featured",
    Facet.TRENDING: "trending",
    Facet.SEARCH: "search_query",
}


def normalize_amount(value: float | int) -> float | int:
    """Collapse integral amounts to ``int`` so 50 and 50.0 compile identically."""
    number = float(value)
    if number.is_integer():
        return int(number)
    return number


@dataclasses.dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds. Well-formed only when ``0 <= min <= max``."""

    min: float | int
    max: float | int

    def __post_init__(self) -> None:
        object.__setattr__(self, "min", normalize_amount(self.min))
        object.__setattr__(self, "max", normalize_amount(self.max))

    @property
    def is_valid(self) -> bool:
        return (
            math.isfinite(self.min)
            and math.isfinite(self.max)
            and 0 <= self.min <= self.max
        )


@dataclasses.dataclass(frozen=True)
class Sort:
    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    def __str__(self) -> str:
        return f"{self.field.value}:{self.direction.value}"


DEFAULT_SORT = Sort()


@dataclasses.dataclass(frozen=True)
class FilterState:
    """Complete snapshot of the active facets, sort order and page cursor.

    Absence is the only way to express "no constraint": ``None`` for valued
    facets and ``False`` for flags. Instances are never mutated; the store
    replaces them.
    """

    category: str | None = None
    brand: str | None = None
    price_range: PriceRange | None = None
    rating_floor: int | None = None
    in_stock: bool = False
    featured: bool = False
    trending: bool = False
    search_query: str | None = None
    sort: Sort = DEFAULT_SORT
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def defaults(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "FilterState":
        return cls(page_size=page_size)

    def copy_with(self, **changes: Any) -> "FilterState":
        return dataclasses.replace(self, **changes)

    def without(self, facet: Facet) -> "FilterState":
        """Return a copy with *facet* cleared (page is left untouched)."""
        default = _FACET_DEFAULTS[facet]
        return dataclasses.replace(self, **{facet.attribute: default})

    def is_set(self, facet: Facet) -> bool:
        return getattr(self, facet.attribute) != _FACET_DEFAULTS[facet]

    def active_facets(self) -> list[tuple[Facet, Any]]:
        return [(facet, getattr(self, facet.attribute)) for facet in Facet if self.is_set(facet)]

    @property
    def has_active_filters(self) -> bool:
        return any(self.is_set(facet) for facet in Facet)

    def invariant_violations(self) -> list[str]:
        """Describe every broken invariant; an empty list means well-formed."""
        problems: list[str] = []
        for name in ("category", "brand"):
            value = getattr(self, name)
            if value is not None and not Slug.is_valid(value):
                problems.append(f"{name} must be a slug, got {value!r}")
        if self.price_range is not None and not self.price_range.is_valid:
            problems.append(
                f"price_range must satisfy 0 <= min <= max, got "
                f"({self.price_range.min}, {self.price_range.max})"
            )
        if self.rating_floor is not None and not _valid_rating(self.rating_floor):
            problems.append(f"rating_floor must be an integer in 1..5, got {self.rating_floor!r}")
        for flag in Flag:
            if not isinstance(getattr(self, flag.attribute), bool):
                problems.append(f"{flag.attribute} must be a bool")
        if self.search_query is not None and (
            not isinstance(self.search_query, str)
            or not self.search_query
            or self.search_query != self.search_query.strip()
        ):
            problems.append("search_query must be a trimmed, non-empty string")
        if not isinstance(self.sort.field, SortField) or not isinstance(self.sort.direction, SortDirection):
            problems.append(f"sort must use known fields and directions, got {self.sort!r}")
        if not _positive_int(self.page):
            problems.append(f"page must be a positive integer, got {self.page!r}")
        if not _positive_int(self.page_size):
            problems.append(f"page_size must be a positive integer, got {self.page_size!r}")
        return problems

    def clamped(self) -> "FilterState":
        """Return the nearest well-formed state: bad facets are dropped."""
        search = self.search_query.strip() if isinstance(self.search_query, str) else None
        sort = self.sort
        if not isinstance(sort.field, SortField) or not isinstance(sort.direction, SortDirection):
            sort = DEFAULT_SORT
        return FilterState(
            category=self.category if Slug.is_valid(self.category) else None,
            brand=self.brand if Slug.is_valid(self.brand) else None,
            price_range=self.price_range if self.price_range is not None and self.price_range.is_valid else None,
            rating_floor=self.rating_floor if _valid_rating(self.rating_floor) else None,
            in_stock=self.in_stock is True,
            featured=self.featured is True,
            trending=self.trending is True,
            search_query=search or None,
            sort=sort,
            page=self.page if _positive_int(self.page) else 1,
            page_size=self.page_size if _positive_int(self.page_size) else DEFAULT_PAGE_SIZE,
        )


_FACET_DEFAULTS: dict[Facet, Any] = {
    Facet.CATEGORY: None,
    Facet.BRAND: None,
    Facet.PRICE_RANGE: None,
    Facet.RATING: None,
    Facet.IN_STOCK: False,
    Facet.FEATURED: False,
    Facet.TRENDING: False,
    Facet.SEARCH: None,
}


def _positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _valid_rating(value: object) -> bool:
    return _positive_int(value) and MIN_RATING <= value <= MAX_RATING  # type: ignore[operator]
