"""Application urlsync – FilterState ⇄ query-string parameters.

Only non-default values are written, and reading is forgiving: a missing,
malformed or out-of-range parameter silently falls back to its default and
unknown parameters are ignored.

One-sided price ranges round-trip because the bound that was filled in by
default (0 for the minimum, the sentinel for the maximum) is not written.
"""
from __future__ import annotations

import math
from typing import Mapping, Sequence
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from storefront_query.application.filters.state import (
    DEFAULT_PAGE_SIZE,
    MAX_RATING,
    MIN_RATING,
    FilterState,
    PriceRange,
    Sort,
    SortDirection,
    SortField,
    normalize_amount,
)
from storefront_query.config import CatalogSettings
from storefront_query.kernel.types import Slug

__all__ = ["OWNED_PARAMS", "UrlCodec", "parse_query_string", "to_query_params"]

P_CATEGORY = "category"
P_BRAND = "brand"
P_MIN_PRICE = "minPrice"
P_MAX_PRICE = "maxPrice"
P_RATING = "rating"
P_IN_STOCK = "inStock"
P_FEATURED = "featured"
P_TRENDING = "trending"
P_QUERY = "q"
P_SORT = "sort"
P_DIR = "dir"
P_PAGE = "page"

OWNED_PARAMS: tuple[str, ...] = (
    P_CATEGORY,
    P_BRAND,
    P_MIN_PRICE,
    P_MAX_PRICE,
    P_RATING,
    P_IN_STOCK,
    P_FEATURED,
    P_TRENDING,
    P_QUERY,
    P_SORT,
    P_DIR,
    P_PAGE,
)

_TRUTHY = frozenset({"1", "true", "yes", "on"})

Params = Mapping[str, "str | Sequence[str]"]


class UrlCodec:
    def __init__(
        self,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_price_sentinel: float = 10000.0,
    ) -> None:
        self._page_size = page_size
        self._sentinel = normalize_amount(max_price_sentinel)

    @classmethod
    def from_settings(cls, settings: CatalogSettings) -> "UrlCodec":
        return cls(page_size=settings.default_page_size, max_price_sentinel=settings.max_price_sentinel)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self, state: FilterState) -> dict[str, str]:
        params: dict[str, str] = {}
        if state.category is not None:
            params[P_CATEGORY] = state.category
        if state.brand is not None:
            params[P_BRAND] = state.brand
        if state.price_range is not None:
            low, high = state.price_range.min, state.price_range.max
            if not (low == 0 and high != self._sentinel):
                params[P_MIN_PRICE] = str(low)
            if high != self._sentinel:
                params[P_MAX_PRICE] = str(high)
        if state.rating_floor is not None:
            params[P_RATING] = str(state.rating_floor)
        if state.in_stock:
            params[P_IN_STOCK] = "true"
        if state.featured:
            params[P_FEATURED] = "true"
        if state.trending:
            params[P_TRENDING] = "true"
        if state.search_query is not None:
            params[P_QUERY] = state.search_query
        if state.sort.field is not Sort().field:
            params[P_SORT] = state.sort.field.value
        if state.sort.direction is not Sort().direction:
            params[P_DIR] = state.sort.direction.value
        if state.page != 1:
            params[P_PAGE] = str(state.page)
        return params

    def format_url(self, base_url: str, state: FilterState) -> str:
        """Rewrite *base_url* so its query string reflects *state*.

        Parameters this codec does not own are kept, after the owned ones.
        """
        parts = urlsplit(base_url)
        foreign = [
            (name, value)
            for name, value in _parse_pairs(parts.query)
            if name not in OWNED_PARAMS
        ]
        pairs = list(self.encode(state).items()) + foreign
        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(pairs), parts.fragment))

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode(self, params: Params) -> FilterState:
        def first(name: str) -> str | None:
            raw = params.get(name)
            if raw is None:
                return None
            if not isinstance(raw, str):
                raw = raw[0] if raw else None
            if raw is None:
                return None
            raw = raw.strip()
            return raw or None

        category = first(P_CATEGORY)
        brand = first(P_BRAND)
        sort_field = _enum_or_none(SortField, first(P_SORT)) or Sort().field
        sort_direction = _enum_or_none(SortDirection, first(P_DIR)) or Sort().direction
        return FilterState(
            category=category if Slug.is_valid(category) else None,
            brand=brand if Slug.is_valid(brand) else None,
            price_range=self._decode_price(first(P_MIN_PRICE), first(P_MAX_PRICE)),
            rating_floor=_decode_rating(first(P_RATING)),
            in_stock=_decode_flag(first(P_IN_STOCK)),
            featured=_decode_flag(first(P_FEATURED)),
            trending=_decode_flag(first(P_TRENDING)),
            search_query=first(P_QUERY),
            sort=Sort(sort_field, sort_direction),
            page=_decode_page(first(P_PAGE)),
            page_size=self._page_size,
        )

    def parse_url(self, url: str) -> FilterState:
        return self.decode(parse_qs(urlsplit(url).query))

    def _decode_price(self, raw_min: str | None, raw_max: str | None) -> PriceRange | None:
        low = _decode_amount(raw_min)
        high = _decode_amount(raw_max)
        if low is None and high is None:
            return None
        price_range = PriceRange(0 if low is None else low, self._sentinel if high is None else high)
        return price_range if price_range.is_valid else None


def _parse_pairs(query: str) -> list[tuple[str, str]]:
    return [
        (name, value)
        for name, values in parse_qs(query, keep_blank_values=True).items()
        for value in values
    ]


def _enum_or_none(enum_cls: type, raw: str | None):  # type: ignore[no-untyped-def]
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def _decode_amount(raw: str | None) -> float | int | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return normalize_amount(value)


def _decode_rating(raw: str | None) -> int | None:
    if raw is None or not raw.isdecimal():
        return None
    rating = int(raw)
    return rating if MIN_RATING <= rating <= MAX_RATING else None


def _decode_flag(raw: str | None) -> bool:
    return raw is not None and raw.lower() in _TRUTHY


def _decode_page(raw: str | None) -> int:
    if raw is None or not raw.isdecimal():
        return 1
    return max(int(raw), 1)


def parse_query_string(
    query_string: str,
    defaults: FilterState | None = None,
    *,
    max_price_sentinel: float = 10000.0,
) -> FilterState:
    """Parse a raw ``a=1&b=2`` query string (a leading ``?`` is allowed)."""
    page_size = (defaults or FilterState()).page_size
    codec = UrlCodec(page_size=page_size, max_price_sentinel=max_price_sentinel)
    return codec.decode(parse_qs(query_string.lstrip("?")))


def to_query_params(
    state: FilterState,
    defaults: FilterState | None = None,
    *,
    max_price_sentinel: float = 10000.0,
) -> dict[str, str]:
    page_size = (defaults or FilterState()).page_size
    return UrlCodec(page_size=page_size, max_price_sentinel=max_price_sentinel).encode(state)
