"""Application query – compile a FilterState into a repository query.

:func:`compile_query` is pure: no I/O, no mutation of its input, and
structurally equal states always produce equal :class:`CompiledQuery` values
with the same :attr:`CompiledQuery.cache_key`.

Every active facet becomes one clause and clauses combine with AND. The free
text term is the only disjunction: it matches when any of the text fields
contains it.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Union

from storefront_query.application.filters.state import FilterState, SortField
from storefront_query.application.query.keys import CacheKey
from storefront_query.kernel.errors import InvariantViolationError
from storefront_query.observability.logging import get_logger

__all__ = [
    "AnyOfClause",
    "Clause",
    "CompiledQuery",
    "FieldClause",
    "SEARCH_FIELDS",
    "SORT_ATTRIBUTES",
    "compile_query",
]

logger = get_logger(__name__)

CATEGORY_FIELD = "category.slug"
BRAND_FIELD = "brand.slug"
PRICE_FIELD = "price"
RATING_FIELD = "averageRating"
STOCK_FIELD = "stockQuantity"
FEATURED_FIELD = "featured"
TRENDING_FIELD = "trending"
SEARCH_FIELDS: tuple[str, ...] = ("name", "description", "shortDescription")

SORT_ATTRIBUTES: dict[SortField, str] = {
    SortField.CREATED_AT: "createdAt",
    SortField.PRICE: "price",
    SortField.RATING: "averageRating",
    SortField.TREND_SCORE: "trendingScore",
}


@dataclasses.dataclass(frozen=True)
class FieldClause:
    """Conditions on one repository field, e.g. ``price >= 50 AND price <= 200``."""

    field: str
    conditions: tuple[tuple[str, Any], ...]

    def to_filter(self) -> dict[str, Any]:
        return {self.field: dict(self.conditions)}


@dataclasses.dataclass(frozen=True)
class AnyOfClause:
    """Disjunction of field clauses (``$or``)."""

    clauses: tuple[FieldClause, ...]

    def to_filter(self) -> dict[str, Any]:
        return {"$or": [clause.to_filter() for clause in self.clauses]}


Clause = Union[FieldClause, AnyOfClause]


@dataclasses.dataclass(frozen=True)
class CompiledQuery:
    clauses: tuple[Clause, ...]
    sort: str
    page: int
    page_size: int
    search_term: str | None = None

    @property
    def filters(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for clause in self.clauses:
            merged.update(clause.to_filter())
        return merged

    @property
    def has_filters(self) -> bool:
        return bool(self.clauses)

    def to_request(self) -> dict[str, Any]:
        """Wire shape understood by the content repository."""
        return {
            "filters": self.filters,
            "sort": self.sort,
            "pagination": {"page": self.page, "pageSize": self.page_size},
        }

    @property
    def cache_key(self) -> str:
        return CacheKey.for_query("products", self.to_request())


def _equals(field: str, value: Any) -> FieldClause:
    return FieldClause(field, (("$eq", value),))


def compile_query(state: FilterState, *, strict: bool = True) -> CompiledQuery:
    """Translate *state* into a :class:`CompiledQuery`.

    A malformed state is a programming error. With ``strict=True`` it raises
    :class:`InvariantViolationError`; otherwise the violation is logged and
    the nearest well-formed state is compiled instead.
    """
    violations = state.invariant_violations()
    if violations:
        if strict:
            raise InvariantViolationError("Cannot compile a malformed FilterState", violations=violations)
        logger.warning("filter_state_clamped", violations=violations)
        state = state.clamped()

    clauses: list[Clause] = []
    if state.category is not None:
        clauses.append(_equals(CATEGORY_FIELD, state.category))
    if state.brand is not None:
        clauses.append(_equals(BRAND_FIELD, state.brand))
    if state.price_range is not None:
        clauses.append(
            FieldClause(PRICE_FIELD, (("$gte", state.price_range.min), ("$lte", state.price_range.max)))
        )
    if state.rating_floor is not None:
        clauses.append(FieldClause(RATING_FIELD, (("$gte", state.rating_floor),)))
    if state.in_stock:
        clauses.append(FieldClause(STOCK_FIELD, (("$gt", 0),)))
    if state.featured:
        clauses.append(_equals(FEATURED_FIELD, True))
    if state.trending:
        clauses.append(_equals(TRENDING_FIELD, True))
    if state.search_query is not None:
        clauses.append(
            AnyOfClause(
                tuple(FieldClause(field, (("$containsi", state.search_query),)) for field in SEARCH_FIELDS)
            )
        )

    return CompiledQuery(
        clauses=tuple(clauses),
        sort=f"{SORT_ATTRIBUTES[state.sort.field]}:{state.sort.direction.value}",
        page=state.page,
        page_size=state.page_size,
        search_term=state.search_query,
    )
