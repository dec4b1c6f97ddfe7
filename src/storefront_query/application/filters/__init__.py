"""Application filters – FilterState and the FilterStore that owns it."""
from storefront_query.application.filters.state import (
    DEFAULT_PAGE_SIZE,
    Facet,
    FilterState,
    Flag,
    PriceRange,
    Sort,
    SortDirection,
    SortField,
)
from storefront_query.application.filters.store import FilterStore, Listener, Mutation, StateChange

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Facet",
    "FilterState",
    "FilterStore",
    "Flag",
    "Listener",
    "Mutation",
    "PriceRange",
    "Sort",
    "SortDirection",
    "SortField",
    "StateChange",
]
