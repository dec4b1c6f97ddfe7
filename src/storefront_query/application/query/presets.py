"""Application query – preset queries for the home page shelves.

Shelves only list products whose ``status`` is ``active``; the listing page
has no status facet.
"""
from __future__ import annotations

import dataclasses

from storefront_query.application.filters.state import FilterState, Sort, SortDirection, SortField
from storefront_query.application.query.compiler import CompiledQuery, FieldClause, compile_query

__all__ = ["ACTIVE_STATUS", "featured_products_query", "trending_products_query"]

ACTIVE_STATUS = FieldClause("status", (("$eq", "active"),))

_BY_TREND = Sort(SortField.TREND_SCORE, SortDirection.DESC)


def _shelf(state: FilterState) -> CompiledQuery:
    query = compile_query(state)
    return dataclasses.replace(query, clauses=query.clauses + (ACTIVE_STATUS,))


def featured_products_query(limit: int = 8) -> CompiledQuery:
    """First *limit* active featured products, hottest first."""
    return _shelf(FilterState(featured=True, sort=_BY_TREND, page_size=limit))


def trending_products_query(limit: int = 8) -> CompiledQuery:
    return _shelf(FilterState(trending=True, sort=_BY_TREND, page_size=limit))
