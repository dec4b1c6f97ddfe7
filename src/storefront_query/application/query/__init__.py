"""Application query – FilterState → repository query compilation."""
from storefront_query.application.query.compiler import (
    AnyOfClause,
    Clause,
    CompiledQuery,
    FieldClause,
    compile_query,
)
from storefront_query.application.query.keys import CacheKey
from storefront_query.application.query.presets import featured_products_query, trending_products_query

__all__ = [
    "AnyOfClause",
    "CacheKey",
    "Clause",
    "CompiledQuery",
    "FieldClause",
    "compile_query",
    "featured_products_query",
    "trending_products_query",
]
