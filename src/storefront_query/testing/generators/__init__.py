"""Testing generators – Hypothesis strategies for catalog values."""
from storefront_query.testing.generators.strategies import (
    filter_state_strategy,
    price_range_strategy,
    search_term_strategy,
    slug_strategy,
)

__all__ = [
    "filter_state_strategy",
    "price_range_strategy",
    "search_term_strategy",
    "slug_strategy",
]
