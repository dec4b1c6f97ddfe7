"""Testing support – fakes and property-based generators.

Usage::

    from storefront_query.testing import FakeClock, FakeProductRepository, ManualTimer
"""

from storefront_query.testing.fakes import (
    FakeClock,
    FakeProductRepository,
    InMemoryHistory,
    ManualTimer,
    make_product,
    sample_catalog,
)
from storefront_query.testing.generators import filter_state_strategy, slug_strategy

__all__ = [
    "FakeClock",
    "FakeProductRepository",
    "InMemoryHistory",
    "ManualTimer",
    "filter_state_strategy",
    "make_product",
    "sample_catalog",
    "slug_strategy",
]
