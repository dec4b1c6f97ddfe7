"""Testing fakes – in-memory doubles for the application ports."""
from storefront_query.testing.fakes.catalog import make_product, sample_catalog
from storefront_query.testing.fakes.clock import FakeClock
from storefront_query.testing.fakes.history import InMemoryHistory
from storefront_query.testing.fakes.repository import FakeProductRepository
from storefront_query.testing.fakes.timer import ManualTimer, ManualTimerHandle

__all__ = [
    "FakeClock",
    "FakeProductRepository",
    "InMemoryHistory",
    "ManualTimer",
    "ManualTimerHandle",
    "make_product",
    "sample_catalog",
]
