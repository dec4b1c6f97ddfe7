"""Application fetch – ProductRepository port."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from storefront_query.application.fetch.result import ProductPage
from storefront_query.application.query.compiler import CompiledQuery

__all__ = ["ProductRepository"]


@runtime_checkable
class ProductRepository(Protocol):
    """Port: executes a compiled query against the content repository.

    Implementations raise :class:`~storefront_query.kernel.errors.InfrastructureError`
    subclasses on failure and never retry.
    """

    async def find_products(self, query: CompiledQuery) -> ProductPage: ...
