"""Application discovery – search-as-you-type suggestions."""
from __future__ import annotations

import dataclasses

from storefront_query.application.fetch.fetcher import FetchStatus, ProductFetcher
from storefront_query.application.fetch.result import Product
from storefront_query.application.filters.state import FilterState
from storefront_query.application.query.compiler import compile_query
from storefront_query.application.search.policy import SearchPolicy
from storefront_query.kernel.errors import BaseError

__all__ = ["SearchSuggestions", "Suggestions"]


@dataclasses.dataclass(frozen=True)
class Suggestions:
    term: str
    items: tuple[Product, ...]
    total: int
    error: BaseError | None = None

    @property
    def has_more(self) -> bool:
        """True when a "view all results" link should be offered."""
        return self.total > len(self.items)


class SearchSuggestions:
    """Looks up the first few matches for a settled search term.

    Give it a fetcher of its own: looking up suggestions must not replace
    the listing's current query.
    """

    def __init__(
        self,
        fetcher: ProductFetcher,
        *,
        policy: SearchPolicy | None = None,
        limit: int = 6,
    ) -> None:
        self._fetcher = fetcher
        self._policy = policy or SearchPolicy()
        self._limit = limit

    async def lookup(self, text: str | None) -> Suggestions | None:
        """Return suggestions for *text*, or ``None`` when the dropdown should close."""
        term = self._policy.display_term(text)
        if term is None:
            return None
        query = compile_query(FilterState(search_query=term, page_size=self._limit))
        handle = await self._fetcher.fetch(query).wait()
        if handle.status is FetchStatus.ERROR:
            return Suggestions(term=term, items=(), total=0, error=handle.error)
        page = handle.result
        if page is None:
            return Suggestions(term=term, items=(), total=0)
        return Suggestions(term=term, items=page.items, total=page.pagination.total)
