"""Application discovery – DiscoverySession.

One product-listing page: the entry URL seeds the filter state, every store
change is compiled and fetched, and the URL follows the store.

Usage::

    session = DiscoverySession(repository, history, settings=settings)
    handle = session.open()
    await handle.wait()
    session.store.set_category("audio")
    session.type_search("wireless")
"""
from __future__ import annotations

from typing import Callable

from storefront_query.application.discovery.suggestions import SearchSuggestions, Suggestions
from storefront_query.application.fetch.fetcher import FetchHandle, FetchListener, ProductFetcher
from storefront_query.application.fetch.ports import ProductRepository
from storefront_query.application.fetch.result import ProductPage
from storefront_query.application.filters.state import FilterState
from storefront_query.application.filters.store import FilterStore, StateChange
from storefront_query.application.query.compiler import CompiledQuery, compile_query
from storefront_query.application.search.debouncer import SearchDebouncer
from storefront_query.application.search.policy import SearchPolicy
from storefront_query.application.urlsync.codec import UrlCodec
from storefront_query.application.urlsync.sync import History, UrlSync
from storefront_query.config import CatalogSettings
from storefront_query.kernel.time import Clock, Timer
from storefront_query.observability.logging import get_logger

__all__ = ["DiscoverySession"]

logger = get_logger(__name__)


class DiscoverySession:
    def __init__(
        self,
        repository: ProductRepository,
        history: History,
        *,
        settings: CatalogSettings | None = None,
        clock: Clock | None = None,
        timer: Timer | None = None,
    ) -> None:
        self._settings = settings or CatalogSettings()
        policy = SearchPolicy(min_length=self._settings.min_search_length)
        codec = UrlCodec.from_settings(self._settings)

        self.store = FilterStore(codec.parse_url(history.current_url), settings=self._settings)
        self.url_sync = UrlSync(self.store, history, codec=codec)
        self.fetcher = ProductFetcher(
            repository,
            clock=clock,
            stale_time=self._settings.stale_time_seconds,
            search_policy=policy,
        )
        self.suggestions = SearchSuggestions(
            ProductFetcher(
                repository,
                clock=clock,
                stale_time=self._settings.stale_time_seconds,
                search_policy=policy,
            ),
            policy=policy,
            limit=self._settings.suggestion_limit,
        )
        self.debouncer = SearchDebouncer(
            self._on_search_settled,
            window=self._settings.search_debounce_seconds,
            timer=timer,
        )
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> FilterState:
        return self.store.state

    @property
    def current(self) -> FetchHandle | None:
        return self.fetcher.current

    @property
    def results(self) -> ProductPage | None:
        """Page currently on screen (kept while a newer query loads or fails)."""
        return self.fetcher.displayed

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    def open(self) -> FetchHandle:
        """Start following the store and fetch the entry state."""
        if self._unsubscribe is None:
            self.url_sync.attach()
            self._unsubscribe = self.store.subscribe(self._on_change)
            logger.info("discovery_session_opened", active=[facet.value for facet, _ in self.state.active_facets()])
        return self._fetch(self.state)

    def refresh(self) -> FetchHandle:
        """Drop the cached page for the current state and fetch it again."""
        query = self._compile(self.state)
        self.fetcher.invalidate(query)
        return self.fetcher.fetch(query)

    def subscribe(self, listener: FetchListener) -> Callable[[], None]:
        return self.fetcher.subscribe(listener)

    def type_search(self, text: str) -> None:
        """Feed one keystroke's worth of input; the term lands after the debounce window."""
        self.debouncer.push(text)

    def submit_search(self, text: str) -> FilterState:
        """Apply *text* now as an explicit search (new history entry)."""
        self.debouncer.cancel()
        return self.store.set_search_query(text, submit=True)

    async def suggest(self, text: str) -> Suggestions | None:
        return await self.suggestions.lookup(text)

    def navigate(self, url: str) -> FilterState:
        return self.url_sync.navigate(url)

    def load_more(self) -> FetchHandle | None:
        """Advance to the next page, or return ``None`` on the last one."""
        page = self.results
        if page is None or page.next_page is None:
            return None
        self.store.set_page(page.next_page)
        return self.current

    def close(self) -> None:
        self.debouncer.cancel()
        self.url_sync.detach()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
            logger.info("discovery_session_closed")

    def _on_search_settled(self, text: str) -> None:
        self.store.set_search_query(text)

    def _on_change(self, change: StateChange) -> None:
        self._fetch(change.current)

    def _compile(self, state: FilterState) -> CompiledQuery:
        return compile_query(state, strict=self._settings.strict_invariants)

    def _fetch(self, state: FilterState) -> FetchHandle:
        return self.fetcher.fetch(self._compile(state))
