"""Application urlsync – keep the address bar and the FilterStore in step.

Store → URL: every published change is written through the :class:`History`
port. Search submissions push a new entry so Back returns to the previous
results; every other change replaces the current entry.

URL → store: :meth:`UrlSync.navigate` (back/forward) parses the URL and
replaces the store state without writing the URL back.
"""
from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from storefront_query.application.filters.state import FilterState
from storefront_query.application.filters.store import FilterStore, Mutation, StateChange
from storefront_query.application.urlsync.codec import UrlCodec
from storefront_query.observability.logging import get_logger

__all__ = ["History", "UrlSync"]

logger = get_logger(__name__)

_PUSH_MUTATIONS = frozenset({Mutation.SUBMIT_SEARCH})


@runtime_checkable
class History(Protocol):
    """Port: the browser history / address bar."""

    @property
    def current_url(self) -> str: ...

    def push(self, url: str) -> None: ...

    def replace(self, url: str) -> None: ...


class UrlSync:
    def __init__(
        self,
        store: FilterStore,
        history: History,
        *,
        codec: UrlCodec | None = None,
    ) -> None:
        self._store = store
        self._history = history
        self._codec = codec or UrlCodec(page_size=store.defaults.page_size)
        self._unsubscribe: Callable[[], None] | None = None
        self._navigating = False

    @property
    def is_attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def read(self) -> FilterState:
        """State encoded in the current URL."""
        return self._codec.parse_url(self._history.current_url)

    def url_for(self, state: FilterState) -> str:
        return self._codec.format_url(self._history.current_url, state)

    def navigate(self, url: str) -> FilterState:
        """Adopt the state of *url* after a back/forward navigation.

        The page size is not part of the URL, so the store keeps its own.
        """
        state = self._codec.parse_url(url).copy_with(page_size=self._store.state.page_size)
        if state == self._store.state:
            return state
        self._navigating = True
        try:
            return self._store.replace(state)
        finally:
            self._navigating = False

    def _on_change(self, change: StateChange) -> None:
        if self._navigating:
            return
        url = self.url_for(change.current)
        if url == self._history.current_url:
            return
        if change.mutation in _PUSH_MUTATIONS:
            logger.debug("url_pushed", url=url)
            self._history.push(url)
        else:
            logger.debug("url_replaced", url=url)
            self._history.replace(url)
