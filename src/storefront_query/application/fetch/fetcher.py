"""Application fetch – ProductFetcher.

Maps a :class:`CompiledQuery` to an in-flight or cached result:

* at most one request per distinct query value is in flight;
* a fresh cached page is served without a request;
* ``current`` is always the handle of the most recently requested query, and
  a response that arrives after its query was superseded is cached but never
  displayed;
* failures become ``status = error`` on the handle. Nothing is retried and
  the previously displayed page stays visible.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Callable

from storefront_query.application.fetch.cache import ResultCache
from storefront_query.application.fetch.ports import ProductRepository
from storefront_query.application.fetch.result import ProductPage
from storefront_query.application.query.compiler import CompiledQuery
from storefront_query.application.search.policy import SearchPolicy
from storefront_query.kernel.errors import BaseError, InfrastructureError
from storefront_query.kernel.time import Clock
from storefront_query.observability.logging import get_logger

__all__ = ["FetchHandle", "FetchListener", "FetchStatus", "ProductFetcher"]

logger = get_logger(__name__)


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchHandle:
    """Observable state of one fetch for one query value."""

    def __init__(
        self,
        query: CompiledQuery,
        *,
        status: FetchStatus = FetchStatus.IDLE,
        result: ProductPage | None = None,
    ) -> None:
        self.query = query
        self.key = query.cache_key
        self._status = status
        self._result = result
        self._error: BaseError | None = None
        self._done = asyncio.Event()
        if status is not FetchStatus.LOADING:
            self._done.set()

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def result(self) -> ProductPage | None:
        return self._result

    @property
    def error(self) -> BaseError | None:
        return self._error

    @property
    def is_settled(self) -> bool:
        return self._status is not FetchStatus.LOADING

    async def wait(self) -> "FetchHandle":
        await self._done.wait()
        return self

    def _succeed(self, page: ProductPage) -> None:
        self._status = FetchStatus.SUCCESS
        self._result = page
        self._done.set()

    def _fail(self, error: BaseError) -> None:
        self._status = FetchStatus.ERROR
        self._error = error
        self._done.set()

    def __repr__(self) -> str:
        return f"FetchHandle(key={self.key!r}, status={self._status.value!r})"


FetchListener = Callable[[FetchHandle], None]


class ProductFetcher:
    def __init__(
        self,
        repository: ProductRepository,
        *,
        clock: Clock | None = None,
        stale_time: float = 300.0,
        search_policy: SearchPolicy | None = None,
    ) -> None:
        self._repository = repository
        self._cache = ResultCache(clock=clock, stale_time=stale_time)
        self._policy = search_policy or SearchPolicy()
        self._inflight: dict[str, FetchHandle] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._current: FetchHandle | None = None
        self._displayed: ProductPage | None = None
        self._listeners: list[FetchListener] = []

    @property
    def current(self) -> FetchHandle | None:
        return self._current

    @property
    def displayed(self) -> ProductPage | None:
        """Last page whose query was current when it arrived."""
        return self._displayed

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def subscribe(self, listener: FetchListener) -> Callable[[], None]:
        """Register *listener*, called whenever the current handle settles."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def fetch(self, query: CompiledQuery) -> FetchHandle:
        """Return the handle for *query*, issuing a request only when needed.

        Must be called while an event loop is running.
        """
        if query.search_term is not None and not self._policy.is_searchable(query.search_term):
            logger.debug("fetch_skipped_short_term", length=len(query.search_term))
            handle = FetchHandle(query)
            self._current = handle
            return handle

        key = query.cache_key
        entry = self._cache.get(key)
        if entry is not None:
            logger.debug("fetch_cache_hit", key=key)
            handle = FetchHandle(query, status=FetchStatus.SUCCESS, result=entry.page)
            self._current = handle
            self._display(handle)
            return handle

        inflight = self._inflight.get(key)
        if inflight is not None:
            logger.debug("fetch_joined_inflight", key=key)
            self._current = inflight
            return inflight

        handle = FetchHandle(query, status=FetchStatus.LOADING)
        self._inflight[key] = handle
        self._current = handle
        task = asyncio.get_running_loop().create_task(self._run(handle))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return handle

    def invalidate(self, query: CompiledQuery | None = None) -> int:
        """Forget cached pages for *query*, or all of them."""
        removed = self._cache.invalidate(None if query is None else query.cache_key)
        logger.debug("fetch_cache_invalidated", removed=removed)
        return removed

    async def _run(self, handle: FetchHandle) -> None:
        logger.debug("fetch_started", key=handle.key, sort=handle.query.sort, page=handle.query.page)
        error: BaseError | None = None
        try:
            page = await self._repository.find_products(handle.query)
        except BaseError as exc:
            error = exc
        except Exception as exc:
            logger.exception("fetch_unexpected_error", key=handle.key)
            error = InfrastructureError("Unexpected repository failure", cause=exc)
        finally:
            self._inflight.pop(handle.key, None)

        if error is not None:
            self._settle_error(handle, error)
            return
        self._cache.put(handle.key, page)
        handle._succeed(page)
        if self._is_current(handle):
            logger.debug("fetch_succeeded", key=handle.key, total=page.pagination.total)
            self._display(handle)
        else:
            logger.info("stale_response_dropped", key=handle.key)

    def _settle_error(self, handle: FetchHandle, error: BaseError) -> None:
        handle._fail(error)
        logger.warning("fetch_failed", key=handle.key, error=error.to_dict())
        if self._is_current(handle):
            self._notify(handle)

    def _is_current(self, handle: FetchHandle) -> bool:
        return self._current is not None and self._current.key == handle.key

    def _display(self, handle: FetchHandle) -> None:
        self._displayed = handle.result
        self._notify(handle)

    def _notify(self, handle: FetchHandle) -> None:
        # Runs inside the fetch task; a raising listener must not abort the task.
        for listener in list(self._listeners):
            try:
                listener(handle)
            except Exception:
                logger.exception("fetch_listener_failed", key=handle.key, status=handle.status.value)
