"""Application fetch – ResultCache with a freshness window."""
from __future__ import annotations

import dataclasses

from storefront_query.application.fetch.result import ProductPage
from storefront_query.kernel.time import Clock, SystemClock

__all__ = ["CacheEntry", "ResultCache"]


@dataclasses.dataclass(frozen=True)
class CacheEntry:
    page: ProductPage
    fetched_at: float


class ResultCache:
    """Successful pages keyed by compiled-query cache key.

    Entries are immutable; storing a page for an existing key inserts a new
    entry. Entries older than ``stale_time`` seconds are evicted on read, and
    every ``put`` sweeps the expired entries of other keys.
    """

    def __init__(self, *, clock: Clock | None = None, stale_time: float = 300.0) -> None:
        self._clock: Clock = clock or SystemClock()
        self._stale_time = stale_time
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock.timestamp()):
            del self._entries[key]
            return None
        return entry

    def put(self, key: str, page: ProductPage) -> CacheEntry:
        now = self._clock.timestamp()
        self.evict_expired(now)
        entry = CacheEntry(page=page, fetched_at=now)
        self._entries[key] = entry
        return entry

    def evict_expired(self, now: float | None = None) -> int:
        """Drop every entry past the freshness window; returns the number removed."""
        if now is None:
            now = self._clock.timestamp()
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.fetched_at >= self._stale_time

    def invalidate(self, key: str | None = None) -> int:
        """Drop *key* (or every entry when ``None``); returns the number removed."""
        if key is None:
            removed = len(self._entries)
            self._entries.clear()
            return removed
        return 1 if self._entries.pop(key, None) is not None else 0

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
