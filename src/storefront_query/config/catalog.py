"""Config – CatalogSettings for the product discovery core."""
from __future__ import annotations

import dataclasses

from storefront_query.config.settings.base import Settings
from storefront_query.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class CatalogSettings(Settings):
    """Tunables for filtering, searching and fetching.

    ``max_price_sentinel`` is the upper bound given to a price range when the
    shopper only types a minimum. It is a business choice, not an algorithmic
    constant.
    """

    _prefix = "STOREFRONT"

    repository_url: str = "http://localhost:1337/api"
    request_timeout: float = 10.0
    populate: str = "mainImage,images,category,brand,tags"
    default_page_size: int = 12
    max_price_sentinel: float = 10000.0
    search_debounce_seconds: float = 0.3
    min_search_length: int = 2
    stale_time_seconds: float = 300.0
    suggestion_limit: int = 6
    strict_invariants: bool = True

    def _validate(self) -> None:
        if self.default_page_size < 1:
            raise InvalidSettingValueError("default_page_size", self.default_page_size, "must be >= 1")
        if self.max_price_sentinel <= 0:
            raise InvalidSettingValueError("max_price_sentinel", self.max_price_sentinel, "must be > 0")
        if self.search_debounce_seconds < 0:
            raise InvalidSettingValueError(
                "search_debounce_seconds", self.search_debounce_seconds, "must be >= 0"
            )
        if self.min_search_length < 0:
            raise InvalidSettingValueError("min_search_length", self.min_search_length, "must be >= 0")
        if self.stale_time_seconds < 0:
            raise InvalidSettingValueError("stale_time_seconds", self.stale_time_seconds, "must be >= 0")
        if self.suggestion_limit < 1:
            raise InvalidSettingValueError("suggestion_limit", self.suggestion_limit, "must be >= 1")
        if self.request_timeout <= 0:
            raise InvalidSettingValueError("request_timeout", self.request_timeout, "must be > 0")


__all__ = ["CatalogSettings"]
