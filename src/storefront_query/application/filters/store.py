"""Application filters – FilterStore, the single owner of the FilterState.

Every facet change goes through one of the mutation methods below. Each
successful mutation replaces the state and publishes one :class:`StateChange`
to subscribers; rejected mutations raise :class:`FilterValidationError` and
leave the state untouched.

Every mutation except :meth:`FilterStore.set_page` sends the shopper back to
page 1, because the old page is not guaranteed to exist in the new result set.
"""
from __future__ import annotations

import dataclasses
import math
from collections import deque
from enum import Enum
from typing import Callable

from storefront_query.application.filters.state import (
    MAX_RATING,
    MIN_RATING,
    Facet,
    FilterState,
    Flag,
    PriceRange,
    Sort,
    SortDirection,
    SortField,
)
from storefront_query.config import CatalogSettings
from storefront_query.kernel.errors import FilterValidationError, InvariantViolationError
from storefront_query.kernel.types import Slug
from storefront_query.observability.logging import get_logger

__all__ = ["FilterStore", "Listener", "Mutation", "StateChange"]

logger = get_logger(__name__)


class Mutation(str, Enum):
    SET_CATEGORY = "set_category"
    SET_BRAND = "set_brand"
    SET_PRICE_RANGE = "set_price_range"
    SET_RATING_FLOOR = "set_rating_floor"
    TOGGLE_FLAG = "toggle_flag"
    SET_SEARCH_QUERY = "set_search_query"
    SUBMIT_SEARCH = "submit_search"
    SET_SORT = "set_sort"
    SET_PAGE = "set_page"
    SET_PAGE_SIZE = "set_page_size"
    CLEAR_ALL = "clear_all"
    REMOVE_FACET = "remove_facet"
    REPLACE = "replace"


@dataclasses.dataclass(frozen=True)
class StateChange:
    previous: FilterState
    current: FilterState
    mutation: Mutation


Listener = Callable[[StateChange], None]


class FilterStore:
    """Holds the current :class:`FilterState` and applies facet mutations."""

    def __init__(
        self,
        initial: FilterState | None = None,
        *,
        settings: CatalogSettings | None = None,
    ) -> None:
        self._settings = settings or CatalogSettings()
        self._defaults = FilterState.defaults(page_size=self._settings.default_page_size)
        state = initial if initial is not None else self._defaults
        violations = state.invariant_violations()
        if violations:
            raise InvariantViolationError("Initial FilterState is malformed", violations=violations)
        self._state = state
        self._listeners: list[Listener] = []
        self._queue: deque[StateChange] = deque()
        self._dispatching = False

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def defaults(self) -> FilterState:
        return self._defaults

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Facet mutations
    # ------------------------------------------------------------------

    def set_category(self, slug: str) -> FilterState:
        """Select *slug*, or clear the category when it is already selected."""
        self._require_slug("category", slug)
        value = None if self._state.category == slug else slug
        return self._commit(self._state.copy_with(category=value), Mutation.SET_CATEGORY)

    def set_brand(self, slug: str) -> FilterState:
        self._require_slug("brand", slug)
        value = None if self._state.brand == slug else slug
        return self._commit(self._state.copy_with(brand=value), Mutation.SET_BRAND)

    def set_price_range(
        self,
        min_price: float | int | None = None,
        max_price: float | int | None = None,
    ) -> FilterState:
        """Apply a price range; one-sided input is completed with default bounds.

        Only *min_price* → the upper bound is ``max_price_sentinel``.
        Only *max_price* → the lower bound is 0. Neither → the facet is
        cleared.
        """
        for name, amount in (("min_price", min_price), ("max_price", max_price)):
            if amount is None:
                continue
            if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not math.isfinite(amount):
                raise self._reject("price_range", f"{name} must be a finite number", amount)
            if amount < 0:
                raise self._reject("price_range", f"{name} must not be negative", amount)

        if min_price is None and max_price is None:
            price_range = None
        else:
            low = 0 if min_price is None else min_price
            high = self._settings.max_price_sentinel if max_price is None else max_price
            if low > high:
                raise self._reject(
                    "price_range",
                    f"Minimum price {low} is greater than maximum price {high}",
                    (min_price, max_price),
                )
            price_range = PriceRange(low, high)
        return self._commit(self._state.copy_with(price_range=price_range), Mutation.SET_PRICE_RANGE)

    def set_rating_floor(self, rating: int) -> FilterState:
        """Select a minimum rating, or clear it when it is already selected."""
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise self._reject("rating_floor", f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}", rating)
        value = None if self._state.rating_floor == rating else rating
        return self._commit(self._state.copy_with(rating_floor=value), Mutation.SET_RATING_FLOOR)

    def toggle_flag(self, flag: Flag | str) -> FilterState:
        try:
            flag = Flag(flag)
        except ValueError:
            raise self._reject("flag", f"Unknown flag {flag!r}", flag) from None
        current = getattr(self._state, flag.attribute)
        return self._commit(self._state.copy_with(**{flag.attribute: not current}), Mutation.TOGGLE_FLAG)

    def set_search_query(self, text: str | None, *, submit: bool = False) -> FilterState:
        """Set the free-text term; blank input clears it.

        Keystrokes are expected to arrive already debounced. ``submit=True``
        marks an explicit search submission (a new navigation entry).
        """
        term = (text or "").strip() or None
        mutation = Mutation.SUBMIT_SEARCH if submit else Mutation.SET_SEARCH_QUERY
        return self._commit(self._state.copy_with(search_query=term), mutation)

    def set_sort(self, field: SortField | str, direction: SortDirection | str) -> FilterState:
        try:
            sort = Sort(SortField(field), SortDirection(direction))
        except ValueError:
            raise self._reject("sort", f"Unknown sort {field!r} {direction!r}", (field, direction)) from None
        return self._commit(self._state.copy_with(sort=sort), Mutation.SET_SORT)

    def remove_facet(self, facet: Facet | str) -> FilterState:
        """Clear one facet regardless of its current value."""
        try:
            facet = Facet(facet)
        except ValueError:
            raise self._reject("facet", f"Unknown facet {facet!r}", facet) from None
        return self._commit(self._state.without(facet), Mutation.REMOVE_FACET)

    def clear_all(self) -> FilterState:
        """Reset every facet and the sort order; the page size is kept."""
        cleared = self._defaults.copy_with(page_size=self._state.page_size)
        return self._commit(cleared, Mutation.CLEAR_ALL)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def set_page(self, page: int) -> FilterState:
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise self._reject("page", "Page must be a positive integer", page)
        return self._commit(self._state.copy_with(page=page), Mutation.SET_PAGE, reset_page=False)

    def set_page_size(self, page_size: int) -> FilterState:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise self._reject("page_size", "Page size must be a positive integer", page_size)
        return self._commit(self._state.copy_with(page_size=page_size), Mutation.SET_PAGE_SIZE)

    def replace(self, state: FilterState) -> FilterState:
        """Adopt a whole state, e.g. one parsed from a back/forward navigation."""
        violations = state.invariant_violations()
        if violations:
            raise self._reject("state", "; ".join(violations), state)
        return self._commit(state, Mutation.REPLACE, reset_page=False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_slug(self, field: str, slug: object) -> None:
        if not Slug.is_valid(slug):
            raise self._reject(field, f"Invalid {field} slug {slug!r}", slug)

    def _reject(self, field: str, message: str, value: object) -> FilterValidationError:
        logger.info("filter_mutation_rejected", field=field, reason=message)
        return FilterValidationError(field, message, value=value)

    def _commit(self, state: FilterState, mutation: Mutation, *, reset_page: bool = True) -> FilterState:
        if reset_page:
            state = state.copy_with(page=1)
        change = StateChange(previous=self._state, current=state, mutation=mutation)
        self._state = state
        logger.debug(
            "filter_state_changed",
            mutation=mutation.value,
            page=state.page,
            active=[facet.value for facet, _ in state.active_facets()],
        )
        self._publish(change)
        return state

    def _publish(self, change: StateChange) -> None:
        # Changes made from inside a listener are delivered after the
        # current round, in the order they were applied. A raising listener
        # ends the round and drops whatever is still queued.
        self._queue.append(change)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                pending = self._queue.popleft()
                for listener in list(self._listeners):
                    listener(pending)
        except Exception:
            logger.warning(
                "filter_notification_aborted", mutation=change.mutation.value, dropped=len(self._queue)
            )
            raise
        finally:
            self._queue.clear()
            self._dispatching = False
