"""Unit tests for FilterState and its facet vocabulary."""
from __future__ import annotations

import pytest

from storefront_query.application.filters import (
    Facet,
    FilterState,
    Flag,
    PriceRange,
    Sort,
    SortDirection,
    SortField,
)


class TestPriceRange:
    def test_integral_amounts_normalized(self) -> None:
        price_range = PriceRange(50.0, 200.0)
        assert price_range.min == 50 and isinstance(price_range.min, int)
        assert price_range.max == 200 and isinstance(price_range.max, int)

    def test_fractional_amounts_kept(self) -> None:
        assert PriceRange(9.99, 19.5).min == 9.99

    def test_equal_ranges_compare_equal(self) -> None:
        assert PriceRange(50, 200) == PriceRange(50.0, 200.0)

    @pytest.mark.parametrize(
        ("low", "high", "valid"),
        [(0, 0, True), (10, 5, False), (-1, 5, False), (5, float("inf"), False), (0, 10000, True)],
    )
    def test_is_valid(self, low: float, high: float, valid: bool) -> None:
        assert PriceRange(low, high).is_valid is valid


class TestSort:
    def test_default(self) -> None:
        assert Sort() == Sort(SortField.CREATED_AT, SortDirection.DESC)

    def test_str(self) -> None:
        assert str(Sort(SortField.PRICE, SortDirection.ASC)) == "price:asc"


class TestFilterStateDefaults:
    def test_defaults(self) -> None:
        state = FilterState()
        assert state.category is None
        assert state.price_range is None
        assert state.in_stock is False
        assert state.sort == Sort()
        assert state.page == 1
        assert state.page_size == 12
        assert not state.has_active_filters

    def test_defaults_page_size(self) -> None:
        assert FilterState.defaults(page_size=24).page_size == 24

    def test_structural_equality(self) -> None:
        assert FilterState(category="audio", price_range=PriceRange(1, 2)) == FilterState(
            category="audio", price_range=PriceRange(1.0, 2.0)
        )


class TestActiveFacets:
    def test_lists_active_facets_in_order(self) -> None:
        state = FilterState(category="audio", featured=True, search_query="bass")
        assert state.active_facets() == [
            (Facet.CATEGORY, "audio"),
            (Facet.FEATURED, True),
            (Facet.SEARCH, "bass"),
        ]
        assert state.has_active_filters

    def test_sort_and_page_are_not_facets(self) -> None:
        state = FilterState(sort=Sort(SortField.PRICE, SortDirection.ASC), page=3)
        assert state.active_facets() == []

    def test_without_clears_one_facet(self) -> None:
        state = FilterState(category="audio", brand="acme", page=4)
        cleared = state.without(Facet.BRAND)
        assert cleared.brand is None
        assert cleared.category == "audio"
        assert cleared.page == 4

    def test_flag_and_facet_attributes(self) -> None:
        assert Flag.IN_STOCK.attribute == "in_stock"
        assert Facet.RATING.attribute == "rating_floor"
        assert Facet.SEARCH.attribute == "search_query"


class TestInvariants:
    def test_well_formed_has_no_violations(self) -> None:
        assert FilterState(category="audio", rating_floor=4).invariant_violations() == []

    @pytest.mark.parametrize(
        "state",
        [
            FilterState(category="Audio"),
            FilterState(brand="acme inc"),
            FilterState(price_range=PriceRange(200, 50)),
            FilterState(rating_floor=6),
            FilterState(rating_floor=0),
            FilterState(search_query=""),
            FilterState(search_query="  padded "),
            FilterState(page=0),
            FilterState(page_size=0),
            FilterState(in_stock=1),  # type: ignore[arg-type]
        ],
    )
    def test_malformed_states_are_reported(self, state: FilterState) -> None:
        assert state.invariant_violations()

    def test_clamped_drops_bad_facets(self) -> None:
        state = FilterState(
            category="Audio",
            price_range=PriceRange(200, 50),
            rating_floor=9,
            search_query="  bass ",
            page=-2,
            page_size=0,
        )
        clamped = state.clamped()
        assert clamped.invariant_violations() == []
        assert clamped.category is None
        assert clamped.price_range is None
        assert clamped.rating_floor is None
        assert clamped.search_query == "bass"
        assert clamped.page == 1
        assert clamped.page_size == 12

    def test_clamped_keeps_good_facets(self) -> None:
        state = FilterState(category="audio", rating_floor=3, page=2)
        assert state.clamped() == state
