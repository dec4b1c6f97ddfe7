"""Property-based tests for the filter → query → URL pipeline."""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from storefront_query.application.filters import FilterState, FilterStore, Flag
from storefront_query.application.query import compile_query
from storefront_query.application.urlsync import UrlCodec
from storefront_query.kernel.errors import FilterValidationError
from storefront_query.testing.generators import filter_state_strategy, slug_strategy

BASE = "https://shop.test/products"


class TestCompilerProperties:
    @given(filter_state_strategy())
    def test_generated_states_are_well_formed(self, state: FilterState) -> None:
        assert state.invariant_violations() == []

    @given(filter_state_strategy())
    def test_compile_is_deterministic(self, state: FilterState) -> None:
        rebuilt = FilterState(**{f: getattr(state, f) for f in state.__dataclass_fields__})
        first, second = compile_query(state), compile_query(rebuilt)
        assert first == second
        assert first.cache_key == second.cache_key

    @given(filter_state_strategy())
    def test_one_clause_per_active_facet(self, state: FilterState) -> None:
        assert len(compile_query(state).clauses) == len(state.active_facets())


class TestStoreProperties:
    @given(filter_state_strategy())
    def test_clear_all_is_idempotent(self, state: FilterState) -> None:
        store = FilterStore(state)
        first = store.clear_all()
        assert store.clear_all() == first
        assert first == FilterState(page_size=state.page_size)

    @given(filter_state_strategy(), slug_strategy())
    def test_category_toggle_twice_restores_facets(self, state: FilterState, slug: str) -> None:
        store = FilterStore(state.copy_with(page=1))
        before = store.state
        store.set_category(slug)
        store.set_category(slug)
        if before.category == slug:
            # first call cleared it, second re-selected it
            assert store.state == before
        else:
            assert store.state == before.copy_with(category=None)

    @given(filter_state_strategy(), st.sampled_from(list(Flag)))
    def test_flag_toggle_is_an_involution(self, state: FilterState, flag: Flag) -> None:
        store = FilterStore(state.copy_with(page=1))
        before = store.state
        store.toggle_flag(flag)
        store.toggle_flag(flag)
        assert store.state == before

    @given(filter_state_strategy(), st.integers(min_value=0, max_value=10000), st.integers(min_value=0, max_value=10000))
    def test_price_range_never_inverted(self, state: FilterState, low: int, high: int) -> None:
        store = FilterStore(state)
        try:
            result = store.set_price_range(low, high)
        except FilterValidationError:
            assert low > high
            assert store.state == state
        else:
            assert result.price_range is not None
            assert result.price_range.min <= result.price_range.max
            assert result.page == 1


class TestUrlProperties:
    @settings(max_examples=200)
    @given(filter_state_strategy())
    def test_url_round_trip(self, state: FilterState) -> None:
        codec = UrlCodec()
        assert codec.parse_url(codec.format_url(BASE, state)) == state

    @given(st.dictionaries(st.sampled_from(["category", "minPrice", "maxPrice", "rating", "page", "sort", "q", "x"]), st.text(max_size=12)))
    def test_decode_never_produces_malformed_state(self, params: dict[str, str]) -> None:
        assert UrlCodec().decode(params).invariant_violations() == []
