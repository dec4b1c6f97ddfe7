"""Unit tests for the URL codec and UrlSync."""
from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from storefront_query.application.filters import FilterState, FilterStore, Flag, PriceRange, Sort, SortDirection, SortField
from storefront_query.application.urlsync import UrlCodec, UrlSync, parse_query_string, to_query_params
from storefront_query.testing import InMemoryHistory

BASE = "https://shop.test/products"


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


class TestEncode:
    def test_default_state_writes_nothing(self) -> None:
        assert UrlCodec().encode(FilterState()) == {}

    def test_all_fields(self) -> None:
        state = FilterState(
            category="audio",
            brand="acme",
            price_range=PriceRange(50, 200),
            rating_floor=4,
            in_stock=True,
            featured=True,
            trending=True,
            search_query="wireless bass",
            sort=Sort(SortField.PRICE, SortDirection.ASC),
            page=3,
        )
        assert UrlCodec().encode(state) == {
            "category": "audio",
            "brand": "acme",
            "minPrice": "50",
            "maxPrice": "200",
            "rating": "4",
            "inStock": "true",
            "featured": "true",
            "trending": "true",
            "q": "wireless bass",
            "sort": "price",
            "dir": "asc",
            "page": "3",
        }

    def test_only_min_omits_sentinel(self) -> None:
        assert UrlCodec().encode(FilterState(price_range=PriceRange(50, 10000))) == {"minPrice": "50"}

    def test_only_max_omits_zero(self) -> None:
        assert UrlCodec().encode(FilterState(price_range=PriceRange(0, 200))) == {"maxPrice": "200"}

    def test_full_default_range_still_written(self) -> None:
        assert UrlCodec().encode(FilterState(price_range=PriceRange(0, 10000))) == {"minPrice": "0"}

    def test_fractional_price(self) -> None:
        assert UrlCodec().encode(FilterState(price_range=PriceRange(9.99, 10000)))["minPrice"] == "9.99"

    def test_page_size_not_written(self) -> None:
        assert UrlCodec().encode(FilterState(page_size=48)) == {}

    def test_module_helper(self) -> None:
        assert to_query_params(FilterState(category="audio")) == {"category": "audio"}


class TestDecode:
    def test_empty(self) -> None:
        assert parse_query_string("") == FilterState()

    def test_all_fields(self) -> None:
        state = parse_query_string(
            "?category=audio&brand=acme&minPrice=50&maxPrice=200&rating=4&inStock=true"
            "&featured=1&trending=yes&q=wireless+bass&sort=price&dir=asc&page=3"
        )
        assert state == FilterState(
            category="audio",
            brand="acme",
            price_range=PriceRange(50, 200),
            rating_floor=4,
            in_stock=True,
            featured=True,
            trending=True,
            search_query="wireless bass",
            sort=Sort(SortField.PRICE, SortDirection.ASC),
            page=3,
        )

    def test_one_sided_prices(self) -> None:
        assert parse_query_string("minPrice=50").price_range == PriceRange(50, 10000)
        assert parse_query_string("maxPrice=200").price_range == PriceRange(0, 200)

    @pytest.mark.parametrize(
        ("qs", "field", "default"),
        [
            ("category=Not%20A%20Slug", "category", None),
            ("minPrice=abc", "price_range", None),
            ("minPrice=300&maxPrice=100", "price_range", None),
            ("minPrice=-5", "price_range", None),
            ("rating=9", "rating_floor", None),
            ("rating=four", "rating_floor", None),
            ("inStock=maybe", "in_stock", False),
            ("sort=popularity", "sort", Sort()),
            ("page=0", "page", 1),
            ("page=-2", "page", 1),
            ("page=two", "page", 1),
            ("q=%20%20", "search_query", None),
        ],
    )
    def test_invalid_values_fall_back(self, qs: str, field: str, default: object) -> None:
        assert getattr(parse_query_string(qs), field) == default

    def test_unknown_parameters_ignored(self) -> None:
        assert parse_query_string("utm_source=mail&colour=red") == FilterState()

    def test_sort_direction_independent(self) -> None:
        assert parse_query_string("dir=asc").sort == Sort(SortField.CREATED_AT, SortDirection.ASC)

    def test_page_size_from_defaults(self) -> None:
        assert parse_query_string("", FilterState(page_size=24)).page_size == 24

    def test_search_is_trimmed(self) -> None:
        assert parse_query_string("q=%20bass%20").search_query == "bass"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "state",
        [
            FilterState(),
            FilterState(price_range=PriceRange(50, 10000)),
            FilterState(price_range=PriceRange(0, 200)),
            FilterState(price_range=PriceRange(0, 0)),
            FilterState(price_range=PriceRange(0, 10000)),
            FilterState(price_range=PriceRange(12.5, 99.99)),
            FilterState(search_query="50% off & more"),
            FilterState(category="home-and-garden", rating_floor=1, page=7),
        ],
    )
    def test_parse_of_encode_is_identity(self, state: FilterState) -> None:
        codec = UrlCodec()
        assert codec.parse_url(codec.format_url(BASE, state)) == state


class TestFormatUrl:
    def test_keeps_foreign_parameters(self) -> None:
        url = UrlCodec().format_url(f"{BASE}?utm_source=mail&category=video", FilterState(category="audio"))
        assert _query(url) == {"category": ["audio"], "utm_source": ["mail"]}
        assert url.startswith(BASE)

    def test_clears_owned_parameters(self) -> None:
        url = UrlCodec().format_url(f"{BASE}?category=video&page=2", FilterState())
        assert url == BASE


class TestUrlSync:
    def _wire(self, url: str = BASE) -> tuple[FilterStore, InMemoryHistory, UrlSync]:
        history = InMemoryHistory(url)
        store = FilterStore()
        sync = UrlSync(store, history)
        sync.attach()
        return store, history, sync

    def test_mutation_replaces_url(self) -> None:
        store, history, _ = self._wire()
        store.set_category("audio")
        assert history.current_url == f"{BASE}?category=audio"
        assert history.replaces == 1
        assert history.pushes == 0

    def test_search_submission_pushes(self) -> None:
        store, history, _ = self._wire()
        store.set_search_query("bass", submit=True)
        assert history.pushes == 1
        assert len(history.entries) == 2
        assert _query(history.current_url) == {"q": ["bass"]}

    def test_unchanged_url_not_written(self) -> None:
        store, history, _ = self._wire()
        store.set_page(1)
        assert history.replaces == 0

    def test_foreign_parameters_preserved(self) -> None:
        store, history, _ = self._wire(f"{BASE}?utm_source=mail")
        store.toggle_flag(Flag.FEATURED)
        assert _query(history.current_url) == {"featured": ["true"], "utm_source": ["mail"]}

    def test_navigate_updates_store_without_writing(self) -> None:
        store, history, sync = self._wire()
        state = sync.navigate(f"{BASE}?category=video&page=2")
        assert store.state == state == FilterState(category="video", page=2)
        assert history.replaces == 0
        assert history.pushes == 0

    def test_navigate_back_after_push(self) -> None:
        store, history, sync = self._wire()
        store.set_category("audio")
        store.set_search_query("bass", submit=True)
        sync.navigate(history.back())
        assert store.state == FilterState(category="audio")

    def test_detach_stops_writing(self) -> None:
        store, history, sync = self._wire()
        sync.detach()
        store.set_category("audio")
        assert history.current_url == BASE
        assert not sync.is_attached

    def test_read_current_url(self) -> None:
        _, _, sync = self._wire(f"{BASE}?rating=3")
        assert sync.read() == FilterState(rating_floor=3)

    def test_navigate_keeps_page_size(self) -> None:
        store, history, sync = self._wire()
        store.set_page_size(24)
        store.set_search_query("shoes", submit=True)
        store.set_category("audio")
        state = sync.navigate(history.back())
        assert state.page_size == 24
        assert store.state == FilterState(page_size=24)
