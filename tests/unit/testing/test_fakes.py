"""Unit tests for the testing fakes."""
from __future__ import annotations

import asyncio

import pytest

from storefront_query.application.filters import FilterState, Sort, SortDirection, SortField
from storefront_query.application.query import compile_query
from storefront_query.testing import (
    FakeClock,
    FakeProductRepository,
    InMemoryHistory,
    ManualTimer,
    make_product,
    sample_catalog,
)


class TestFakeClock:
    def test_pinned(self) -> None:
        clk = FakeClock()
        assert clk.now().year == 2026
        assert clk.now() == FakeClock().now()


class TestManualTimer:
    def test_fires_in_schedule_order(self) -> None:
        timer = ManualTimer()
        fired: list[str] = []
        timer.call_later(0.5, lambda: fired.append("late"))
        timer.call_later(0.1, lambda: fired.append("early"))
        assert timer.advance(1) == 2
        assert fired == ["early", "late"]

    def test_cancelled_handle_skipped(self) -> None:
        timer = ManualTimer()
        fired: list[str] = []
        handle = timer.call_later(0.1, lambda: fired.append("x"))
        handle.cancel()
        timer.advance(1)
        assert fired == []
        assert timer.pending == []

    def test_callback_can_schedule_more(self) -> None:
        timer = ManualTimer()
        fired: list[float] = []

        def chain() -> None:
            fired.append(timer.now)
            if len(fired) < 3:
                timer.call_later(0.25, chain)

        timer.call_later(0.25, chain)
        timer.advance(1)
        assert fired == [0.25, 0.5, 0.75]


class TestInMemoryHistory:
    def test_push_truncates_forward_entries(self) -> None:
        history = InMemoryHistory("/a")
        history.push("/b")
        history.push("/c")
        assert history.back() == "/b"
        history.push("/d")
        assert history.entries == ["/a", "/b", "/d"]
        assert history.forward() == "/d"

    def test_replace(self) -> None:
        history = InMemoryHistory("/a")
        history.replace("/a?x=1")
        assert history.entries == ["/a?x=1"]
        assert history.replaces == 1


class TestFakeProductRepository:
    def test_filters_and_sorts(self) -> None:
        repo = FakeProductRepository(sample_catalog())
        query = compile_query(
            FilterState(in_stock=True, rating_floor=4, sort=Sort(SortField.PRICE, SortDirection.DESC))
        )
        page = asyncio.run(repo.find_products(query))
        assert [p.id for p in page.items] == [4, 1]

    def test_missing_sort_values_last(self) -> None:
        repo = FakeProductRepository(sample_catalog())
        query = compile_query(FilterState(sort=Sort(SortField.RATING, SortDirection.ASC)))
        page = asyncio.run(repo.find_products(query))
        assert page.items[-1].id == 6

    def test_paginates(self) -> None:
        repo = FakeProductRepository([make_product(i) for i in range(1, 6)])
        page = asyncio.run(repo.find_products(compile_query(FilterState(page=2, page_size=2))))
        assert len(page.items) == 2
        assert page.pagination.total == 5
        assert page.pagination.page_count == 3

    def test_hold_and_release(self) -> None:
        async def run() -> None:
            repo = FakeProductRepository(sample_catalog(), held=True)
            query = compile_query(FilterState())
            task = asyncio.create_task(repo.find_products(query))
            await asyncio.sleep(0)
            assert repo.pending == [query]
            assert not task.done()
            assert repo.release(query) == 1
            page = await task
            assert page.pagination.total == 6

        asyncio.run(run())

    def test_fail_with(self) -> None:
        repo = FakeProductRepository()
        repo.fail_with(RuntimeError("down"))
        with pytest.raises(RuntimeError):
            asyncio.run(repo.find_products(compile_query(FilterState())))
        assert len(repo.calls) == 1

    def test_satisfies_port(self) -> None:
        from storefront_query.application.fetch import ProductRepository

        assert isinstance(FakeProductRepository(), ProductRepository)
