"""Tests for the query façade use cases."""

import pytest

from stock_dashboard.application.use_cases.get_stock import GetStockUseCase
from stock_dashboard.application.use_cases.get_stock_stats import GetStockStatsUseCase
from stock_dashboard.application.use_cases.list_stocks import ListStocksUseCase
from stock_dashboard.application.use_cases.refresh_stocks import RefreshStocksUseCase
from stock_dashboard.domain.entities.stock import StockStats
from stock_dashboard.domain.errors import StockNotFoundError


class TestListStocksUseCase:
    """Tests for parameter normalization and the page envelope."""

    def test_defaults(self, store):
        page = ListStocksUseCase(store).execute()

        assert page.page == 1
        assert page.limit == 20
        assert page.total == 5
        assert page.total_pages == 1
        assert [s.symbol for s in page.stocks] == ["AAPL", "GOOGL", "JPM", "MSFT", "XOM"]

    def test_string_params_are_coerced(self, store):
        page = ListStocksUseCase(store).execute(page="2", limit="2")

        assert page.page == 2
        assert page.limit == 2
        assert page.total_pages == 3
        assert [s.symbol for s in page.stocks] == ["JPM", "MSFT"]

    def test_garbage_params_fall_back(self, store):
        page = ListStocksUseCase(store).execute(page="first", limit="-5")

        assert (page.page, page.limit) == (1, 20)

    def test_filters_are_normalized(self, store):
        page = ListStocksUseCase(store).execute(
            recommendation=" HOLD ", sector="Technology", sort_by="PRICE"
        )

        assert [s.symbol for s in page.stocks] == ["GOOGL"]
        assert page.total == 1

    def test_blank_filters_are_ignored(self, store):
        page = ListStocksUseCase(store).execute(recommendation="", sector="  ")

        assert page.total == 5

    def test_no_matches_gives_zero_pages(self, store):
        page = ListStocksUseCase(store).execute(sector="utilities")

        assert page.stocks == []
        assert page.total == 0
        assert page.total_pages == 0


class TestGetStockUseCase:
    """Tests for symbol lookup."""

    def test_case_insensitive(self, store):
        assert GetStockUseCase(store).execute(" jpm ").symbol == "JPM"

    def test_not_found(self, store):
        with pytest.raises(StockNotFoundError):
            GetStockUseCase(store).execute("NOPE")

    def test_blank_symbol(self, store):
        with pytest.raises(StockNotFoundError):
            GetStockUseCase(store).execute("  ")


class TestStatsAndRefreshUseCases:
    """Tests for the stats and refresh use cases."""

    def test_stats(self, seeded_store):
        assert GetStockStatsUseCase(seeded_store).execute() == StockStats(2, 1, 1)

    @pytest.mark.asyncio
    async def test_refresh_without_source_reseeds(self, seeded_store):
        outcome = await RefreshStocksUseCase(seeded_store).execute()

        assert outcome.used_fallback is True
        assert outcome.record_count == 4
