"""Shared fixtures for stock dashboard tests."""

import asyncio
from typing import Optional

import pytest

from stock_dashboard.application.services.stock_store import InMemoryStockStore
from stock_dashboard.domain.entities.stock import (
    DailyQuote,
    Recommendation,
    Sector,
    StockRecord,
)
from stock_dashboard.domain.errors import QuoteSourceError
from stock_dashboard.domain.ports.quote_provider_port import IQuoteProvider
from stock_dashboard.domain.ports.quote_source_port import IQuoteSource
from stock_dashboard.infrastructure.config.settings import Settings


def make_record(
    symbol: str = "AAPL",
    price: float = 100.0,
    recommendation: Recommendation = Recommendation.HOLD,
    sector: Optional[Sector] = Sector.TECHNOLOGY,
    **kwargs,
) -> StockRecord:
    """Helper to create a StockRecord with sensible defaults."""
    return StockRecord(
        symbol=symbol,
        name=kwargs.pop("name", f"{symbol} Corp."),
        price=price,
        change=kwargs.pop("change", 1.0),
        change_percent=kwargs.pop("change_percent", 1.0),
        volume=kwargs.pop("volume", 1_000_000),
        market_cap=kwargs.pop("market_cap", 1_000_000_000.0),
        sector=sector,
        recommendation=recommendation,
        **kwargs,
    )


class StaticSource(IQuoteSource):
    """Quote source returning a fixed snapshot, or raising a fixed error."""

    name = "static"

    def __init__(self, snapshot=None, error: Optional[Exception] = None) -> None:
        self.snapshot = snapshot or {}
        self.error = error
        self.calls: list[dict] = []

    async def next_snapshot(self, current):
        self.calls.append(dict(current))
        if self.error is not None:
            raise self.error
        return dict(self.snapshot)


class GatedSource(IQuoteSource):
    """Quote source that parks inside next_snapshot until released."""

    name = "gated"

    def __init__(self, snapshot) -> None:
        self.snapshot = snapshot
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def next_snapshot(self, current):
        self.started.set()
        await self.release.wait()
        return dict(self.snapshot)


class FakeQuoteProvider(IQuoteProvider):
    """Provider serving canned quotes; symbols mapped to an exception raise it."""

    name = "fake"

    def __init__(self, quotes: dict) -> None:
        self.quotes = quotes
        self.requested: list[str] = []

    def get_daily_quote(self, symbol: str) -> DailyQuote:
        self.requested.append(symbol)
        result = self.quotes.get(symbol)
        if result is None:
            raise QuoteSourceError(f"no quote for {symbol}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def five_records() -> list[StockRecord]:
    """Five records with distinct prices, volumes and caps."""
    return [
        make_record("MSFT", price=385.0, recommendation=Recommendation.BUY,
                    change_percent=1.7, volume=21_000_000, market_cap=2.8e12),
        make_record("AAPL", price=175.0, recommendation=Recommendation.STRONG_BUY,
                    change_percent=2.4, volume=56_000_000, market_cap=2.7e12),
        make_record("GOOGL", price=140.0, recommendation=Recommendation.HOLD,
                    change_percent=-0.3, volume=25_000_000, market_cap=1.7e12),
        make_record("JPM", price=190.0, recommendation=Recommendation.SELL,
                    sector=Sector.FINANCIALS, change_percent=-2.5,
                    volume=9_000_000, market_cap=5.5e11),
        make_record("XOM", price=110.0, recommendation=Recommendation.STRONG_SELL,
                    sector=Sector.ENERGY, change_percent=-6.0,
                    volume=15_000_000, market_cap=4.4e11),
    ]


@pytest.fixture
def store(five_records) -> InMemoryStockStore:
    """Store seeded with the five-record fixture and no quote source."""
    return InMemoryStockStore(source=None, seed_records=five_records)


@pytest.fixture
def seeded_store() -> InMemoryStockStore:
    """Store holding the built-in fallback seed set."""
    return InMemoryStockStore(source=None)


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch):
    """Settings built in tests see only what the test sets, never a local .env."""
    for field_name in Settings.model_fields:
        monkeypatch.delenv(field_name.upper(), raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
