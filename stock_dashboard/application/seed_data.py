"""
Fallback seed set.

Illustrative, static values for a handful of well-known symbols. Loaded at
store construction and whenever a refresh fails, so the dashboard is never
left without data. Not live prices.
"""

from typing import Iterable

from stock_dashboard.domain.entities.stock import Recommendation, Sector, StockRecord

FALLBACK_STOCKS: tuple[StockRecord, ...] = (
    StockRecord(
        symbol="AAPL",
        name="Apple Inc.",
        price=174.79,
        change=4.21,
        change_percent=2.41,
        volume=56_300_000,
        market_cap=2_740_000_000_000,
        sector=Sector.TECHNOLOGY,
        recommendation=Recommendation.STRONG_BUY,
        high_52_week=198.23,
        low_52_week=124.17,
        pe_ratio=28.74,
        dividend_yield=0.51,
        target_price=193.50,
    ),
    StockRecord(
        symbol="MSFT",
        name="Microsoft Corporation",
        price=385.64,
        change=6.48,
        change_percent=1.68,
        volume=21_700_000,
        market_cap=2_860_000_000_000,
        sector=Sector.TECHNOLOGY,
        recommendation=Recommendation.BUY,
        high_52_week=420.82,
        low_52_week=309.05,
        pe_ratio=33.21,
        dividend_yield=0.72,
        target_price=415.75,
    ),
    StockRecord(
        symbol="AMZN",
        name="Amazon.com Inc.",
        price=178.22,
        change=-0.61,
        change_percent=-0.34,
        volume=33_900_000,
        market_cap=1_840_000_000_000,
        sector=Sector.CONSUMER_CYCLICAL,
        recommendation=Recommendation.HOLD,
        high_52_week=189.54,
        low_52_week=118.35,
        pe_ratio=59.82,
        dividend_yield=0.0,
        target_price=186.40,
    ),
    StockRecord(
        symbol="NFLX",
        name="Netflix Inc.",
        price=625.78,
        change=-7.82,
        change_percent=-1.24,
        volume=5_300_000,
        market_cap=276_500_000_000,
        sector=Sector.COMMUNICATION_SERVICES,
        recommendation=Recommendation.SELL,
        high_52_week=639.00,
        low_52_week=344.73,
        pe_ratio=43.15,
        dividend_yield=0.0,
        target_price=590.25,
    ),
)


def fallback_snapshot(
    records: Iterable[StockRecord] = FALLBACK_STOCKS,
) -> dict[str, StockRecord]:
    """A fresh symbol → record mapping of *records* (the built-in seed set by default)."""
    return {stock.symbol: stock for stock in records}
