"""
Domain entities for the stock dashboard.
Zero external dependencies: pure Python dataclasses and enums only.

StockRecord is immutable; refreshes produce new records via dataclasses.replace.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Recommendation(str, Enum):
    """Analyst-style rating, declared from most bullish to most bearish."""

    STRONG_BUY = "strong_buy"
    BUY = "buy"
    HOLD = "hold"
    SELL = "sell"
    STRONG_SELL = "strong_sell"

    @property
    def is_buy_side(self) -> bool:
        return self in (Recommendation.STRONG_BUY, Recommendation.BUY)

    @property
    def is_sell_side(self) -> bool:
        return self in (Recommendation.SELL, Recommendation.STRONG_SELL)

    def step_toward_buy(self) -> "Recommendation":
        """One notch more bullish; STRONG_BUY stays put."""
        members = list(Recommendation)
        index = members.index(self)
        return members[max(index - 1, 0)]

    def step_toward_sell(self) -> "Recommendation":
        """One notch more bearish; STRONG_SELL stays put."""
        members = list(Recommendation)
        index = members.index(self)
        return members[min(index + 1, len(members) - 1)]


class Sector(str, Enum):
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCIALS = "financials"
    ENERGY = "energy"
    CONSUMER_CYCLICAL = "consumer_cyclical"
    CONSUMER_DEFENSIVE = "consumer_defensive"
    INDUSTRIALS = "industrials"
    BASIC_MATERIALS = "basic_materials"
    COMMUNICATION_SERVICES = "communication_services"
    UTILITIES = "utilities"
    REAL_ESTATE = "real_estate"


class SortOption(str, Enum):
    ALPHABETICAL = "alphabetical"
    PRICE = "price"
    CHANGE = "change"
    VOLUME = "volume"
    MARKET_CAP = "market_cap"


@dataclass(frozen=True)
class StockRecord:
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: int
    market_cap: float
    sector: Optional[Sector]
    recommendation: Recommendation
    high_52_week: Optional[float] = None
    low_52_week: Optional[float] = None
    pe_ratio: Optional[float] = None
    dividend_yield: Optional[float] = None
    target_price: Optional[float] = None


@dataclass(frozen=True)
class DailyQuote:
    """Raw quote returned by an external provider for a single symbol."""

    symbol: str
    close: float
    previous_close: float
    volume: int
    name: Optional[str] = None
    market_cap: float = 0.0
    high_52_week: Optional[float] = None
    low_52_week: Optional[float] = None
    pe_ratio: Optional[float] = None
    dividend_yield: Optional[float] = None


@dataclass(frozen=True)
class StockStats:
    buy_count: int
    hold_count: int
    sell_count: int


@dataclass(frozen=True)
class StockPage:
    stocks: list[StockRecord]
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class RefreshOutcome:
    """What the last refresh actually did.

    source:       name of the quote source that produced the data
                  ("polygon", "yfinance", "simulation" or "fallback").
    record_count: size of the collection after the swap.
    used_fallback: True when the seed set replaced a failed source.
    """

    source: str
    record_count: int
    used_fallback: bool
    completed_at: datetime
