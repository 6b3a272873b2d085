"""
The fixed watch list fetched in external mode, and the static sector lookup.

Every symbol costs one provider request per refresh; the list stays within a
free-tier rate limit.
"""

from dataclasses import dataclass

from stock_dashboard.domain.entities.stock import Sector


@dataclass(frozen=True)
class WatchlistEntry:
    symbol: str
    name: str


WATCHLIST: tuple[WatchlistEntry, ...] = (
    WatchlistEntry("AAPL", "Apple Inc."),
    WatchlistEntry("MSFT", "Microsoft Corporation"),
    WatchlistEntry("GOOGL", "Alphabet Inc."),
    WatchlistEntry("AMZN", "Amazon.com Inc."),
    WatchlistEntry("META", "Meta Platforms Inc."),
    WatchlistEntry("TSLA", "Tesla Inc."),
    WatchlistEntry("JPM", "JPMorgan Chase & Co."),
    WatchlistEntry("JNJ", "Johnson & Johnson"),
    WatchlistEntry("NVDA", "NVIDIA Corporation"),
    WatchlistEntry("V", "Visa Inc."),
)

SECTOR_BY_SYMBOL: dict[str, Sector] = {
    "AAPL": Sector.TECHNOLOGY,
    "MSFT": Sector.TECHNOLOGY,
    "GOOGL": Sector.TECHNOLOGY,
    "META": Sector.TECHNOLOGY,
    "NVDA": Sector.TECHNOLOGY,
    "AMZN": Sector.CONSUMER_CYCLICAL,
    "TSLA": Sector.CONSUMER_CYCLICAL,
    "JPM": Sector.FINANCIALS,
    "V": Sector.FINANCIALS,
    "JNJ": Sector.HEALTHCARE,
    "NFLX": Sector.COMMUNICATION_SERVICES,
}


def classify_sector(symbol: str) -> Sector:
    """Static lookup; unknown symbols are filed under technology."""
    return SECTOR_BY_SYMBOL.get(symbol.upper(), Sector.TECHNOLOGY)
