"""
Application service: the in-memory stock store.

Sole owner of the symbol → StockRecord mapping. Queries (filter, sort,
paginate, stats) are synchronous and run to completion; refresh() is a
coroutine that computes the next snapshot off to the side and swaps it in
with a single assignment, so a reader sees either the old or the new
collection and never a half-applied one.

refresh() never raises: every quote-source failure ends with the fallback
seed set being loaded.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

import structlog

from stock_dashboard.application.seed_data import FALLBACK_STOCKS, fallback_snapshot
from stock_dashboard.domain.entities.stock import (
    Recommendation,
    RefreshOutcome,
    Sector,
    SortOption,
    StockRecord,
    StockStats,
)
from stock_dashboard.domain.errors import QuoteSourceError
from stock_dashboard.domain.ports.quote_source_port import IQuoteSource

logger = structlog.get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

_DESCENDING_SORT_KEYS = {
    SortOption.PRICE: lambda record: record.price,
    SortOption.CHANGE: lambda record: record.change_percent,
    SortOption.VOLUME: lambda record: record.volume,
    SortOption.MARKET_CAP: lambda record: record.market_cap,
}


def coerce_positive_int(value: Any, default: int) -> int:
    """Best-effort conversion of a query value to an integer >= 1.

    Accepts ints and numeric strings ("3", " 3 ", "3.0"); anything else,
    including zero and negatives, yields *default*.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        try:
            number = int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return default
    return number if number >= 1 else default


def parse_sort_option(value: Union[SortOption, str, None]) -> SortOption:
    """Unknown or missing sort keys fall back to alphabetical."""
    try:
        return SortOption(value)
    except ValueError:
        return SortOption.ALPHABETICAL


class InMemoryStockStore:
    def __init__(
        self,
        source: Optional[IQuoteSource] = None,
        seed_records: Iterable[StockRecord] = FALLBACK_STOCKS,
    ) -> None:
        """
        Args:
            source:       quote source used by refresh(); None means every
                          refresh simply re-seeds.
            seed_records: fallback seed set, loaded immediately and on every
                          failed refresh.
        """
        self._source = source
        self._seed_records = tuple(seed_records)
        self._records: dict[str, StockRecord] = {}
        self.last_refresh: Optional[RefreshOutcome] = None
        self.seed()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def seed(self) -> None:
        """Replace the whole collection with the fallback seed set."""
        self._records = self._seed_snapshot()

    def upsert(self, record: StockRecord) -> None:
        """Insert *record*, replacing any record with the same symbol."""
        self._records[record.symbol] = record

    async def refresh(self) -> RefreshOutcome:
        source = self._source
        if source is None:
            return self._fall_back("no quote source configured")

        current = dict(self._records) or self._seed_snapshot()
        try:
            snapshot = await source.next_snapshot(current)
            if not snapshot:
                raise QuoteSourceError(f"{source.name} produced an empty snapshot")
        except QuoteSourceError as exc:
            logger.warning("refresh_failed", source=source.name, error=str(exc))
            return self._fall_back(str(exc))
        except Exception:
            logger.exception("refresh_crashed", source=source.name)
            return self._fall_back("unexpected error")

        self._records = dict(snapshot)
        return self._record_outcome(source.name, used_fallback=False)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_stocks(
        self,
        page: Any = DEFAULT_PAGE,
        limit: Any = DEFAULT_LIMIT,
        recommendation: Union[Recommendation, str, None] = None,
        sector: Union[Sector, str, None] = None,
        sort_by: Union[SortOption, str, None] = SortOption.ALPHABETICAL,
    ) -> tuple[list[StockRecord], int]:
        """Filter, sort and paginate the collection.

        Returns:
            (records on the requested page, number of records matching the
            filters before pagination).
        """
        page = coerce_positive_int(page, DEFAULT_PAGE)
        limit = coerce_positive_int(limit, DEFAULT_LIMIT)

        matches = [
            record
            for record in self._records.values()
            if (recommendation is None or record.recommendation == recommendation)
            and (sector is None or record.sector == sector)
        ]

        # Alphabetical first; the stable descending sorts then break ties by symbol.
        matches.sort(key=lambda record: record.symbol)
        sort_key = _DESCENDING_SORT_KEYS.get(parse_sort_option(sort_by))
        if sort_key is not None:
            matches.sort(key=sort_key, reverse=True)

        offset = (page - 1) * limit
        return matches[offset:offset + limit], len(matches)

    def get_by_symbol(self, symbol: str) -> Optional[StockRecord]:
        return self._records.get(symbol)

    def stats(self) -> StockStats:
        """Recommendation counts over the full, unfiltered collection."""
        records = list(self._records.values())
        return StockStats(
            buy_count=sum(1 for r in records if r.recommendation.is_buy_side),
            hold_count=sum(1 for r in records if r.recommendation == Recommendation.HOLD),
            sell_count=sum(1 for r in records if r.recommendation.is_sell_side),
        )

    def symbols(self) -> list[str]:
        return sorted(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _seed_snapshot(self) -> dict[str, StockRecord]:
        return fallback_snapshot(self._seed_records)

    def _fall_back(self, reason: str) -> RefreshOutcome:
        self.seed()
        logger.info("fallback_seed_loaded", reason=reason, count=len(self._records))
        return self._record_outcome("fallback", used_fallback=True)

    def _record_outcome(self, source: str, used_fallback: bool) -> RefreshOutcome:
        self.last_refresh = RefreshOutcome(
            source=source,
            record_count=len(self._records),
            used_fallback=used_fallback,
            completed_at=datetime.now(timezone.utc),
        )
        logger.info(
            "refresh_completed",
            source=source,
            count=len(self._records),
            used_fallback=used_fallback,
        )
        return self.last_refresh
