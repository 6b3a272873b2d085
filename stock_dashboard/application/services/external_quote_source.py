"""
Application service: refresh the collection from an external quote provider.

Business decisions owned here:
  - which symbols are fetched (the watch list) and how fast (request delay);
  - how a DailyQuote becomes a StockRecord: change math, sector lookup,
    recommendation, target-price estimate;
  - per-symbol failures are skipped, a missing credential aborts the batch.

The provider (IQuoteProvider) is injected; no httpx or yfinance import here.
Blocking provider calls run in a worker thread so the event loop keeps serving
requests while a refresh is in flight.
"""

import asyncio
import random
from typing import Optional, Sequence

import structlog

from stock_dashboard.application.strategies.recommendation import (
    ThresholdRecommendationStrategy,
)
from stock_dashboard.application.watchlist import (
    WATCHLIST,
    WatchlistEntry,
    classify_sector,
)
from stock_dashboard.domain.entities.stock import DailyQuote, StockRecord
from stock_dashboard.domain.errors import (
    MissingCredentialsError,
    QuoteSourceError,
    QuoteUnavailableError,
)
from stock_dashboard.domain.ports.quote_provider_port import IQuoteProvider
from stock_dashboard.domain.ports.quote_source_port import IQuoteSource
from stock_dashboard.domain.ports.recommendation_port import IRecommendationStrategy

logger = structlog.get_logger(__name__)


class ExternalQuoteSource(IQuoteSource):
    """Clears and rebuilds the collection from one provider call per watch-list symbol."""

    REQUEST_DELAY_SECONDS: float = 2.0
    TARGET_BASE_MULTIPLIER: float = 1.10
    TARGET_SPREAD: float = 0.10

    def __init__(
        self,
        provider: IQuoteProvider,
        watchlist: Sequence[WatchlistEntry] = WATCHLIST,
        recommender: Optional[IRecommendationStrategy] = None,
        request_delay: float = REQUEST_DELAY_SECONDS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._provider = provider
        self._watchlist = tuple(watchlist)
        self._recommender = recommender or ThresholdRecommendationStrategy()
        self._request_delay = request_delay
        self._rng = rng or random.Random()

    @property
    def name(self) -> str:
        return self._provider.name

    async def next_snapshot(
        self, current: dict[str, StockRecord]
    ) -> dict[str, StockRecord]:
        logger.info(
            "external_refresh_started",
            source=self.name,
            symbols=len(self._watchlist),
        )
        records: dict[str, StockRecord] = {}
        for index, entry in enumerate(self._watchlist):
            if index > 0 and self._request_delay > 0:
                await asyncio.sleep(self._request_delay)
            try:
                quote = await asyncio.to_thread(
                    self._provider.get_daily_quote, entry.symbol
                )
                record = self.to_record(quote, entry)
            except MissingCredentialsError:
                raise
            except Exception as exc:
                logger.warning(
                    "quote_skipped",
                    source=self.name,
                    symbol=entry.symbol,
                    error=str(exc),
                )
                continue
            records[record.symbol] = record
            logger.debug("quote_loaded", source=self.name, symbol=record.symbol)

        if not records:
            raise QuoteSourceError(f"{self.name} returned no usable quotes")
        logger.info("external_refresh_finished", source=self.name, count=len(records))
        return records

    def to_record(self, quote: DailyQuote, entry: WatchlistEntry) -> StockRecord:
        """Translate a provider quote into a StockRecord.

        Raises:
            QuoteUnavailableError: if the quote has no usable previous close.
        """
        price = round(quote.close, 2)
        previous_close = round(quote.previous_close or 0, 2)
        if previous_close <= 0:
            raise QuoteUnavailableError(
                f"No previous close for symbol: {quote.symbol!r}"
            )

        # Both figures come from the rounded prices so a sub-cent move reads as
        # no move at all.
        change = round(price - previous_close, 2)
        change_percent = round(change / previous_close * 100, 2)
        multiplier = self.TARGET_BASE_MULTIPLIER + self._rng.random() * self.TARGET_SPREAD

        return StockRecord(
            symbol=entry.symbol,
            name=quote.name or entry.name,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=max(int(quote.volume or 0), 0),
            market_cap=max(float(quote.market_cap or 0), 0.0),
            sector=classify_sector(entry.symbol),
            recommendation=self._recommender.recommend(None, change_percent),
            high_52_week=_round_or_none(quote.high_52_week),
            low_52_week=_round_or_none(quote.low_52_week),
            pe_ratio=_round_or_none(quote.pe_ratio),
            dividend_yield=_round_or_none(quote.dividend_yield),
            target_price=round(quote.close * multiplier, 2),
        )


def _round_or_none(value: Optional[float]) -> Optional[float]:
    return round(float(value), 2) if value is not None else None
