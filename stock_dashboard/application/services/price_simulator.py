"""
Application service: offline price-walk simulation.

Perturbs every existing record with a biased random walk instead of calling a
market-data API. Every symbol survives the refresh; nothing is added or dropped.
"""

import random
from dataclasses import replace
from typing import Optional

from stock_dashboard.application.strategies.recommendation import MomentumNudgeStrategy
from stock_dashboard.domain.entities.stock import Sector, StockRecord
from stock_dashboard.domain.errors import QuoteSourceError
from stock_dashboard.domain.ports.quote_source_port import IQuoteSource
from stock_dashboard.domain.ports.recommendation_port import IRecommendationStrategy


class PriceWalkSimulator(IQuoteSource):
    name = "simulation"

    BASE_CHANGE_RANGE: tuple[float, float] = (-3.0, 4.0)
    SECTOR_BIAS: dict[Sector, float] = {
        Sector.TECHNOLOGY: 1.5,
        Sector.HEALTHCARE: 1.5,
        Sector.CONSUMER_CYCLICAL: 0.8,
    }
    BUY_SIDE_BIAS: float = 0.3
    SELL_SIDE_BIAS: float = -0.5
    VOLUME_JITTER: float = 0.2
    TARGET_NUDGE_PROBABILITY: float = 0.3
    TARGET_NUDGE: float = 0.05
    MIN_PRICE: float = 0.01

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        recommender: Optional[IRecommendationStrategy] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._recommender = recommender or MomentumNudgeStrategy(rng=self._rng)

    async def next_snapshot(
        self, current: dict[str, StockRecord]
    ) -> dict[str, StockRecord]:
        if not current:
            raise QuoteSourceError("Nothing to simulate: the collection is empty")
        return {symbol: self.perturb(record) for symbol, record in current.items()}

    def simulated_change_percent(self, record: StockRecord) -> float:
        low, high = self.BASE_CHANGE_RANGE
        percent = self._rng.uniform(low, high) * self.SECTOR_BIAS.get(record.sector, 1.0)
        if record.recommendation.is_buy_side:
            percent += self.BUY_SIDE_BIAS
        elif record.recommendation.is_sell_side:
            percent += self.SELL_SIDE_BIAS
        return percent

    def perturb(self, record: StockRecord) -> StockRecord:
        """Return the next state of *record*; the input is left untouched."""
        percent = self.simulated_change_percent(record)
        new_price = max(round(record.price * (1 + percent / 100), 2), self.MIN_PRICE)

        # change and change_percent both come from the rounded prices so their
        # signs always agree.
        change = round(new_price - record.price, 2)
        change_percent = round(change / record.price * 100, 2) if record.price else 0.0

        jitter = self._rng.uniform(1 - self.VOLUME_JITTER, 1 + self.VOLUME_JITTER)
        volume = max(int(record.volume * jitter), 0)

        target_price = record.target_price
        if self._rng.random() < self.TARGET_NUDGE_PROBABILITY and target_price is not None:
            nudge = self._rng.uniform(1 - self.TARGET_NUDGE, 1 + self.TARGET_NUDGE)
            target_price = round(target_price * nudge, 2)

        high_52_week = record.high_52_week
        if high_52_week is not None and new_price > high_52_week:
            high_52_week = new_price
        low_52_week = record.low_52_week
        if low_52_week is not None and new_price < low_52_week:
            low_52_week = new_price

        return replace(
            record,
            price=new_price,
            change=change,
            change_percent=change_percent,
            volume=volume,
            target_price=target_price,
            high_52_week=high_52_week,
            low_52_week=low_52_week,
            recommendation=self._recommender.recommend(record, change_percent),
        )
