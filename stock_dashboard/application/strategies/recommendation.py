"""
Recommendation strategies derived from percent price change.

Business rules owned here:
  - the five-band threshold table used when a quote arrives from a provider;
  - the momentum nudge used by the price-walk simulation, which moves an
    existing rating one notch at a time instead of re-deriving it.
"""

import random
from typing import Optional

from stock_dashboard.domain.entities.stock import Recommendation, StockRecord
from stock_dashboard.domain.ports.recommendation_port import IRecommendationStrategy


def recommendation_for_change(change_percent: float) -> Recommendation:
    """Map a percent change onto the threshold table (upper bounds inclusive)."""
    if change_percent > 5:
        return Recommendation.STRONG_BUY
    if change_percent > 2:
        return Recommendation.BUY
    if change_percent > -2:
        return Recommendation.HOLD
    if change_percent > -5:
        return Recommendation.SELL
    return Recommendation.STRONG_SELL


class ThresholdRecommendationStrategy(IRecommendationStrategy):
    """Ignores history; the rating is a pure function of the percent change."""

    def recommend(
        self, record: Optional[StockRecord], change_percent: float
    ) -> Recommendation:
        return recommendation_for_change(change_percent)


class MomentumNudgeStrategy(IRecommendationStrategy):
    """Occasionally move the existing rating one notch in the direction of a big move."""

    NUDGE_PROBABILITY: float = 0.15
    MOVE_THRESHOLD: float = 2.0

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        probability: float = NUDGE_PROBABILITY,
        threshold: float = MOVE_THRESHOLD,
    ) -> None:
        self._rng = rng or random.Random()
        self._probability = probability
        self._threshold = threshold

    def recommend(
        self, record: Optional[StockRecord], change_percent: float
    ) -> Recommendation:
        if record is None:
            return recommendation_for_change(change_percent)

        current = record.recommendation
        if self._rng.random() >= self._probability:
            return current
        if change_percent > self._threshold:
            return current.step_toward_buy()
        if change_percent < -self._threshold:
            return current.step_toward_sell()
        return current
