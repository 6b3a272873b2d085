"""
Port (interface) for recommendation strategies.
The store and the quote sources only depend on this interface, so the
percent-change heuristics can be swapped for a real signal without touching them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from stock_dashboard.domain.entities.stock import Recommendation, StockRecord


class IRecommendationStrategy(ABC):
    @abstractmethod
    def recommend(
        self, record: Optional[StockRecord], change_percent: float
    ) -> Recommendation:
        """Produce a recommendation for a record that just moved by *change_percent*.

        *record* is the state before the move, or None for a brand-new quote.
        """
        ...
