"""
Port (interface) for refresh strategies.
A quote source turns the current snapshot into the next one. Implementations:
ExternalQuoteSource (clear and rebuild from a provider) and PriceWalkSimulator
(perturb every existing record in place).
"""

from abc import ABC, abstractmethod

from stock_dashboard.domain.entities.stock import StockRecord


class IQuoteSource(ABC):
    name: str = "source"

    @abstractmethod
    async def next_snapshot(
        self, current: dict[str, StockRecord]
    ) -> dict[str, StockRecord]:
        """Compute the full replacement mapping from *current*.

        Must not mutate *current*. Raises QuoteSourceError when no usable data
        could be produced.
        """
        ...
