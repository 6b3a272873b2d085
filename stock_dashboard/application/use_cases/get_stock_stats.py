"""
Use-case: buy/hold/sell counts across the whole collection.
"""

from stock_dashboard.application.services.stock_store import InMemoryStockStore
from stock_dashboard.domain.entities.stock import StockStats


class GetStockStatsUseCase:
    def __init__(self, store: InMemoryStockStore) -> None:
        self._store = store

    def execute(self) -> StockStats:
        return self._store.stats()
