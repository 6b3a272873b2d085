"""
Use-case: look up a single stock by ticker symbol.
"""

from stock_dashboard.application.services.stock_store import InMemoryStockStore
from stock_dashboard.domain.entities.stock import StockRecord
from stock_dashboard.domain.errors import StockNotFoundError


class GetStockUseCase:
    def __init__(self, store: InMemoryStockStore) -> None:
        self._store = store

    def execute(self, symbol: str) -> StockRecord:
        """Return the record for *symbol* (case-insensitive).

        Raises:
            StockNotFoundError: if no record is held under that symbol.
        """
        normalized = (symbol or "").strip().upper()
        record = self._store.get_by_symbol(normalized) if normalized else None
        if record is None:
            raise StockNotFoundError(symbol)
        return record
