"""
Use-case: refresh the collection from the configured quote source.
The store absorbs every source failure, so callers only ever observe a
completed refresh (possibly served from the fallback seed set).
"""

from stock_dashboard.application.services.stock_store import InMemoryStockStore
from stock_dashboard.domain.entities.stock import RefreshOutcome


class RefreshStocksUseCase:
    def __init__(self, store: InMemoryStockStore) -> None:
        self._store = store

    async def execute(self) -> RefreshOutcome:
        return await self._store.refresh()
