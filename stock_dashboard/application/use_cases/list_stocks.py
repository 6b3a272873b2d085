"""
Use-case: paginated, filtered, sorted stock listing.
Normalizes raw query parameters and shapes the store's output into a StockPage.
Depends only on the application store and domain entities; no infrastructure imports.
"""

import math
from typing import Any, Optional

from stock_dashboard.application.services.stock_store import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    InMemoryStockStore,
    coerce_positive_int,
    parse_sort_option,
)
from stock_dashboard.domain.entities.stock import StockPage


class ListStocksUseCase:
    def __init__(self, store: InMemoryStockStore) -> None:
        self._store = store

    def execute(
        self,
        page: Any = None,
        limit: Any = None,
        recommendation: Optional[str] = None,
        sector: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> StockPage:
        """List stocks matching every given filter.

        Never rejects input: unparseable page/limit fall back to 1/20, an
        unknown sort key falls back to alphabetical, and an unknown filter
        value simply matches nothing.
        """
        page = coerce_positive_int(page, DEFAULT_PAGE)
        limit = coerce_positive_int(limit, DEFAULT_LIMIT)
        stocks, total = self._store.list_stocks(
            page=page,
            limit=limit,
            recommendation=_normalize_filter(recommendation),
            sector=_normalize_filter(sector),
            sort_by=parse_sort_option(_normalize_filter(sort_by)),
        )
        return StockPage(
            stocks=stocks,
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )


def _normalize_filter(value: Optional[str]) -> Optional[str]:
    """Trim and lower-case; blank means "not filtered"."""
    if value is None:
        return None
    value = str(value).strip().lower()
    return value or None
