"""
Stock API router.
Thin pass-through: each endpoint builds its use case from the shared store and
converts domain objects into response models.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from stock_dashboard.application.services.stock_store import InMemoryStockStore
from stock_dashboard.application.use_cases.get_stock import GetStockUseCase
from stock_dashboard.application.use_cases.get_stock_stats import GetStockStatsUseCase
from stock_dashboard.application.use_cases.list_stocks import ListStocksUseCase
from stock_dashboard.application.use_cases.refresh_stocks import RefreshStocksUseCase
from stock_dashboard.infrastructure.entrypoints.schemas import (
    MessageResponse,
    StockListResponse,
    StockResponse,
    StockStatsResponse,
)

router = APIRouter()


async def get_store(request: Request) -> InMemoryStockStore:
    """FastAPI dependency: the store wired by the composition root."""
    return request.app.state.store


@router.get("", response_model=StockListResponse)
async def list_stocks(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size"),
    recommendation: Optional[str] = Query(None, description="strong_buy, buy, hold, sell or strong_sell"),
    sector: Optional[str] = Query(None, description="Sector filter"),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", description="alphabetical | price | change | volume | market_cap"
    ),
    store: InMemoryStockStore = Depends(get_store),
) -> StockListResponse:
    """Paginated stock list with optional recommendation/sector filters."""
    result = ListStocksUseCase(store).execute(
        page=page,
        limit=limit,
        recommendation=recommendation,
        sector=sector,
        sort_by=sort_by,
    )
    return StockListResponse.from_page(result)


@router.get("/stats/overview", response_model=StockStatsResponse)
async def stock_stats(store: InMemoryStockStore = Depends(get_store)) -> StockStatsResponse:
    """Buy/hold/sell counts across all stocks."""
    return StockStatsResponse.from_stats(GetStockStatsUseCase(store).execute())


@router.post("/refresh", response_model=MessageResponse)
async def refresh_stocks(store: InMemoryStockStore = Depends(get_store)) -> MessageResponse:
    """Re-fetch or re-simulate quotes; always acknowledges success."""
    await RefreshStocksUseCase(store).execute()
    return MessageResponse(message="Stocks refreshed successfully")


@router.get(
    "/{symbol}",
    response_model=StockResponse,
    responses={404: {"model": MessageResponse}},
)
async def get_stock(symbol: str, store: InMemoryStockStore = Depends(get_store)) -> StockResponse:
    """Single stock by ticker symbol.

    Raises:
        StockNotFoundError: rendered as 404 by the app-level handler.
    """
    return StockResponse.from_record(GetStockUseCase(store).execute(symbol))
