"""
Pydantic response models for the HTTP API.
Field names are snake_case in Python and camelCase on the wire.
"""

import dataclasses
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stock_dashboard.domain.entities.stock import (
    Recommendation,
    RefreshOutcome,
    Sector,
    StockPage,
    StockRecord,
    StockStats,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StockResponse(CamelModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: int
    market_cap: float
    sector: Optional[Sector] = None
    recommendation: Recommendation
    high_52_week: Optional[float] = Field(default=None, alias="high52Week")
    low_52_week: Optional[float] = Field(default=None, alias="low52Week")
    pe_ratio: Optional[float] = None
    dividend_yield: Optional[float] = None
    target_price: Optional[float] = None

    @classmethod
    def from_record(cls, record: StockRecord) -> "StockResponse":
        return cls(**dataclasses.asdict(record))


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class StockListResponse(CamelModel):
    stocks: list[StockResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: StockPage) -> "StockListResponse":
        return cls(
            stocks=[StockResponse.from_record(record) for record in page.stocks],
            pagination=PaginationResponse(
                page=page.page,
                limit=page.limit,
                total=page.total,
                total_pages=page.total_pages,
            ),
        )


class StockStatsResponse(CamelModel):
    buy_count: int
    hold_count: int
    sell_count: int

    @classmethod
    def from_stats(cls, stats: StockStats) -> "StockStatsResponse":
        return cls(**dataclasses.asdict(stats))


class MessageResponse(BaseModel):
    message: str


class RefreshInfo(CamelModel):
    source: str
    record_count: int
    used_fallback: bool
    completed_at: str

    @classmethod
    def from_outcome(cls, outcome: RefreshOutcome) -> "RefreshInfo":
        return cls(
            source=outcome.source,
            record_count=outcome.record_count,
            used_fallback=outcome.used_fallback,
            completed_at=outcome.completed_at.isoformat(),
        )


class HealthResponse(CamelModel):
    status: str
    stocks: int
    last_refresh: Optional[RefreshInfo] = None
