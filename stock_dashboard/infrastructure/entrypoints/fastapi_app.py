"""
FastAPI entry point for the local development server.

This module is the Composition Root: it reads settings, picks the quote source
(Polygon, yfinance or the offline price walk), builds the single
InMemoryStockStore and hands it to the routes through app.state.

Run locally:
    uvicorn stock_dashboard.infrastructure.entrypoints.fastapi_app:app --reload --port 5000
"""

import asyncio
import contextlib
import random
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stock_dashboard.application.services.external_quote_source import ExternalQuoteSource
from stock_dashboard.application.services.price_simulator import PriceWalkSimulator
from stock_dashboard.application.services.stock_store import InMemoryStockStore
from stock_dashboard.domain.errors import StockNotFoundError
from stock_dashboard.domain.ports.quote_source_port import IQuoteSource
from stock_dashboard.infrastructure.config.settings import Settings, get_settings
from stock_dashboard.infrastructure.entrypoints.routes import router as stocks_router
from stock_dashboard.infrastructure.entrypoints.schemas import HealthResponse, RefreshInfo
from stock_dashboard.infrastructure.observability.logging import setup_logging
from stock_dashboard.infrastructure.quotes.polygon_adapter import PolygonQuoteProvider
from stock_dashboard.infrastructure.quotes.yfinance_adapter import YFinanceQuoteProvider

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------

def build_quote_source(settings: Settings) -> IQuoteSource:
    """Pick the refresh strategy; exactly one is active per process."""
    rng = random.Random(settings.simulation_seed)
    source = settings.resolved_quote_source
    if source == "polygon":
        provider = PolygonQuoteProvider(
            api_key=settings.polygon_api_key,
            timeout=settings.quote_http_timeout_seconds,
        )
    elif source == "yfinance":
        provider = YFinanceQuoteProvider()
    else:
        return PriceWalkSimulator(rng=rng)
    return ExternalQuoteSource(
        provider,
        request_delay=settings.quote_request_delay_seconds,
        rng=rng,
    )


def build_store(settings: Settings) -> InMemoryStockStore:
    return InMemoryStockStore(source=build_quote_source(settings))


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[InMemoryStockStore] = None,
) -> FastAPI:
    """Create the application around *store* (built from *settings* when omitted)."""
    if settings is None:
        settings = get_settings()
    if store is None:
        store = build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "stock_dashboard_starting",
            quote_source=settings.resolved_quote_source,
            stocks=len(store),
        )
        # Serve seed data immediately; the first refresh runs in the background.
        startup_refresh = (
            asyncio.create_task(store.refresh()) if settings.refresh_on_startup else None
        )
        yield
        if startup_refresh is not None and not startup_refresh.done():
            startup_refresh.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await startup_refresh
        logger.info("stock_dashboard_stopped")

    app = FastAPI(title="Stock Dashboard API", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            logger.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
        return response

    @app.exception_handler(StockNotFoundError)
    async def stock_not_found_handler(request: Request, exc: StockNotFoundError):
        return JSONResponse(status_code=404, content={"message": "Stock not found"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    app.include_router(stocks_router, prefix="/api/stocks", tags=["stocks"])

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        last = store.last_refresh
        return HealthResponse(
            status="ok",
            stocks=len(store),
            last_refresh=RefreshInfo.from_outcome(last) if last else None,
        )

    return app


_settings = get_settings()
setup_logging(_settings.log_level, _settings.log_format)
app = create_app(_settings)
