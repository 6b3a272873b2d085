"""
Infrastructure adapter: Polygon.io aggregates API → IQuoteProvider.

One request per symbol: the daily bars of the trailing year. The last bar is
the latest close, the bar before it the previous close, and the whole window
gives the 52-week range. All httpx and Polygon payload details are confined here.
"""

from datetime import date, timedelta
from typing import Callable, Optional

import httpx

from stock_dashboard.domain.entities.stock import DailyQuote
from stock_dashboard.domain.errors import (
    MissingCredentialsError,
    QuoteUnavailableError,
    RateLimitedError,
)
from stock_dashboard.domain.ports.quote_provider_port import IQuoteProvider


class PolygonQuoteProvider(IQuoteProvider):
    """Fetches daily aggregates from Polygon.io with an API key."""

    name = "polygon"

    BASE_URL = "https://api.polygon.io"
    LOOKBACK_DAYS = 365

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 10.0,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._today = today

    def get_daily_quote(self, symbol: str) -> DailyQuote:
        if not self._api_key:
            raise MissingCredentialsError("POLYGON_API_KEY environment variable is not set")

        end = self._today()
        start = end - timedelta(days=self.LOOKBACK_DAYS)
        url = (
            f"{self.BASE_URL}/v2/aggs/ticker/{symbol}/range/1/day/"
            f"{start.isoformat()}/{end.isoformat()}"
        )
        try:
            response = httpx.get(
                url,
                params={
                    "adjusted": "true",
                    "sort": "asc",
                    "limit": 500,
                    "apiKey": self._api_key,
                },
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise QuoteUnavailableError(f"Request for {symbol!r} failed: {exc}") from exc

        if response.status_code == 429:
            raise RateLimitedError(f"Polygon rate limit hit while fetching {symbol!r}")
        if response.status_code in (401, 403):
            raise MissingCredentialsError(
                f"Polygon rejected the API key (HTTP {response.status_code})"
            )
        try:
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPStatusError, ValueError) as exc:
            raise QuoteUnavailableError(f"Bad response for {symbol!r}: {exc}") from exc

        bars = payload.get("results") if isinstance(payload, dict) else None
        if not bars:
            raise QuoteUnavailableError(f"No aggregate data available for symbol: {symbol!r}")
        return self._to_quote(symbol, bars)

    @staticmethod
    def _to_quote(symbol: str, bars: list[dict]) -> DailyQuote:
        try:
            latest = bars[-1]
            close = float(latest["c"])
            # A single bar has no prior session; its open stands in.
            previous_close = float(bars[-2]["c"]) if len(bars) > 1 else float(latest["o"])
            highs = [float(bar["h"]) for bar in bars if bar.get("h") is not None]
            lows = [float(bar["l"]) for bar in bars if bar.get("l") is not None]
            volume = int(latest.get("v") or 0)
        except (KeyError, TypeError, ValueError) as exc:
            raise QuoteUnavailableError(f"Malformed aggregate for {symbol!r}: {exc}") from exc

        return DailyQuote(
            symbol=symbol,
            close=close,
            previous_close=previous_close,
            volume=volume,
            high_52_week=max(highs) if highs else None,
            low_52_week=min(lows) if lows else None,
        )
