"""
Infrastructure adapter: yfinance → IQuoteProvider.
All yfinance-specific details (ticker.info, fast_info) are confined here;
the rest of the codebase depends only on IQuoteProvider.
"""

import yfinance as yf

from stock_dashboard.domain.entities.stock import DailyQuote
from stock_dashboard.domain.errors import QuoteUnavailableError
from stock_dashboard.domain.ports.quote_provider_port import IQuoteProvider


class YFinanceQuoteProvider(IQuoteProvider):
    """Fetches stock market data from Yahoo Finance via the yfinance library."""

    name = "yfinance"

    def get_daily_quote(self, symbol: str) -> DailyQuote:
        try:
            ticker = yf.Ticker(symbol)
            info = ticker.info or {}
            fast_info = ticker.fast_info

            current_price = getattr(fast_info, "last_price", None) or info.get("currentPrice")
            previous_close = (
                getattr(fast_info, "previous_close", None) or info.get("previousClose")
            )
            volume = info.get("volume") or getattr(fast_info, "last_volume", None) or 0
        except Exception as exc:
            raise QuoteUnavailableError(f"yfinance lookup for {symbol!r} failed: {exc}") from exc

        if current_price is None or not previous_close:
            raise QuoteUnavailableError(f"No price data available for symbol: {symbol!r}")

        return DailyQuote(
            symbol=symbol,
            close=round(float(current_price), 4),
            previous_close=round(float(previous_close), 4),
            volume=int(volume),
            name=info.get("shortName") or info.get("longName"),
            market_cap=float(info.get("marketCap") or 0),
            high_52_week=info.get("fiftyTwoWeekHigh"),
            low_52_week=info.get("fiftyTwoWeekLow"),
            pe_ratio=info.get("trailingPE"),
            dividend_yield=info.get("dividendYield"),
        )
