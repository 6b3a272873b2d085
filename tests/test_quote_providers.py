"""Tests for the Polygon and yfinance quote provider adapters."""

from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import httpx
import pytest
import respx

from stock_dashboard.domain.errors import (
    MissingCredentialsError,
    QuoteUnavailableError,
    RateLimitedError,
)
from stock_dashboard.infrastructure.quotes.polygon_adapter import PolygonQuoteProvider
from stock_dashboard.infrastructure.quotes.yfinance_adapter import YFinanceQuoteProvider

AAPL_URL = "https://api.polygon.io/v2/aggs/ticker/AAPL/range/1/day/2025-10-19/2026-10-19"


def _polygon(api_key="test-key") -> PolygonQuoteProvider:
    return PolygonQuoteProvider(api_key=api_key, today=lambda: date(2026, 10, 19))


def _bars():
    return [
        {"o": 150.0, "h": 160.0, "l": 120.0, "c": 155.0, "v": 1_000},
        {"o": 155.0, "h": 199.5, "l": 150.0, "c": 170.0, "v": 2_000},
        {"o": 170.0, "h": 180.0, "l": 165.0, "c": 178.5, "v": 3_500.0},
    ]


class TestPolygonQuoteProvider:
    """Tests for PolygonQuoteProvider."""

    def test_missing_api_key(self):
        with pytest.raises(MissingCredentialsError):
            _polygon(api_key=None).get_daily_quote("AAPL")

    @respx.mock
    def test_quote_from_last_two_bars(self):
        route = respx.get(AAPL_URL).mock(
            return_value=httpx.Response(200, json={"status": "OK", "results": _bars()})
        )

        quote = _polygon().get_daily_quote("AAPL")

        assert route.called
        assert "apiKey=test-key" in str(route.calls.last.request.url)
        assert quote.symbol == "AAPL"
        assert quote.close == 178.5
        assert quote.previous_close == 170.0
        assert quote.volume == 3_500
        assert quote.high_52_week == 199.5
        assert quote.low_52_week == 120.0
        assert quote.market_cap == 0.0

    @respx.mock
    def test_single_bar_uses_open_as_previous_close(self):
        respx.get(AAPL_URL).mock(
            return_value=httpx.Response(200, json={"results": _bars()[:1]})
        )

        quote = _polygon().get_daily_quote("AAPL")

        assert quote.close == 155.0
        assert quote.previous_close == 150.0

    @respx.mock
    def test_empty_results(self):
        respx.get(AAPL_URL).mock(
            return_value=httpx.Response(200, json={"resultsCount": 0, "results": []})
        )

        with pytest.raises(QuoteUnavailableError):
            _polygon().get_daily_quote("AAPL")

    @respx.mock
    def test_rate_limited(self):
        respx.get(AAPL_URL).mock(return_value=httpx.Response(429, json={}))

        with pytest.raises(RateLimitedError):
            _polygon().get_daily_quote("AAPL")

    @respx.mock
    def test_rejected_key(self):
        respx.get(AAPL_URL).mock(return_value=httpx.Response(401, json={}))

        with pytest.raises(MissingCredentialsError):
            _polygon().get_daily_quote("AAPL")

    @respx.mock
    def test_server_error(self):
        respx.get(AAPL_URL).mock(return_value=httpx.Response(502, text="bad gateway"))

        with pytest.raises(QuoteUnavailableError):
            _polygon().get_daily_quote("AAPL")

    @respx.mock
    def test_network_error(self):
        respx.get(AAPL_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(QuoteUnavailableError):
            _polygon().get_daily_quote("AAPL")

    @respx.mock
    def test_malformed_json(self):
        respx.get(AAPL_URL).mock(return_value=httpx.Response(200, text="not json"))

        with pytest.raises(QuoteUnavailableError):
            _polygon().get_daily_quote("AAPL")

    @respx.mock
    def test_malformed_bar(self):
        respx.get(AAPL_URL).mock(
            return_value=httpx.Response(200, json={"results": [{"o": 1.0}]})
        )

        with pytest.raises(QuoteUnavailableError):
            _polygon().get_daily_quote("AAPL")


class TestYFinanceQuoteProvider:
    """Tests for YFinanceQuoteProvider with yfinance mocked out."""

    def _ticker(self, info=None, **fast_info) -> MagicMock:
        ticker = MagicMock()
        ticker.info = info or {}
        ticker.fast_info = SimpleNamespace(**fast_info)
        return ticker

    def test_quote_from_fast_info_and_info(self):
        ticker = self._ticker(
            info={
                "shortName": "Apple Inc.",
                "volume": 42_000_000,
                "marketCap": 2.9e12,
                "fiftyTwoWeekHigh": 199.6,
                "fiftyTwoWeekLow": 164.1,
                "trailingPE": 29.4,
                "dividendYield": 0.44,
            },
            last_price=190.123456,
            previous_close=188.5,
        )
        with patch(
            "stock_dashboard.infrastructure.quotes.yfinance_adapter.yf.Ticker",
            return_value=ticker,
        ) as ticker_cls:
            quote = YFinanceQuoteProvider().get_daily_quote("AAPL")

        ticker_cls.assert_called_once_with("AAPL")
        assert quote.close == 190.1235
        assert quote.previous_close == 188.5
        assert quote.volume == 42_000_000
        assert quote.name == "Apple Inc."
        assert quote.market_cap == 2.9e12
        assert quote.high_52_week == 199.6
        assert quote.pe_ratio == 29.4

    def test_falls_back_to_info_prices(self):
        ticker = self._ticker(info={"currentPrice": 10.0, "previousClose": 9.0})
        with patch(
            "stock_dashboard.infrastructure.quotes.yfinance_adapter.yf.Ticker",
            return_value=ticker,
        ):
            quote = YFinanceQuoteProvider().get_daily_quote("V")

        assert quote.close == 10.0
        assert quote.previous_close == 9.0
        assert quote.volume == 0
        assert quote.market_cap == 0.0

    def test_missing_price(self):
        with patch(
            "stock_dashboard.infrastructure.quotes.yfinance_adapter.yf.Ticker",
            return_value=self._ticker(),
        ):
            with pytest.raises(QuoteUnavailableError):
                YFinanceQuoteProvider().get_daily_quote("NOPE")

    def test_library_error_is_wrapped(self):
        with patch(
            "stock_dashboard.infrastructure.quotes.yfinance_adapter.yf.Ticker",
            side_effect=RuntimeError("yahoo down"),
        ):
            with pytest.raises(QuoteUnavailableError):
                YFinanceQuoteProvider().get_daily_quote("AAPL")
