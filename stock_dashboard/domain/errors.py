"""
Domain exception hierarchy.

QuoteSourceError and its subclasses never escape InMemoryStockStore.refresh();
they exist so adapters can say *why* a source failed and the store can log it.
"""


class StockDashboardError(Exception):
    """Base class for every error raised by this package."""


class QuoteSourceError(StockDashboardError):
    """A quote source could not produce usable data."""


class MissingCredentialsError(QuoteSourceError):
    """The provider needs an API key that is not configured."""


class QuoteUnavailableError(QuoteSourceError):
    """The provider answered, but not with a usable quote (network, HTTP, payload)."""


class RateLimitedError(QuoteSourceError):
    """The provider rejected the request because of its rate limit."""


class StockNotFoundError(StockDashboardError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"Stock not found: {symbol!r}")
        self.symbol = symbol
