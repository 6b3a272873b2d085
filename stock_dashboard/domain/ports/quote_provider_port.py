"""
Port (interface) for external quote providers.
Infrastructure adapters (e.g. PolygonQuoteProvider, YFinanceQuoteProvider) must
implement this interface.
"""

from abc import ABC, abstractmethod

from stock_dashboard.domain.entities.stock import DailyQuote


class IQuoteProvider(ABC):
    #: Short identifier reported in RefreshOutcome.source and in logs.
    name: str = "external"

    @abstractmethod
    def get_daily_quote(self, symbol: str) -> DailyQuote:
        """Return the latest daily quote for *symbol*.

        Raises:
            MissingCredentialsError: if the provider needs a key that is not set.
            RateLimitedError:        if the provider throttled the request.
            QuoteUnavailableError:   on network, HTTP or payload problems.
        """
        ...
