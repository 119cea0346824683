"""Abstract base class for all price fetchers."""

from abc import ABC, abstractmethod

from coinboard.config import QUOTE_SUFFIX
from coinboard.models import PriceQuote


class PriceFetcher(ABC):
    """Interface that every price data source must implement."""

    name: str = ""
    quote_suffix: str = QUOTE_SUFFIX

    @abstractmethod
    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        """Fetch the latest quotes for *symbols* (already suffixed, e.g. BTCUSDT).

        Returns one quote per resolvable symbol. Unknown symbols and failed
        requests are omitted rather than raised.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""


def strip_quote_suffix(symbol: str, suffix: str = QUOTE_SUFFIX) -> str:
    """``BTCUSDT`` -> ``BTC``; symbols without the suffix pass through."""
    if symbol.endswith(suffix) and len(symbol) > len(suffix):
        return symbol[: -len(suffix)]
    return symbol
