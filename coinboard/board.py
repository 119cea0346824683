"""Price board: the single-writer state container behind the list view.

Owns the current quote list, search text, selection and user-facing
notifications, and runs one refresh cycle at a time on request (the
scheduler calls :meth:`PriceBoard.refresh` every interval).

Each cycle takes a sequence number. When a cycle finishes after a newer one
has started, its result is dropped, so the board always shows the latest
fetch that was issued. Selection is kept by symbol and re-resolved against
the current list.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel

from coinboard.commands import GetPricesCommand, filter_prices
from coinboard.config import NOTIFICATION_HISTORY, QUOTE_SUFFIX, Preferences
from coinboard.models import PriceQuote
from coinboard.providers.base import PriceFetcher
from coinboard.providers.binance import BinancePriceFetcher
from coinboard.providers.coinmarketcap import CoinMarketCapPriceFetcher

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    """A dismissible, non-blocking message for the user."""

    style: str = "failure"
    title: str
    message: str = ""
    timestamp: str


# ---------------------------------------------------------------------------
# Fetcher selection
# ---------------------------------------------------------------------------


def select_fetcher(
    preferences: Preferences,
    notify: Callable[[str, str], None] | None = None,
) -> PriceFetcher:
    """Build the fetcher named by ``preferences.data_source``.

    ``coinmarketcap`` without an API key warns through *notify* and falls
    back to Binance. Unknown sources use Binance.
    """
    if preferences.data_source == "coinmarketcap":
        if not preferences.api_key:
            if notify is not None:
                notify(
                    "CoinMarketCap API Key Missing",
                    "Please add your API key in preferences",
                )
            return BinancePriceFetcher()
        return CoinMarketCapPriceFetcher(preferences.api_key)
    return BinancePriceFetcher()


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------


class PriceBoard:
    """State for one price list session."""

    def __init__(
        self,
        preferences_loader: Callable[[], Preferences] = Preferences.from_env,
        fetcher_factory: Callable[[Preferences], PriceFetcher] | None = None,
        history: int = NOTIFICATION_HISTORY,
    ) -> None:
        self._load_preferences = preferences_loader
        self._fetcher_factory = fetcher_factory or self.select_fetcher
        self._sequence = 0

        self.quotes: list[PriceQuote] = []
        self.is_loading = False
        self.search_text = ""
        self.selected_symbol: str | None = None
        self.last_updated: str | None = None
        self.notifications: deque[Notification] = deque(maxlen=history)

    # -- Notifications -------------------------------------------------------

    def notify(self, title: str, message: str = "") -> Notification:
        """Record a failure notification and log it."""
        note = Notification(
            title=title,
            message=message,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        self.notifications.append(note)
        logger.warning("%s: %s", title, message)
        return note

    def select_fetcher(self, preferences: Preferences) -> PriceFetcher:
        return select_fetcher(preferences, self.notify)

    # -- Refresh cycle -------------------------------------------------------

    @property
    def sequence(self) -> int:
        return self._sequence

    def invalidate_pending(self) -> None:
        """Make every in-flight cycle stale; their results will be dropped."""
        self._sequence += 1
        self.is_loading = False

    async def refresh(self) -> bool:
        """Run one fetch cycle. Returns ``True`` when its result was applied.

        Preferences and the fetcher are re-read on every cycle, so a missing
        API key is re-checked each time rather than remembered.
        """
        self._sequence += 1
        seq = self._sequence
        self.is_loading = True

        fetcher: PriceFetcher | None = None
        try:
            preferences = self._load_preferences()
            fetcher = self._fetcher_factory(preferences)
            command = GetPricesCommand(fetcher)
            results = await command.get_prices(preferences.tickers)

            if seq != self._sequence:
                logger.info("Discarding stale refresh #%d (latest #%d)", seq, self._sequence)
                return False

            if not results:
                self.notify("No Prices Found", "Please check your tickers or API key")
            self.quotes = results
            self.last_updated = datetime.now(timezone.utc).isoformat()
            return True
        except Exception as exc:
            logger.exception("Refresh #%d failed", seq)
            if seq == self._sequence:
                self.notify("Error Loading Prices", str(exc) or repr(exc))
            return False
        finally:
            if fetcher is not None:
                await fetcher.close()
            if seq == self._sequence:
                self.is_loading = False

    # -- Search and selection -----------------------------------------------

    def set_search_text(self, text: str) -> None:
        self.search_text = text or ""

    def filtered_quotes(self) -> list[PriceQuote]:
        return filter_prices(self.quotes, self.search_text)

    def find(self, symbol: str) -> PriceQuote | None:
        """Look a quote up by symbol (``BTC`` also matches ``BTCUSDT``)."""
        wanted = symbol.strip().upper()
        candidates = (wanted, f"{wanted}{QUOTE_SUFFIX}")
        for quote in self.quotes:
            if quote.symbol in candidates:
                return quote
        return None

    def select(self, symbol: str) -> PriceQuote | None:
        quote = self.find(symbol)
        if quote is not None:
            self.selected_symbol = quote.symbol
        return quote

    def selected_quote(self) -> PriceQuote | None:
        """The detailed quote: current selection, else the first visible row."""
        visible = self.filtered_quotes()
        if not visible:
            return None
        for quote in visible:
            if quote.symbol == self.selected_symbol:
                return quote
        self.selected_symbol = visible[0].symbol
        return visible[0]
