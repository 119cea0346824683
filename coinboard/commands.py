"""Prices command: ticker parsing, fetch delegation and search filtering."""

from __future__ import annotations

import logging

from coinboard.models import PriceQuote
from coinboard.providers.base import PriceFetcher

logger = logging.getLogger(__name__)


def parse_tickers(ticker_csv: str, suffix: str) -> list[str]:
    """Turn ``"btc, eth,,BTC"`` into ``["BTCUSDT", "ETHUSDT"]``.

    Entries are trimmed and upper-cased; empty entries are dropped; *suffix*
    is appended only when missing; duplicates keep their first position.
    """
    symbols: list[str] = []
    seen: set[str] = set()
    for part in (ticker_csv or "").split(","):
        value = part.strip().upper()
        if not value:
            continue
        if suffix and not value.endswith(suffix):
            value = f"{value}{suffix}"
        if value in seen:
            continue
        seen.add(value)
        symbols.append(value)
    return symbols


def filter_prices(quotes: list[PriceQuote], search_text: str) -> list[PriceQuote]:
    """Return the quotes whose symbol or name contains *search_text*.

    Matching is case-insensitive. Blank search text returns *quotes* as is;
    otherwise the text is matched as typed, spaces included.
    """
    if not (search_text or "").strip():
        return quotes
    needle = search_text.lower()
    return [
        q for q in quotes
        if needle in q.symbol.lower() or needle in q.name.lower()
    ]


class GetPricesCommand:
    """Resolve a comma-separated ticker list into quotes from one fetcher."""

    def __init__(self, fetcher: PriceFetcher, source_name: str = "") -> None:
        self.fetcher = fetcher
        self.source_name = source_name or fetcher.name

    async def get_prices(self, ticker_csv: str) -> list[PriceQuote]:
        """Fetch quotes for *ticker_csv* in source order.

        Returns ``[]`` without touching the fetcher when no ticker survives
        parsing.
        """
        symbols = parse_tickers(ticker_csv, self.fetcher.quote_suffix)
        if not symbols:
            logger.info("No tickers configured; skipping %s fetch", self.source_name)
            return []

        quotes = await self.fetcher.fetch_quotes(symbols)
        logger.info(
            "%s returned %d quotes for %d symbols",
            self.source_name, len(quotes), len(symbols),
        )
        return quotes

    @staticmethod
    def filter_prices(quotes: list[PriceQuote], search_text: str) -> list[PriceQuote]:
        return filter_prices(quotes, search_text)
