"""Binance spot ticker provider (last price and rolling percent changes)."""

from __future__ import annotations

import asyncio
import logging

import httpx

from coinboard.config import BINANCE_BASE_URL
from coinboard.models import PriceQuote
from coinboard.providers.base import PriceFetcher, strip_quote_suffix

logger = logging.getLogger(__name__)

_TIMEOUT = 10.0
_MAX_CONCURRENT = 8

# windowSize values accepted by /api/v3/ticker
_WINDOWS: dict[str, str] = {
    "1h": "price_change_percent_1h",
    "7d": "price_change_percent_7d",
}


class BinanceError(Exception):
    """Raised when Binance answers with an application-level error payload."""


# ---------------------------------------------------------------------------
# Pure helper functions
# ---------------------------------------------------------------------------


def _parse_ticker(raw: dict, symbol: str) -> PriceQuote:
    """Map a /ticker/24hr payload onto a quote.

    Raises ``KeyError`` when the payload lacks a last price.
    """
    change_24h = raw.get("priceChangePercent")
    return PriceQuote(
        symbol=raw.get("symbol", symbol),
        name=strip_quote_suffix(symbol),
        price=str(raw["lastPrice"]),
        price_change_percent_24h=str(change_24h) if change_24h is not None else None,
    )


def _parse_window_change(raw: dict) -> str | None:
    value = raw.get("priceChangePercent")
    if value is None:
        return None
    return str(value)


# ---------------------------------------------------------------------------
# Provider class
# ---------------------------------------------------------------------------


class BinancePriceFetcher(PriceFetcher):
    """Binance implementation of the PriceFetcher interface.

    Issues one 24h ticker call per symbol plus one rolling-window call per
    extra change period. Market cap and icon are not available.
    """

    name = "Binance"

    def __init__(self, base_url: str = BINANCE_BASE_URL) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=_TIMEOUT)
        self._semaphore = asyncio.Semaphore(_MAX_CONCURRENT)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, endpoint: str, params: dict) -> dict:
        """Rate-limited GET; raises BinanceError on API-level errors."""
        async with self._semaphore:
            resp = await self._client.get(endpoint, params=params)

        data = resp.json() if resp.content else {}
        if isinstance(data, dict) and "code" in data and "msg" in data:
            raise BinanceError(f"{data['code']}: {data['msg']}")
        resp.raise_for_status()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected payload type {type(data).__name__}")
        return data

    async def _window_change(self, symbol: str, window: str) -> str | None:
        try:
            raw = await self._request(
                "/api/v3/ticker", {"symbol": symbol, "windowSize": window}
            )
            return _parse_window_change(raw)
        except (httpx.HTTPError, BinanceError, ValueError) as exc:
            logger.warning("%s change for %s unavailable: %s", window, symbol, exc)
            return None

    async def get_quote(self, symbol: str) -> PriceQuote | None:
        """Fetch a single symbol; ``None`` when it cannot be resolved."""
        try:
            raw = await self._request("/api/v3/ticker/24hr", {"symbol": symbol})
            quote = _parse_ticker(raw, symbol)
        except (httpx.HTTPError, BinanceError, KeyError, ValueError) as exc:
            logger.error("get_quote(%s) failed: %s", symbol, exc)
            return None

        changes = await asyncio.gather(
            *(self._window_change(symbol, window) for window in _WINDOWS)
        )
        updates = dict(zip(_WINDOWS.values(), changes))
        return quote.model_copy(update=updates)

    # -- Public interface ----------------------------------------------------

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        """Fetch quotes for *symbols* concurrently, keeping request order."""
        if not symbols:
            return []
        results = await asyncio.gather(*(self.get_quote(s) for s in symbols))
        quotes = [q for q in results if q is not None]
        logger.info("Binance: %d/%d symbols resolved", len(quotes), len(symbols))
        return quotes
