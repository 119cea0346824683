"""CoinMarketCap aggregator provider (price, rolling changes, market cap, icon)."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

import httpx

from coinboard.config import COINMARKETCAP_BASE_URL, COINMARKETCAP_ICON_URL
from coinboard.models import PriceQuote
from coinboard.providers.base import PriceFetcher, strip_quote_suffix

logger = logging.getLogger(__name__)

_TIMEOUT = 15.0
_CONVERT = "USD"


class CoinMarketCapError(Exception):
    """Raised when CoinMarketCap reports a non-zero ``status.error_code``."""


# ---------------------------------------------------------------------------
# Pure helper functions
# ---------------------------------------------------------------------------


def _to_decimal_string(value) -> str | None:
    """Render a JSON number as a plain decimal string (no exponent)."""
    if value is None:
        return None
    try:
        return format(Decimal(str(value)), "f")
    except InvalidOperation:
        return None


def _parse_listing(raw: dict, symbol: str) -> PriceQuote:
    """Normalize one entry of ``data`` into a quote.

    Raises ``KeyError`` when the USD quote or its price is missing.
    """
    usd = raw["quote"][_CONVERT]
    price = _to_decimal_string(usd["price"])
    if price is None:
        raise ValueError(f"price missing for {symbol}")

    coin_id = raw.get("id")
    return PriceQuote(
        symbol=symbol,
        name=raw.get("name") or strip_quote_suffix(symbol),
        price=price,
        price_change_percent_1h=_to_decimal_string(usd.get("percent_change_1h")),
        price_change_percent_24h=_to_decimal_string(usd.get("percent_change_24h")),
        price_change_percent_7d=_to_decimal_string(usd.get("percent_change_7d")),
        market_cap=_to_decimal_string(usd.get("market_cap")),
        icon_url=COINMARKETCAP_ICON_URL.format(id=coin_id) if coin_id is not None else None,
    )


def _parse_quotes_latest(raw: dict, symbols: list[str]) -> list[PriceQuote]:
    """Parse a /quotes/latest response, keeping the order of *symbols*.

    ``data`` is keyed by base asset; entries may be a dict or, for
    ambiguous tickers, a list whose first element is the top-ranked coin.
    """
    data = raw.get("data") or {}
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected data type {type(data).__name__}")
    quotes: list[PriceQuote] = []
    for symbol in symbols:
        entry = data.get(strip_quote_suffix(symbol))
        if isinstance(entry, list):
            entry = entry[0] if entry else None
        if entry is None:
            logger.warning("No data returned for %s", symbol)
            continue
        try:
            quotes.append(_parse_listing(entry, symbol))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Failed to parse quote for %s: %s", symbol, exc)
    return quotes


# ---------------------------------------------------------------------------
# Provider class
# ---------------------------------------------------------------------------


class CoinMarketCapPriceFetcher(PriceFetcher):
    """CoinMarketCap implementation of the PriceFetcher interface.

    All symbols are requested in a single batched call authenticated with
    the ``X-CMC_PRO_API_KEY`` header.
    """

    name = "CoinMarketCap"

    def __init__(self, api_key: str, base_url: str = COINMARKETCAP_BASE_URL) -> None:
        if not api_key:
            raise ValueError("api_key must be provided")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=_TIMEOUT,
            headers={"X-CMC_PRO_API_KEY": api_key, "Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, endpoint: str, params: dict) -> dict:
        """GET *endpoint*; raises CoinMarketCapError on API-level errors."""
        resp = await self._client.get(endpoint, params=params)
        data = resp.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected payload type {type(data).__name__}")
        status = data.get("status") or {}
        if not isinstance(status, dict):
            raise ValueError(f"Unexpected status type {type(status).__name__}")
        if status.get("error_code"):
            raise CoinMarketCapError(
                f"{status.get('error_code')}: {status.get('error_message')}"
            )
        resp.raise_for_status()
        return data

    # -- Public interface ----------------------------------------------------

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        """Batch-fetch quotes for *symbols* in one HTTP call."""
        if not symbols:
            return []
        bases = list(dict.fromkeys(strip_quote_suffix(s) for s in symbols))
        try:
            raw = await self._request(
                "/v1/cryptocurrency/quotes/latest",
                {"symbol": ",".join(bases), "convert": _CONVERT, "skip_invalid": "true"},
            )
            quotes = _parse_quotes_latest(raw, symbols)
        except (httpx.HTTPError, CoinMarketCapError, KeyError, TypeError, ValueError) as exc:
            logger.error("CoinMarketCap batch request failed: %s", exc)
            return []
        logger.info("CoinMarketCap: %d/%d symbols resolved", len(quotes), len(symbols))
        return quotes
