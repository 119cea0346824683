"""Normalized quote record shared by fetchers, the board and the views."""

from __future__ import annotations

from pydantic import BaseModel


class PriceQuote(BaseModel):
    """A single cryptocurrency's price and derived statistics at fetch time.

    Numeric fields are kept as decimal strings exactly as the vendor sent
    them; formatting happens at render time.
    """

    symbol: str
    name: str
    price: str
    price_change_percent_1h: str | None = None
    price_change_percent_24h: str | None = None
    price_change_percent_7d: str | None = None
    market_cap: str | None = None
    icon_url: str | None = None
