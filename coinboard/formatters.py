"""Pure string formatting helpers used at render time."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from coinboard.config import (
    BRAND_COLORS,
    COLOR_PALETTE,
    DEFAULT_BRAND_COLOR,
    MARKET_PAGE_URL,
    PERCENT_COLUMN_WIDTH,
    QUOTE_SUFFIX,
)
from coinboard.models import PriceQuote
from coinboard.providers.base import strip_quote_suffix

_TWO_PLACES = Decimal("0.01")

# (divisor, suffix) pairs for en-US compact notation
_COMPACT_UNITS: list[tuple[Decimal, str]] = [
    (Decimal(1), ""),
    (Decimal(10) ** 3, "K"),
    (Decimal(10) ** 6, "M"),
    (Decimal(10) ** 9, "B"),
    (Decimal(10) ** 12, "T"),
]

_WHITESPACE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Prices and market cap
# ---------------------------------------------------------------------------


def format_price(price: str) -> str:
    """Prefix the vendor's decimal string with ``$`` (no re-rounding)."""
    return f"${price}"


def _trim_fraction(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_market_cap(market_cap: str) -> str:
    """Render *market_cap* as compact USD, e.g. ``"1230000000"`` -> ``"$1.23B"``.

    At most two fraction digits, trailing zeros dropped. A value that rounds
    up to 1000 of one unit is promoted to the next (``"$1B"``, not
    ``"$1000M"``). Unparseable input renders as ``"$NaN"``.
    """
    try:
        value = Decimal(str(market_cap).strip())
    except InvalidOperation:
        return "$NaN"
    if not value.is_finite():
        return "$NaN"

    magnitude = abs(value)
    idx = 0
    while idx + 1 < len(_COMPACT_UNITS) and magnitude >= _COMPACT_UNITS[idx + 1][0]:
        idx += 1

    scaled = (magnitude / _COMPACT_UNITS[idx][0]).quantize(_TWO_PLACES, ROUND_HALF_UP)
    if scaled >= 1000 and idx + 1 < len(_COMPACT_UNITS):
        idx += 1
        scaled = (magnitude / _COMPACT_UNITS[idx][0]).quantize(_TWO_PLACES, ROUND_HALF_UP)

    sign = "-" if value < 0 and scaled != 0 else ""
    number = _trim_fraction(format(scaled, ",f"))
    return f"{sign}${number}{_COMPACT_UNITS[idx][1]}"


# ---------------------------------------------------------------------------
# Percent changes
# ---------------------------------------------------------------------------


def parse_change(value: str | None) -> float:
    """Parse an optional percent string; missing or garbage reads as 0."""
    try:
        return float(value or "0")
    except ValueError:
        return 0.0


def pad_to_fixed_width(value: str, width: int) -> str:
    """Center *value* in *width* spaces; extra space goes to the right."""
    if len(value) >= width:
        return value
    spaces = width - len(value)
    left = spaces // 2
    return " " * left + value + " " * (spaces - left)


def format_percentage_change(change: float, is_positive: bool) -> str:
    """``(5, True)`` -> ``"  +5.00%  "``: signed, two decimals, width 10."""
    change = change + 0.0  # folds -0.0 into 0.0
    text = f"+{change:.2f}%" if is_positive else f"{change:.2f}%"
    return pad_to_fixed_width(text, PERCENT_COLUMN_WIDTH)


def change_color(change: float) -> str:
    return "green" if change >= 0 else "red"


# ---------------------------------------------------------------------------
# Symbols and colors
# ---------------------------------------------------------------------------


def base_asset(symbol: str) -> str:
    """Strip a trailing quote currency: ``BTCUSDT`` -> ``BTC``."""
    return strip_quote_suffix(symbol, QUOTE_SUFFIX)


def format_symbol(symbol: str) -> str:
    """``BTCUSDT`` -> ``BTC/USDT``; ``BTCUSD`` -> ``BTC/USD``."""
    if symbol.endswith("USDT"):
        return f"{symbol[:-4]}/{symbol[-4:]}"
    if symbol.endswith("USD"):
        return f"{symbol[:-3]}/{symbol[-3:]}"
    return symbol


def color_for_symbol(symbol: str) -> str:
    """Pick a palette color from the sum of the symbol's character codes."""
    total = sum(ord(ch) for ch in symbol)
    return COLOR_PALETTE[total % len(COLOR_PALETTE)]


def brand_color(symbol: str) -> str:
    """Hex brand color for well-known assets, grey otherwise."""
    base = re.sub(r"(USDT|USD)$", "", symbol)
    return BRAND_COLORS.get(base, DEFAULT_BRAND_COLOR)


def market_page_url(quote: PriceQuote) -> str:
    """CoinMarketCap page for *quote*, slugged from its name (or symbol)."""
    slug = _WHITESPACE.sub("-", (quote.name or quote.symbol).lower())
    return MARKET_PAGE_URL.format(slug=slug)
