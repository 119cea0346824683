"""Render quotes into list rows, detail panes and the empty state."""

from __future__ import annotations

from coinboard.formatters import (
    base_asset,
    brand_color,
    change_color,
    color_for_symbol,
    format_market_cap,
    format_percentage_change,
    format_price,
    format_symbol,
    market_page_url,
    parse_change,
)
from coinboard.models import PriceQuote

_CHANGE_PERIODS: list[tuple[str, str]] = [
    ("1h Change", "price_change_percent_1h"),
    ("24h Change", "price_change_percent_24h"),
    ("7d Change", "price_change_percent_7d"),
]

EMPTY_VIEW: dict = {
    "icon": "coins",
    "title": "No cryptocurrencies found",
    "description": "Please add tickers in preferences (e.g., 'BTC,ETH,ADA')",
}


def change_tag(value: str | None) -> dict:
    """Colored, fixed-width percent tag for an optional change string."""
    change = parse_change(value)
    return {
        "value": format_percentage_change(change, change >= 0),
        "color": change_color(change),
    }


def row_actions(quote: PriceQuote) -> list[dict]:
    return [
        {"type": "open", "title": "View On CoinMarketCap", "url": market_page_url(quote)},
        {"type": "copy", "title": "Copy Price", "content": format_price(quote.price)},
        {"type": "copy", "title": "Copy Symbol", "content": quote.symbol},
    ]


def render_row(quote: PriceQuote) -> dict:
    """One list row: base asset, price and the 1h change tag."""
    if quote.icon_url:
        icon = {"source": quote.icon_url}
    else:
        icon = {"source": "coin", "tint": color_for_symbol(quote.symbol)}

    return {
        "id": quote.symbol,
        "title": base_asset(quote.symbol),
        "subtitle": format_price(quote.price),
        "icon": icon,
        "accessories": [{"tag": change_tag(quote.price_change_percent_1h)}],
        "actions": row_actions(quote),
    }


def render_detail(quote: PriceQuote) -> dict:
    """Detail metadata: price, change tags, market cap and market page link."""
    pair = format_symbol(quote.symbol)
    metadata: list[dict] = [
        {"type": "tags", "title": "Pair", "tags": [{"value": pair, "color": brand_color(quote.symbol)}]},
        {"type": "label", "title": "Price", "text": format_price(quote.price)},
    ]
    for title, field in _CHANGE_PERIODS:
        metadata.append({"type": "tags", "title": title, "tags": [change_tag(getattr(quote, field))]})
    metadata.append(
        {"type": "label", "title": "Market Cap", "text": format_market_cap(quote.market_cap or "0")}
    )
    metadata.append({"type": "separator"})
    metadata.append(
        {
            "type": "link",
            "title": "View On CoinMarketCap",
            "target": market_page_url(quote),
            "text": quote.name or quote.symbol,
        }
    )

    return {
        "symbol": quote.symbol,
        "pair": pair,
        "name": quote.name,
        "metadata": metadata,
        "markdown": render_detail_markdown(quote),
        "actions": row_actions(quote),
    }


def render_detail_markdown(quote: PriceQuote) -> str:
    change_24h = parse_change(quote.price_change_percent_24h)
    change_7d = parse_change(quote.price_change_percent_7d)
    dot_24h = "🟢" if change_24h >= 0 else "🔴"
    dot_7d = "🟢" if change_7d >= 0 else "🔴"

    return "\n".join([
        f"# {quote.name} ({quote.symbol})",
        "",
        "## Current Price",
        f"**{format_price(quote.price)}**",
        "",
        "## Performance",
        f"- **24h Change**: {dot_24h} {format_percentage_change(change_24h, change_24h >= 0)}",
        f"- **7d Change**: {dot_7d} {format_percentage_change(change_7d, change_7d >= 0)}",
        "",
        "## Market Data",
        f"- **Market Cap**: {format_market_cap(quote.market_cap or '0')}",
        "",
        f"## About {quote.name}",
        f"{quote.name} is a cryptocurrency with the symbol {base_asset(quote.symbol)}.",
    ])


def render_list(quotes: list[PriceQuote], is_loading: bool) -> dict:
    """Rows for *quotes*, or the empty-state placeholder once loading ends."""
    rows = [render_row(q) for q in quotes]
    return {
        "rows": rows,
        "empty_view": EMPTY_VIEW if not rows and not is_loading else None,
    }
