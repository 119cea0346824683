"""Shared quote fixtures."""

from __future__ import annotations

import pytest

from coinboard.models import PriceQuote


@pytest.fixture
def btc_quote() -> PriceQuote:
    return PriceQuote(
        symbol="BTCUSDT",
        name="Bitcoin",
        price="67012.55",
        price_change_percent_1h="0.42",
        price_change_percent_24h="-1.75",
        price_change_percent_7d="6.3",
        market_cap="1320000000000",
        icon_url="https://s2.coinmarketcap.com/static/img/coins/64x64/1.png",
    )


@pytest.fixture
def eth_quote() -> PriceQuote:
    return PriceQuote(
        symbol="ETHUSDT",
        name="Ethereum",
        price="3150.10",
        price_change_percent_24h="2.5",
    )


@pytest.fixture
def ada_quote() -> PriceQuote:
    return PriceQuote(symbol="ADAUSDT", name="Cardano", price="0.4512")
