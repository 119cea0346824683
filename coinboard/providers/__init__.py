"""Price fetchers package."""

from coinboard.providers.base import PriceFetcher
from coinboard.providers.binance import BinancePriceFetcher
from coinboard.providers.coinmarketcap import CoinMarketCapPriceFetcher

__all__ = ["PriceFetcher", "BinancePriceFetcher", "CoinMarketCapPriceFetcher"]
