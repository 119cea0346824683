"""Configuration: env vars, data sources, refresh cadence, display palette."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()

# ---------------------------------------------------------------------------
# Preferences (defaults, re-read per cycle by Preferences.from_env)
# ---------------------------------------------------------------------------
TICKERS: str = os.getenv("COINBOARD_TICKERS", "")
COINMARKETCAP_API_KEY: str = os.getenv("COINMARKETCAP_API_KEY", "")
DATA_SOURCE: str = os.getenv("COINBOARD_DATA_SOURCE", "binance")

# ---------------------------------------------------------------------------
# Refresh loop
# ---------------------------------------------------------------------------
REFRESH_INTERVAL_SECONDS: int = int(os.getenv("COINBOARD_REFRESH_SECONDS", "30"))
NOTIFICATION_HISTORY: int = 20

# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------
DATA_SOURCES: dict[str, str] = {
    "binance": "Binance",
    "coinmarketcap": "CoinMarketCap",
}

QUOTE_SUFFIX: str = "USDT"

BINANCE_BASE_URL: str = os.getenv("BINANCE_BASE_URL", "https://api.binance.com")
COINMARKETCAP_BASE_URL: str = os.getenv(
    "COINMARKETCAP_BASE_URL", "https://pro-api.coinmarketcap.com"
)
COINMARKETCAP_ICON_URL: str = "https://s2.coinmarketcap.com/static/img/coins/64x64/{id}.png"
MARKET_PAGE_URL: str = "https://coinmarketcap.com/currencies/{slug}"

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
# Generic row tint, picked by the sum of a symbol's character codes.
COLOR_PALETTE: list[str] = [
    "blue",
    "green",
    "magenta",
    "orange",
    "purple",
    "red",
    "yellow",
    "primary-text",
]

BRAND_COLORS: dict[str, str] = {
    "BTC": "#f7931a",   # Bitcoin orange
    "ETH": "#627eea",
    "ADA": "#0033ad",
    "XRP": "#00aae4",
    "SOL": "#14f195",
    "DOGE": "#c3a634",
    "DOT": "#e6007a",
    "USDT": "#26a17b",
}
DEFAULT_BRAND_COLOR: str = "#888888"

PERCENT_COLUMN_WIDTH: int = 10


class Preferences(BaseModel):
    """Snapshot of user preferences, passed by value into each refresh cycle."""

    model_config = ConfigDict(frozen=True)

    tickers: str = ""
    api_key: str = ""
    data_source: str = "binance"

    @classmethod
    def from_env(cls) -> "Preferences":
        """Read preferences from the environment at call time.

        Falls back to the values captured at import, so a ``.env`` file
        still applies when the variables are not exported.
        """
        return cls(
            tickers=os.getenv("COINBOARD_TICKERS", TICKERS),
            api_key=os.getenv("COINMARKETCAP_API_KEY", COINMARKETCAP_API_KEY).strip(),
            data_source=os.getenv("COINBOARD_DATA_SOURCE", DATA_SOURCE).strip().lower(),
        )
