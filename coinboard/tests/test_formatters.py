"""Tests: render-time formatting helpers.

Covers:
- format_market_cap compact notation, promotion and bad input
- format_percentage_change sign, rounding and centering
- pad_to_fixed_width split of the padding
- color_for_symbol determinism
- symbol display helpers and market page slugs
"""

from __future__ import annotations

from coinboard.config import COLOR_PALETTE
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
    pad_to_fixed_width,
    parse_change,
)
from coinboard.models import PriceQuote


# ---------------------------------------------------------------------------
# format_market_cap
# ---------------------------------------------------------------------------


class TestFormatMarketCap:
    def test_billions(self):
        assert format_market_cap("1230000000") == "$1.23B"

    def test_trillions(self):
        assert format_market_cap("1320000000000") == "$1.32T"

    def test_thousands_trim_trailing_zero(self):
        assert format_market_cap("1500") == "$1.5K"

    def test_whole_unit_has_no_fraction(self):
        assert format_market_cap("2000000") == "$2M"

    def test_rounds_to_two_fraction_digits(self):
        assert format_market_cap("1234.5") == "$1.23K"
        assert format_market_cap("1235") == "$1.24K"

    def test_promotes_to_next_unit(self):
        assert format_market_cap("999999999") == "$1B"

    def test_below_thousand(self):
        assert format_market_cap("950") == "$950"
        assert format_market_cap("0.456") == "$0.46"

    def test_zero(self):
        assert format_market_cap("0") == "$0"

    def test_beyond_trillions_keeps_grouping(self):
        assert format_market_cap("2500000000000000") == "$2,500T"

    def test_negative(self):
        assert format_market_cap("-1500000") == "-$1.5M"

    def test_garbage(self):
        assert format_market_cap("abc") == "$NaN"
        assert format_market_cap("") == "$NaN"


# ---------------------------------------------------------------------------
# Percent changes
# ---------------------------------------------------------------------------


class TestFormatPercentageChange:
    def test_positive_centered(self):
        result = format_percentage_change(5, True)
        assert result == "  +5.00%  "
        assert len(result) == 10

    def test_negative_has_no_plus(self):
        assert format_percentage_change(-1.25, False) == "  -1.25%  "

    def test_odd_padding_goes_right(self):
        assert format_percentage_change(12.5, True) == " +12.50%  "

    def test_rounds_to_two_places(self):
        assert format_percentage_change(123.456, True).strip() == "+123.46%"

    def test_negative_zero_reads_as_zero(self):
        assert format_percentage_change(-0.0, True).strip() == "+0.00%"

    def test_wide_value_not_truncated(self):
        assert format_percentage_change(12345.678, True) == "+12345.68%"
        assert format_percentage_change(-123456.0, False) == "-123456.00%"


class TestPadToFixedWidth:
    def test_even_split(self):
        assert pad_to_fixed_width("ab", 6) == "  ab  "

    def test_odd_split(self):
        assert pad_to_fixed_width("abc", 6) == " abc  "

    def test_already_wide(self):
        assert pad_to_fixed_width("abcdef", 4) == "abcdef"


class TestParseChange:
    def test_missing_is_zero(self):
        assert parse_change(None) == 0.0
        assert parse_change("") == 0.0

    def test_garbage_is_zero(self):
        assert parse_change("n/a") == 0.0

    def test_number(self):
        assert parse_change("-3.5") == -3.5

    def test_change_color(self):
        assert change_color(0.0) == "green"
        assert change_color(-0.01) == "red"


# ---------------------------------------------------------------------------
# Colors and symbols
# ---------------------------------------------------------------------------


class TestColorForSymbol:
    def test_same_symbol_same_color(self):
        assert color_for_symbol("BTC") == color_for_symbol("BTC")

    def test_sum_of_char_codes(self):
        # B(66) + T(84) + C(67) = 217; 217 % 8 = 1
        assert color_for_symbol("BTC") == COLOR_PALETTE[1]

    def test_always_in_palette(self):
        for symbol in ("ETHUSDT", "DOGE", "", "x"):
            assert color_for_symbol(symbol) in COLOR_PALETTE


class TestSymbolHelpers:
    def test_base_asset(self):
        assert base_asset("BTCUSDT") == "BTC"
        assert base_asset("BTC") == "BTC"
        # a bare quote currency is not stripped to nothing
        assert base_asset("USDT") == "USDT"

    def test_format_symbol(self):
        assert format_symbol("BTCUSDT") == "BTC/USDT"
        assert format_symbol("ETHUSD") == "ETH/USD"
        assert format_symbol("XYZ") == "XYZ"

    def test_brand_color(self):
        assert brand_color("BTCUSDT") == "#f7931a"
        assert brand_color("ETHUSD") == "#627eea"
        assert brand_color("NOPEUSDT") == "#888888"

    def test_format_price(self):
        assert format_price("67012.55") == "$67012.55"

    def test_market_page_slug_from_name(self):
        quote = PriceQuote(symbol="BCHUSDT", name="Bitcoin  Cash", price="1")
        assert market_page_url(quote) == "https://coinmarketcap.com/currencies/bitcoin-cash"

    def test_market_page_slug_falls_back_to_symbol(self):
        quote = PriceQuote(symbol="BTCUSDT", name="", price="1")
        assert market_page_url(quote) == "https://coinmarketcap.com/currencies/btcusdt"
