#!/usr/bin/env python3
"""One-shot price fetch with live data.

Runs a single refresh cycle using the configured preferences
(COINBOARD_TICKERS, COINBOARD_DATA_SOURCE, COINMARKETCAP_API_KEY) and
prints the rendered rows plus any notifications.

Usage: python scripts/fetch_prices.py [search text]
"""

import asyncio
import logging
import os
import sys

# Ensure project root is on sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("fetch_prices")


async def main() -> int:
    from coinboard.board import PriceBoard
    from coinboard.config import Preferences
    from coinboard.views import render_detail, render_list

    prefs = Preferences.from_env()
    print("=" * 70)
    print("  COINBOARD — ONE-SHOT FETCH")
    print("=" * 70)
    print(f"\nSource:  {prefs.data_source}")
    print(f"Tickers: {prefs.tickers or '(none)'}")

    board = PriceBoard()
    if len(sys.argv) > 1:
        board.set_search_text(sys.argv[1])

    await board.refresh()

    listing = render_list(board.filtered_quotes(), board.is_loading)
    if listing["empty_view"]:
        print(f"\n  {listing['empty_view']['title']}")
        print(f"  {listing['empty_view']['description']}")
    for row in listing["rows"]:
        tag = row["accessories"][0]["tag"]["value"]
        print(f"  {row['title']:<10} {row['subtitle']:>18} {tag}")

    selected = board.selected_quote()
    if selected is not None:
        print("\n--- Detail ---")
        print(render_detail(selected)["markdown"])

    for note in board.notifications:
        print(f"\n[!] {note.title}: {note.message}")

    return 0 if board.quotes else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
