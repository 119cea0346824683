"""Job function for the periodic price refresh."""

from __future__ import annotations

import logging

from coinboard.board import PriceBoard

logger = logging.getLogger(__name__)


async def refresh_prices(board: PriceBoard) -> None:
    """Run one refresh cycle on *board*.

    Failures are reported through the board's notifications; the next tick
    is the retry.
    """
    logger.info("Auto-refreshing prices (cycle #%d)", board.sequence + 1)
    applied = await board.refresh()
    logger.info(
        "Refresh %s: %d quotes on board",
        "applied" if applied else "not applied",
        len(board.quotes),
    )
