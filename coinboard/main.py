"""FastAPI application entry point: the price board's rendered surface."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from coinboard.board import PriceBoard
from coinboard.jobs.scheduler import start_scheduler, stop_scheduler
from coinboard.views import render_detail, render_list

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Mount the board on startup (first load + 30s ticks), tear down on exit."""
    app.state.board = PriceBoard()
    app.state.scheduler = start_scheduler(app.state.board)
    logger.info("coinboard started")
    yield

    stop_scheduler()
    # In-flight fetches are left to finish; their results are discarded.
    app.state.board.invalidate_pending()
    logger.info("coinboard stopped")


app = FastAPI(title="coinboard", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _board() -> PriceBoard:
    return app.state.board


@app.get("/api/health")
async def health() -> dict:
    """Return service health status."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/prices")
async def prices(search: str | None = Query(None)) -> dict:
    """Return the list view, filtered by *search* when given.

    Passing ``search`` updates the board's search text; omitting it keeps
    the previous one.
    """
    board = _board()
    if search is not None:
        board.set_search_text(search)

    visible = board.filtered_quotes()
    selected = board.selected_quote()
    payload = render_list(visible, board.is_loading)
    payload.update({
        "is_loading": board.is_loading,
        "search_text": board.search_text,
        "selected": selected.symbol if selected else None,
        "last_updated": board.last_updated,
    })
    return payload


@app.get("/api/prices/{symbol}")
async def price_detail(symbol: str) -> dict:
    """Return the detail pane for *symbol* and make it the selection."""
    quote = _board().select(symbol)
    if quote is None:
        raise HTTPException(status_code=404, detail=f"No quote for {symbol!r}")
    return render_detail(quote)


@app.get("/api/notifications")
async def notifications() -> dict:
    """Return recent notifications, newest first."""
    notes = list(reversed(_board().notifications))
    return {"notifications": [n.model_dump() for n in notes]}


@app.post("/api/refresh")
async def refresh_now() -> dict:
    """Run one refresh cycle immediately."""
    board = _board()
    applied = await board.refresh()
    logger.info("refresh-now: applied=%s, %d quotes", applied, len(board.quotes))
    return {"status": "ok", "applied": applied, "count": len(board.quotes)}
