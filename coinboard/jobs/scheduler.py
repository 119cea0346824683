"""APScheduler configuration and lifecycle management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from coinboard.board import PriceBoard
from coinboard.config import REFRESH_INTERVAL_SECONDS
from coinboard.jobs.refresh import refresh_prices

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None


def create_scheduler(
    board: PriceBoard,
    interval_seconds: int = REFRESH_INTERVAL_SECONDS,
) -> AsyncIOScheduler:
    """Create the scheduler with the price refresh job.

    The board is passed as a job kwarg so the job function stays testable
    without global state. The first run fires immediately (the mount-time
    load); later runs follow every *interval_seconds*.
    """
    scheduler = AsyncIOScheduler(timezone="UTC")

    scheduler.add_job(
        refresh_prices,
        trigger="interval",
        seconds=interval_seconds,
        id="refresh_prices",
        name="Refresh cryptocurrency prices",
        kwargs={"board": board},
        next_run_time=datetime.now(timezone.utc),
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    return scheduler


def start_scheduler(board: PriceBoard) -> AsyncIOScheduler:
    """Create, start, and return the scheduler."""
    global _scheduler
    _scheduler = create_scheduler(board)
    _scheduler.start()
    logger.info("Scheduler started with %d jobs", len(_scheduler.get_jobs()))
    return _scheduler


def stop_scheduler() -> None:
    """Shut the scheduler down without waiting for a running refresh."""
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
        _scheduler = None
