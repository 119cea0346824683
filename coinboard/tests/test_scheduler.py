"""Tests: refresh job wiring, the job function, and the app lifespan."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from coinboard import main
from coinboard.board import PriceBoard
from coinboard.config import Preferences
from coinboard.jobs.refresh import refresh_prices
from coinboard.jobs.scheduler import create_scheduler


class TestCreateScheduler:
    def test_single_interval_job(self):
        board = PriceBoard()
        scheduler = create_scheduler(board, interval_seconds=30)

        jobs = scheduler.get_jobs()
        assert [j.id for j in jobs] == ["refresh_prices"]

        job = jobs[0]
        assert job.func is refresh_prices
        assert job.kwargs == {"board": board}
        assert job.trigger.interval == timedelta(seconds=30)
        assert job.max_instances == 1
        assert job.coalesce is True

    def test_first_run_is_immediate(self):
        before = datetime.now(timezone.utc)
        job = create_scheduler(PriceBoard(), interval_seconds=30).get_jobs()[0]

        assert job.next_run_time is not None
        # first load on mount, not one interval later
        assert job.next_run_time <= before + timedelta(seconds=1)

    def test_custom_interval(self):
        scheduler = create_scheduler(PriceBoard(), interval_seconds=5)
        assert scheduler.get_jobs()[0].trigger.interval == timedelta(seconds=5)


class TestRefreshPricesJob:
    @pytest.mark.asyncio
    async def test_runs_one_cycle(self):
        board = MagicMock()
        board.sequence = 3
        board.quotes = []
        board.refresh = AsyncMock(return_value=True)

        await refresh_prices(board=board)

        board.refresh.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_applied_does_not_raise(self):
        board = MagicMock()
        board.sequence = 0
        board.quotes = []
        board.refresh = AsyncMock(return_value=False)

        await refresh_prices(board=board)

        board.refresh.assert_awaited_once()


class TestLifespan:
    @pytest.mark.asyncio
    async def test_mount_installs_board_and_starts_scheduler(self):
        board = PriceBoard()
        app = FastAPI()
        with patch.object(main, "PriceBoard", return_value=board), \
                patch.object(main, "start_scheduler") as start, \
                patch.object(main, "stop_scheduler") as stop:
            async with main.lifespan(app):
                assert app.state.board is board
                start.assert_called_once_with(board)
                stop.assert_not_called()
            stop.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_teardown_discards_in_flight_cycle(self, btc_quote):
        gate = asyncio.Event()

        async def slow_fetch(symbols):
            await gate.wait()
            return [btc_quote]

        fetcher = AsyncMock()
        fetcher.name = "Gated"
        fetcher.quote_suffix = "USDT"
        fetcher.fetch_quotes.side_effect = slow_fetch
        board = PriceBoard(
            preferences_loader=lambda: Preferences(tickers="btc"),
            fetcher_factory=lambda prefs: fetcher,
        )

        app = FastAPI()
        with patch.object(main, "PriceBoard", return_value=board), \
                patch.object(main, "start_scheduler"), \
                patch.object(main, "stop_scheduler"):
            async with main.lifespan(app):
                cycle = asyncio.create_task(board.refresh())
                await asyncio.sleep(0)
                assert board.is_loading is True

        gate.set()
        assert await cycle is False
        assert board.quotes == []
        assert list(board.notifications) == []
        assert board.is_loading is False
        fetcher.close.assert_awaited_once()
