"""
Refresh orchestrator — owns the market feed, the refresh graph and the
dashboard-facing state (current aggregate, error, last-updated time).

One cycle:
  holdings → Agent 1 (batch price fetch + revalue)
           → Agent 2 (P/E + earnings, optional)
           → Agent 3 (sector + portfolio totals)

A cycle that raises leaves the previous aggregate on screen and sets a
single user-facing error; the next manual or timed refresh retries.
Overlapping triggers are dropped while a cycle is in flight.
"""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable, Optional

from langgraph.graph import END, START, StateGraph

from agents import agent_01_price_refresh, agent_02_fundamental, agent_03_portfolio_metrics
from analysis.portfolio_metrics import aggregate
from logging_config import get_logger
from state.graph_state import RefreshState
from state.models import Holding, PortfolioAggregate
from tools.market_feed import MarketFeed

logger = get_logger(__name__)

REFRESH_ERROR = "Failed to update stock prices. Please try again."
DEFAULT_INTERVAL = 15.0


def build_graph(feed: MarketFeed, refresh_financials: bool = False):
    async def agent_01_node(state: RefreshState) -> dict:
        return await agent_01_price_refresh.run(state, feed=feed)

    async def agent_02_node(state: RefreshState) -> dict:
        return await agent_02_fundamental.run(state, feed=feed)

    graph = StateGraph(RefreshState)
    graph.add_node("agent_01", agent_01_node)
    graph.add_node("agent_03", agent_03_portfolio_metrics.run)
    graph.add_edge(START, "agent_01")
    if refresh_financials:
        graph.add_node("agent_02", agent_02_node)
        graph.add_edge("agent_01", "agent_02")
        graph.add_edge("agent_02", "agent_03")
    else:
        graph.add_edge("agent_01", "agent_03")
    graph.add_edge("agent_03", END)
    return graph.compile()


class RefreshOrchestrator:
    def __init__(
        self,
        holdings: list[Holding],
        feed: MarketFeed,
        refresh_financials: bool = False,
        on_update: Optional[Callable[["RefreshOrchestrator"], None]] = None,
    ):
        self.feed = feed
        self.on_update = on_update
        self.portfolio: PortfolioAggregate = aggregate(holdings)
        self.error: Optional[str] = None
        self.last_updated: datetime = datetime.now()
        self.loading = False
        self.data_warnings: list[str] = []
        self._app = build_graph(feed, refresh_financials=refresh_financials)
        self._timer: Optional[asyncio.Task] = None

    @property
    def holdings(self) -> list[Holding]:
        return self.portfolio.holdings

    async def refresh(self) -> bool:
        """
        Run one refresh cycle.

        Returns:
            True if the cycle completed, False if it failed or was skipped
            because another cycle was already running.
        """
        if self.loading:
            logger.info("Refresh already in progress, trigger ignored")
            return False

        self.loading = True
        self.error = None
        initial_state: RefreshState = {
            "holdings": self.holdings,
            "prices": None,
            "data_warnings": [],
            "financials": None,
            "portfolio": None,
        }
        try:
            final = await self._app.ainvoke(initial_state)
            self.portfolio = final["portfolio"]
            self.data_warnings = final["data_warnings"]
            self.last_updated = datetime.now()
            logger.info(
                "Refresh cycle complete",
                extra={'holdings': len(self.portfolio.holdings),
                       'stale': len(self.data_warnings)},
            )
            return True
        except Exception:
            logger.exception("Refresh cycle failed")
            self.error = REFRESH_ERROR
            return False
        finally:
            self.loading = False
            self._notify()

    def _notify(self) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(self)
        except Exception:
            logger.exception("on_update callback failed")

    # ── Timer ─────────────────────────────────────────────────────────────────

    async def _tick(self, interval: float) -> None:
        # Ticks sit on a fixed grid; a cycle that overruns skips the ticks it missed.
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            await self.refresh()
            next_tick += interval
            now = loop.time()
            while next_tick <= now:
                next_tick += interval

    def start(self, interval: float = DEFAULT_INTERVAL) -> asyncio.Task:
        """Begin automatic refreshes every `interval` seconds (first one after one interval)."""
        if self._timer is None or self._timer.done():
            self._timer = asyncio.create_task(self._tick(interval))
            logger.info("Automatic refresh started", extra={'interval_s': interval})
        return self._timer

    async def stop(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        try:
            await self._timer
        except asyncio.CancelledError:
            pass
        self._timer = None
        logger.info("Automatic refresh stopped")
