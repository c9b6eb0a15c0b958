"""
Agent 1 — Price Refresh

Asks the market feed for a fresh price for every holding (each holding's
current price is the base the simulated move starts from), then rebuilds the
holdings list with the new prices.

Produces:
  state["holdings"]       → new list, revalued where a price came back
  state["prices"]         → { symbol: price } for symbols that resolved
  state["data_warnings"]  → one line per symbol left at its stale price

Design:
  - fetch() and merge() are the core logic, testable standalone
  - run()   is the LangGraph node wrapper
  - A holding with no returned price is passed through unchanged
"""
from __future__ import annotations

import time

from analysis.portfolio_metrics import revalue
from logging_config import get_logger
from state.models import Holding
from tools.market_feed import MarketFeed

logger = get_logger(__name__)


async def fetch(feed: MarketFeed, holdings: list[Holding]) -> dict[str, float]:
    """
    Batch-fetch prices for all holdings.

    Returns:
        { symbol: price }  (failed lookups are absent)
    """
    requests = [(h.symbol, h.price) for h in holdings]
    return await feed.fetch_batch_prices(requests)


def merge(holdings: list[Holding], prices: dict[str, float]) -> list[Holding]:
    """Replace prices for matched symbols; everything else is left as is."""
    return [
        revalue(h, prices[h.symbol]) if h.symbol in prices else h
        for h in holdings
    ]


async def run(state: dict, feed: MarketFeed) -> dict:
    """LangGraph node: refresh prices and write the revalued holdings back."""
    holdings: list[Holding] = state["holdings"]

    t0 = time.monotonic()
    prices = await fetch(feed, holdings)
    updated = merge(holdings, prices)

    stale = [h.symbol for h in holdings if h.symbol not in prices]
    warnings = [f"{symbol}: price not updated this cycle, showing last known price."
                for symbol in stale]

    logger.info(
        "Prices refreshed",
        extra={'updated': len(prices), 'stale': len(stale),
               'elapsed_s': round(time.monotonic() - t0, 2)},
    )
    return {**state, "holdings": updated, "prices": prices,
            "data_warnings": state.get("data_warnings", []) + warnings}
