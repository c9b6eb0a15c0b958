"""
Agent 2 — Fundamentals Refresh

Refreshes P/E ratio and latest earnings for holdings that carry them.
Holdings without a base P/E or earnings figure are skipped (nothing to
jitter around). Only wired into the graph when financial refresh is on.

Data pipeline:
  tools/market_feed.py  →  fetch_batch_financials()  →  FinancialQuote per symbol
  state["financials"]   →  dict[symbol, FinancialQuote]
  state["holdings"]     →  pe_ratio / latest_earnings replaced where resolved
"""
from __future__ import annotations

from logging_config import get_logger
from state.models import FinancialQuote, Holding
from tools.market_feed import MarketFeed

logger = get_logger(__name__)


# ── Standalone entry point ────────────────────────────────────────────────────

async def fetch(feed: MarketFeed, holdings: list[Holding]) -> dict[str, FinancialQuote]:
    requests = [
        (h.symbol, h.pe_ratio, h.latest_earnings)
        for h in holdings
        if h.pe_ratio is not None and h.latest_earnings is not None
    ]
    return await feed.fetch_batch_financials(requests)


def merge(holdings: list[Holding], financials: dict[str, FinancialQuote]) -> list[Holding]:
    merged = []
    for h in holdings:
        quote = financials.get(h.symbol)
        if quote is None:
            merged.append(h)
        else:
            merged.append(h.model_copy(update={
                "pe_ratio": quote.pe_ratio,
                "latest_earnings": quote.latest_earnings,
            }))
    return merged


# ── LangGraph node ────────────────────────────────────────────────────────────

async def run(state: dict, feed: MarketFeed) -> dict:
    holdings: list[Holding] = state["holdings"]

    financials = await fetch(feed, holdings)
    logger.info("Fundamentals refreshed", extra={'updated': len(financials)})

    return {**state, "holdings": merge(holdings, financials), "financials": financials}
