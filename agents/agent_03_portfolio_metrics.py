"""
Agent 3 — Portfolio Metrics

Final node of the refresh graph: turns the (revalued) holdings into the
PortfolioAggregate the dashboard shows.

Produces: state["portfolio"] = PortfolioAggregate
"""
from __future__ import annotations

from analysis.portfolio_metrics import aggregate
from state.models import Holding


def run(state: dict) -> dict:
    holdings: list[Holding] = state["holdings"]
    portfolio = aggregate(holdings)
    return {**state, "holdings": portfolio.holdings, "portfolio": portfolio}
