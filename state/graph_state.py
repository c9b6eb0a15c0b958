"""
LangGraph state for the price-refresh pipeline.
"""
from __future__ import annotations

from typing import Optional
from typing_extensions import TypedDict

from state.models import FinancialQuote, Holding, PortfolioAggregate


class RefreshState(TypedDict):
    # Input: the holdings as they stood when the cycle started
    holdings: list[Holding]

    # Agent 1 output: symbol → freshly simulated price (failed symbols absent)
    prices: Optional[dict[str, float]]

    # Symbols left at their stale price (lookup failed or skipped)
    data_warnings: list[str]

    # Agent 2 output: symbol → FinancialQuote (only when financials are refreshed)
    financials: Optional[dict[str, FinancialQuote]]

    # Agent 3 output
    portfolio: Optional[PortfolioAggregate]
