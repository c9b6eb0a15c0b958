"""
Terminal dashboard — text rendering of a PortfolioAggregate.

Sections (in order):
  1. Header             totals, gain/loss, last-updated time
  2. Error banner       only when the last refresh failed
  3. Sector summaries   one line each; expanded sectors get their holdings table
  4. All holdings       full table
  5. Data warnings      symbols still showing a stale price
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from report.formatters import format_currency, format_number, format_optional, format_percentage
from state.models import Holding, PortfolioAggregate

_RULE = "=" * 70
_THIN = "─" * 70


def holdings_frame(holdings: list[Holding]) -> pd.DataFrame:
    """One formatted row per holding, in the order given."""
    rows = [
        {
            "Particulars":   f"{h.name}{' *' if h.stage2 else ''}",
            "NSE":           h.symbol,
            "Purchase":      format_currency(h.purchase_price),
            "Qty":           format_number(h.quantity),
            "Investment":    format_currency(h.investment),
            "Portfolio %":   f"{h.portfolio_percentage:.2f}%",
            "CMP":           format_currency(h.price),
            "Present Value": format_currency(h.present_value),
            "Gain/Loss":     format_currency(h.gain_loss),
            "G/L %":         format_percentage(h.gain_loss_percentage),
            "P/E":           format_optional(h.pe_ratio),
            "Earnings":      format_optional(h.latest_earnings, format_currency),
        }
        for h in holdings
    ]
    return pd.DataFrame(rows)


def _table(holdings: list[Holding]) -> str:
    if not holdings:
        return "  (no holdings)"
    return holdings_frame(holdings).to_string(index=False)


def _header(portfolio: PortfolioAggregate, last_updated: datetime) -> str:
    return "\n".join([
        _RULE,
        f"Portfolio Dashboard  |  {len(portfolio.holdings)} holdings  |  Last updated: {last_updated:%H:%M:%S}",
        _RULE,
        f"  Total Investment : {format_currency(portfolio.total_investment)}",
        f"  Present Value    : {format_currency(portfolio.total_present_value)}",
        f"  Total Gain/Loss  : {format_currency(portfolio.total_gain_loss)}"
        f"  ({format_percentage(portfolio.total_gain_loss_percentage)})",
    ])


def render(
    portfolio: PortfolioAggregate,
    last_updated: datetime,
    error: Optional[str] = None,
    expanded: Iterable[str] = (),
    data_warnings: Iterable[str] = (),
) -> str:
    """Render the whole dashboard as a single string."""
    expanded = set(expanded)
    parts = [_header(portfolio, last_updated)]

    if error:
        parts.append(f"\n[ERROR] {error}  (retry with a manual refresh)")

    parts.append(f"\nSectors ({len(portfolio.sectors)})")
    parts.append(_THIN)
    for s in portfolio.sectors:
        marker = "▼" if s.sector in expanded else "▶"
        parts.append(
            f"{marker} {s.sector:<12} {len(s.holdings):>2} stocks  "
            f"inv {format_currency(s.total_investment):>14}  "
            f"value {format_currency(s.total_present_value):>14}  "
            f"G/L {format_currency(s.total_gain_loss):>13} "
            f"({format_percentage(s.gain_loss_percentage)})"
        )
        if s.sector in expanded:
            parts.append(_table(s.holdings))
            parts.append("")

    parts.append("\nAll Holdings  (* = stage 2)")
    parts.append(_THIN)
    parts.append(_table(portfolio.holdings))

    warnings = list(data_warnings)
    if warnings:
        parts.append("\nData warnings:")
        parts.extend(f"  - {w}" for w in warnings)

    return "\n".join(parts)
