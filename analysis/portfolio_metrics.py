"""
Portfolio metrics — sector grouping and investment / gain-loss totals.

Input:  list[Holding]  (seed list, or the output of a price refresh)
Output: PortfolioAggregate  (holdings + per-sector SectorAggregate + totals)

Pure: no I/O, no mutation of the input, never raises. Empty input gives
zero totals and no sectors.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from state.models import Holding, PortfolioAggregate, SectorAggregate, pct_of


def revalue(holding: Holding, price: float) -> Holding:
    """Copy of holding at a new market price; present value and gain/loss follow."""
    return holding.model_copy(update={"price": price})


def _totals(holdings: Iterable[Holding]) -> tuple[float, float]:
    investment = 0.0
    present_value = 0.0
    for h in holdings:
        investment += h.investment
        present_value += h.present_value
    return investment, present_value


def aggregate(holdings: Sequence[Holding]) -> PortfolioAggregate:
    """
    Group holdings by sector and compute sector + portfolio totals.

    Sectors appear in first-seen order; holdings keep their relative order
    inside each sector. Each returned holding carries its share of total
    portfolio investment in `portfolio_percentage`.
    """
    total_investment, total_present_value = _totals(holdings)

    weighted = [
        h.model_copy(update={"portfolio_percentage": pct_of(h.investment, total_investment)})
        for h in holdings
    ]

    # dict keeps insertion order → first-seen sector order
    by_sector: dict[str, list[Holding]] = defaultdict(list)
    for h in weighted:
        by_sector[h.sector].append(h)

    sectors = []
    for sector, members in by_sector.items():
        investment, present_value = _totals(members)
        sectors.append(SectorAggregate(
            sector=sector,
            total_investment=investment,
            total_present_value=present_value,
            holdings=members,
        ))

    return PortfolioAggregate(
        holdings=weighted,
        sectors=sectors,
        total_investment=total_investment,
        total_present_value=total_present_value,
    )
