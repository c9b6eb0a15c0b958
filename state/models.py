"""
Pydantic models for portfolio holdings, sector/portfolio aggregates and
simulated market quotes.

Derived money fields (investment, present value, gain/loss) are computed
properties, so they can never drift from quantity × price.
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, computed_field


def pct_of(amount: float, base: float) -> float:
    """amount / base × 100, or 0 when base is not positive."""
    return amount / base * 100 if base > 0 else 0.0


class Holding(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str               # display name, e.g. "HDFC Bank"
    symbol: str             # NSE code, e.g. "HDFCBANK"
    purchase_price: float
    quantity: float
    price: float            # current market price
    sector: str
    pe_ratio: Optional[float] = None
    latest_earnings: Optional[float] = None
    stage2: bool = False
    sale_price: Optional[float] = None
    portfolio_percentage: float = 0.0   # filled in by the aggregator

    @computed_field
    @property
    def investment(self) -> float:
        return self.purchase_price * self.quantity

    @computed_field
    @property
    def present_value(self) -> float:
        return self.price * self.quantity

    @computed_field
    @property
    def gain_loss(self) -> float:
        return self.present_value - self.investment

    @computed_field
    @property
    def gain_loss_percentage(self) -> float:
        return pct_of(self.gain_loss, self.investment)


class SectorAggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    sector: str
    total_investment: float
    total_present_value: float
    holdings: list[Holding]

    @computed_field
    @property
    def total_gain_loss(self) -> float:
        return self.total_present_value - self.total_investment

    @computed_field
    @property
    def gain_loss_percentage(self) -> float:
        return pct_of(self.total_gain_loss, self.total_investment)


class PortfolioAggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    holdings: list[Holding]
    sectors: list[SectorAggregate]
    total_investment: float
    total_present_value: float

    @computed_field
    @property
    def total_gain_loss(self) -> float:
        return self.total_present_value - self.total_investment

    @computed_field
    @property
    def total_gain_loss_percentage(self) -> float:
        return pct_of(self.total_gain_loss, self.total_investment)


QuoteKind = Literal["price", "financial"]


class PriceQuote(BaseModel):
    symbol: str
    price: float
    change: float
    change_percent: float
    timestamp: datetime


class FinancialQuote(BaseModel):
    symbol: str
    pe_ratio: float
    latest_earnings: float
    timestamp: datetime
