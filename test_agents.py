"""
Tests for the refresh-graph agents (agents/agent_0*.py)
Run: pytest test_agents.py
"""
import pytest

from agents import agent_01_price_refresh, agent_02_fundamental, agent_03_portfolio_metrics
from tools.market_feed import MarketDataError, MarketFeed


class PartialFeed(MarketFeed):
    def __init__(self, failing: set, **kw):
        super().__init__(**kw)
        self.failing = failing

    async def fetch_current_price(self, symbol, base_price):
        if symbol in self.failing:
            raise MarketDataError(f"Failed to fetch price for {symbol}")
        return await super().fetch_current_price(symbol, base_price)


def test_merge_replaces_only_matched_symbols(make_holding):
    a = make_holding(symbol="AAA", purchase_price=10, quantity=5, price=10)
    b = make_holding(symbol="BBB", purchase_price=20, quantity=5, price=20)

    merged = agent_01_price_refresh.merge([a, b], {"AAA": 12.5})

    assert merged[0].price == 12.5
    assert merged[0].present_value == pytest.approx(62.5)
    assert merged[0].gain_loss == pytest.approx(12.5)
    assert merged[1] is b


@pytest.mark.asyncio
async def test_price_node_keeps_stale_price_for_failed_lookup(make_holding, rng, fake_sleep):
    a = make_holding(symbol="AAA", price=100.0)
    b = make_holding(symbol="BBB", price=200.0)
    feed = PartialFeed({"BBB"}, rng=rng, sleep=fake_sleep)

    state = {"holdings": [a, b], "prices": None, "data_warnings": [],
             "financials": None, "portfolio": None}
    out = await agent_01_price_refresh.run(state, feed=feed)

    assert set(out["prices"]) == {"AAA"}
    assert out["holdings"][0].price == out["prices"]["AAA"]
    assert out["holdings"][1] is b
    assert len(out["data_warnings"]) == 1
    assert out["data_warnings"][0].startswith("BBB")


@pytest.mark.asyncio
async def test_price_node_uses_current_price_as_base(make_holding, feed):
    h = make_holding(symbol="AAA", purchase_price=10.0, price=500.0)
    prices = await agent_01_price_refresh.fetch(feed, [h])

    assert abs(prices["AAA"] - 500.0) <= 15.005


@pytest.mark.asyncio
async def test_fundamentals_skip_holdings_without_base_figures(make_holding, feed):
    with_data = make_holding(symbol="AAA", pe_ratio=25.0, latest_earnings=400.0)
    without = make_holding(symbol="BBB")

    quotes = await agent_02_fundamental.fetch(feed, [with_data, without])
    assert set(quotes) == {"AAA"}

    merged = agent_02_fundamental.merge([with_data, without], quotes)
    assert merged[0].pe_ratio == quotes["AAA"].pe_ratio
    assert merged[0].latest_earnings == quotes["AAA"].latest_earnings
    assert merged[1] is without


@pytest.mark.asyncio
async def test_fundamentals_node_writes_state(make_holding, feed):
    h = make_holding(symbol="AAA", pe_ratio=25.0, latest_earnings=400.0)
    out = await agent_02_fundamental.run({"holdings": [h]}, feed=feed)

    assert set(out["financials"]) == {"AAA"}
    assert 24.0 - 0.005 <= out["holdings"][0].pe_ratio <= 26.0 + 0.005


def test_metrics_node_builds_aggregate(make_holding):
    holdings = [make_holding("IT"), make_holding("Auto"), make_holding("IT")]
    out = agent_03_portfolio_metrics.run({"holdings": holdings})

    portfolio = out["portfolio"]
    assert [s.sector for s in portfolio.sectors] == ["IT", "Auto"]
    assert out["holdings"] == portfolio.holdings
    assert sum(h.portfolio_percentage for h in portfolio.holdings) == pytest.approx(100.0)
