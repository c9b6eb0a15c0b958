"""
Shared pytest fixtures: seeded randomness, a sleep that records instead of
waiting, a hand-cranked clock, and a holding factory.
"""
import random

import pytest

from cache.quote_cache import QuoteCache
from state.models import Holding
from tools.market_feed import MarketFeed


class FakeSleep:
    """Records requested delays; returns immediately."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class ManualClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def feed(rng, fake_sleep, clock):
    return MarketFeed(cache=QuoteCache(ttl=30.0, clock=clock), rng=rng, sleep=fake_sleep)


@pytest.fixture
def make_holding():
    counter = {"n": 0}

    def _make(sector="IT", purchase_price=100.0, quantity=10, price=100.0, symbol=None, **kw):
        counter["n"] += 1
        n = counter["n"]
        return Holding(
            id=str(n),
            name=kw.pop("name", f"Stock {n}"),
            symbol=symbol or f"SYM{n}",
            purchase_price=purchase_price,
            quantity=quantity,
            price=price,
            sector=sector,
            **kw,
        )

    return _make
