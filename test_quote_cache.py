"""
Tests for cache/quote_cache.py
Run: pytest test_quote_cache.py
"""
from cache.quote_cache import QuoteCache


def test_entry_fresh_until_ttl(clock):
    cache = QuoteCache(ttl=30.0, clock=clock)
    cache.put("TCS", "price", {"price": 1.0})

    clock.advance(29.99)
    assert cache.get("TCS", "price") == {"price": 1.0}

    clock.advance(0.01)
    assert cache.get("TCS", "price") is None


def test_kinds_are_separate_entries(clock):
    cache = QuoteCache(clock=clock)
    cache.put("TCS", "price", "p")

    assert cache.get("TCS", "financial") is None
    cache.put("TCS", "financial", "f")
    assert cache.get("TCS", "price") == "p"
    assert cache.get("TCS", "financial") == "f"
    assert len(cache) == 2


def test_put_restarts_window(clock):
    cache = QuoteCache(ttl=10.0, clock=clock)
    cache.put("INFY", "price", 1)
    clock.advance(15)
    assert cache.get("INFY", "price") is None

    cache.put("INFY", "price", 2)
    clock.advance(5)
    assert cache.get("INFY", "price") == 2

    cache.clear()
    assert len(cache) == 0
