"""
Simulated market feed — stands in for a quotes API and a financials API.

Design decisions:
- One explicitly constructed MarketFeed per orchestrator (no module-level
  singleton); tests build their own with a seeded random.Random, a fake
  sleep and a manual clock.
- Every lookup goes through a QuoteCache keyed by (symbol, kind); a fresh
  entry is returned verbatim without touching the random source.
- Concurrent lookups of the same (symbol, kind) share one pending
  computation instead of each paying the latency. A cancelled caller
  stops waiting but does not cancel the shared computation.
- Batch fetches never raise: failed lookups are logged and left out of the
  result, so callers keep the stale value for those symbols.
"""
from __future__ import annotations

import asyncio
import random
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Sequence

from cache.quote_cache import CacheKey, QuoteCache
from logging_config import get_logger
from state.models import FinancialQuote, PriceQuote, QuoteKind, pct_of
from tools.batch import split_into_batches

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

VOLATILITY = 0.03                  # ±3% per price lookup
PE_NOISE = 1.0                     # ±1.0 on P/E
EARNINGS_NOISE = 0.05              # ±5% on latest earnings
PRICE_LATENCY = (0.2, 0.7)         # seconds
FINANCIAL_LATENCY = (0.3, 1.1)     # seconds


class MarketDataError(Exception):
    """A single simulated lookup failed."""


class MarketFeed:
    def __init__(
        self,
        cache: Optional[QuoteCache] = None,
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
        batch_size: int = 5,
        batch_pause: float = 1.0,
        failure_rate: float = 0.0,
    ):
        self.cache = cache if cache is not None else QuoteCache()
        self.batch_size = batch_size
        self.batch_pause = batch_pause
        self.failure_rate = failure_rate
        self._rng = rng if rng is not None else random.Random()
        self._sleep = sleep
        self._inflight: dict[CacheKey, asyncio.Future] = {}

    @classmethod
    def from_settings(cls, settings, rng: Optional[random.Random] = None,
                      sleep: Sleep = asyncio.sleep) -> "MarketFeed":
        return cls(
            cache=QuoteCache(ttl=settings.cache_ttl),
            rng=rng,
            sleep=sleep,
            batch_size=settings.batch_size,
            batch_pause=settings.batch_pause,
            failure_rate=settings.failure_rate,
        )

    # ── Single lookups ────────────────────────────────────────────────────────

    async def fetch_current_price(self, symbol: str, base_price: float) -> PriceQuote:
        """
        Current price for symbol, drifted up to ±3% from base_price.

        Served from cache while fresh. Raises MarketDataError when the
        simulated request fails (failures are not cached).
        """
        return await self._lookup(symbol, "price", lambda: self._simulate_price(symbol, base_price))

    async def fetch_financial_data(
        self, symbol: str, base_pe: float, base_earnings: float
    ) -> FinancialQuote:
        """P/E and latest earnings for symbol, jittered around the base figures."""
        return await self._lookup(
            symbol, "financial",
            lambda: self._simulate_financials(symbol, base_pe, base_earnings),
        )

    # ── Batched lookups ───────────────────────────────────────────────────────

    async def fetch_batch_prices(self, requests: Sequence[tuple[str, float]]) -> dict[str, float]:
        """
        Fetch prices for [(symbol, base_price), ...] in throttled batches.

        Returns:
            { symbol: price }  (only symbols whose lookup succeeded)
        """
        quotes = await self._run_batches(
            requests,
            lambda req: self.fetch_current_price(req[0], req[1]),
            kind="price",
        )
        return {symbol: quote.price for symbol, quote in quotes.items()}

    async def fetch_batch_financials(
        self, requests: Sequence[tuple[str, float, float]]
    ) -> dict[str, FinancialQuote]:
        """
        Fetch financials for [(symbol, base_pe, base_earnings), ...] in
        throttled batches. Failed symbols are omitted.
        """
        return await self._run_batches(
            requests,
            lambda req: self.fetch_financial_data(req[0], req[1], req[2]),
            kind="financial",
        )

    async def _run_batches(self, requests: Sequence[tuple], call, kind: QuoteKind) -> dict[str, Any]:
        results: dict[str, Any] = {}
        batches = split_into_batches(list(requests), self.batch_size)

        for i, batch in enumerate(batches):
            responses = await asyncio.gather(
                *(call(req) for req in batch),
                return_exceptions=True,
            )
            for req, response in zip(batch, responses):
                symbol = req[0]
                if isinstance(response, BaseException):
                    logger.warning(
                        "Lookup failed, symbol omitted from batch result",
                        extra={'symbol': symbol, 'kind': kind, 'error': str(response)},
                    )
                    continue
                results[symbol] = response

            if i < len(batches) - 1:
                await self._sleep(self.batch_pause)

        logger.debug(
            "Batch fetch complete",
            extra={'kind': kind, 'requested': len(requests),
                   'resolved': len(results), 'batches': len(batches)},
        )
        return results

    # ── Internals ─────────────────────────────────────────────────────────────

    async def _lookup(self, symbol: str, kind: QuoteKind, compute: Callable[[], Awaitable[Any]]):
        cached = self.cache.get(symbol, kind)
        if cached is not None:
            logger.debug("Cache hit", extra={'symbol': symbol, 'kind': kind})
            return cached

        key = (symbol, kind)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(compute())
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))

        # Shielded so that cancelling one waiter leaves the lookup running for the others.
        return await asyncio.shield(task)

    def _maybe_fail(self, symbol: str, what: str) -> None:
        if self.failure_rate > 0 and self._rng.random() < self.failure_rate:
            raise MarketDataError(f"Failed to fetch {what} for {symbol}")

    async def _simulate_price(self, symbol: str, base_price: float) -> PriceQuote:
        await self._sleep(self._rng.uniform(*PRICE_LATENCY))
        self._maybe_fail(symbol, "price")

        drift = self._rng.uniform(-VOLATILITY, VOLATILITY)
        price = round(base_price * (1 + drift), 2)
        change = price - base_price
        quote = PriceQuote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=pct_of(change, base_price),
            timestamp=datetime.now(timezone.utc),
        )
        self.cache.put(symbol, "price", quote)
        return quote

    async def _simulate_financials(
        self, symbol: str, base_pe: float, base_earnings: float
    ) -> FinancialQuote:
        await self._sleep(self._rng.uniform(*FINANCIAL_LATENCY))
        self._maybe_fail(symbol, "financial data")

        pe_noise = self._rng.uniform(-PE_NOISE, PE_NOISE)
        earnings_noise = self._rng.uniform(-EARNINGS_NOISE, EARNINGS_NOISE)
        quote = FinancialQuote(
            symbol=symbol,
            pe_ratio=round(base_pe + pe_noise, 2),
            latest_earnings=round(base_earnings * (1 + earnings_noise), 2),
            timestamp=datetime.now(timezone.utc),
        )
        self.cache.put(symbol, "financial", quote)
        return quote
