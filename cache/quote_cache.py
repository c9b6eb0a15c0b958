"""
Quote cache — in-memory, per (symbol, kind) entries with a freshness window.

Kinds: "price", "financial"

An entry is served verbatim while younger than `ttl` seconds; once stale the
next lookup misses and the feed recomputes it. Age is measured on a
monotonic clock so wall-clock jumps can't extend or cut short a window.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from state.models import QuoteKind

CacheKey = tuple[str, QuoteKind]


@dataclass
class CacheEntry:
    value: Any
    captured_at: float


class QuoteCache:
    def __init__(self, ttl: float = 30.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.captured_at < self.ttl

    def get(self, symbol: str, kind: QuoteKind) -> Optional[Any]:
        """Return the cached payload, or None if absent or stale."""
        entry = self._entries.get((symbol, kind))
        if entry is None or not self.is_fresh(entry):
            return None
        return entry.value

    def put(self, symbol: str, kind: QuoteKind, value: Any) -> None:
        self._entries[(symbol, kind)] = CacheEntry(value=value, captured_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
