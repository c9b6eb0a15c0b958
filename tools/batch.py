"""
Batching helper for throttled lookups.
"""
from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def split_into_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """
    Split items into consecutive batches of at most batch_size.

    A non-positive batch_size means "no batching": one batch with everything.
    """
    if batch_size <= 0:
        return [list(items)] if items else []
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]
