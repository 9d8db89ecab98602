"""
Age-based retention for append-only record logs.

Logs are deques in insertion (= creation) order, so expiry only ever removes a
prefix: pruning stops at the first record young enough to keep.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, TypeVar

T = TypeVar("T")


def prune_older_than(
    items: deque[T], *, now_ms: int, max_age_ms: int, created_at: Callable[[T], int]
) -> int:
    """Drop records whose age exceeds `max_age_ms`; returns how many were dropped."""
    dropped = 0
    while items and now_ms - created_at(items[0]) > max_age_ms:
        items.popleft()
        dropped += 1
    return dropped


def trim_to_capacity(items: deque[T], *, max_count: int) -> int:
    """Drop the oldest records until at most `max_count` remain."""
    dropped = 0
    while len(items) > max_count:
        items.popleft()
        dropped += 1
    return dropped
