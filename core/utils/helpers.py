"""
Darents utility functions
"""

from __future__ import annotations
from datetime import datetime
from typing import Callable, Hashable, Iterable, List, Optional, Sequence, TypeVar

from domain.models.document import ensure_utc, utcnow

T = TypeVar("T")


# Batching & aggregation utilities

def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive chunks of at most ``size`` elements."""
    if size < 1:
        raise ValueError("chunk size must be positive")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def unique_ids(ids: Iterable[Optional[str]]) -> List[str]:
    """Drop empty ids and duplicates, keeping first-seen order."""
    seen = set()
    out = []
    for i in ids:
        if i and i not in seen:
            seen.add(i)
            out.append(i)
    return out


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for each key; items whose key is None are dropped."""
    seen = set()
    out = []
    for item in items:
        k = key(item)
        if k is None or k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out


def newest_first(items: Iterable[T], key: Callable[[T], Optional[datetime]]) -> List[T]:
    """Sort by a timestamp, most recent first. Missing timestamps count as now."""
    now = utcnow()

    def _key(item: T) -> datetime:
        value = key(item)
        return ensure_utc(value) if value is not None else now

    return sorted(items, key=_key, reverse=True)

