from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum


class FreshnessState(str, Enum):
    FRESH = "fresh"
    EXPIRED = "expired"
    STALE = "stale"


def ttl_enabled(ttl_in_seconds: int | None) -> bool:
    return bool(ttl_in_seconds)


def expiration_instant(feed_timestamp: datetime, ttl_in_seconds: int | None) -> datetime | None:
    if not ttl_enabled(ttl_in_seconds):
        return None
    return feed_timestamp + timedelta(seconds=ttl_in_seconds or 0)


def evaluate_freshness(
    *,
    now: datetime,
    feed_timestamp: datetime,
    ttl_in_seconds: int | None,
    cached_timestamp: datetime | None,
) -> FreshnessState:
    """Decide whether in-memory rates can still be served.

    ``feed_timestamp`` is the feed time of the rates this instance holds and
    ``cached_timestamp`` the feed time of the document currently in the shared
    cache (None when the cache is empty). Expiry wins over staleness; a disabled
    TTL never expires but a sibling's newer write is still picked up.
    """
    expires_at = expiration_instant(feed_timestamp, ttl_in_seconds)
    if expires_at is not None and now > expires_at:
        return FreshnessState.EXPIRED
    if cached_timestamp is not None and cached_timestamp != feed_timestamp:
        return FreshnessState.STALE
    return FreshnessState.FRESH


__all__ = ["FreshnessState", "evaluate_freshness", "expiration_instant", "ttl_enabled"]
