"""In-memory TTL cache for BLS series results.

Keys are canonical request signatures (sorted series ids plus year bounds);
values are the full result of a successful request. Expiry is lazy: a stale
entry is dropped when it is read, there is no background sweep.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog

from careerecon.domain.models.series import Series

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 3600.0


def make_cache_key(
    series_ids: Iterable[str],
    start_year: int | None = None,
    end_year: int | None = None,
) -> str:
    """Build the cache key; series order does not matter."""
    ids = ",".join(sorted(series_ids))
    start = "null" if start_year is None else str(start_year)
    end = "null" if end_year is None else str(end_year)
    return f"{ids}_{start}_{end}"


@dataclass(frozen=True)
class CacheEntry:
    result: tuple[Series, ...]
    created_at: float


class SeriesCache:
    """Keyed store of series results with time-to-live freshness checks."""

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl
        self._clock = clock

    def is_fresh(self, entry: CacheEntry, ttl: float | None = None) -> bool:
        ttl = self._default_ttl if ttl is None else ttl
        return self._clock() - entry.created_at < ttl

    def get(self, key: str, ttl: float | None = None) -> CacheEntry | None:
        """Return the entry for ``key`` unless it is missing or older than ``ttl`` seconds."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self.is_fresh(entry, ttl):
            logger.debug("Cache entry expired", key=key)
            del self._entries[key]
            return None
        return entry

    def put(self, key: str, result: Iterable[Series]) -> CacheEntry:
        entry = CacheEntry(result=tuple(result), created_at=self._clock())
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()


# Process-wide cache, created on first use
_series_cache: SeriesCache | None = None


def get_series_cache() -> SeriesCache:
    """Return the process-wide series cache."""
    global _series_cache
    if _series_cache is None:
        _series_cache = SeriesCache()
    return _series_cache


def reset_series_cache() -> None:
    """Drop the process-wide cache (useful for testing)."""
    global _series_cache
    _series_cache = None
