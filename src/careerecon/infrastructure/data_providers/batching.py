"""Split series requests into provider-legal batches."""

from __future__ import annotations

from collections.abc import Sequence

# BLS API v2 per-request series limits
MAX_SERIES_WITH_KEY = 50
MAX_SERIES_WITHOUT_KEY = 25


def max_batch_size_for(api_key: str | None) -> int:
    return MAX_SERIES_WITH_KEY if api_key else MAX_SERIES_WITHOUT_KEY


def split_batches(series_ids: Sequence[str], max_batch_size: int) -> list[list[str]]:
    """Partition ``series_ids`` into contiguous chunks of at most ``max_batch_size``.

    Chunks keep input order and cover every id exactly once.
    """
    if max_batch_size < 1:
        raise ValueError("max_batch_size must be at least 1")
    return [
        list(series_ids[i : i + max_batch_size])
        for i in range(0, len(series_ids), max_batch_size)
    ]
