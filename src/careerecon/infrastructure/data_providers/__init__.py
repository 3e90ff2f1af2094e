"""Data provider implementations."""

from careerecon.infrastructure.data_providers.backoff import BackoffFetcher
from careerecon.infrastructure.data_providers.batching import max_batch_size_for, split_batches
from careerecon.infrastructure.data_providers.bls import BLS_SERIES, BlsTimeSeriesProvider

__all__ = [
    "BLS_SERIES",
    "BackoffFetcher",
    "BlsTimeSeriesProvider",
    "max_batch_size_for",
    "split_batches",
]
