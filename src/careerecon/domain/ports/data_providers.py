"""Data provider interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from careerecon.domain.models.series import Series


class TimeSeriesDataProvider(ABC):
    """Interface for keyed economic time-series providers."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short provider identifier (e.g. 'bls')."""

    @abstractmethod
    async def get_series(
        self,
        series_id: str,
        start_year: int | None = None,
        end_year: int | None = None,
        **overrides: Any,
    ) -> Series | None:
        """Fetch one series, or None when the provider does not return it."""

    @abstractmethod
    async def get_multiple_series(
        self,
        series_ids: list[str],
        start_year: int | None = None,
        end_year: int | None = None,
        **overrides: Any,
    ) -> list[Series]:
        """Fetch several series, preserving the provider's result order."""
