"""Career economic indicators service.

Resolves a career's configured series, fetches a trailing window of years and
reshapes each series into an ``Indicator`` with a readable name. Provider
errors are not caught here; callers decide whether to degrade.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime

import structlog

from careerecon.domain.models.series import EntitySeriesMapping, Indicator, Series, SeriesRole
from careerecon.domain.ports.data_providers import TimeSeriesDataProvider
from careerecon.infrastructure.mappings import EntitySeriesMapper

logger = structlog.get_logger(__name__)

DEFAULT_LOOKBACK_YEARS = 5

ROLE_DISPLAY_NAMES: dict[SeriesRole, str] = {
    SeriesRole.PRICE_INDEX: "Consumer Price Index (CPI)",
    SeriesRole.UNEMPLOYMENT: "Unemployment Rate",
    SeriesRole.WAGES: "Average Hourly Earnings",
}


def display_name_for(series_id: str, mapping: EntitySeriesMapping) -> str:
    role = mapping.role_for(series_id)
    if role is None:
        return series_id
    return ROLE_DISPLAY_NAMES.get(role, series_id)


class CareerEconomicService:
    """Builds economic indicators for careers with configured BLS series."""

    def __init__(
        self,
        provider: TimeSeriesDataProvider,
        mapper: EntitySeriesMapper,
        enabled: bool = True,
        lookback_years: int = DEFAULT_LOOKBACK_YEARS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._provider = provider
        self._mapper = mapper
        self._enabled = enabled
        self._lookback_years = lookback_years
        self._today = today

    async def economic_data_for(self, entity_id: str) -> list[Indicator]:
        if not self._enabled:
            logger.debug("Economic enrichment disabled", entity_id=entity_id)
            return []

        mapping = self._mapper.mapping_for(entity_id)
        if mapping is None:
            logger.debug("No series mapping for entity", entity_id=entity_id)
            return []

        series_ids = mapping.series_ids()
        if not series_ids:
            return []

        current_year = self._today().year
        series_list = await self._provider.get_multiple_series(
            series_ids, current_year - self._lookback_years, current_year
        )

        generated_at = datetime.now(UTC)
        return [self._to_indicator(series, mapping, generated_at) for series in series_list]

    @staticmethod
    def _to_indicator(
        series: Series, mapping: EntitySeriesMapping, generated_at: datetime
    ) -> Indicator:
        return Indicator(
            series_id=series.series_id,
            display_name=display_name_for(series.series_id, mapping),
            data=list(series.data),
            generated_at=generated_at,
        )
