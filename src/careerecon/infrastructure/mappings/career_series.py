"""Career id -> BLS series mappings.

The defaults use national series (all-urban CPI, civilian unemployment rate,
total private average hourly earnings). Occupation-specific wage series
(e.g. OEWS) can replace them per career where available.
"""

from __future__ import annotations

from collections.abc import Iterable

from careerecon.domain.models.series import EntitySeriesMapping, SeriesRole
from careerecon.infrastructure.data_providers.bls import BLS_SERIES

_NATIONAL_SERIES: dict[SeriesRole, str | None] = {
    SeriesRole.PRICE_INDEX: BLS_SERIES["CPI_ALL_URBAN"],
    SeriesRole.UNEMPLOYMENT: BLS_SERIES["UNEMPLOYMENT_RATE"],
    SeriesRole.WAGES: BLS_SERIES["AVERAGE_HOURLY_EARNINGS"],
}

DEFAULT_CAREER_MAPPINGS: tuple[EntitySeriesMapping, ...] = (
    EntitySeriesMapping(entity_id="rn-001", series_by_role=_NATIONAL_SERIES),  # Registered Nurse
    EntitySeriesMapping(entity_id="ma-001", series_by_role=_NATIONAL_SERIES),  # Medical Assistant
    EntitySeriesMapping(entity_id="elec-001", series_by_role=_NATIONAL_SERIES),  # Electrician
)


class EntitySeriesMapper:
    """Read-only lookup of the series configured for each entity."""

    def __init__(self, mappings: Iterable[EntitySeriesMapping] = DEFAULT_CAREER_MAPPINGS) -> None:
        self._mappings = {mapping.entity_id: mapping for mapping in mappings}

    def mapping_for(self, entity_id: str) -> EntitySeriesMapping | None:
        return self._mappings.get(entity_id)

    def entity_ids(self) -> list[str]:
        return list(self._mappings)
