"""Economic time-series domain models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from careerecon.domain.models.base import ValueObject


class Footnote(ValueObject):
    """Provider footnote attached to an observation (BLS sends ``{}`` for none)."""

    code: str | None = None
    text: str | None = None


class DataPoint(ValueObject):
    """Value object representing one observation of a series."""

    year: str = Field(..., description="Observation year, e.g. '2023'")
    period: str = Field(..., description="Machine period code, e.g. 'M12'")
    period_name: str = Field(..., alias="periodName", description="Human label, e.g. 'December'")
    value: str = Field(..., description="Observation value as provider-native text")
    footnotes: list[Footnote] = Field(default_factory=list)


class Series(ValueObject):
    """A provider series; ``data`` keeps provider order (most recent first)."""

    series_id: str = Field(..., alias="seriesID", description="Provider series identifier")
    data: list[DataPoint] = Field(default_factory=list)


class SeriesResults(ValueObject):
    series: list[Series] = Field(default_factory=list)

    @field_validator("series", mode="before")
    @classmethod
    def _null_series_is_empty(cls, value: object) -> object:
        return [] if value is None else value


class BlsResponseEnvelope(ValueObject):
    """Top-level JSON envelope returned by the BLS timeseries endpoint."""

    status: str
    response_time: float | None = Field(default=None, alias="responseTime")
    message: list[str] = Field(default_factory=list)
    results: SeriesResults | None = Field(default=None, alias="Results")

    @field_validator("message", mode="before")
    @classmethod
    def _null_message_is_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def succeeded(self) -> bool:
        return self.status == "REQUEST_SUCCEEDED"

    @property
    def series(self) -> list[Series]:
        if self.results is None:
            return []
        return list(self.results.series)


class SeriesRole(str, Enum):
    """What an external series measures for an entity."""

    PRICE_INDEX = "price_index"
    UNEMPLOYMENT = "unemployment"
    WAGES = "wages"


class EntitySeriesMapping(ValueObject):
    """Static mapping from an internal entity (career) to the series it uses."""

    entity_id: str = Field(..., description="Internal entity identifier, e.g. 'rn-001'")
    series_by_role: dict[SeriesRole, str | None] = Field(default_factory=dict)

    def series_ids(self) -> list[str]:
        """Non-empty series ids in role order, without duplicates."""
        ids: list[str] = []
        for series_id in self.series_by_role.values():
            if series_id and series_id not in ids:
                ids.append(series_id)
        return ids

    def role_for(self, series_id: str) -> SeriesRole | None:
        """First role filled by ``series_id``, if any."""
        for role, mapped_id in self.series_by_role.items():
            if mapped_id == series_id:
                return role
        return None


class Indicator(ValueObject):
    """Display-ready view of one series for an entity."""

    series_id: str
    display_name: str
    data: list[DataPoint] = Field(default_factory=list)
    generated_at: datetime
