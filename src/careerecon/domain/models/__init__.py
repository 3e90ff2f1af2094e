"""Domain models for careerecon."""

from careerecon.domain.models.series import (
    BlsResponseEnvelope,
    DataPoint,
    EntitySeriesMapping,
    Footnote,
    Indicator,
    Series,
    SeriesResults,
    SeriesRole,
)

__all__ = [
    "BlsResponseEnvelope",
    "DataPoint",
    "EntitySeriesMapping",
    "Footnote",
    "Indicator",
    "Series",
    "SeriesResults",
    "SeriesRole",
]
