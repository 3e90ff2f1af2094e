"""Static entity-to-series mappings."""

from careerecon.infrastructure.mappings.career_series import (
    DEFAULT_CAREER_MAPPINGS,
    EntitySeriesMapper,
)

__all__ = ["DEFAULT_CAREER_MAPPINGS", "EntitySeriesMapper"]
