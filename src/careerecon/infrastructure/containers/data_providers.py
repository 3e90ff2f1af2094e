"""Data provider container configuration."""

from collections.abc import Mapping

from dependency_injector import providers

from careerecon.application.economic_data import CareerEconomicService
from careerecon.infrastructure.cache import get_series_cache
from careerecon.infrastructure.config import get_settings
from careerecon.infrastructure.data_providers import BlsTimeSeriesProvider
from careerecon.infrastructure.mappings import EntitySeriesMapper


def configure_data_providers(
    environ: Mapping[str, str] | None = None,
) -> dict[str, providers.Provider]:
    """Configure data provider providers.

    Args:
        environ: Optional environment snapshot for BLS client config. If None,
                 the provider reads ``os.environ`` on every call (CLI default).
                 Library integrators can pass their own mapping here.

    Returns:
        Dictionary of data provider providers
    """
    settings = get_settings()

    series_cache = providers.Singleton(get_series_cache)
    series_data_provider = providers.Singleton(
        BlsTimeSeriesProvider,
        cache=series_cache,
        environ=environ,
    )
    entity_series_mapper = providers.Singleton(EntitySeriesMapper)

    return {
        "series_cache": series_cache,
        "series_data_provider": series_data_provider,
        "entity_series_mapper": entity_series_mapper,
        "career_economic_service": providers.Singleton(
            CareerEconomicService,
            provider=series_data_provider,
            mapper=entity_series_mapper,
            enabled=settings.enabled,
            lookback_years=settings.lookback_years,
        ),
    }
