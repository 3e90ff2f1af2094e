"""BLS (Bureau of Labor Statistics) time-series data provider implementation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from careerecon.domain.exceptions import ProviderApiError, ProviderHttpError
from careerecon.domain.models.series import BlsResponseEnvelope, Series
from careerecon.domain.ports.data_providers import TimeSeriesDataProvider
from careerecon.infrastructure.cache import SeriesCache, get_series_cache, make_cache_key
from careerecon.infrastructure.config import ClientConfig, resolve_client_config
from careerecon.infrastructure.data_providers.backoff import BackoffFetcher
from careerecon.infrastructure.data_providers.batching import max_batch_size_for, split_batches

logger = structlog.get_logger(__name__)

# Common BLS series ids
BLS_SERIES: dict[str, str] = {
    # Consumer Price Index
    "CPI_ALL_URBAN": "CUSR0000SA0",
    "CPI_FOOD": "CUSR0000SAF1",
    "CPI_ENERGY": "CUSR0000SA0E",
    "CPI_MEDICAL": "CUSR0000SAM",
    # Employment
    "UNEMPLOYMENT_RATE": "LNS14000000",
    "EMPLOYMENT_POPULATION_RATIO": "LNS12300000",
    "LABOR_FORCE_PARTICIPATION": "LNS11300000",
    # Wages
    "AVERAGE_HOURLY_EARNINGS": "CES0500000003",
    # Producer Price Index
    "PPI_FINAL_DEMAND": "WPUFD49104",
}


class BlsTimeSeriesProvider(TimeSeriesDataProvider):
    """BLS implementation of TimeSeriesDataProvider.

    Results are cached per request signature in a ``SeriesCache`` (the
    process-wide one unless another is given). Config is resolved on every
    call from ``environ`` (``os.environ`` when omitted) and keyword overrides.
    """

    def __init__(
        self,
        cache: SeriesCache | None = None,
        environ: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._cache = cache if cache is not None else get_series_cache()
        self._environ = environ
        self._client = client
        self._sleep = sleep

    def get_provider_name(self) -> str:
        return "bls"

    def resolve_config(self, **overrides: Any) -> ClientConfig:
        return resolve_client_config(self._environ, **overrides)

    async def _get_client(self, config: ClientConfig) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=config.timeout_seconds,
                follow_redirects=True,
            )
        return self._client

    async def get_series(
        self,
        series_id: str,
        start_year: int | None = None,
        end_year: int | None = None,
        **overrides: Any,
    ) -> Series | None:
        """Fetch a single series, e.g. ``await provider.get_series("CUSR0000SA0", 2020, 2023)``.

        Returns None when the provider answers successfully without that series.
        """
        series = await self.get_multiple_series([series_id], start_year, end_year, **overrides)
        return next((s for s in series if s.series_id == series_id), None)

    async def get_multiple_series(
        self,
        series_ids: list[str],
        start_year: int | None = None,
        end_year: int | None = None,
        **overrides: Any,
    ) -> list[Series]:
        """Fetch several series, splitting into batches the provider accepts.

        Raises:
            TransientFailure: Retries exhausted on network errors or throttling.
            ProviderHttpError: Non-2xx response.
            ProviderApiError: 2xx response whose envelope reports failure.
        """
        config = self.resolve_config(**overrides)
        cache_key = make_cache_key(series_ids, start_year, end_year)

        if config.cache_enabled:
            cached = self._cache.get(cache_key, ttl=config.cache_ttl_seconds)
            if cached is not None:
                logger.debug("BLS cache hit", cache_key=cache_key)
                return list(cached.result)
            logger.debug("BLS cache miss", cache_key=cache_key)

        client = await self._get_client(config)
        fetcher = BackoffFetcher(
            client,
            max_retries=config.max_retries,
            base_delay=config.retry_base_delay_seconds,
            sleep=self._sleep,
        )

        batches = split_batches(series_ids, max_batch_size_for(config.api_key))
        results: list[Series] = []
        for index, batch in enumerate(batches):
            logger.debug(
                "Fetching BLS batch",
                batch=index + 1,
                batches=len(batches),
                series_count=len(batch),
                start_year=start_year,
                end_year=end_year,
            )
            batch_series = await self._fetch_batch(
                fetcher, client, config, batch, start_year, end_year
            )
            results.extend(batch_series)

        if config.cache_enabled:
            self._cache.put(cache_key, results)

        return results

    async def _fetch_batch(
        self,
        fetcher: BackoffFetcher,
        client: httpx.AsyncClient,
        config: ClientConfig,
        series_ids: list[str],
        start_year: int | None,
        end_year: int | None,
    ) -> list[Series]:
        body: dict[str, Any] = {"seriesid": series_ids}
        if start_year is not None:
            body["startyear"] = str(start_year)
        if end_year is not None:
            body["endyear"] = str(end_year)
        # A registration key raises the per-request series and daily query limits
        if config.api_key:
            body["registrationkey"] = config.api_key

        request = client.build_request(
            "POST", config.data_url, json=body, timeout=config.timeout_seconds
        )
        resp = await fetcher.exchange(request)

        if not resp.is_success:
            logger.warning(
                "BLS request returned error status",
                status_code=resp.status_code,
                response_text=resp.text[:200] if resp.text else None,
            )
            raise ProviderHttpError(resp.status_code, resp.reason_phrase)

        try:
            envelope = BlsResponseEnvelope.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise ProviderApiError([f"Malformed response envelope: {e}"]) from e

        if not envelope.succeeded:
            logger.warning("BLS request failed", status=envelope.status, messages=envelope.message)
            raise ProviderApiError(envelope.message)

        return envelope.series

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_size(self) -> int:
        return self._cache.size()

    def is_credential_configured(self) -> bool:
        return self.resolve_config().has_credential

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
