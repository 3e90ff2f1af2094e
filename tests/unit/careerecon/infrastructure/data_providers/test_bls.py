"""Unit tests for the BLS time-series provider."""

from __future__ import annotations

import httpx
import pytest

from careerecon.domain.exceptions import ProviderApiError, ProviderHttpError, TransientFailure
from careerecon.infrastructure.data_providers.bls import BlsTimeSeriesProvider

FAST_RETRY = {"retry_base_delay_ms": 10}


@pytest.fixture
def provider(series_cache, http_client, recording_sleep) -> BlsTimeSeriesProvider:
    return BlsTimeSeriesProvider(
        cache=series_cache, environ={}, client=http_client, sleep=recording_sleep
    )


@pytest.mark.unit
class TestGetSeries:
    async def test_returns_matching_series(
        self, provider, fake_bls, envelope_payload, series_payload
    ) -> None:
        fake_bls.respond_with(
            httpx.Response(
                200,
                json=envelope_payload(series_payload("CUSR0000SA0", "306.746", "307.051")),
            )
        )

        series = await provider.get_series("CUSR0000SA0", 2023, 2023)

        assert series is not None
        assert series.series_id == "CUSR0000SA0"
        assert [p.value for p in series.data] == ["306.746", "307.051"]
        assert series.data[0].period_name == "December"
        assert len(fake_bls.requests) == 1

    async def test_unknown_series_returns_none(
        self, provider, fake_bls, envelope_payload, series_payload
    ) -> None:
        fake_bls.respond_with(
            httpx.Response(200, json=envelope_payload(series_payload("CUSR0000SA0")))
        )

        assert await provider.get_series("UNKNOWN_ID", 2023, 2023) is None

    async def test_preserves_value_text_and_order(
        self, provider, fake_bls, envelope_payload, series_payload
    ) -> None:
        fake_bls.respond_with(
            httpx.Response(
                200, json=envelope_payload(series_payload("LNS14000000", "3.70", "3.7", "-"))
            )
        )

        series = await provider.get_series("LNS14000000")

        assert series is not None
        assert [p.value for p in series.data] == ["3.70", "3.7", "-"]
        assert [p.period for p in series.data] == ["M12", "M11", "M10"]


@pytest.mark.unit
class TestRequestBody:
    async def test_posts_series_and_years_as_strings(self, provider, fake_bls) -> None:
        await provider.get_multiple_series(["CUSR0000SA0", "LNS14000000"], 2020, 2023)

        request = fake_bls.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.bls.gov/publicAPI/v2/timeseries/data/"
        assert fake_bls.bodies[0] == {
            "seriesid": ["CUSR0000SA0", "LNS14000000"],
            "startyear": "2020",
            "endyear": "2023",
        }

    async def test_omits_absent_year_bounds(self, provider, fake_bls) -> None:
        result = await provider.get_multiple_series(["CUSR0000SA0"])

        assert len(result) == 1
        assert fake_bls.bodies[0] == {"seriesid": ["CUSR0000SA0"]}

    async def test_includes_registration_key_from_environment(
        self, series_cache, http_client, fake_bls
    ) -> None:
        provider = BlsTimeSeriesProvider(
            cache=series_cache, environ={"BLS_API_KEY": "test-api-key"}, client=http_client
        )

        await provider.get_series("CUSR0000SA0", 2023, 2023)

        assert fake_bls.bodies[0]["registrationkey"] == "test-api-key"

    async def test_timeout_resolved_per_call(self, provider, fake_bls) -> None:
        await provider.get_series("CUSR0000SA0", 2023, 2023, timeout_seconds=30)
        await provider.get_series("CUSR0000SA0", 2022, 2023, timeout_seconds=2)

        timeouts = [request.extensions["timeout"]["read"] for request in fake_bls.requests]
        assert timeouts == [30.0, 2.0]

    async def test_base_url_override(self, provider, fake_bls) -> None:
        await provider.get_series("CUSR0000SA0", base_url="https://bls.example.com/v2/")

        assert str(fake_bls.requests[0].url) == "https://bls.example.com/v2/timeseries/data/"


@pytest.mark.unit
class TestCaching:
    async def test_identical_calls_hit_cache(self, provider, fake_bls) -> None:
        first = await provider.get_multiple_series(["CUSR0000SA0", "LNS14000000"], 2023, 2023)
        second = await provider.get_multiple_series(["CUSR0000SA0", "LNS14000000"], 2023, 2023)

        assert first == second
        assert len(fake_bls.requests) == 1
        assert provider.cache_size() == 1

    async def test_series_order_does_not_change_cache_key(self, provider, fake_bls) -> None:
        await provider.get_multiple_series(["A", "B"], 2023, 2023)
        await provider.get_multiple_series(["B", "A"], 2023, 2023)

        assert len(fake_bls.requests) == 1

    async def test_caller_list_is_not_reordered(self, provider) -> None:
        ids = ["B", "A"]
        await provider.get_multiple_series(ids)

        assert ids == ["B", "A"]

    async def test_different_years_are_cached_separately(self, provider, fake_bls) -> None:
        await provider.get_series("CUSR0000SA0", 2022, 2023)
        await provider.get_series("CUSR0000SA0", 2023, 2023)

        assert len(fake_bls.requests) == 2
        assert provider.cache_size() == 2

    async def test_clear_cache_forces_refetch(self, provider, fake_bls) -> None:
        await provider.get_series("CUSR0000SA0", 2023, 2023)
        assert provider.cache_size() == 1

        provider.clear_cache()
        assert provider.cache_size() == 0

        await provider.get_series("CUSR0000SA0", 2023, 2023)
        assert len(fake_bls.requests) == 2

    async def test_expired_entry_is_refetched(self, provider, fake_bls, clock) -> None:
        await provider.get_series("CUSR0000SA0", 2023, 2023, cache_ttl_ms=1_000)
        clock.advance(0.5)
        await provider.get_series("CUSR0000SA0", 2023, 2023, cache_ttl_ms=1_000)
        assert len(fake_bls.requests) == 1

        clock.advance(1.0)
        await provider.get_series("CUSR0000SA0", 2023, 2023, cache_ttl_ms=1_000)
        assert len(fake_bls.requests) == 2

    async def test_cache_disabled_by_override(self, provider, fake_bls) -> None:
        await provider.get_series("CUSR0000SA0", 2023, 2023, cache_enabled=False)
        await provider.get_series("CUSR0000SA0", 2023, 2023, cache_enabled=False)

        assert len(fake_bls.requests) == 2
        assert provider.cache_size() == 0

    async def test_cache_disabled_by_environment(
        self, series_cache, http_client, fake_bls
    ) -> None:
        provider = BlsTimeSeriesProvider(
            cache=series_cache, environ={"BLS_CACHE_ENABLED": "false"}, client=http_client
        )

        await provider.get_series("CUSR0000SA0")
        await provider.get_series("CUSR0000SA0")

        assert len(fake_bls.requests) == 2

    async def test_failed_request_is_not_cached(
        self, provider, fake_bls, envelope_payload
    ) -> None:
        fake_bls.respond_with(
            httpx.Response(200, json=envelope_payload(status="REQUEST_NOT_PROCESSED"))
        )

        with pytest.raises(ProviderApiError):
            await provider.get_series("CUSR0000SA0", 2023, 2023)

        assert provider.cache_size() == 0


@pytest.mark.unit
class TestRetries:
    async def test_retries_throttled_request(self, provider, fake_bls, recording_sleep) -> None:
        fake_bls.respond_with(httpx.Response(429))

        series = await provider.get_series("CUSR0000SA0", 2023, 2023, **FAST_RETRY)

        assert series is not None
        assert len(fake_bls.requests) == 2
        assert recording_sleep.delays == [0.01]

    async def test_retries_network_error(self, provider, fake_bls) -> None:
        fake_bls.respond_with(httpx.ConnectError("Network error"))

        series = await provider.get_series("CUSR0000SA0", 2023, 2023, **FAST_RETRY)

        assert series is not None
        assert len(fake_bls.requests) == 2

    async def test_fails_after_max_retries(self, provider, fake_bls, recording_sleep) -> None:
        fake_bls.respond_with(*(httpx.ConnectError("Network error") for _ in range(5)))

        with pytest.raises(TransientFailure, match="failed after 2 attempts") as exc_info:
            await provider.get_series("CUSR0000SA0", 2023, 2023, max_retries=2, **FAST_RETRY)

        assert exc_info.value.attempts == 2
        assert "Network error" in str(exc_info.value)
        assert len(fake_bls.requests) == 2
        assert recording_sleep.delays == [0.01]
        assert provider.cache_size() == 0

    async def test_retry_settings_from_environment(
        self, series_cache, http_client, fake_bls, recording_sleep
    ) -> None:
        provider = BlsTimeSeriesProvider(
            cache=series_cache,
            environ={"BLS_RETRY_MAX_ATTEMPTS": "4", "BLS_RETRY_BASE_DELAY_MS": "100"},
            client=http_client,
            sleep=recording_sleep,
        )
        fake_bls.respond_with(*(httpx.Response(429) for _ in range(4)))

        with pytest.raises(TransientFailure):
            await provider.get_series("CUSR0000SA0")

        assert len(fake_bls.requests) == 4
        assert recording_sleep.delays == [0.1, 0.2, 0.4]


@pytest.mark.unit
class TestProviderErrors:
    async def test_http_error(self, provider, fake_bls) -> None:
        fake_bls.respond_with(httpx.Response(500))

        with pytest.raises(ProviderHttpError) as exc_info:
            await provider.get_series("CUSR0000SA0", 2023, 2023)

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "BLS API error: 500 Internal Server Error"
        assert len(fake_bls.requests) == 1

    async def test_envelope_failure_joins_messages(self, provider, fake_bls) -> None:
        fake_bls.respond_with(
            httpx.Response(
                200,
                json={
                    "status": "REQUEST_FAILED",
                    "responseTime": 10,
                    "message": ["Invalid series ID", "Year range exceeded"],
                    "Results": None,
                },
            )
        )

        with pytest.raises(ProviderApiError) as exc_info:
            await provider.get_series("INVALID", 2023, 2023)

        assert exc_info.value.messages == ["Invalid series ID", "Year range exceeded"]
        assert str(exc_info.value) == "BLS API error: Invalid series ID; Year range exceeded"

    async def test_missing_results_is_empty(self, provider, fake_bls) -> None:
        fake_bls.respond_with(
            httpx.Response(200, json={"status": "REQUEST_SUCCEEDED", "message": []})
        )

        assert await provider.get_multiple_series(["CUSR0000SA0"]) == []

    async def test_null_series_list_is_empty(self, provider, fake_bls) -> None:
        fake_bls.respond_with(
            httpx.Response(
                200,
                json={"status": "REQUEST_SUCCEEDED", "message": [], "Results": {"series": None}},
            )
        )

        assert await provider.get_multiple_series(["CUSR0000SA0"]) == []

    async def test_malformed_body_is_api_error(self, provider, fake_bls) -> None:
        fake_bls.respond_with(httpx.Response(200, text="<html>maintenance</html>"))

        with pytest.raises(ProviderApiError, match="Malformed response envelope"):
            await provider.get_series("CUSR0000SA0")


@pytest.mark.unit
class TestBatching:
    async def test_splits_unkeyed_request_into_batches_of_25(self, provider, fake_bls) -> None:
        ids = [f"SERIES{i:03d}" for i in range(60)]

        result = await provider.get_multiple_series(ids, 2022, 2023)

        assert [len(body["seriesid"]) for body in fake_bls.bodies] == [25, 25, 10]
        assert [s.series_id for s in result] == ids
        assert all(body["startyear"] == "2022" for body in fake_bls.bodies)
        assert provider.cache_size() == 1

    async def test_keyed_request_uses_batches_of_50(self, provider, fake_bls) -> None:
        ids = [f"SERIES{i:03d}" for i in range(60)]

        await provider.get_multiple_series(ids, api_key="key")

        assert [len(body["seriesid"]) for body in fake_bls.bodies] == [50, 10]
        assert all(body["registrationkey"] == "key" for body in fake_bls.bodies)

    async def test_failing_batch_caches_nothing(self, provider, fake_bls) -> None:
        ids = [f"SERIES{i:03d}" for i in range(30)]
        fake_bls.respond_with(
            httpx.Response(
                200,
                json={
                    "status": "REQUEST_SUCCEEDED",
                    "message": [],
                    "Results": {"series": [{"seriesID": sid, "data": []} for sid in ids[:25]]},
                },
            ),
            httpx.Response(503),
        )

        with pytest.raises(ProviderHttpError):
            await provider.get_multiple_series(ids)

        assert len(fake_bls.requests) == 2
        assert provider.cache_size() == 0


@pytest.mark.unit
class TestCredential:
    def test_not_configured_without_key(self, series_cache) -> None:
        provider = BlsTimeSeriesProvider(cache=series_cache, environ={})
        assert provider.is_credential_configured() is False

    def test_configured_with_key(self, series_cache) -> None:
        provider = BlsTimeSeriesProvider(cache=series_cache, environ={"BLS_API_KEY": "abc"})
        assert provider.is_credential_configured() is True

    def test_reads_process_environment_by_default(self, series_cache, monkeypatch) -> None:
        monkeypatch.setenv("BLS_API_KEY", "from-env")
        provider = BlsTimeSeriesProvider(cache=series_cache)
        assert provider.is_credential_configured() is True

        monkeypatch.delenv("BLS_API_KEY")
        assert provider.is_credential_configured() is False

    def test_provider_name(self, series_cache) -> None:
        assert BlsTimeSeriesProvider(cache=series_cache).get_provider_name() == "bls"
