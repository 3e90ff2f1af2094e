"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from careerecon.infrastructure.cache import SeriesCache


def _series_payload(series_id: str, *values: str) -> dict[str, Any]:
    """Provider-shaped series with monthly points, most recent first."""
    values = values or ("306.746",)
    return {
        "seriesID": series_id,
        "data": [
            {
                "year": "2023",
                "period": f"M{12 - i:02d}",
                "periodName": ["December", "November", "October"][i % 3],
                "value": value,
                "footnotes": [{}],
            }
            for i, value in enumerate(values)
        ],
    }


def _envelope_payload(
    *series: dict[str, Any],
    status: str = "REQUEST_SUCCEEDED",
    message: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "status": status,
        "responseTime": 42,
        "message": message or [],
        "Results": {"series": list(series)},
    }


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeBls:
    """httpx MockTransport handler that records requests.

    By default it echoes one series per requested id. Queue explicit
    responses (or exceptions) with ``respond_with`` to override.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queued: list[httpx.Response | Exception] = []

    def respond_with(self, *responses: httpx.Response | Exception) -> None:
        self._queued.extend(responses)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._queued:
            queued = self._queued.pop(0)
            if isinstance(queued, Exception):
                raise queued
            return queued
        body = json.loads(request.content)
        return httpx.Response(
            200, json=_envelope_payload(*(_series_payload(sid) for sid in body["seriesid"]))
        )


@pytest.fixture
def series_payload():
    return _series_payload


@pytest.fixture
def envelope_payload():
    return _envelope_payload


@pytest.fixture
def fake_bls() -> FakeBls:
    return FakeBls()


@pytest.fixture
def http_client(fake_bls: FakeBls) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_bls))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def series_cache(clock: FakeClock) -> SeriesCache:
    return SeriesCache(clock=clock)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
