"""Retrying HTTP exchange with exponential backoff."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import httpx
import structlog

from careerecon.domain.exceptions import TransientFailure

logger = structlog.get_logger(__name__)

TOO_MANY_REQUESTS = 429


class BackoffFetcher:
    """Send a request, retrying transport failures and throttling (HTTP 429).

    Any other response, successful or not, is handed back to the caller
    unparsed. Between attempts the fetcher sleeps ``base_delay * 2 ** attempt``
    seconds; no sleep follows the final attempt.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_retries: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._client = client
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._sleep = sleep

    def delay_for(self, attempt: int) -> float:
        return self._base_delay * (2**attempt)

    async def exchange(self, request: httpx.Request) -> httpx.Response:
        last_cause: str | None = None

        for attempt in range(self._max_retries):
            try:
                response = await self._client.send(request)
            except httpx.TransportError as e:
                last_cause = f"{type(e).__name__}: {e}"
            else:
                if response.status_code != TOO_MANY_REQUESTS:
                    return response
                await response.aclose()
                last_cause = f"{response.status_code} {response.reason_phrase}"

            if attempt + 1 < self._max_retries:
                delay = self.delay_for(attempt)
                logger.warning(
                    "BLS request failed, retrying",
                    url=str(request.url),
                    attempt=attempt + 1,
                    max_attempts=self._max_retries,
                    delay_seconds=delay,
                    cause=last_cause,
                )
                await self._sleep(delay)

        logger.error(
            "BLS request retries exhausted",
            url=str(request.url),
            attempts=self._max_retries,
            cause=last_cause,
        )
        raise TransientFailure(self._max_retries, last_cause)
