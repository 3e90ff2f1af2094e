"""Errors raised while acquiring economic time-series data."""

from __future__ import annotations


class EconomicDataError(Exception):
    """Base class for upstream data acquisition failures."""


class TransientFailure(EconomicDataError):
    """Retries were exhausted on network faults or provider throttling."""

    def __init__(self, attempts: int, last_cause: str | None = None) -> None:
        self.attempts = attempts
        self.last_cause = last_cause
        super().__init__(
            f"BLS API request failed after {attempts} attempts: {last_cause or 'Unknown error'}"
        )


class ProviderHttpError(EconomicDataError):
    """The provider answered with a non-2xx HTTP status."""

    def __init__(self, status_code: int, reason_phrase: str = "") -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        super().__init__(f"BLS API error: {status_code} {reason_phrase}".rstrip())


class ProviderApiError(EconomicDataError):
    """The provider answered 2xx but its envelope reports a failure."""

    def __init__(self, messages: list[str] | None = None) -> None:
        self.messages = list(messages or [])
        detail = "; ".join(self.messages) if self.messages else "Unknown BLS API error"
        super().__init__(f"BLS API error: {detail}")
