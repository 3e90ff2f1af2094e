"""Configuration for the BLS client and the economic enrichment layer.

Process-level settings come from ``Settings`` (environment / ``.env``).
Per-call client configuration is resolved by ``resolve_client_config`` from an
explicit environment snapshot plus keyword overrides, so nothing deeper in the
call stack reads ``os.environ`` directly.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.bls.gov/publicAPI/v2"
ENV_FILE = ".env"

# ClientConfig field -> environment variable
CLIENT_ENV_VARS: dict[str, str] = {
    "api_key": "BLS_API_KEY",
    "base_url": "BLS_BASE_URL",
    "cache_enabled": "BLS_CACHE_ENABLED",
    "cache_ttl_ms": "BLS_CACHE_TTL_MS",
    "max_retries": "BLS_RETRY_MAX_ATTEMPTS",
    "retry_base_delay_ms": "BLS_RETRY_BASE_DELAY_MS",
    "timeout_seconds": "BLS_TIMEOUT_SECONDS",
}


class ClientConfig(BaseModel):
    """Effective configuration for one BLS client call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str | None = Field(default=None, description="BLS registration key")
    base_url: str = Field(default=DEFAULT_BASE_URL)
    cache_enabled: bool = Field(default=True)
    cache_ttl_ms: int = Field(default=3_600_000, ge=0, description="Cache time-to-live (ms)")
    max_retries: int = Field(default=3, ge=1, description="Total attempts per exchange")
    retry_base_delay_ms: int = Field(default=1_000, ge=0, description="Backoff base delay (ms)")
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_ms / 1000

    @property
    def retry_base_delay_seconds(self) -> float:
        return self.retry_base_delay_ms / 1000

    @property
    def has_credential(self) -> bool:
        return self.api_key is not None

    @property
    def data_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/timeseries/data/"


def environment_snapshot(env_file: str = ENV_FILE) -> dict[str, str]:
    """Process environment layered over ``env_file``, the same sources ``Settings`` reads."""
    file_values = {
        key: value for key, value in dotenv_values(env_file).items() if value is not None
    }
    return {**file_values, **os.environ}


def resolve_client_config(
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ClientConfig:
    """Resolve client config: defaults < environment < explicit overrides.

    Args:
        environ: Environment snapshot. Defaults to ``environment_snapshot()``
            (``os.environ`` over ``.env``).
        **overrides: ``ClientConfig`` fields. ``None`` values are ignored; pass
            ``api_key=""`` to force an unauthenticated call.

    Raises:
        pydantic.ValidationError: If a value cannot be coerced or an override
            names an unknown field.
    """
    env = environment_snapshot() if environ is None else environ
    values: dict[str, Any] = {}
    for field_name, env_var in CLIENT_ENV_VARS.items():
        raw = env.get(env_var)
        if raw is not None and raw != "":
            values[field_name] = raw
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ClientConfig.model_validate(values)


class Settings(BaseSettings):
    """Process-level settings for economic enrichment."""

    model_config = SettingsConfigDict(
        env_prefix="BLS_", env_file=ENV_FILE, env_file_encoding="utf-8", extra="ignore"
    )

    enabled: bool = True
    lookback_years: int = Field(default=5, ge=0)
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached process settings."""
    return Settings()
