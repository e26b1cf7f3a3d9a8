"""
Runtime settings for the order collector.

Values are read from command-line overrides, environment variables and an
optional ``.env`` file, in that order of precedence.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nash_stats.core.exceptions import ConfigurationError

DEFAULT_ENDPOINT_URL = "https://app.nash.io/api/cash/latest_completed_orders"
DEFAULT_FETCH_INTERVAL = 2.0
DEFAULT_BASELINE_LIMIT = 10


class NashStatsSettings(BaseSettings):
    """Main collector configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    persist_path: str = Field(..., description="DuckDB database file holding observed orders")
    fetch_interval: float = Field(DEFAULT_FETCH_INTERVAL, description="Seconds between poll cycles")
    endpoint_url: str = Field(DEFAULT_ENDPOINT_URL, description="Upstream latest-orders endpoint")
    request_timeout: float = Field(30.0, description="HTTP request timeout in seconds")
    baseline_limit: int = Field(
        DEFAULT_BASELINE_LIMIT, description="Stored orders loaded as the startup baseline"
    )
    log_level: str = Field("INFO", description="Log level")
    log_file: str | None = Field(None, description="Optional file receiving JSON log lines")
    metrics_port: int | None = Field(None, description="Port for the Prometheus endpoint")

    @field_validator("fetch_interval", "request_timeout")
    @classmethod
    def _positive_seconds(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("baseline_limit")
    @classmethod
    def _positive_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("persist_path")
    @classmethod
    def _non_empty_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


def load_settings(**overrides: Any) -> NashStatsSettings:
    """Build settings, letting non-``None`` overrides win over the environment."""

    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        return NashStatsSettings(**explicit)
    except ValidationError as exc:
        problems = {
            ".".join(str(part) for part in error["loc"]): error["msg"] for error in exc.errors()
        }
        raise ConfigurationError("Invalid configuration", details={"errors": problems}) from exc
