"""Configuration management module."""

from nash_stats.core.config.settings import (
    DEFAULT_BASELINE_LIMIT,
    DEFAULT_ENDPOINT_URL,
    DEFAULT_FETCH_INTERVAL,
    NashStatsSettings,
    load_settings,
)

__all__ = [
    "DEFAULT_BASELINE_LIMIT",
    "DEFAULT_ENDPOINT_URL",
    "DEFAULT_FETCH_INTERVAL",
    "NashStatsSettings",
    "load_settings",
]
