"""Exception handling module."""

from nash_stats.core.exceptions.base import (
    ConfigurationError,
    FetchError,
    NashStatsError,
    ParseError,
    StoreError,
)
from nash_stats.core.exceptions.codes import ErrorCode

__all__ = [
    "NashStatsError",
    "ConfigurationError",
    "ParseError",
    "FetchError",
    "StoreError",
    "ErrorCode",
]
