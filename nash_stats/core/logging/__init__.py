"""Logging utilities for monitoring and debugging."""

from nash_stats.core.logging.config import LogConfig
from nash_stats.core.logging.logger import (
    configure_logging,
    get_logger,
    log_context,
    logger,
)

__all__ = [
    "LogConfig",
    "get_logger",
    "configure_logging",
    "log_context",
    "logger",
]
