"""Database storage module."""

from nash_stats.core.data.storage.duckdb_factory import (
    DuckDBConnectionFactory,
    DuckDBFactoryConfig,
)
from nash_stats.core.data.storage.order_store import DEFAULT_RECENT_LIMIT, OrderStore

__all__ = [
    "DEFAULT_RECENT_LIMIT",
    "DuckDBConnectionFactory",
    "DuckDBFactoryConfig",
    "OrderStore",
]
