"""Upstream fetching and durable storage of orders."""

from nash_stats.core.data.fetcher import OrderFetcher, create_http_client
from nash_stats.core.data.schema import ORDERS_TABLE, ColumnDef, TableSchema
from nash_stats.core.data.storage import OrderStore

__all__ = [
    "ColumnDef",
    "ORDERS_TABLE",
    "OrderFetcher",
    "OrderStore",
    "TableSchema",
    "create_http_client",
]
