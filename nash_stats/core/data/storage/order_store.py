"""Append-only DuckDB store for observed orders."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import duckdb

from nash_stats.core.data.schema import ORDER_FIELD_COLUMNS, ORDERS_TABLE
from nash_stats.core.data.storage.duckdb_factory import (
    DuckDBConnectionFactory,
    DuckDBFactoryConfig,
)
from nash_stats.core.exceptions import ErrorCode, ParseError, StoreError
from nash_stats.core.models import Order

DEFAULT_RECENT_LIMIT = 10


def _utc_now() -> datetime:
    # Stored as a naive UTC TIMESTAMP.
    return datetime.now(UTC).replace(tzinfo=None)


class OrderStore:
    """Durable history of orders, one short-lived connection per operation."""

    def __init__(
        self,
        persist_path: str,
        *,
        factory: DuckDBConnectionFactory | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.persist_path = persist_path
        self._factory = factory or DuckDBConnectionFactory(DuckDBFactoryConfig(database=persist_path))
        self._clock = clock

    def initialize(self) -> None:
        """Create the ``orders`` table if it does not exist yet."""

        try:
            with self._factory.connection() as conn:
                ORDERS_TABLE.ensure(conn)
        except (duckdb.Error, OSError) as exc:
            raise StoreError(
                f"Failed to initialise order store: {exc}",
                error_code=ErrorCode.STORAGE_INIT_ERROR,
                persist_path=self.persist_path,
            ) from exc

    def load_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[Order]:
        """Return up to ``limit`` of the most recently stored orders, newest first.

        Equal orders are collapsed onto their newest occurrence.
        """
        if limit <= 0:
            return []
        columns = ", ".join(ORDER_FIELD_COLUMNS)
        query = (
            f"SELECT {columns} FROM {ORDERS_TABLE.name} "
            "ORDER BY created_at DESC, rowid DESC LIMIT ?"
        )
        try:
            with self._factory.connection() as conn:
                rows = conn.execute(query, [limit]).fetchall()
        except (duckdb.Error, OSError) as exc:
            raise StoreError(
                f"Failed to load recent orders: {exc}",
                error_code=ErrorCode.STORAGE_READ_ERROR,
                persist_path=self.persist_path,
            ) from exc

        recent: list[Order] = []
        for row in rows:
            try:
                order = Order.from_row(row)
            except ParseError as exc:
                raise StoreError(
                    f"Stored order is invalid: {exc.message}",
                    error_code=ErrorCode.STORAGE_READ_ERROR,
                    persist_path=self.persist_path,
                ) from exc
            if order not in recent:
                recent.append(order)
        return recent

    def append(self, order: Order) -> datetime:
        """Insert ``order`` stamped with the current time and return the stamp."""

        created_at = self._clock()
        try:
            with self._factory.connection() as conn:
                conn.execute(ORDERS_TABLE.insert_sql(), [created_at, *order.to_row()])
        except (duckdb.Error, OSError) as exc:
            raise StoreError(
                f"Failed to insert order: {exc}",
                error_code=ErrorCode.STORAGE_WRITE_ERROR,
                persist_path=self.persist_path,
                details={"order": str(order)},
            ) from exc
        return created_at


__all__ = ["DEFAULT_RECENT_LIMIT", "OrderStore"]
