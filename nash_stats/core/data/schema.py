"""Table definitions for the durable order history."""

from __future__ import annotations

from collections.abc import Sequence  # noqa: TC003
from dataclasses import dataclass

from duckdb import DuckDBPyConnection


@dataclass(frozen=True)
class ColumnDef:
    """Represents a DuckDB table column definition."""

    name: str
    data_type: str
    constraints: Sequence[str] = ()

    def render(self) -> str:
        parts = [self.name, self.data_type, *self.constraints]
        return " ".join(parts)


@dataclass(frozen=True)
class TableSchema:
    """Utility wrapper describing a DuckDB table schema."""

    name: str
    columns: Sequence[ColumnDef]

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    def create_ddl(self) -> str:
        columns_sql = ",\n                ".join(column.render() for column in self.columns)
        return f"""
            CREATE TABLE IF NOT EXISTS {self.name} (
                {columns_sql}
            )
            """.strip()

    def insert_sql(self) -> str:
        placeholders = ", ".join("?" for _ in self.columns)
        return f"INSERT INTO {self.name} ({', '.join(self.column_names)}) VALUES ({placeholders})"

    def ensure(self, conn: DuckDBPyConnection) -> None:
        """Create the table on the provided connection if it does not exist."""

        conn.execute(self.create_ddl())


ORDERS_TABLE = TableSchema(
    name="orders",
    columns=(
        ColumnDef("created_at", "TIMESTAMP", ("NOT NULL",)),
        ColumnDef("type", "VARCHAR", ("NOT NULL",)),
        ColumnDef("blockchain", "VARCHAR", ("NOT NULL",)),
        ColumnDef("crypto_amount", "DOUBLE", ("NOT NULL",)),
        ColumnDef("crypto_symbol", "VARCHAR", ("NOT NULL",)),
        ColumnDef("fiat_amount", "DOUBLE", ("NOT NULL",)),
        ColumnDef("fiat_price", "DOUBLE", ("NOT NULL",)),
        ColumnDef("fiat_symbol", "VARCHAR", ("NOT NULL",)),
    ),
)

# Order fields in the column order expected by ``Order.from_row``.
ORDER_FIELD_COLUMNS = ORDERS_TABLE.column_names[1:]


__all__ = ["ColumnDef", "TableSchema", "ORDERS_TABLE", "ORDER_FIELD_COLUMNS"]
