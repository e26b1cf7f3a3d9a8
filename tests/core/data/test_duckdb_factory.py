from __future__ import annotations

import duckdb
import pytest

from nash_stats.core.data.storage import DuckDBConnectionFactory, DuckDBFactoryConfig


def test_connection_factory_context_yields_and_closes_connection() -> None:
    factory = DuckDBConnectionFactory()

    with factory.connection() as conn:
        assert conn.execute("SELECT 1").fetchone()[0] == 1

    with pytest.raises(duckdb.Error):
        conn.execute("SELECT 1")


def test_connection_factory_applies_pragmas() -> None:
    factory = DuckDBConnectionFactory(DuckDBFactoryConfig(pragmas={"threads": 3}))

    with factory.connection() as conn:
        threads = conn.execute("SELECT current_setting('threads')").fetchone()[0]

    assert threads == 3


def test_connection_factory_creates_parent_directory(tmp_path) -> None:
    database = tmp_path / "nested" / "dir" / "orders.duckdb"
    factory = DuckDBConnectionFactory(DuckDBFactoryConfig(database=database))

    with factory.connection() as conn:
        conn.execute("CREATE TABLE t (x INTEGER)")

    assert database.exists()
    assert factory.database == str(database)
