"""Unit tests for ConnectionConfig and ConnectionManager."""

from __future__ import annotations

import pytest

from row_seed.adapters.sqlite import SqliteSyncAdapter
from row_seed.core.connection import ConnectionConfig, ConnectionManager
from row_seed.core.exceptions import AdapterError


class TestConnectionConfig:
    def test_defaults(self) -> None:
        config = ConnectionConfig(driver="sqlite", database=":memory:")
        assert config.pool_size == 5
        assert config.foreign_keys is True

    def test_only_sqlite_fields(self) -> None:
        assert set(ConnectionConfig.model_fields) == {
            "driver",
            "database",
            "pool_size",
            "foreign_keys",
        }


class TestConnectionManager:
    def test_loads_sqlite_adapter(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        assert isinstance(manager.adapter, SqliteSyncAdapter)

    def test_driver_name_is_case_insensitive(self) -> None:
        manager = ConnectionManager(ConnectionConfig(driver="SQLite", database=":memory:"))
        assert isinstance(manager.adapter, SqliteSyncAdapter)

    def test_unsupported_driver(self) -> None:
        with pytest.raises(AdapterError, match="postgresql"):
            ConnectionManager(ConnectionConfig(driver="postgresql", database="app"))

    def test_connection_returns_to_pool(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        with manager.get_connection() as first:
            first.execute("CREATE TABLE t (x INTEGER)")
        with manager.get_connection() as second:
            assert second is first
        manager.close_pool()
