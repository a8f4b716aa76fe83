"""SQLite adapter (sqlite3 stdlib)."""

from __future__ import annotations

import sqlite3
from typing import Any

from row_seed.core.connection import ConnectionConfig
from row_seed.core.exceptions import ConnectionError  # noqa: A004
from row_seed.core.identifiers import quote_identifier


class SqliteSyncAdapter:
    """Synchronous SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def create_pool(self, config: ConnectionConfig) -> list[sqlite3.Connection]:
        """Create a 'pool' (list of connections) for SQLite."""
        pool: list[sqlite3.Connection] = []
        for _ in range(config.pool_size):
            try:
                conn = sqlite3.connect(config.database)
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA journal_mode=WAL")
                if config.foreign_keys:
                    conn.execute("PRAGMA foreign_keys=ON")
            except sqlite3.Error as e:
                self.close_pool(pool)
                raise ConnectionError(
                    f"Cannot open SQLite database '{config.database}': {e}"
                ) from e
            pool.append(conn)
        return pool

    def acquire_connection(self, pool: list[sqlite3.Connection]) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        if not pool:
            raise RuntimeError("No connections available in pool")
        return pool.pop()

    def release_connection(
        self, connection: sqlite3.Connection, pool: list[sqlite3.Connection]
    ) -> None:
        """Release a connection back to the pool."""
        pool.append(connection)

    def close_pool(self, pool: list[sqlite3.Connection]) -> None:
        """Close all connections in the pool."""
        for conn in pool:
            conn.close()
        pool.clear()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        return connection.execute(sql, params or {})

    def foreign_keys(self, connection: sqlite3.Connection, table: str) -> list[tuple[str, str]]:
        """Read ``(column, referenced_table)`` pairs from PRAGMA foreign_key_list."""
        cursor = connection.execute(f"PRAGMA foreign_key_list({quote_identifier(table)})")
        return [(row["from"], row["table"]) for row in cursor.fetchall()]
