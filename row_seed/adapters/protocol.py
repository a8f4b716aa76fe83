"""Database adapter protocol.

Every adapter module MUST implement this protocol so the SQL record store
and schema can stay driver-agnostic.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from row_seed.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Parameter binding style: 'named' (:name) or 'pyformat' (%(name)s)."""
        ...

    def create_pool(self, config: ConnectionConfig) -> Any:
        """Create a connection pool."""
        ...

    def acquire_connection(self, pool: Any) -> Any:
        """Acquire a connection from the pool."""
        ...

    def release_connection(self, connection: Any, pool: Any) -> None:
        """Release a connection back to the pool."""
        ...

    def close_pool(self, pool: Any) -> None:
        """Close the pool and release all connections."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor-like object."""
        ...

    def foreign_keys(self, connection: Any, table: str) -> list[tuple[str, str]]:
        """List ``(column, referenced_table)`` pairs declared on *table*."""
        ...
