"""SQL-backed record store and entity schema.

Each entity type maps to a table of the same name and each field to a
column. Connections come from a ConnectionManager; every record is inserted
and committed on its own, so records created before a failure stay in place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from row_seed.core.connection import ConnectionManager
from row_seed.core.exceptions import ParentFieldInferenceError, RecordStoreError
from row_seed.core.identifiers import bind_marker, insert_statement, quote_identifier
from row_seed.store.protocol import RecordHandle

logger = logging.getLogger(__name__)


def _row_to_dict(cursor: Any) -> dict[str, Any] | None:
    """Convert a single cursor row to dict, or None.

    Handles both tuple-like rows and dict-like rows from different adapters.
    """
    if cursor.description is None:
        return None
    columns = [desc[0] for desc in cursor.description]
    row = cursor.fetchone()
    if row is None:
        return None

    if isinstance(row, dict):
        return dict(row)

    return dict(zip(columns, row, strict=True))


class SqlRecordStore:
    """Record store that inserts one row per record.

    The returned handle carries the row as read back after the insert, so
    column defaults applied by the database are visible to later references.
    The row is located through the driver's ``lastrowid``, so tables must
    have a rowid; the key column itself may have any type.

    Args:
        connection_manager: Source of database connections.
        id_column: Primary-key column whose value becomes the handle id.
    """

    def __init__(self, connection_manager: ConnectionManager, id_column: str = "id") -> None:
        self._connection_manager = connection_manager
        self._id_column = id_column
        self._paramstyle = connection_manager.adapter.paramstyle

    @property
    def id_column(self) -> str:
        return self._id_column

    def create(self, entity_type: str, fields: Mapping[str, Any]) -> RecordHandle:
        columns = list(fields)
        sql, param_names = insert_statement(entity_type, columns, self._paramstyle)
        params = {name: fields[column] for name, column in zip(param_names, columns, strict=True)}
        select_sql = (
            f"SELECT * FROM {quote_identifier(entity_type)} "
            f"WHERE rowid = {bind_marker('row_id', self._paramstyle)}"
        )
        adapter = self._connection_manager.adapter

        with self._connection_manager.get_connection() as conn:
            try:
                cursor = adapter.execute(conn, sql, params)
                row_id = cursor.lastrowid
                row = _row_to_dict(adapter.execute(conn, select_sql, {"row_id": row_id}))
                conn.commit()
            except Exception as e:
                conn.rollback()
                raise RecordStoreError(f"Insert into '{entity_type}' failed: {e}") from e

        if row is None:
            # Row not visible after the insert: report what was sent
            row = dict(fields)
            row.setdefault(self._id_column, row_id)
        record_id = row.get(self._id_column, row_id)
        logger.debug("Inserted %s row %r", entity_type, record_id)
        return RecordHandle(entity_type=entity_type, id=record_id, fields=row)


class SqlEntitySchema:
    """Entity schema that reads parent fields from declared foreign keys.

    A child table with exactly one foreign key to the parent table yields
    that column. Several candidate columns are ambiguous and rejected.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager
        self._cache: dict[tuple[str, str], str | None] = {}

    def infer_parent_field(self, child_type: str, parent_type: str) -> str | None:
        key = (child_type, parent_type)
        if key not in self._cache:
            self._cache[key] = self._lookup(child_type, parent_type)
        return self._cache[key]

    def _lookup(self, child_type: str, parent_type: str) -> str | None:
        adapter = self._connection_manager.adapter
        with self._connection_manager.get_connection() as conn:
            foreign_keys = adapter.foreign_keys(conn, child_type)

        matches = [column for column, table in foreign_keys if table.lower() == parent_type.lower()]
        if not matches:
            return None
        if len(matches) > 1:
            raise ParentFieldInferenceError(
                child_type,
                parent_type,
                f"ambiguous foreign keys {matches}",
            )
        return matches[0]
