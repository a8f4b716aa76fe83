"""In-memory record store and static entity schemas.

Useful for tests and dry runs: nothing is persisted outside the process.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from row_seed.store.protocol import RecordHandle

logger = logging.getLogger(__name__)


def _default_id(entity_type: str, sequence: int) -> str:
    return f"{entity_type}-{sequence}"


class InMemoryRecordStore:
    """Record store that keeps created records in a list.

    Identifiers are generated from a per-store sequence, so two fresh stores
    fed the same creation order hand out identical identifiers.

    Args:
        id_field: Field under which the generated identifier is exposed.
        id_factory: Callable ``(entity_type, sequence) -> id``; defaults to
            ``"<entity_type>-<sequence>"``.
    """

    def __init__(
        self,
        id_field: str = "Id",
        id_factory: Callable[[str, int], Any] | None = None,
    ) -> None:
        self._id_field = id_field
        self._id_factory = id_factory or _default_id
        self._records: list[RecordHandle] = []

    @property
    def id_field(self) -> str:
        return self._id_field

    @property
    def records(self) -> list[RecordHandle]:
        """All created records, in creation order."""
        return list(self._records)

    def create(self, entity_type: str, fields: Mapping[str, Any]) -> RecordHandle:
        record_id = self._id_factory(entity_type, len(self._records) + 1)
        stored = {**fields, self._id_field: record_id}
        handle = RecordHandle(entity_type=entity_type, id=record_id, fields=stored)
        self._records.append(handle)
        logger.debug("Stored %s record %r", entity_type, record_id)
        return handle

    def created(self, entity_type: str | None = None) -> list[RecordHandle]:
        """Created records, optionally filtered by entity type."""
        if entity_type is None:
            return self.records
        return [r for r in self._records if r.entity_type == entity_type]

    def __len__(self) -> int:
        return len(self._records)


class MappingEntitySchema:
    """Schema backed by an explicit ``(child_type, parent_type) -> field`` table."""

    def __init__(self, relationships: Mapping[tuple[str, str], str]) -> None:
        self._relationships = dict(relationships)

    def infer_parent_field(self, child_type: str, parent_type: str) -> str | None:
        return self._relationships.get((child_type, parent_type))


class ConventionEntitySchema:
    """Schema that finds the parent field by naming convention.

    For a parent type ``Account`` the candidates are ``AccountId``,
    ``Account_id`` (one per suffix) and then ``account_id``; the first one
    present among the child type's known fields wins.

    Args:
        fields_by_type: Known field names of each entity type.
        suffixes: Suffixes appended to the parent type name.
    """

    def __init__(
        self,
        fields_by_type: Mapping[str, Iterable[str]],
        suffixes: tuple[str, ...] = ("Id", "_id"),
    ) -> None:
        self._fields_by_type = {name: set(fields) for name, fields in fields_by_type.items()}
        self._suffixes = suffixes

    def infer_parent_field(self, child_type: str, parent_type: str) -> str | None:
        known = self._fields_by_type.get(child_type)
        if not known:
            return None
        candidates = [parent_type + suffix for suffix in self._suffixes]
        candidates.append(parent_type.lower() + "_id")
        for candidate in candidates:
            if candidate in known:
                return candidate
        return None
