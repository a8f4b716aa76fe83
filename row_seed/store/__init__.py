"""Store layer - record persistence and entity metadata collaborators."""

from __future__ import annotations

from row_seed.store.memory import ConventionEntitySchema, InMemoryRecordStore, MappingEntitySchema
from row_seed.store.protocol import EntitySchema, RecordHandle, RecordStore
from row_seed.store.sql import SqlEntitySchema, SqlRecordStore

__all__ = [
    "RecordStore",
    "EntitySchema",
    "RecordHandle",
    "InMemoryRecordStore",
    "MappingEntitySchema",
    "ConventionEntitySchema",
    "SqlRecordStore",
    "SqlEntitySchema",
]
