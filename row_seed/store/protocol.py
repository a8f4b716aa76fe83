"""Collaborator protocols.

The orchestrator persists records through a RecordStore and asks an
EntitySchema for parent-link fields that a blueprint does not name.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class RecordHandle:
    """A created record: its generated identifier and its fields as persisted."""

    entity_type: str
    id: Any
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, field_name: str) -> Any:
        return self.fields[field_name]

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.fields

    def get(self, field_name: str, default: Any = None) -> Any:
        return self.fields.get(field_name, default)


@runtime_checkable
class RecordStore(Protocol):
    """Persists one record and returns its handle."""

    def create(self, entity_type: str, fields: Mapping[str, Any]) -> RecordHandle:
        """Create a record of *entity_type* with fully resolved *fields*."""
        ...


@runtime_checkable
class EntitySchema(Protocol):
    """Entity metadata used to infer parent-link fields."""

    def infer_parent_field(self, child_type: str, parent_type: str) -> str | None:
        """Return the field of *child_type* that stores a *parent_type* identifier.

        Returns None when no such field exists. Implementations may raise
        ParentFieldInferenceError when the answer is ambiguous.
        """
        ...
