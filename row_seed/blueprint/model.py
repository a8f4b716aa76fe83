"""Blueprint data model.

A Blueprint is a frozen declaration of one record, or of a family of records
when a count is given. Every configuration method returns a new Blueprint;
the receiver is never modified, so a blueprint can be shared as a template
and specialized many times.

    account = blueprint("Account", Name="Test Account").as_alias("acc")
    contact = blueprint("Contact").as_alias("con").use_ref("{P0}", "Name", "LastName")
    tree = account.with_children(contact)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class UseRef:
    """Copy ``source_field`` of the record aliased ``source_alias`` into ``target_field``.

    ``source_alias`` may be an ancestor placeholder such as ``{P0}`` and may
    contain sequence placeholders.
    """

    source_alias: str
    source_field: str
    target_field: str


@dataclass(frozen=True)
class Blueprint:
    """Declarative, immutable description of one entity instance or family."""

    entity_type: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    alias: str | None = None
    count: int = 1
    children: tuple[Blueprint, ...] = ()
    use_refs: tuple[UseRef, ...] = ()
    parent_field: str | None = None

    def __post_init__(self) -> None:
        # Own a read-only copy so callers cannot mutate through the original dict
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "use_refs", tuple(self.use_refs))

    def set(self, field_name: str, value: Any) -> Blueprint:
        """Assign a field value or placeholder template."""
        return dataclasses.replace(self, fields={**self.fields, field_name: value})

    def set_fields(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> Blueprint:
        """Assign several fields at once."""
        merged = dict(self.fields)
        if values:
            merged.update(values)
        merged.update(kwargs)
        return dataclasses.replace(self, fields=merged)

    def unset(self, field_name: str) -> Blueprint:
        """Drop a field assignment, if present."""
        remaining = {k: v for k, v in self.fields.items() if k != field_name}
        return dataclasses.replace(self, fields=remaining)

    def as_alias(self, template: str | None) -> Blueprint:
        """Name the record(s) so they can be referenced and looked up later."""
        return dataclasses.replace(self, alias=template)

    def times(self, count: int) -> Blueprint:
        """Expand this blueprint into *count* instances."""
        return dataclasses.replace(self, count=count)

    def with_children(self, *children: Blueprint) -> Blueprint:
        """Nest child blueprints under every instance of this one."""
        return dataclasses.replace(self, children=(*self.children, *children))

    def use_ref(self, source_alias: str, source_field: str, target_field: str) -> Blueprint:
        """Declare a cross reference to another aliased record."""
        ref = UseRef(source_alias, source_field, target_field)
        return dataclasses.replace(self, use_refs=(*self.use_refs, ref))

    def parent_link(self, field_name: str | None) -> Blueprint:
        """Override the field that receives the parent's identifier."""
        return dataclasses.replace(self, parent_field=field_name)


def blueprint(entity_type: str, **fields: Any) -> Blueprint:
    """Entry point for the blueprint DSL.

    Args:
        entity_type: The kind of record to create.
        **fields: Initial field assignments.

    Returns:
        A Blueprint for chaining further declarations.
    """
    return Blueprint(entity_type=entity_type, fields=fields)
