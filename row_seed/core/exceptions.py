"""RowSeed exception hierarchy.

All exceptions are RowSeed-specific. Errors raised by a Record Store or by a
database driver are wrapped and chained, never exposed raw to callers.

Configuration and structural errors are raised while planning, before any
record is created. Execution errors abort a run part-way through. Usage errors
come from the caller-facing lookup surface.
"""

from __future__ import annotations

from typing import Any


class RowSeedError(Exception):
    """Base exception for all RowSeed errors."""


# --- Configuration ---


class ConfigurationError(RowSeedError):
    """Base for errors in blueprint declarations."""


class DuplicateAliasError(ConfigurationError):
    """Raised when two records resolve to the same alias in one run."""

    def __init__(self, alias: str, first: str | None = None, second: str | None = None) -> None:
        self.alias = alias
        if first is not None and second is not None:
            super().__init__(f"Duplicate alias '{alias}': declared by {first} and {second}")
        else:
            super().__init__(f"Duplicate alias '{alias}'")


class UnresolvedAliasError(ConfigurationError):
    """Raised when a cross reference names an alias no record will carry."""

    def __init__(self, alias: str, referenced_by: str) -> None:
        self.alias = alias
        self.referenced_by = referenced_by
        super().__init__(f"Unresolved alias '{alias}' referenced by {referenced_by}")


class ParentFieldInferenceError(ConfigurationError):
    """Raised when the parent-link field of a nested record cannot be determined."""

    def __init__(self, child: str, parent_type: str, detail: str | None = None) -> None:
        self.child = child
        self.parent_type = parent_type
        message = f"Cannot infer parent field of {child} for parent type '{parent_type}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PlaceholderError(ConfigurationError):
    """Raised for placeholder usage that cannot be expanded or resolved."""


class AncestorPlaceholderError(PlaceholderError):
    """Raised when an ancestor placeholder cannot be resolved at its depth."""

    def __init__(self, placeholder: str, node: str, detail: str) -> None:
        self.placeholder = placeholder
        self.node = node
        super().__init__(f"Cannot resolve '{placeholder}' in {node}: {detail}")


class InvalidCountError(ConfigurationError):
    """Raised when a blueprint declares a negative instance count."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Instance count must be non-negative, got {count}")


# --- Structural ---


class StructuralError(RowSeedError):
    """Base for errors in the shape of the dependency graph."""


class CycleError(StructuralError):
    """Raised when the dependency graph contains a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        path = " -> ".join([*cycle, cycle[0]]) if cycle else "<unknown>"
        super().__init__(f"Dependency cycle detected: {path}")


# --- Execution ---


class ExecutionError(RowSeedError):
    """Base for errors raised while records are being created."""


class RecordStoreError(ExecutionError):
    """Raised by a Record Store when it cannot persist a record."""


class RecordCreationError(ExecutionError):
    """Raised when the Record Store fails to create the record of a node."""

    def __init__(self, node: str, entity_type: str, detail: str) -> None:
        self.node = node
        self.entity_type = entity_type
        super().__init__(f"Failed to create {node} ({entity_type}): {detail}")


class ReferenceResolutionError(ExecutionError):
    """Raised when a referenced record does not expose the requested field."""

    def __init__(self, node: str, source: str, field: str) -> None:
        self.node = node
        self.source = source
        self.field = field
        super().__init__(f"{node} references field '{field}' of {source}, which it does not have")


# --- Usage ---


class UsageError(RowSeedError):
    """Base for misuse of the caller-facing surface."""


class RunNotCompletedError(UsageError):
    """Raised when created records are looked up before a successful run."""

    def __init__(self, state: Any) -> None:
        self.state = state
        super().__init__(f"No completed run to look up records from (state '{state}')")


class AliasNotFoundError(UsageError):
    """Raised when no record is registered under an alias."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"Alias not found: '{alias}'")


# --- Adapter ---


class AdapterError(RowSeedError):
    """Base for database adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised on connection failures."""


class IdentifierError(AdapterError):
    """Raised when an entity type or field name is not a safe SQL identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Invalid SQL identifier: '{identifier}'")
