"""Expanded instance nodes and the dependency graph that links them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from row_seed.core.enums import DependencyKind


@dataclass(frozen=True)
class Reference:
    """Deferred field value: ``source_field`` of the record created for ``node_id``.

    A ``source_field`` of None stands for the record's generated identifier.
    """

    node_id: int
    source_field: str | None


@dataclass
class InstanceNode:
    """One concrete record to create.

    ``fields`` holds literal values and Reference placeholders; the
    orchestrator swaps references for real values right before creation.
    ``ancestors`` lists the node ids of every enclosing instance, root first.
    """

    node_id: int
    entity_type: str
    fields: dict[str, Any] = field(default_factory=dict)
    alias: str | None = None
    parent_id: int | None = None
    parent_field: str | None = None
    ancestors: tuple[int, ...] = ()
    dependencies: dict[int, DependencyKind] = field(default_factory=dict)

    @property
    def label(self) -> str:
        """Human-readable name used in errors and logs."""
        if self.alias is not None:
            return f"'{self.alias}'"
        return f"{self.entity_type}#{self.node_id}"

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    def depends_on(self, node_id: int, kind: DependencyKind) -> None:
        # The first recorded reason for an edge is kept
        self.dependencies.setdefault(node_id, kind)


class DependencyGraph:
    """Directed graph of instance nodes; edges point at dependencies."""

    def __init__(self) -> None:
        self._nodes: dict[int, InstanceNode] = {}
        self._aliases: dict[str, int] = {}

    def add_node(self, node: InstanceNode) -> InstanceNode:
        if node.node_id in self._nodes:
            raise ValueError(f"Node {node.node_id} already in graph")
        self._nodes[node.node_id] = node
        if node.alias is not None:
            self._aliases.setdefault(node.alias, node.node_id)
        return node

    def add_dependency(self, dependent_id: int, dependency_id: int, kind: DependencyKind) -> None:
        """Record that *dependent_id* must be created after *dependency_id*."""
        if dependent_id not in self._nodes:
            raise ValueError(f"Dependent node not found: {dependent_id}")
        if dependency_id not in self._nodes:
            raise ValueError(f"Dependency node not found: {dependency_id}")
        self._nodes[dependent_id].depends_on(dependency_id, kind)

    def node(self, node_id: int) -> InstanceNode:
        return self._nodes[node_id]

    def by_alias(self, alias: str) -> InstanceNode | None:
        node_id = self._aliases.get(alias)
        return None if node_id is None else self._nodes[node_id]

    @property
    def nodes(self) -> list[InstanceNode]:
        """All nodes, ordered by node id."""
        return [self._nodes[i] for i in sorted(self._nodes)]

    def edges(self) -> list[tuple[int, int, DependencyKind]]:
        """All ``(dependent, dependency, kind)`` triples, ordered by dependent id."""
        return [
            (node.node_id, dep_id, kind)
            for node in self.nodes
            for dep_id, kind in sorted(node.dependencies.items())
        ]

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(n.dependencies) for n in self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[InstanceNode]:
        return iter(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes
