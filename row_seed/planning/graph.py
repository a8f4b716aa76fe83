"""Dependency graph builder.

Expands a forest of blueprints depth-first into instance nodes and derives
the edges between them:

- containment: a nested instance depends on the instance it is nested under;
- cross reference: a node depends on the node whose alias its use_ref names;
- ancestor: a node depends on every ancestor its ``{Px}`` placeholders name.

Node ids are handed out in expansion order (an instance, then everything
nested under it, then the next instance), which is also the scheduler's
tie-break order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from row_seed.blueprint.model import Blueprint
from row_seed.blueprint.placeholder import (
    ancestor_layers,
    expand_one,
    expand_value,
    is_ancestor_placeholder,
    substitute_ancestors,
)
from row_seed.core.config import RunConfig
from row_seed.core.enums import DependencyKind
from row_seed.core.exceptions import (
    AncestorPlaceholderError,
    DuplicateAliasError,
    InvalidCountError,
    ParentFieldInferenceError,
    UnresolvedAliasError,
)
from row_seed.planning.node import DependencyGraph, InstanceNode, Reference
from row_seed.store.protocol import EntitySchema

logger = logging.getLogger(__name__)


def _describe(node: InstanceNode) -> str:
    return f"{node.entity_type}#{node.node_id}"


class _Expansion:
    """Mutable state of one build() call."""

    def __init__(self) -> None:
        self.graph = DependencyGraph()
        self.next_id = 0
        # (node, literal source alias, source field, target field)
        self.pending_refs: list[tuple[InstanceNode, str, str, str]] = []

    def allocate_id(self) -> int:
        node_id = self.next_id
        self.next_id += 1
        return node_id


class GraphBuilder:
    """Builds a DependencyGraph from top-level blueprints.

    Args:
        schema: Consulted for the parent-link field of nested blueprints
            that do not declare one.
        config: Run configuration (placeholder strictness).
    """

    def __init__(
        self,
        schema: EntitySchema | None = None,
        config: RunConfig | None = None,
    ) -> None:
        self._schema = schema
        self._config = config or RunConfig()

    def build(self, blueprints: Iterable[Blueprint]) -> DependencyGraph:
        """Expand *blueprints* and link the resulting nodes.

        Raises:
            ConfigurationError: For duplicate or unresolved aliases, bad
                placeholders, negative counts or uninferable parent fields.
        """
        state = _Expansion()
        for bp in blueprints:
            self._expand(bp, None, state)

        for node, alias, source_field, target_field in state.pending_refs:
            target = state.graph.by_alias(alias)
            if target is None:
                raise UnresolvedAliasError(alias, _describe(node))
            node.fields[target_field] = Reference(target.node_id, source_field)
            state.graph.add_dependency(node.node_id, target.node_id, DependencyKind.REFERENCE)

        logger.info(
            "Built dependency graph: %d nodes, %d edges",
            state.graph.node_count,
            state.graph.edge_count,
        )
        return state.graph

    def _expand(self, bp: Blueprint, parent: InstanceNode | None, state: _Expansion) -> None:
        if bp.count < 0:
            raise InvalidCountError(bp.count)

        strict = self._config.strict_placeholders
        ancestors = () if parent is None else (*parent.ancestors, parent.node_id)
        field_values = {
            name: expand_value(value, bp.count, strict=strict) for name, value in bp.fields.items()
        }

        for index in range(bp.count):
            node = InstanceNode(
                node_id=state.allocate_id(),
                entity_type=bp.entity_type,
                parent_id=None if parent is None else parent.node_id,
                ancestors=ancestors,
            )
            if parent is not None:
                node.depends_on(parent.node_id, DependencyKind.CONTAINMENT)

            if bp.alias is not None:
                alias = expand_one(bp.alias, index, strict=strict)
                alias = self._substitute(alias, node, state)
                existing = state.graph.by_alias(alias)
                if existing is not None:
                    raise DuplicateAliasError(alias, _describe(existing), _describe(node))
                node.alias = alias

            for name, values in field_values.items():
                value = values[index]
                if isinstance(value, str):
                    value = self._substitute(value, node, state)
                node.fields[name] = value

            if parent is not None:
                node.parent_field = self._parent_field(bp, node, parent)
                node.fields[node.parent_field] = Reference(parent.node_id, None)

            for ref in bp.use_refs:
                source = expand_one(ref.source_alias, index, strict=strict)
                layer = is_ancestor_placeholder(source)
                if layer is not None:
                    ancestor = self._ancestor(node, layer, source, state)
                    node.fields[ref.target_field] = Reference(ancestor.node_id, ref.source_field)
                    node.depends_on(ancestor.node_id, DependencyKind.ANCESTOR)
                else:
                    source = self._substitute(source, node, state)
                    state.pending_refs.append((node, source, ref.source_field, ref.target_field))

            state.graph.add_node(node)
            logger.debug("Expanded %s as %s", _describe(node), node.alias or "<no alias>")

            for child in bp.children:
                self._expand(child, node, state)

    def _parent_field(self, bp: Blueprint, node: InstanceNode, parent: InstanceNode) -> str:
        if bp.parent_field is not None:
            return bp.parent_field
        if self._schema is None:
            raise ParentFieldInferenceError(
                _describe(node), parent.entity_type, "no entity schema configured"
            )
        inferred = self._schema.infer_parent_field(bp.entity_type, parent.entity_type)
        if inferred is None:
            raise ParentFieldInferenceError(_describe(node), parent.entity_type)
        return inferred

    def _ancestor(
        self, node: InstanceNode, layer: int, placeholder: str, state: _Expansion
    ) -> InstanceNode:
        if layer >= node.depth:
            raise AncestorPlaceholderError(
                placeholder,
                _describe(node),
                f"layer {layer} is out of range at nesting depth {node.depth}",
            )
        return state.graph.node(node.ancestors[layer])

    def _substitute(self, text: str, node: InstanceNode, state: _Expansion) -> str:
        """Replace ``{Px}`` tokens in *text* with ancestor aliases."""
        layers = ancestor_layers(text)
        if not layers:
            return text

        aliases: dict[int, str] = {}
        for layer in layers:
            ancestor = self._ancestor(node, layer, f"{{P{layer}}}", state)
            if ancestor.alias is None:
                raise AncestorPlaceholderError(
                    f"{{P{layer}}}",
                    _describe(node),
                    f"ancestor {_describe(ancestor)} has no alias",
                )
            aliases[layer] = ancestor.alias
            node.depends_on(ancestor.node_id, DependencyKind.ANCESTOR)

        return substitute_ancestors(text, aliases.__getitem__)
