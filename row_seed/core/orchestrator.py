"""Orchestrator - drives planning and record creation end to end.

The Orchestrator accumulates top-level blueprints, builds and schedules the
dependency graph, then creates records one at a time in that order, filling
deferred references from the records created before them.
"""

from __future__ import annotations

import logging
from typing import Any

from row_seed.blueprint.model import Blueprint
from row_seed.core.config import RunConfig
from row_seed.core.connection import ConnectionConfig, ConnectionManager
from row_seed.core.enums import RunState
from row_seed.core.exceptions import (
    RecordCreationError,
    ReferenceResolutionError,
    RunNotCompletedError,
)
from row_seed.core.registry import AliasRegistry
from row_seed.planning.graph import GraphBuilder
from row_seed.planning.node import InstanceNode, Reference
from row_seed.planning.scheduler import schedule
from row_seed.store.protocol import EntitySchema, RecordHandle, RecordStore
from row_seed.store.sql import SqlEntitySchema, SqlRecordStore

logger = logging.getLogger(__name__)


class Orchestrator:
    """Resolves a blueprint forest and creates its records through a RecordStore.

    Planning is all-or-nothing: configuration and cycle errors are raised
    before the store is called at all. A store failure stops the run at the
    failing record; records created before it are left as they are.

    Args:
        store: Persists records and returns their handles.
        schema: Infers parent-link fields for nested blueprints.
        config: Run configuration.
    """

    def __init__(
        self,
        store: RecordStore,
        schema: EntitySchema | None = None,
        config: RunConfig | None = None,
    ) -> None:
        self._store = store
        self._schema = schema
        self._config = config or RunConfig()
        self._blueprints: list[Blueprint] = []
        self._registry: AliasRegistry | None = None
        self._order: list[InstanceNode] = []
        self._state = RunState.IDLE

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        run_config: RunConfig | None = None,
        id_column: str = "id",
    ) -> Orchestrator:
        """Create an Orchestrator backed by a SQL database.

        Args:
            config: ConnectionConfig instance
            run_config: RunConfig instance
            id_column: Primary-key column of every entity table

        Returns:
            Orchestrator instance
        """
        connection_manager = ConnectionManager(config)
        return cls(
            SqlRecordStore(connection_manager, id_column=id_column),
            SqlEntitySchema(connection_manager),
            run_config,
        )

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def blueprints(self) -> tuple[Blueprint, ...]:
        return tuple(self._blueprints)

    @property
    def order(self) -> list[InstanceNode]:
        """Nodes created by the last run, in creation order."""
        return list(self._order)

    @property
    def registry(self) -> AliasRegistry:
        """Alias registry of the last successful run."""
        if self._state != RunState.COMPLETED or self._registry is None:
            raise RunNotCompletedError(self._state.value)
        return self._registry

    def add(self, *blueprints: Blueprint) -> Orchestrator:
        """Accumulate top-level blueprints for the next run."""
        self._blueprints.extend(blueprints)
        return self

    def plan(self) -> list[InstanceNode]:
        """Build and schedule the dependency graph without creating anything.

        Raises:
            ConfigurationError: For invalid declarations.
            CycleError: If the declarations depend on each other in a cycle.
        """
        graph = GraphBuilder(self._schema, self._config).build(self._blueprints)
        return schedule(graph)

    def create(self) -> AliasRegistry:
        """Create every declared record in dependency order.

        Each call is a new run with a fresh registry.

        Returns:
            The run's AliasRegistry.

        Raises:
            ConfigurationError: Before any record is created.
            CycleError: Before any record is created.
            RecordCreationError: When the store fails for a record.
            ReferenceResolutionError: When a referenced record lacks the field.
        """
        self._registry = None
        self._order = []
        self._state = RunState.RUNNING
        try:
            order = self.plan()
            registry = AliasRegistry()
            handles: dict[int, RecordHandle] = {}

            logger.info("Creating %d records", len(order))
            for node in order:
                fields = self._resolve_fields(node, handles)
                try:
                    handle = self._store.create(node.entity_type, fields)
                except Exception as e:
                    logger.error("Record store failed for %s", node.label)
                    raise RecordCreationError(node.label, node.entity_type, str(e)) from e

                handles[node.node_id] = handle
                self._order.append(node)
                if node.alias is not None:
                    registry.register(node.alias, handle)
                logger.debug("Created %s with id %r", node.label, handle.id)
        except Exception:
            self._state = RunState.FAILED
            raise

        self._registry = registry
        self._state = RunState.COMPLETED
        logger.info("Run completed: %d records, %d aliases", len(order), len(registry))
        return registry

    def get_by_alias(self, alias: str) -> RecordHandle:
        """Return the record created under *alias* by the last successful run.

        Raises:
            RunNotCompletedError: If no run has completed successfully.
            AliasNotFoundError: If nothing was registered under *alias*.
        """
        return self.registry.resolve(alias)

    def _resolve_fields(
        self, node: InstanceNode, handles: dict[int, RecordHandle]
    ) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for name, value in node.fields.items():
            if isinstance(value, Reference):
                value = self._dereference(node, value, handles[value.node_id])
            resolved[name] = value
        return resolved

    def _dereference(self, node: InstanceNode, ref: Reference, source: RecordHandle) -> Any:
        if ref.source_field is None:
            return source.id
        if ref.source_field in source:
            return source[ref.source_field]
        if ref.source_field == self._config.id_field:
            return source.id
        raise ReferenceResolutionError(
            node.label,
            f"{source.entity_type} {source.id!r}",
            ref.source_field,
        )
