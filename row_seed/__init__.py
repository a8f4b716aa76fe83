"""RowSeed - declarative, dependency-ordered record seeding engine."""

from __future__ import annotations

from row_seed.blueprint.model import Blueprint, UseRef, blueprint
from row_seed.blueprint.placeholder import alpha_label, expand
from row_seed.core.config import RunConfig
from row_seed.core.connection import ConnectionConfig, ConnectionManager
from row_seed.core.enums import DependencyKind, RunState
from row_seed.core.exceptions import (
    AdapterError,
    AliasNotFoundError,
    AncestorPlaceholderError,
    ConfigurationError,
    ConnectionError,  # noqa: A004
    CycleError,
    DuplicateAliasError,
    ExecutionError,
    IdentifierError,
    InvalidCountError,
    ParentFieldInferenceError,
    PlaceholderError,
    RecordCreationError,
    RecordStoreError,
    ReferenceResolutionError,
    RowSeedError,
    RunNotCompletedError,
    StructuralError,
    UnresolvedAliasError,
    UsageError,
)
from row_seed.core.orchestrator import Orchestrator
from row_seed.core.registry import AliasRegistry
from row_seed.planning.graph import GraphBuilder
from row_seed.planning.node import DependencyGraph, InstanceNode, Reference
from row_seed.planning.scheduler import schedule
from row_seed.store.memory import ConventionEntitySchema, InMemoryRecordStore, MappingEntitySchema
from row_seed.store.protocol import EntitySchema, RecordHandle, RecordStore
from row_seed.store.sql import SqlEntitySchema, SqlRecordStore

__all__ = [
    # Blueprint
    "Blueprint",
    "UseRef",
    "blueprint",
    "expand",
    "alpha_label",
    # Planning
    "GraphBuilder",
    "DependencyGraph",
    "InstanceNode",
    "Reference",
    "schedule",
    # Orchestration
    "Orchestrator",
    "AliasRegistry",
    "RunConfig",
    # Stores
    "RecordStore",
    "EntitySchema",
    "RecordHandle",
    "InMemoryRecordStore",
    "MappingEntitySchema",
    "ConventionEntitySchema",
    "SqlRecordStore",
    "SqlEntitySchema",
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    # Enums
    "DependencyKind",
    "RunState",
    # Exceptions
    "RowSeedError",
    "ConfigurationError",
    "DuplicateAliasError",
    "UnresolvedAliasError",
    "ParentFieldInferenceError",
    "PlaceholderError",
    "AncestorPlaceholderError",
    "InvalidCountError",
    "StructuralError",
    "CycleError",
    "ExecutionError",
    "RecordStoreError",
    "RecordCreationError",
    "ReferenceResolutionError",
    "UsageError",
    "RunNotCompletedError",
    "AliasNotFoundError",
    "AdapterError",
    "ConnectionError",
    "IdentifierError",
]
