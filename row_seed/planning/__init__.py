"""Planning layer - dependency graph construction and creation ordering."""

from __future__ import annotations

from row_seed.planning.graph import GraphBuilder
from row_seed.planning.node import DependencyGraph, InstanceNode, Reference
from row_seed.planning.scheduler import schedule

__all__ = [
    "GraphBuilder",
    "DependencyGraph",
    "InstanceNode",
    "Reference",
    "schedule",
]
