"""Topological scheduler.

Orders instance nodes so that every node comes after all of its
dependencies. Among the nodes that are ready at any point, the one with the
lowest node id goes first, so identical input always yields the identical
creation order (declaration order wins ties).
"""

from __future__ import annotations

import heapq
import logging

from row_seed.core.exceptions import CycleError
from row_seed.planning.node import DependencyGraph, InstanceNode

logger = logging.getLogger(__name__)


def schedule(graph: DependencyGraph) -> list[InstanceNode]:
    """Return the creation order of *graph*.

    Raises:
        CycleError: If no valid order exists. The error lists the nodes of
            one cycle, starting from the lowest node id involved.
    """
    remaining = {node.node_id: len(node.dependencies) for node in graph}
    dependents: dict[int, list[int]] = {node_id: [] for node_id in remaining}
    for dependent_id, dependency_id, _kind in graph.edges():
        dependents[dependency_id].append(dependent_id)

    ready = [node_id for node_id, count in remaining.items() if count == 0]
    heapq.heapify(ready)

    order: list[InstanceNode] = []
    while ready:
        node_id = heapq.heappop(ready)
        order.append(graph.node(node_id))
        del remaining[node_id]
        for dependent_id in dependents[node_id]:
            remaining[dependent_id] -= 1
            if remaining[dependent_id] == 0:
                heapq.heappush(ready, dependent_id)

    if remaining:
        cycle = _find_cycle(graph, set(remaining))
        logger.debug("Unschedulable nodes: %s", sorted(remaining))
        raise CycleError([graph.node(node_id).label for node_id in cycle])

    logger.debug("Scheduled %d nodes", len(order))
    return order


def _find_cycle(graph: DependencyGraph, unresolved: set[int]) -> list[int]:
    """Walk unresolved dependencies from the lowest node id until one repeats.

    Every unresolved node has at least one unresolved dependency, so the walk
    always closes a cycle.
    """
    path: list[int] = []
    position: dict[int, int] = {}
    current = min(unresolved)
    while current not in position:
        position[current] = len(path)
        path.append(current)
        current = min(d for d in graph.node(current).dependencies if d in unresolved)

    cycle = path[position[current] :]
    # Rotate so the report starts at the lowest id on the cycle
    start = cycle.index(min(cycle))
    return cycle[start:] + cycle[:start]
