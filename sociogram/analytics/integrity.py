"""
sociogram/analytics/integrity.py

Edge filtering applied before any metric is computed.

Malformed edges never raise; they contribute nothing:
  - dangling edges: source or target is not a node of the graph
  - self-loops:     source == target

Repeated (source, target, type) triples are legitimate when the same pair
nominates each other on several survey questions.  DuplicatePolicy decides
whether only the first occurrence counts (COLLAPSE, the default) or every
occurrence does (COUNT_EACH).  Under COUNT_EACH indices and densities may
exceed 1.
"""
from __future__ import annotations

from collections.abc import Collection, Iterable
from enum import Enum

import structlog

from sociogram.models.schemas.graph import Edge, EdgeType, NodeId

logger = structlog.get_logger(__name__)

EdgeKey = tuple[NodeId, NodeId, EdgeType]


class DuplicatePolicy(str, Enum):
    COUNT_EACH = "count_each"
    COLLAPSE   = "collapse"


def edge_key(edge: Edge) -> EdgeKey:
    """Return the (source, target, type) triple identifying a nomination."""
    return (edge.source, edge.target, edge.type)


def is_self_loop(edge: Edge) -> bool:
    return edge.source == edge.target


def is_well_formed(edge: Edge, node_ids: Collection[NodeId]) -> bool:
    """True when both endpoints exist and the edge is not a self-loop."""
    return (
        edge.source in node_ids
        and edge.target in node_ids
        and not is_self_loop(edge)
    )


def usable_edges(
    node_ids: Collection[NodeId],
    edges: Iterable[Edge],
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE,
) -> list[Edge]:
    """Return the edges that take part in metric computation.

    Args:
        node_ids:         Ids of every node in the graph.
        edges:            All edges as supplied.
        duplicate_policy: How repeated (source, target, type) triples count.

    Returns:
        Edges in their original order, minus dangling edges, self-loops
        and (under COLLAPSE) repeated triples.
    """
    kept: list[Edge] = []
    seen: set[EdgeKey] = set()
    dangling = self_loops = collapsed = 0

    for edge in edges:
        if edge.source not in node_ids or edge.target not in node_ids:
            dangling += 1
            continue
        if is_self_loop(edge):
            self_loops += 1
            continue

        key = edge_key(edge)
        if duplicate_policy is DuplicatePolicy.COLLAPSE and key in seen:
            collapsed += 1
            continue
        seen.add(key)
        kept.append(edge)

    if dangling or self_loops:
        logger.warning(
            "malformed_edges_excluded",
            dangling=dangling,
            self_loops=self_loops,
        )
    if collapsed:
        logger.info("duplicate_edges_collapsed", collapsed=collapsed)

    return kept
