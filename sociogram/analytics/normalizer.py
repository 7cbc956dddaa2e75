"""
sociogram/analytics/normalizer.py

Entry point of the analytics engine.

normalize() turns a SociogramGraph into an EnrichedGraph in a single pass:

  1. Nodes:       every node gets NodeMetrics.  Under PRESERVE_EXISTING a node
                  that already carries metrics keeps them untouched; under
                  RECOMPUTE all metrics are rebuilt from the edges.
  2. Edge ids:    an edge without an id gets "{source}-{target}-{type}".
                  When that id is already taken an ordinal suffix is added
                  ("-2", "-3", ...) in edge order, so ids stay unique and
                  deterministic.
  3. Reciprocity: every edge gets a reciprocal flag.  Dangling edges and
                  self-loops are kept in the output but flagged False and
                  never counted.

The input graph is never mutated; a new EnrichedGraph is returned.
analyze() chains normalize() and aggregate() for callers that want both.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

import structlog

from sociogram.analytics.fingerprint import compute_fingerprint
from sociogram.analytics.global_metrics import aggregate
from sociogram.analytics.integrity import DuplicatePolicy, is_well_formed, usable_edges
from sociogram.analytics.node_metrics import STATUS_RULES, StatusRule, compute_node_metrics
from sociogram.analytics.reciprocity import ReciprocityIndex
from sociogram.models.schemas.analysis import SociogramAnalysis
from sociogram.models.schemas.graph import (
    Edge,
    EnrichedEdge,
    EnrichedGraph,
    EnrichedNode,
    SociogramGraph,
)

logger = structlog.get_logger(__name__)


class MergePolicy(str, Enum):
    """What normalize() does with metrics a node already carries."""

    PRESERVE_EXISTING = "preserve_existing"
    RECOMPUTE         = "recompute"


def default_edge_id(edge: Edge) -> str:
    return f"{edge.source}-{edge.target}-{edge.type.value}"


def assign_edge_ids(edges: Sequence[Edge]) -> list[str]:
    """Return one id per edge, keeping supplied ids and generating the rest."""
    taken = {edge.id for edge in edges if edge.id is not None}
    ids: list[str] = []
    for edge in edges:
        if edge.id is not None:
            ids.append(edge.id)
            continue
        base = default_edge_id(edge)
        candidate, ordinal = base, 1
        while candidate in taken:
            ordinal += 1
            candidate = f"{base}-{ordinal}"
        taken.add(candidate)
        ids.append(candidate)
    return ids


def normalize(
    graph: SociogramGraph,
    merge_policy: MergePolicy = MergePolicy.PRESERVE_EXISTING,
    *,
    rules: Iterable[StatusRule] = STATUS_RULES,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE,
) -> EnrichedGraph:
    """Attach node metrics and edge reciprocity to *graph*.

    Args:
        graph:            Raw or already-enriched graph.
        merge_policy:     PRESERVE_EXISTING keeps metrics already on a node;
                          RECOMPUTE rebuilds them.
        rules:            Ordered status rules.
        duplicate_policy: How repeated (source, target, type) triples count.

    Returns:
        A new EnrichedGraph with the same metadata.
    """
    rules = tuple(rules)
    node_ids = graph.node_ids
    total = len(graph.nodes)
    counted = usable_edges(node_ids, graph.edges, duplicate_policy)

    nodes: list[EnrichedNode] = []
    for node in graph.nodes:
        metrics = getattr(node, "metrics", None)
        if metrics is None or merge_policy is MergePolicy.RECOMPUTE:
            metrics = compute_node_metrics(node.id, counted, total, rules)
        nodes.append(
            EnrichedNode(id=node.id, label=node.label, attributes=node.attributes, metrics=metrics)
        )

    index = ReciprocityIndex(edge for edge in graph.edges if is_well_formed(edge, node_ids))
    edges = [
        EnrichedEdge(
            id=edge_id,
            source=edge.source,
            target=edge.target,
            type=edge.type,
            question_id=edge.question_id,
            reciprocal=is_well_formed(edge, node_ids) and index.is_reciprocal(edge),
            weight=edge.weight,
        )
        for edge, edge_id in zip(graph.edges, assign_edge_ids(graph.edges))
    ]

    logger.debug(
        "graph_normalized",
        nodes=len(nodes),
        edges=len(edges),
        reciprocal_edges=sum(1 for edge in edges if edge.reciprocal),
        merge_policy=merge_policy.value,
    )
    return EnrichedGraph(nodes=tuple(nodes), edges=tuple(edges), metadata=graph.metadata)


def analyze(
    graph: SociogramGraph,
    merge_policy: MergePolicy = MergePolicy.PRESERVE_EXISTING,
    *,
    include_clusters: bool = False,
    rules: Iterable[StatusRule] = STATUS_RULES,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE,
) -> SociogramAnalysis:
    """Normalize *graph* and aggregate its group metrics in one call."""
    rules = tuple(rules)
    enriched = normalize(graph, merge_policy, rules=rules, duplicate_policy=duplicate_policy)
    metrics = aggregate(
        enriched.nodes,
        enriched.edges,
        include_clusters=include_clusters,
        rules=rules,
        duplicate_policy=duplicate_policy,
    )
    return SociogramAnalysis(
        graph=enriched,
        metrics=metrics,
        fingerprint=compute_fingerprint(graph),
    )
