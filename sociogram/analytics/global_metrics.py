"""
sociogram/analytics/global_metrics.py

Group-level sociometric metrics.

    positive density      choice edges    / n(n-1)
    negative density      rejection edges / n(n-1)
    cohesion index        positive density - 0.5 * negative density
    choice reciprocity    share of choice edges that are mutual
    rejection reciprocity share of rejection edges that are mutual
    status distribution   participants per status bucket

The cohesion index is a signed heuristic, not a bounded index: it goes
negative when rejections dominate.  Every ratio is 0 when its denominator
is 0, and an empty group yields GlobalMetrics.zero().
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import structlog

from sociogram.analytics.clusters import detect_clusters
from sociogram.analytics.integrity import DuplicatePolicy, usable_edges
from sociogram.analytics.node_metrics import (
    STATUS_RULES,
    StatusRule,
    compute_node_metrics,
    round_ratio,
    safe_ratio,
)
from sociogram.analytics.reciprocity import reciprocity_ratio
from sociogram.models.schemas.graph import Edge, EdgeType, RawNode
from sociogram.models.schemas.metrics import GlobalMetrics, NodeMetrics, NodeStatus

logger = structlog.get_logger(__name__)

COHESION_REJECTION_WEIGHT = 0.5


def status_distribution(
    nodes: Sequence[RawNode],
    edges: Sequence[Edge],
    rules: Iterable[StatusRule] = STATUS_RULES,
) -> Counter[NodeStatus]:
    """Tally nodes per status, using attached metrics where a node has them."""
    rules = tuple(rules)
    n = len(nodes)
    tally: Counter[NodeStatus] = Counter()
    for node in nodes:
        metrics: NodeMetrics | None = getattr(node, "metrics", None)
        if metrics is None:
            metrics = compute_node_metrics(node.id, edges, n, rules)
        tally[metrics.status] += 1
    return tally


def aggregate(
    nodes: Sequence[RawNode],
    edges: Iterable[Edge],
    *,
    include_clusters: bool = False,
    rules: Iterable[StatusRule] = STATUS_RULES,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE,
) -> GlobalMetrics:
    """Compute the GlobalMetrics of a node/edge set.

    Args:
        nodes:            Raw or enriched nodes; attached metrics are trusted.
        edges:            All edges; dangling edges and self-loops are ignored.
        include_clusters: Attach mutual-choice cluster summaries.
        rules:            Status rules for nodes without attached metrics.
        duplicate_policy: How repeated (source, target, type) triples count.

    Returns:
        GlobalMetrics with ratios rounded to two decimals and status
        counts summing to len(nodes).
    """
    n = len(nodes)
    if n == 0:
        return GlobalMetrics.zero()

    node_ids = {node.id for node in nodes}
    edges = usable_edges(node_ids, edges, duplicate_policy)

    choices = [edge for edge in edges if edge.type is EdgeType.CHOICE]
    rejections = [edge for edge in edges if edge.type is EdgeType.REJECTION]

    max_directed_edges = n * (n - 1)
    positive_density = safe_ratio(len(choices), max_directed_edges)
    negative_density = safe_ratio(len(rejections), max_directed_edges)
    cohesion = positive_density - COHESION_REJECTION_WEIGHT * negative_density

    tally = status_distribution(nodes, edges, rules)

    metrics = GlobalMetrics(
        cohesion_index=round_ratio(cohesion),
        positive_density=round_ratio(positive_density),
        negative_density=round_ratio(negative_density),
        choice_reciprocity=round_ratio(reciprocity_ratio(choices)),
        rejection_reciprocity=round_ratio(reciprocity_ratio(rejections)),
        total_leaders=tally[NodeStatus.LEADER],
        total_popular=tally[NodeStatus.POPULAR],
        total_normal=tally[NodeStatus.NORMAL],
        total_isolated=tally[NodeStatus.ISOLATED],
        total_rejected=tally[NodeStatus.REJECTED],
        clusters=detect_clusters(nodes, edges) if include_clusters else None,
    )

    logger.debug(
        "global_metrics_aggregated",
        nodes=n,
        choice_edges=len(choices),
        rejection_edges=len(rejections),
        cohesion_index=metrics.cohesion_index,
    )
    return metrics
