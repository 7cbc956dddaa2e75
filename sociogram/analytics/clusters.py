"""
sociogram/analytics/clusters.py

Cohesive subgroup detection.

Participants joined by mutual choices form an undirected graph; each
connected component with at least two members is a cluster.  Internal
cohesion is the share of possible directed choices inside the cluster that
were actually made.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx
import structlog

from sociogram.analytics.node_metrics import round_ratio, safe_ratio
from sociogram.analytics.reciprocity import mutual_pairs
from sociogram.models.schemas.graph import Edge, EdgeType, NodeId, RawNode
from sociogram.models.schemas.metrics import ClusterInfo

logger = structlog.get_logger(__name__)


def node_sort_key(node_id: NodeId) -> tuple[bool, NodeId]:
    """Order ids deterministically even when ints and strings are mixed."""
    return (isinstance(node_id, str), node_id)


def build_mutual_choice_graph(nodes: Iterable[RawNode], edges: Iterable[Edge]) -> nx.Graph:
    G = nx.Graph()
    G.add_nodes_from(node.id for node in nodes)
    for pair in mutual_pairs(edges, EdgeType.CHOICE):
        a, b = tuple(pair)
        if a in G and b in G:
            G.add_edge(a, b)
    return G


def detect_clusters(nodes: Sequence[RawNode], edges: Sequence[Edge]) -> tuple[ClusterInfo, ...]:
    """Return mutual-choice clusters, largest first.

    Ties on size are broken by the smallest member id; ids are assigned
    1..N in that order.
    """
    G = build_mutual_choice_graph(nodes, edges)

    components = [
        sorted(component, key=node_sort_key)
        for component in nx.connected_components(G)
        if len(component) >= 2
    ]
    components.sort(key=lambda members: (-len(members), node_sort_key(members[0])))

    clusters: list[ClusterInfo] = []
    for cluster_id, members in enumerate(components, start=1):
        member_set = set(members)
        internal_choices = sum(
            1
            for edge in edges
            if edge.type is EdgeType.CHOICE
            and edge.source in member_set
            and edge.target in member_set
            and edge.source != edge.target
        )
        k = len(members)
        clusters.append(
            ClusterInfo(
                id=cluster_id,
                members=tuple(members),
                internal_cohesion=min(round_ratio(safe_ratio(internal_choices, k * (k - 1))), 1.0),
            )
        )

    logger.debug(
        "clusters_detected",
        clusters=len(clusters),
        clustered_nodes=sum(len(c.members) for c in clusters),
    )
    return tuple(clusters)
