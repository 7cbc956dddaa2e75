"""
sociogram/analytics/reciprocity.py

Mutual-nomination detection.

An edge is reciprocal when a *distinct* edge of the same type runs in the
opposite direction.  Lookups go through ReciprocityIndex, a Counter keyed by
(source, target, type), so a whole edge set is checked in O(E) instead of
the pairwise O(E²) scan.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from sociogram.analytics.integrity import EdgeKey, edge_key
from sociogram.models.schemas.graph import Edge, EdgeType, NodeId


class ReciprocityIndex:
    """Occurrence counts of every (source, target, type) triple in an edge set."""

    def __init__(self, edges: Iterable[Edge]) -> None:
        self._counts: Counter[EdgeKey] = Counter(edge_key(edge) for edge in edges)

    def is_reciprocal(self, edge: Edge) -> bool:
        reverse = (edge.target, edge.source, edge.type)
        # A self-loop is its own reverse; it needs a second copy to count.
        needed = 2 if edge.source == edge.target else 1
        return self._counts[reverse] >= needed


def is_reciprocal(edge: Edge, all_edges: Iterable[Edge]) -> bool:
    """True iff *all_edges* holds a distinct same-type edge from edge.target to edge.source."""
    return ReciprocityIndex(all_edges).is_reciprocal(edge)


def reciprocity_ratio(edges: Sequence[Edge]) -> float:
    """Fraction of *edges* that are reciprocated within the same set.

    Callers pass the edges of a single type.  Returns 0.0 for an empty set;
    the value is not rounded.
    """
    if not edges:
        return 0.0
    index = ReciprocityIndex(edges)
    reciprocated = sum(1 for edge in edges if index.is_reciprocal(edge))
    return reciprocated / len(edges)


def mutual_pairs(edges: Iterable[Edge], edge_type: EdgeType) -> set[frozenset[NodeId]]:
    """Unordered participant pairs that nominate each other with *edge_type*."""
    typed = [edge for edge in edges if edge.type is edge_type and edge.source != edge.target]
    index = ReciprocityIndex(typed)
    return {
        frozenset((edge.source, edge.target))
        for edge in typed
        if index.is_reciprocal(edge)
    }
