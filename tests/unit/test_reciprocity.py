"""
tests/unit/test_reciprocity.py

Unit tests for sociogram.analytics.reciprocity.

Coverage
--------
  is_reciprocal: reverse edge of the same type required; a reverse edge of
                 the other type does not count; an edge is not its own
                 reciprocal; a self-loop needs a second copy
  reciprocity_ratio: 0 for an empty set; 1 when all mutual; partial sets;
                     unrounded value
  ReciprocityIndex: matches the pairwise definition
  mutual_pairs: unordered pairs per type; self-loops excluded
"""
from __future__ import annotations

from sociogram.analytics.reciprocity import (
    ReciprocityIndex,
    is_reciprocal,
    mutual_pairs,
    reciprocity_ratio,
)
from sociogram.models.schemas.graph import Edge, EdgeType


def _edge(source: int, target: int, edge_type: EdgeType = EdgeType.CHOICE) -> Edge:
    return Edge(source=source, target=target, type=edge_type)


class TestIsReciprocal:
    def test_reverse_edge_of_same_type(self) -> None:
        a, b = _edge(1, 2), _edge(2, 1)
        assert is_reciprocal(a, [a, b]) is True
        assert is_reciprocal(b, [a, b]) is True

    def test_no_reverse_edge(self) -> None:
        a = _edge(1, 2)
        assert is_reciprocal(a, [a, _edge(2, 3)]) is False

    def test_reverse_edge_of_other_type_does_not_count(self) -> None:
        a = _edge(1, 2, EdgeType.CHOICE)
        b = _edge(2, 1, EdgeType.REJECTION)
        assert is_reciprocal(a, [a, b]) is False

    def test_edge_alone_is_not_reciprocal(self) -> None:
        a = _edge(1, 2)
        assert is_reciprocal(a, [a]) is False

    def test_single_self_loop_is_not_reciprocal(self) -> None:
        loop = _edge(1, 1)
        assert is_reciprocal(loop, [loop]) is False

    def test_duplicated_self_loop_is_reciprocal(self) -> None:
        loop = _edge(1, 1)
        assert is_reciprocal(loop, [loop, _edge(1, 1)]) is True

    def test_edge_need_not_belong_to_the_set(self) -> None:
        assert is_reciprocal(_edge(1, 2), [_edge(2, 1)]) is True


class TestReciprocityRatio:
    def test_empty_set_is_zero(self) -> None:
        assert reciprocity_ratio([]) == 0.0

    def test_all_mutual(self) -> None:
        assert reciprocity_ratio([_edge(1, 2), _edge(2, 1)]) == 1.0

    def test_partial(self) -> None:
        edges = [_edge(1, 2), _edge(2, 1), _edge(1, 3), _edge(3, 4)]
        assert reciprocity_ratio(edges) == 0.5

    def test_not_rounded(self) -> None:
        edges = [_edge(1, 2), _edge(2, 1), _edge(1, 3)]
        assert reciprocity_ratio(edges) == 2 / 3

    def test_ratio_within_unit_interval(self) -> None:
        edges = [_edge(s, t) for s in range(1, 5) for t in range(1, 5) if s != t]
        assert 0.0 <= reciprocity_ratio(edges) <= 1.0


class TestReciprocityIndex:
    def test_matches_pairwise_scan(self) -> None:
        edges = [
            _edge(1, 2),
            _edge(2, 1),
            _edge(2, 3),
            _edge(3, 2, EdgeType.REJECTION),
            _edge(4, 1, EdgeType.REJECTION),
            _edge(1, 4, EdgeType.REJECTION),
        ]
        index = ReciprocityIndex(edges)
        for edge in edges:
            pairwise = any(
                other is not edge
                and other.source == edge.target
                and other.target == edge.source
                and other.type is edge.type
                for other in edges
            )
            assert index.is_reciprocal(edge) is pairwise


class TestMutualPairs:
    def test_pairs_are_unordered_and_typed(self) -> None:
        edges = [
            _edge(1, 2),
            _edge(2, 1),
            _edge(3, 4, EdgeType.REJECTION),
            _edge(4, 3, EdgeType.REJECTION),
            _edge(1, 3),
        ]
        assert mutual_pairs(edges, EdgeType.CHOICE) == {frozenset({1, 2})}
        assert mutual_pairs(edges, EdgeType.REJECTION) == {frozenset({3, 4})}

    def test_self_loops_excluded(self) -> None:
        assert mutual_pairs([_edge(1, 1), _edge(1, 1)], EdgeType.CHOICE) == set()
