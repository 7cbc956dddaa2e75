"""
tests/unit/test_fingerprint.py

Unit tests for sociogram.analytics.fingerprint.compute_fingerprint().

Coverage
--------
  - 64-character SHA-256 hex digest
  - identical structures produce identical fingerprints
  - attribute key order does not matter
  - any node, edge or metadata change alters the fingerprint
"""
from __future__ import annotations

from sociogram.analytics.fingerprint import compute_fingerprint
from sociogram.models.schemas.graph import Edge, EdgeType, GraphMetadata, RawNode, SociogramGraph


def _graph(**overrides) -> SociogramGraph:
    fields = {
        "nodes": (
            RawNode(id=1, label="Ana", attributes={"gender": "F", "enrollment": "A01"}),
            RawNode(id=2, label="Luis"),
        ),
        "edges": (Edge(source=1, target=2, type=EdgeType.CHOICE, question_id=3),),
        "metadata": GraphMetadata(title="Term 1"),
    }
    fields.update(overrides)
    return SociogramGraph(**fields)


class TestComputeFingerprint:
    def test_returns_sha256_hex(self) -> None:
        fp = compute_fingerprint(_graph())
        assert isinstance(fp, str)
        assert len(fp) == 64
        int(fp, 16)

    def test_deterministic(self) -> None:
        assert compute_fingerprint(_graph()) == compute_fingerprint(_graph())

    def test_attribute_order_irrelevant(self) -> None:
        reordered = _graph(
            nodes=(
                RawNode(id=1, label="Ana", attributes={"enrollment": "A01", "gender": "F"}),
                RawNode(id=2, label="Luis"),
            )
        )
        assert compute_fingerprint(reordered) == compute_fingerprint(_graph())

    def test_edge_change_alters_fingerprint(self) -> None:
        changed = _graph(edges=(Edge(source=1, target=2, type=EdgeType.REJECTION, question_id=3),))
        assert compute_fingerprint(changed) != compute_fingerprint(_graph())

    def test_node_change_alters_fingerprint(self) -> None:
        changed = _graph(nodes=(RawNode(id=1, label="Ana"),))
        assert compute_fingerprint(changed) != compute_fingerprint(_graph())

    def test_metadata_change_alters_fingerprint(self) -> None:
        changed = _graph(metadata=GraphMetadata(title="Term 2"))
        assert compute_fingerprint(changed) != compute_fingerprint(_graph())
