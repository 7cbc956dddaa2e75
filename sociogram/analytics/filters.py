from __future__ import annotations

from sociogram.models.schemas.graph import Edge, EdgeType, RawNode, SociogramGraph


def filter_graph(
    graph: SociogramGraph,
    *,
    question_id: int | None = None,
    edge_type: EdgeType | None = None,
) -> SociogramGraph:
    """Restrict *graph* to the nominations of one question and/or one type.

    Every node is kept so the group size, and therefore every index, stays
    comparable with the unfiltered graph.  Node metrics are stripped because
    they described the full edge set; edge reciprocity flags likewise.
    """
    edges = tuple(
        Edge.model_validate(edge.model_dump(exclude={"reciprocal"}))
        for edge in graph.edges
        if (question_id is None or edge.question_id == question_id)
        and (edge_type is None or edge.type is edge_type)
    )
    nodes = tuple(
        RawNode(id=node.id, label=node.label, attributes=node.attributes)
        for node in graph.nodes
    )
    return SociogramGraph(nodes=nodes, edges=edges, metadata=graph.metadata)
