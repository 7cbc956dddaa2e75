"""
sociogram/ingestion/statistics.py

Adapter from the group statistics payload to the sociogram graph model.

The statistics service reports one record per participant and one
aggregated connection per nominating pair.  Mapping rules:

    participant_id      -> node id
    name                -> node label
    enrollment, gender  -> node attributes (only when present)
    POSITIVE polarity   -> choice edge
    NEGATIVE polarity   -> rejection edge
    missing polarity    -> choice edge
    weight              -> edge weight
    nomination_order    -> dropped
"""
from __future__ import annotations

import structlog

from sociogram.models.schemas.graph import (
    Edge,
    EdgeType,
    GraphMetadata,
    RawNode,
    SociogramGraph,
)
from sociogram.models.schemas.statistics import (
    GroupStatistics,
    Polarity,
    StatisticsConnection,
    StatisticsNode,
)

logger = structlog.get_logger(__name__)

_POLARITY_TO_TYPE: dict[Polarity, EdgeType] = {
    Polarity.POSITIVE: EdgeType.CHOICE,
    Polarity.NEGATIVE: EdgeType.REJECTION,
}


def _node_from_statistics(record: StatisticsNode) -> RawNode:
    attributes: dict[str, str] = {}
    if record.enrollment:
        attributes["enrollment"] = record.enrollment
    if record.gender:
        attributes["gender"] = record.gender
    return RawNode(id=record.participant_id, label=record.name, attributes=attributes)


def _edge_from_connection(connection: StatisticsConnection) -> Edge:
    edge_type = _POLARITY_TO_TYPE.get(connection.polarity, EdgeType.CHOICE)
    return Edge(
        source=connection.origin_id,
        target=connection.destination_id,
        type=edge_type,
        question_id=connection.question_id,
        weight=connection.weight,
    )


def graph_from_group_statistics(payload: GroupStatistics) -> SociogramGraph:
    """Build a raw SociogramGraph from one group's statistics."""
    graph = SociogramGraph(
        nodes=tuple(_node_from_statistics(node) for node in payload.nodes),
        edges=tuple(_edge_from_connection(conn) for conn in payload.connections),
        metadata=GraphMetadata(
            id=payload.group_id,
            title=payload.survey_title,
            group=payload.group_key,
            survey_id=payload.survey_id,
            total_participants=payload.total_participants,
            total_responses=payload.completed_responses,
        ),
    )
    logger.debug(
        "group_statistics_converted",
        group_id=payload.group_id,
        nodes=len(graph.nodes),
        edges=len(graph.edges),
    )
    return graph
