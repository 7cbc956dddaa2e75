from sociogram.models.schemas.metrics import NodeStatus, NodeMetrics, ClusterInfo, GlobalMetrics
from sociogram.models.schemas.graph import (
    NodeId,
    EdgeType,
    RawNode,
    EnrichedNode,
    Edge,
    EnrichedEdge,
    GraphMetadata,
    SociogramGraph,
    EnrichedGraph,
)
from sociogram.models.schemas.analysis import SociogramAnalysis
from sociogram.models.schemas.statistics import (
    Polarity,
    StatisticsNode,
    StatisticsConnection,
    GroupStatistics,
)

__all__ = [
    "NodeStatus",
    "NodeMetrics",
    "ClusterInfo",
    "GlobalMetrics",
    "NodeId",
    "EdgeType",
    "RawNode",
    "EnrichedNode",
    "Edge",
    "EnrichedEdge",
    "GraphMetadata",
    "SociogramGraph",
    "EnrichedGraph",
    "SociogramAnalysis",
    "Polarity",
    "StatisticsNode",
    "StatisticsConnection",
    "GroupStatistics",
]
