"""
sociogram/api/routes/sociogram.py

Sociogram analytics endpoints.  Every handler is a thin wrapper around the
pure functions in sociogram.analytics; nothing is stored between calls.

POST /sociogram/normalize
    Body: SociogramGraph.  Returns the EnrichedGraph (node metrics and
    edge reciprocity flags attached).

POST /sociogram/metrics
    Body: SociogramGraph.  Returns the group's GlobalMetrics.

POST /sociogram/analyze
    Body: SociogramGraph.  Optionally restricted to one survey question
    and/or one nomination type before analysis.  Returns the enriched
    graph, its metrics, and the input fingerprint.

POST /sociogram/statistics
    Body: GroupStatistics as reported by the statistics service.  Converted
    to a graph and analysed like /analyze.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query

from sociogram.analytics.filters import filter_graph
from sociogram.analytics.global_metrics import aggregate
from sociogram.analytics.node_metrics import build_status_rules
from sociogram.analytics.normalizer import MergePolicy, analyze, normalize
from sociogram.api.routes import require_api_key
from sociogram.config import settings
from sociogram.ingestion.statistics import graph_from_group_statistics
from sociogram.models.schemas.analysis import SociogramAnalysis
from sociogram.models.schemas.graph import EdgeType, EnrichedGraph, SociogramGraph
from sociogram.models.schemas.metrics import GlobalMetrics
from sociogram.models.schemas.statistics import GroupStatistics

logger = structlog.get_logger(__name__)

router = APIRouter()


def _run_analysis(
    graph: SociogramGraph,
    merge_policy: MergePolicy,
    include_clusters: bool,
) -> SociogramAnalysis:
    analysis = analyze(
        graph,
        merge_policy,
        include_clusters=include_clusters,
        rules=build_status_rules(settings.status_thresholds()),
        duplicate_policy=settings.duplicate_policy,
    )
    logger.info(
        "sociogram_analyzed",
        fingerprint=analysis.fingerprint[:16],
        nodes=len(analysis.graph.nodes),
        edges=len(analysis.graph.edges),
        cohesion_index=analysis.metrics.cohesion_index,
    )
    return analysis


@router.post(
    "/normalize",
    response_model=EnrichedGraph,
    summary="Attach node metrics and edge reciprocity to a graph",
)
async def normalize_graph(
    graph: SociogramGraph,
    merge_policy: MergePolicy = Query(default=settings.merge_policy),
    _key: str = Depends(require_api_key),
) -> EnrichedGraph:
    enriched = normalize(
        graph,
        merge_policy,
        rules=build_status_rules(settings.status_thresholds()),
        duplicate_policy=settings.duplicate_policy,
    )
    logger.info("sociogram_normalized", nodes=len(enriched.nodes), edges=len(enriched.edges))
    return enriched


@router.post(
    "/metrics",
    response_model=GlobalMetrics,
    summary="Compute group-level metrics for a graph",
)
async def graph_metrics(
    graph: SociogramGraph,
    include_clusters: bool = Query(default=settings.include_clusters),
    _key: str = Depends(require_api_key),
) -> GlobalMetrics:
    metrics = aggregate(
        graph.nodes,
        graph.edges,
        include_clusters=include_clusters,
        rules=build_status_rules(settings.status_thresholds()),
        duplicate_policy=settings.duplicate_policy,
    )
    logger.info("sociogram_metrics_served", nodes=len(graph.nodes), cohesion_index=metrics.cohesion_index)
    return metrics


@router.post(
    "/analyze",
    response_model=SociogramAnalysis,
    summary="Normalize a graph and compute its metrics",
)
async def analyze_graph(
    graph: SociogramGraph,
    question_id: int | None = Query(default=None, description="Only nominations answering this question"),
    edge_type: EdgeType | None = Query(default=None, description="Only choices or only rejections"),
    include_clusters: bool = Query(default=settings.include_clusters),
    merge_policy: MergePolicy = Query(default=settings.merge_policy),
    _key: str = Depends(require_api_key),
) -> SociogramAnalysis:
    if question_id is not None or edge_type is not None:
        graph = filter_graph(graph, question_id=question_id, edge_type=edge_type)
    return _run_analysis(graph, merge_policy, include_clusters)


@router.post(
    "/statistics",
    response_model=SociogramAnalysis,
    summary="Analyse a group statistics payload",
)
async def analyze_group_statistics(
    payload: GroupStatistics,
    include_clusters: bool = Query(default=settings.include_clusters),
    _key: str = Depends(require_api_key),
) -> SociogramAnalysis:
    graph = graph_from_group_statistics(payload)
    return _run_analysis(graph, MergePolicy.RECOMPUTE, include_clusters)
