"""
sociogram/analytics/node_metrics.py

Per-participant nomination metrics.

For one node the calculator counts choices and rejections received and
given, normalises the received counts by the number of possible nominators
(n - 1) and assigns exactly one status.

Status rules
------------
Rules are evaluated in order and the first one whose predicate holds wins:

    leader    popularity > 0.5 and no rejections received
    popular   popularity > 0.3
    isolated  no choices and no rejections received
    rejected  antipathy > 0.3
    normal    fallback
"""
from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sociogram.models.schemas.graph import Edge, EdgeType, NodeId
from sociogram.models.schemas.metrics import NodeMetrics, NodeStatus


def round_ratio(value: float, precision: int = 2) -> float:
    """Round half up to *precision* decimals: 0.125 -> 0.13, -0.125 -> -0.12."""
    factor = 10 ** precision
    return math.floor(value * factor + 0.5) / factor


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


# ---------------------------------------------------------------------------
# Status rule table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NominationProfile:
    """The inputs the status rules look at."""

    choices_received: int
    rejections_received: int
    popularity: float
    antipathy: float


@dataclass(frozen=True)
class StatusThresholds:
    leader_popularity: float = 0.5
    popular: float = 0.3
    rejected_antipathy: float = 0.3


@dataclass(frozen=True)
class StatusRule:
    status: NodeStatus
    predicate: Callable[[NominationProfile], bool]


def build_status_rules(thresholds: StatusThresholds = StatusThresholds()) -> tuple[StatusRule, ...]:
    """Build the ordered rule table for the given thresholds."""
    return (
        StatusRule(
            NodeStatus.LEADER,
            lambda p: p.popularity > thresholds.leader_popularity and p.rejections_received == 0,
        ),
        StatusRule(
            NodeStatus.POPULAR,
            lambda p: p.popularity > thresholds.popular,
        ),
        StatusRule(
            NodeStatus.ISOLATED,
            lambda p: p.choices_received == 0 and p.rejections_received == 0,
        ),
        StatusRule(
            NodeStatus.REJECTED,
            lambda p: p.antipathy > thresholds.rejected_antipathy,
        ),
    )


STATUS_RULES: tuple[StatusRule, ...] = build_status_rules()


def classify_status(
    profile: NominationProfile,
    rules: Iterable[StatusRule] = STATUS_RULES,
) -> NodeStatus:
    for rule in rules:
        if rule.predicate(profile):
            return rule.status
    return NodeStatus.NORMAL


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------

def compute_node_metrics(
    node_id: NodeId,
    edges: Iterable[Edge],
    total_node_count: int,
    rules: Iterable[StatusRule] = STATUS_RULES,
) -> NodeMetrics:
    """Compute the nomination metrics of *node_id*.

    Args:
        node_id:          The participant being measured.
        edges:            Edges to count; callers pass the already-filtered set.
        total_node_count: Number of participants in the group.
        rules:            Ordered status rules (see module docstring).

    Returns:
        NodeMetrics with indices rounded to two decimals.  Both indices
        are 0 when the group has one participant or none.
    """
    choices_received = choices_given = 0
    rejections_received = rejections_given = 0

    for edge in edges:
        if edge.type is EdgeType.CHOICE:
            if edge.target == node_id:
                choices_received += 1
            if edge.source == node_id:
                choices_given += 1
        elif edge.type is EdgeType.REJECTION:
            if edge.target == node_id:
                rejections_received += 1
            if edge.source == node_id:
                rejections_given += 1

    possible_nominators = max(total_node_count - 1, 0)
    popularity = safe_ratio(choices_received, possible_nominators)
    antipathy = safe_ratio(rejections_received, possible_nominators)

    status = classify_status(
        NominationProfile(
            choices_received=choices_received,
            rejections_received=rejections_received,
            popularity=popularity,
            antipathy=antipathy,
        ),
        rules,
    )

    return NodeMetrics(
        choices_received=choices_received,
        choices_given=choices_given,
        rejections_received=rejections_received,
        rejections_given=rejections_given,
        popularity_index=round_ratio(popularity),
        antipathy_index=round_ratio(antipathy),
        status=status,
    )
