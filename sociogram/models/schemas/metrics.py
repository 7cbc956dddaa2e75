from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class NodeStatus(str, Enum):
    """The five mutually exclusive status buckets of a participant."""

    LEADER   = "leader"
    POPULAR  = "popular"
    NORMAL   = "normal"
    ISOLATED = "isolated"
    REJECTED = "rejected"


class NodeMetrics(BaseModel):
    """Nomination counts and derived indices for one participant."""
    model_config = ConfigDict(frozen=True)

    choices_received: NonNegativeInt
    choices_given: NonNegativeInt
    rejections_received: NonNegativeInt
    rejections_given: NonNegativeInt
    popularity_index: float = Field(..., ge=0.0)
    antipathy_index: float = Field(..., ge=0.0)
    status: NodeStatus


class ClusterInfo(BaseModel):
    """A group of participants held together by mutual choices."""
    model_config = ConfigDict(frozen=True)

    id: int
    members: tuple[int | str, ...]
    internal_cohesion: float = Field(..., ge=0.0, le=1.0)


class GlobalMetrics(BaseModel):
    """Group-level metrics for one graph snapshot."""
    model_config = ConfigDict(frozen=True)

    # Cohesion
    cohesion_index: float = Field(..., description="Signed: positive density minus half the negative density")
    positive_density: float = Field(..., ge=0.0)
    negative_density: float = Field(..., ge=0.0)

    # Reciprocity
    choice_reciprocity: float = Field(..., ge=0.0, le=1.0)
    rejection_reciprocity: float = Field(..., ge=0.0, le=1.0)

    # Distribution
    total_leaders: NonNegativeInt
    total_popular: NonNegativeInt
    total_normal: NonNegativeInt
    total_isolated: NonNegativeInt
    total_rejected: NonNegativeInt

    clusters: tuple[ClusterInfo, ...] | None = None

    @classmethod
    def zero(cls) -> GlobalMetrics:
        return cls(
            cohesion_index=0.0,
            positive_density=0.0,
            negative_density=0.0,
            choice_reciprocity=0.0,
            rejection_reciprocity=0.0,
            total_leaders=0,
            total_popular=0,
            total_normal=0,
            total_isolated=0,
            total_rejected=0,
        )

    @property
    def status_counts(self) -> dict[NodeStatus, int]:
        return {
            NodeStatus.LEADER: self.total_leaders,
            NodeStatus.POPULAR: self.total_popular,
            NodeStatus.NORMAL: self.total_normal,
            NodeStatus.ISOLATED: self.total_isolated,
            NodeStatus.REJECTED: self.total_rejected,
        }
