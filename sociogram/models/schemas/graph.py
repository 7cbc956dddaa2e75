from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from sociogram.models.schemas.metrics import NodeMetrics

NodeId = int | str


class EdgeType(str, Enum):
    """Polarity of a peer nomination."""

    CHOICE    = "choice"
    REJECTION = "rejection"


class RawNode(BaseModel):
    """A participant as supplied by the caller, before any metrics exist."""
    model_config = ConfigDict(frozen=True)

    id: NodeId
    label: str
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Optional demographic attributes (gender, enrollment number, ...)",
    )


class EnrichedNode(RawNode):
    """A participant carrying its computed nomination metrics."""

    metrics: NodeMetrics


def _node_stage(value: Any) -> str:
    if isinstance(value, dict):
        return "enriched" if value.get("metrics") is not None else "raw"
    return "enriched" if getattr(value, "metrics", None) is not None else "raw"


AnyNode = Annotated[
    Union[
        Annotated[RawNode, Tag("raw")],
        Annotated[EnrichedNode, Tag("enriched")],
    ],
    Discriminator(_node_stage),
]


class Edge(BaseModel):
    """A directed nomination from *source* to *target*."""
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    source: NodeId
    target: NodeId
    type: EdgeType
    question_id: int | None = Field(default=None, description="Survey question the nomination answers")
    reciprocal: bool | None = Field(default=None, description="Computed; ignored on input")
    weight: float | None = None


class EnrichedEdge(Edge):
    """An edge with a stable id and its reciprocity flag."""

    id: str
    reciprocal: bool


class GraphMetadata(BaseModel):
    """Descriptive metadata about the survey snapshot; opaque to analytics."""
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str | None = None
    title: str | None = None
    group: str | None = None
    survey_id: int | str | None = None
    date: str | None = None
    total_participants: int | None = None
    total_responses: int | None = None


class SociogramGraph(BaseModel):
    """Participants and their nominations for one group."""
    model_config = ConfigDict(frozen=True)

    nodes: tuple[AnyNode, ...] = ()
    edges: tuple[Edge, ...] = ()
    metadata: GraphMetadata | None = None

    @property
    def node_ids(self) -> frozenset[NodeId]:
        return frozenset(node.id for node in self.nodes)


class EnrichedGraph(SociogramGraph):
    """Output of normalize(): every node has metrics, every edge an id and reciprocity flag."""

    nodes: tuple[EnrichedNode, ...] = ()
    edges: tuple[EnrichedEdge, ...] = ()
