from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Polarity(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


class StatisticsNode(BaseModel):
    """A participant as reported by the group statistics service."""
    participant_id: int
    enrollment: str | None = None
    name: str
    gender: str | None = None
    completed: bool = False


class StatisticsConnection(BaseModel):
    """An aggregated nomination between two participants."""
    origin_id: int
    destination_id: int
    weight: float = 1.0
    polarity: Polarity | None = Field(default=None, description="Missing polarity is treated as positive")
    question_id: int | None = None
    nomination_order: int | None = None


class GroupStatistics(BaseModel):
    """Per-group statistics payload, the upstream source of a sociogram."""
    group_id: int
    group_key: str | None = None
    survey_id: int | None = None
    survey_title: str | None = None
    total_participants: int = 0
    completed_responses: int = 0
    nodes: list[StatisticsNode] = Field(default_factory=list)
    connections: list[StatisticsConnection] = Field(default_factory=list)
