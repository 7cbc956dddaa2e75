from pydantic import BaseModel, ConfigDict, Field

from sociogram.models.schemas.graph import EnrichedGraph
from sociogram.models.schemas.metrics import GlobalMetrics


class SociogramAnalysis(BaseModel):
    """Enriched graph plus its group metrics, as handed to dashboards."""
    model_config = ConfigDict(frozen=True)

    graph: EnrichedGraph
    metrics: GlobalMetrics
    fingerprint: str = Field(..., description="SHA-256 of the input graph; stable for identical input")
