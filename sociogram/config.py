from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from sociogram.analytics.integrity import DuplicatePolicy
from sociogram.analytics.node_metrics import StatusThresholds
from sociogram.analytics.normalizer import MergePolicy

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──────────────────────────────────────────────
    app_name: str = "Sociogram Analytics"
    app_version: str = "0.1.0"
    debug: bool = False
    api_key: str = "changeme"

    # ── Status classification ────────────────────────────
    leader_popularity_threshold: float = 0.5
    popular_threshold: float = 0.3
    rejected_antipathy_threshold: float = 0.3

    def status_thresholds(self) -> StatusThresholds:
        return StatusThresholds(
            leader_popularity=self.leader_popularity_threshold,
            popular=self.popular_threshold,
            rejected_antipathy=self.rejected_antipathy_threshold,
        )

    # ── Graph processing ─────────────────────────────────
    merge_policy: MergePolicy = MergePolicy.PRESERVE_EXISTING
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE
    include_clusters: bool = False

    # ── Server ───────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
