import hashlib
import json

from sociogram.models.schemas.graph import SociogramGraph


def compute_fingerprint(graph: SociogramGraph) -> str:
    """Return the SHA-256 hex digest of the graph's canonical JSON form.

    Identical node/edge sets (and metadata) hash identically, so the digest
    can key a cache of analysis results; any structural change alters it.
    """
    canonical = json.dumps(
        graph.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
