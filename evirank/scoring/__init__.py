"""Evidence scoring: four sub-scores and their weighted confidence."""

from evirank.scoring.scorer import chunk_to_raw, chunks_to_evidence, score_evidence, score_many
from evirank.scoring.signals import (
    authority,
    clamp01,
    confidence,
    extract_terms,
    license_score,
    recency,
    similarity,
)

__all__ = [
    "authority",
    "chunk_to_raw",
    "chunks_to_evidence",
    "clamp01",
    "confidence",
    "extract_terms",
    "license_score",
    "recency",
    "score_evidence",
    "score_many",
    "similarity",
]
