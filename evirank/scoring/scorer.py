"""
Evidence Scorer
================

Turns raw passages (chunks, search snippets, transcripts) into scored
Evidence objects.

Data Flow:
    RawEvidence + (topic, query) → sub-scores → confidence → Evidence

The current year is the only outside input to scoring. It is resolved
once per call (or injected by the caller) and threaded through, so a
batch scored with the same year is reproducible.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Optional, Sequence

from evirank.config import ScoringConfig
from evirank.schemas.chunk import Chunk
from evirank.schemas.evidence import (
    Evidence,
    EvidenceMetadata,
    RawEvidence,
    RelevanceContext,
    SourceKind,
    SubScores,
)
from evirank.scoring.signals import authority, confidence, license_score, recency, similarity
from evirank.utils import compute_hash

logger = logging.getLogger("evirank.scoring.scorer")


def _resolve_year(current_year: Optional[int]) -> int:
    return current_year if current_year is not None else datetime.date.today().year


def score_evidence(
    raw: RawEvidence | dict[str, Any],
    topic: str,
    query: str,
    config: Optional[ScoringConfig] = None,
    current_year: Optional[int] = None,
) -> Evidence:
    """
    Build and score one Evidence item.

    Args:
        raw: Unscored fields (a RawEvidence or an equivalent dict).
        topic: Topic the evidence should support (weighted higher).
        query: Search query that produced it.
        config: Scoring weights; defaults to ScoringConfig().
        current_year: Year used for recency; defaults to today's year.

    Returns:
        Evidence with sub_scores, confidence and relevance_context set.
    """
    config = config or ScoringConfig()
    if not isinstance(raw, RawEvidence):
        raw = RawEvidence.model_validate(raw)

    evidence = Evidence(
        id=raw.id or f"ev_{compute_hash(raw.source_label + raw.content, length=12)}",
        content=raw.content,
        source_label=raw.source_label,
        source_kind=raw.source_kind,
        url=raw.url,
        title=raw.title,
        metadata=raw.metadata.model_copy(deep=True),
        relevance_context=RelevanceContext(topic=topic, query=query),
    )

    evidence.sub_scores = SubScores(
        authority=authority(evidence),
        similarity=similarity(evidence, topic, query),
        recency=recency(evidence, _resolve_year(current_year)),
        license=license_score(evidence),
    )
    evidence.confidence = confidence(evidence.sub_scores, config)
    return evidence


def score_many(
    raws: Sequence[RawEvidence | dict[str, Any]],
    topic: str,
    query: str,
    config: Optional[ScoringConfig] = None,
    current_year: Optional[int] = None,
) -> list[Evidence]:
    """Score a batch against one topic/query pair with a single resolved year."""
    year = _resolve_year(current_year)
    scored = [score_evidence(r, topic, query, config, year) for r in raws]
    logger.info(f"Scored {len(scored)} evidence items for topic '{topic}'")
    return scored


def chunk_to_raw(chunk: Chunk) -> RawEvidence:
    """Describe a document chunk as user-document evidence."""
    return RawEvidence(
        id=chunk.id,
        content=chunk.content,
        source_label=chunk.metadata.filename or chunk.metadata.source_id,
        source_kind=SourceKind.USER_DOCUMENT,
        metadata=EvidenceMetadata(
            filename=chunk.metadata.filename,
            chunk_index=chunk.metadata.chunk_index,
            unit_count=chunk.unit_count,
            word_count=len(chunk.content.split()),
        ),
    )


def chunks_to_evidence(
    chunks: Sequence[Chunk],
    topic: str,
    query: str,
    config: Optional[ScoringConfig] = None,
    current_year: Optional[int] = None,
) -> list[Evidence]:
    """
    Score document chunks as user-document evidence.

    Args:
        chunks: Chunks from the chunk builder.
        topic: Topic string.
        query: Query string.
        config: Scoring configuration.
        current_year: Year used for recency.

    Returns:
        One Evidence per chunk, in chunk order.
    """
    return score_many([chunk_to_raw(c) for c in chunks], topic, query, config, current_year)
