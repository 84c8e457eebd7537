"""
Evidence Reranker
==================

Orders, caps and deduplicates scored evidence.

Sort key (descending, lexicographic):
    (confidence, authority, similarity)

The sort is stable: items tied on all three keys keep their input
order. Deduplication keys on (source_label, first 100 characters of
content) and keeps the first occurrence.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from evirank.config import ScoringConfig
from evirank.schemas.evidence import Evidence

logger = logging.getLogger("evirank.rank.reranker")

DEDUP_PREFIX_CHARS = 100


def _rank_key(evidence: Evidence) -> tuple[float, float, float]:
    return (
        evidence.confidence,
        evidence.sub_scores.authority,
        evidence.sub_scores.similarity,
    )


def rerank(
    evidence: Sequence[Evidence],
    config: Optional[ScoringConfig] = None,
) -> list[Evidence]:
    """
    Sort evidence best-first and keep the top ``max_evidence_per_topic``.

    Returns a new list; the input is left untouched.
    """
    config = config or ScoringConfig()
    ranked = sorted(evidence, key=_rank_key, reverse=True)[:config.max_evidence_per_topic]
    logger.debug(
        f"Reranked {len(evidence)} items → kept {len(ranked)} "
        f"(cap={config.max_evidence_per_topic})"
    )
    return ranked


def dedup_key(evidence: Evidence) -> tuple[str, str]:
    """Identity used for near-duplicate detection."""
    return evidence.source_label, evidence.content[:DEDUP_PREFIX_CHARS]


def deduplicate(evidence: Iterable[Evidence]) -> list[Evidence]:
    """Drop later items sharing a dedup key with an earlier one."""
    seen: set[tuple[str, str]] = set()
    unique: list[Evidence] = []
    for item in evidence:
        key = dedup_key(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def combine_sources(
    search_results: Sequence[Evidence],
    documents: Sequence[Evidence],
    videos: Sequence[Evidence] = (),
    *more: Sequence[Evidence],
    config: Optional[ScoringConfig] = None,
) -> list[Evidence]:
    """
    Merge evidence from several sources into one ranked pool.

    Concatenation order is fixed: web search results, then user
    documents, then videos, then any further lists in argument order.
    Because deduplication keeps the first occurrence, that order decides
    which copy of a duplicate survives.

    Returns:
        Deduplicated evidence, reranked and capped.
    """
    pool: list[Evidence] = [*search_results, *documents, *videos]
    for extra in more:
        pool.extend(extra)

    unique = deduplicate(pool)
    ranked = rerank(unique, config)
    logger.info(
        f"Combined sources: {len(pool)} items → {len(unique)} unique → {len(ranked)} ranked"
    )
    return ranked
