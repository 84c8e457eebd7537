"""
Chunk Post-processors
======================

Operations applied to chunk lists after building:
- filter_by_relevance: keep chunks whose external relevance score clears a bar
- merge_small_chunks:  fold runs of consecutive small chunks into one
- summarize:           short extractive summary (first two sentences)
"""

from __future__ import annotations

import logging
from typing import Sequence

from evirank.ingest.segmenter import split_sentences
from evirank.ingest.tokens import estimate_units
from evirank.schemas.chunk import Chunk

logger = logging.getLogger("evirank.ingest.postprocess")

MERGE_SEPARATOR = "\n\n"
SUMMARY_SENTENCES = 2
SUMMARY_MAX_CHARS = 150
ELLIPSIS = "..."


def filter_by_relevance(chunks: Sequence[Chunk], min_score: float = 0.3) -> list[Chunk]:
    """
    Keep chunks with ``relevance_score >= min_score``, best first.

    A chunk with no attached score counts as 0. The sort is stable, so
    equally scored chunks keep their input order.
    """
    kept = [c for c in chunks if (c.relevance_score or 0.0) >= min_score]
    kept.sort(key=lambda c: c.relevance_score or 0.0, reverse=True)
    logger.debug(f"Relevance filter (>= {min_score}): {len(chunks)} → {len(kept)} chunks")
    return kept


def _combine(group: list[Chunk]) -> Chunk:
    """Concatenate a multi-chunk group into one chunk headed by its first member."""
    first, last = group[0], group[-1]
    content = MERGE_SEPARATOR.join(c.content for c in group)
    # Never below the members' sum, so re-merging the output regroups nothing.
    unit_count = max(estimate_units(content), sum(c.unit_count for c in group))
    metadata = first.metadata.model_copy(update={
        "end_offset": max(c.metadata.end_offset for c in group),
    })
    return Chunk(
        id=f"{first.id}+{len(group) - 1}",
        content=content,
        unit_count=unit_count,
        metadata=metadata,
        relevance_score=first.relevance_score,
    )


def merge_small_chunks(
    chunks: Sequence[Chunk],
    min_units: int = 100,
    max_units: int = 500,
) -> list[Chunk]:
    """
    Greedily fold consecutive chunks together while their unit sum fits.

    A group grows while ``group_units + next.unit_count <= max_units``;
    on overflow it is flushed. Single-member groups pass through
    unchanged; larger groups become one chunk whose content is the
    members joined by blank lines and whose metadata comes from the
    first member (end offset from the last).

    Args:
        chunks: Chunks in document order.
        min_units: Unused; grouping depends on max_units only.
        max_units: Unit budget per merged chunk.

    Returns:
        New chunk list. Idempotent for a fixed max_units.
    """
    merged: list[Chunk] = []
    group: list[Chunk] = []
    group_units = 0

    def flush() -> None:
        if len(group) == 1:
            merged.append(group[0])
        elif group:
            merged.append(_combine(group))

    for chunk in chunks:
        if group and group_units + chunk.unit_count > max_units:
            flush()
            group = []
            group_units = 0
        group.append(chunk)
        group_units += chunk.unit_count

    flush()

    logger.info(f"Merged small chunks: {len(chunks)} → {len(merged)} (max_units={max_units})")
    return merged


def summarize(chunks: Sequence[Chunk]) -> list[tuple[Chunk, str]]:
    """
    Pair each chunk with a short summary: its first two sentences,
    cut to 150 characters with a trailing ellipsis when cut.
    """
    summaries: list[tuple[Chunk, str]] = []
    for chunk in chunks:
        summary = " ".join(split_sentences(chunk.content)[:SUMMARY_SENTENCES])
        if len(summary) > SUMMARY_MAX_CHARS:
            summary = summary[:SUMMARY_MAX_CHARS] + ELLIPSIS
        summaries.append((chunk, summary))
    return summaries
