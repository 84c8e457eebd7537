"""
Evirank End-to-End Pipeline
=============================

Orchestrates the evidence pipeline:
    Documents → Chunk → (Merge) → Score → Combine/Dedupe/Rerank → Review Gate

Every stage is a stateless function; the pipeline only holds the chunks
produced by ``ingest`` so several topics can be scored against the same
documents. It performs no I/O: callers hand in text and receive pydantic
objects.

Usage:
    from evirank.pipeline import EvidencePipeline

    pipeline = EvidencePipeline.from_config()
    pipeline.ingest([("...texto...", "apostila.pdf", "doc1")])
    result = pipeline.run("cálculo", "derivadas", current_year=2025)
    print(len(result.approved), len(result.needs_review))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from evirank.config import EvirankConfig, get_config
from evirank.ingest.chunker import DocumentChunker, SourceDocument
from evirank.ingest.postprocess import merge_small_chunks
from evirank.rank.gate import ReviewGate
from evirank.rank.reranker import combine_sources
from evirank.schemas.chunk import Chunk
from evirank.schemas.evidence import Evidence
from evirank.scoring.scorer import chunks_to_evidence
from evirank.utils import generate_run_id, setup_logging

logger = logging.getLogger("evirank.pipeline")


@dataclass
class PipelineResult:
    """
    Complete output of one pipeline run for a topic/query pair.
    """
    run_id: str
    topic: str
    query: str
    config_hash: str
    chunks: list[Chunk]
    ranked: list[Evidence]
    approved: list[Evidence]
    needs_review: list[Evidence]
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def stats(self) -> dict:
        """Summary statistics."""
        return {
            "chunks": len(self.chunks),
            "ranked": len(self.ranked),
            "approved": len(self.approved),
            "needs_review": len(self.needs_review),
        }


class EvidencePipeline:
    """
    End-to-end evidence pipeline orchestrator.

    Manages the flow from raw documents to gated evidence:
        1. Chunk documents (structural or character-window mode)
        2. Optionally merge runs of small chunks
        3. Score chunks as user-document evidence for a topic/query
        4. Combine with externally supplied evidence (search, video),
           deduplicate and rerank
        5. Split into approved / needs-review

    Args:
        config: Evirank configuration.
    """

    def __init__(self, config: Optional[EvirankConfig] = None):
        self.config = config or get_config()
        setup_logging(self.config.log_level, self.config.log_format)
        self._chunker = DocumentChunker(self.config.chunking)
        self._gate = ReviewGate.from_config(self.config.scoring)
        self._chunks: list[Chunk] = []
        self._is_ingested = False

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "EvidencePipeline":
        """Create pipeline from config file or environment."""
        return cls(get_config(config_path))

    @property
    def chunks(self) -> list[Chunk]:
        """Chunks produced by the last ``ingest`` call."""
        return list(self._chunks)

    def ingest(
        self,
        documents: Iterable[SourceDocument | tuple[str, Optional[str], str]],
    ) -> list[Chunk]:
        """
        Chunk documents and keep the result for subsequent runs.

        Args:
            documents: ``(content, filename, source_id)`` triples.

        Returns:
            The produced chunks.
        """
        t0 = time.time()
        chunks = self._chunker.chunk_documents(documents)
        if self.config.merge_small_chunks:
            chunks = merge_small_chunks(
                chunks,
                min_units=self.config.chunking.min_chunk_units,
                max_units=self.config.chunking.max_units,
            )

        self._chunks = chunks
        self._is_ingested = True
        logger.info(f"Ingestion complete: {len(chunks)} chunks in {time.time() - t0:.2f}s")
        return list(chunks)

    def run(
        self,
        topic: str,
        query: str,
        search_results: Sequence[Evidence] = (),
        videos: Sequence[Evidence] = (),
        current_year: Optional[int] = None,
    ) -> PipelineResult:
        """
        Score the ingested chunks for one topic/query and gate the result.

        Args:
            topic: Topic the evidence should support.
            query: Query used to judge relevance.
            search_results: Already-scored web search evidence.
            videos: Already-scored video evidence.
            current_year: Year used for recency (defaults to today).

        Returns:
            PipelineResult with ranked, approved and needs-review lists.

        Raises:
            RuntimeError: If documents haven't been ingested yet.
        """
        if not self._is_ingested:
            raise RuntimeError("No documents ingested. Call pipeline.ingest() first.")

        timings: dict[str, float] = {}
        total_start = time.time()

        # ── Step 1: Score chunks ───────────────────────────────────
        t0 = time.time()
        document_evidence = chunks_to_evidence(
            self._chunks, topic, query, self.config.scoring, current_year
        )
        timings["score_ms"] = (time.time() - t0) * 1000

        # ── Step 2: Combine, dedupe, rerank ────────────────────────
        t0 = time.time()
        ranked = combine_sources(
            search_results, document_evidence, videos, config=self.config.scoring
        )
        timings["rank_ms"] = (time.time() - t0) * 1000

        # ── Step 3: Review gate ────────────────────────────────────
        t0 = time.time()
        split = self._gate.split(ranked)
        timings["gate_ms"] = (time.time() - t0) * 1000
        timings["total_ms"] = (time.time() - total_start) * 1000

        result = PipelineResult(
            run_id=generate_run_id(),
            topic=topic,
            query=query,
            config_hash=self.config.config_hash(),
            chunks=list(self._chunks),
            ranked=ranked,
            approved=split.approved,
            needs_review=split.needs_review,
            timings=timings,
        )

        logger.info(f"Pipeline complete: {result.stats} | Total: {timings['total_ms']:.0f}ms")
        return result
