"""
Evirank Test Configuration
============================

Shared fixtures, factories, and helpers for the entire test suite.
"""

from __future__ import annotations

import logging
import uuid

import pytest

from evirank.config import ChunkingConfig, EvirankConfig, ScoringConfig
from evirank.ingest.tokens import estimate_units
from evirank.schemas.chunk import Chunk, ChunkMetadata
from evirank.schemas.evidence import (
    Evidence,
    EvidenceMetadata,
    SourceKind,
    SubScores,
)

CURRENT_YEAR = 2025


# ── Markers ─────────────────────────────────────────────────────

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line("markers", "integration: multi-component tests")


# ── Fixtures ────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so streams never outlive a test."""
    yield
    logging.getLogger("evirank").handlers.clear()


@pytest.fixture
def config() -> EvirankConfig:
    """Default config, independent of the caller's environment."""
    return EvirankConfig(_env_file=None)


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    return ChunkingConfig()


@pytest.fixture
def scoring_config() -> ScoringConfig:
    return ScoringConfig()


@pytest.fixture
def sample_documents() -> list[tuple[str, str, str]]:
    """Small corpus of (content, filename, source_id) triples."""
    return [
        (
            "Cálculo diferencial estuda taxas de variação. A derivada mede a "
            "inclinação da reta tangente. O Prof. Silva apresenta exemplos.",
            "calculo.txt",
            "doc_calculo",
        ),
        (
            "Álgebra linear trata de vetores e matrizes. Sistemas lineares "
            "aparecem em engenharia.",
            "algebra.txt",
            "doc_algebra",
        ),
    ]


@pytest.fixture
def long_document() -> str:
    """Three ~660-char paragraphs, 2,000 characters in total."""
    return make_document([660, 660, 676])


# ── Factories ───────────────────────────────────────────────────

def make_paragraph(length: int, word: str = "palavra") -> str:
    """A single-sentence paragraph of exactly ``length`` characters."""
    body = ((word + " ") * (length // (len(word) + 1) + 1))[:length - 1]
    if body.endswith(" "):
        body = body[:-1] + "x"
    return body + "."


def make_document(paragraph_lengths: list[int]) -> str:
    """Blank-line separated paragraphs; total length = sum(lengths) + 2·(n-1)."""
    return "\n\n".join(make_paragraph(n) for n in paragraph_lengths)


def make_chunk(
    content: str = "Conteúdo padrão do trecho.",
    source_id: str = "doc_0",
    index: int = 0,
    total: int = 1,
    unit_count: int | None = None,
    start: int = 0,
    relevance: float | None = None,
) -> Chunk:
    """Factory for creating test chunks."""
    return Chunk(
        id=f"{source_id}#c{index}",
        content=content,
        unit_count=estimate_units(content) if unit_count is None else unit_count,
        metadata=ChunkMetadata(
            source_id=source_id,
            chunk_index=index,
            total_chunks=total,
            start_offset=start,
            end_offset=start + len(content),
        ),
        relevance_score=relevance,
    )


def make_evidence(
    confidence: float = 0.7,
    authority: float = 0.5,
    similarity: float = 0.5,
    content: str | None = None,
    source_label: str = "source",
    evidence_id: str | None = None,
    source_kind: SourceKind = SourceKind.OTHER,
) -> Evidence:
    """Factory for pre-scored evidence (scores set directly)."""
    evidence_id = evidence_id or f"ev_{uuid.uuid4().hex[:8]}"
    return Evidence(
        id=evidence_id,
        content=content if content is not None else f"Conteúdo da evidência {evidence_id}.",
        source_label=source_label,
        source_kind=source_kind,
        sub_scores=SubScores(authority=authority, similarity=similarity, recency=1.0, license=0.7),
        confidence=confidence,
        metadata=EvidenceMetadata(),
    )
