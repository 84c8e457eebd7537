"""
Integration Tests: Evidence Pipeline
======================================

Tests the full chain from raw documents to gated evidence:
    chunk → (merge) → score → combine/dedupe/rerank → review gate
"""

from __future__ import annotations

import logging

import pytest

from evirank.config import ChunkingConfig, EvirankConfig, ScoringConfig
from evirank.pipeline import EvidencePipeline, PipelineResult
from evirank.schemas.evidence import RawEvidence, SourceKind
from evirank.scoring.scorer import score_many
from tests.conftest import CURRENT_YEAR, make_paragraph

pytestmark = pytest.mark.integration


@pytest.fixture
def pipeline(config):
    return EvidencePipeline(config)


@pytest.fixture
def web_results():
    raws = [
        RawEvidence(
            id="web_mit",
            content="Derivadas e cálculo diferencial explicados com exemplos. " * 3,
            source_label="MIT OCW",
            source_kind=SourceKind.UNIVERSITY,
            url="https://ocw.mit.edu/calculus",
        ),
        RawEvidence(
            id="web_loja",
            content="Compre apostilas baratas.",
            source_label="Loja",
            source_kind=SourceKind.COMMERCIAL_SITE,
            url="https://example-shop.com",
        ),
    ]
    return score_many(raws, "cálculo", "derivadas", current_year=CURRENT_YEAR)


class TestPipeline:
    """End-to-end runs."""

    def test_run_before_ingest_raises(self, pipeline):
        with pytest.raises(RuntimeError, match="ingest"):
            pipeline.run("cálculo", "derivadas")

    def test_ingest_returns_chunks(self, pipeline, sample_documents):
        chunks = pipeline.ingest(sample_documents)
        assert [c.id for c in chunks] == ["doc_calculo#c0", "doc_algebra#c0"]
        assert pipeline.chunks == chunks

    def test_full_run(self, pipeline, sample_documents, web_results):
        pipeline.ingest(sample_documents)
        result = pipeline.run(
            "cálculo", "derivadas", search_results=web_results, current_year=CURRENT_YEAR,
        )

        assert isinstance(result, PipelineResult)
        assert result.run_id.startswith("evirank-")
        assert result.config_hash == pipeline.config.config_hash()
        assert len(result.ranked) == 4
        assert result.stats == {
            "chunks": 2,
            "ranked": 4,
            "approved": len(result.approved),
            "needs_review": len(result.needs_review),
        }
        for key in ("score_ms", "rank_ms", "gate_ms", "total_ms"):
            assert key in result.timings

        confidences = [e.confidence for e in result.ranked]
        assert confidences == sorted(confidences, reverse=True)
        assert result.approved + result.needs_review == result.ranked

        ids = {e.id for e in result.ranked}
        assert {"web_mit", "web_loja", "doc_calculo#c0", "doc_algebra#c0"} == ids

        calculo = next(e for e in result.ranked if e.id == "doc_calculo#c0")
        assert calculo.source_kind == SourceKind.USER_DOCUMENT
        assert calculo.source_label == "calculo.txt"
        assert "cálculo" in calculo.matching_terms

        loja = next(e for e in result.ranked if e.id == "web_loja")
        assert loja in result.needs_review

    def test_relevant_document_outranks_unrelated(self, pipeline, sample_documents):
        pipeline.ingest(sample_documents)
        result = pipeline.run("cálculo", "derivadas", current_year=CURRENT_YEAR)
        assert [e.id for e in result.ranked] == ["doc_calculo#c0", "doc_algebra#c0"]

    def test_reproducible_for_fixed_year(self, pipeline, sample_documents, web_results):
        pipeline.ingest(sample_documents)
        a = pipeline.run("cálculo", "derivadas", web_results, current_year=CURRENT_YEAR)
        b = pipeline.run("cálculo", "derivadas", web_results, current_year=CURRENT_YEAR)
        assert [(e.id, e.confidence) for e in a.ranked] == [(e.id, e.confidence) for e in b.ranked]

    def test_several_topics_share_ingest(self, pipeline, sample_documents):
        pipeline.ingest(sample_documents)
        calculo = pipeline.run("cálculo", "derivadas", current_year=CURRENT_YEAR)
        algebra = pipeline.run("álgebra", "matrizes", current_year=CURRENT_YEAR)
        assert calculo.ranked[0].id == "doc_calculo#c0"
        assert algebra.ranked[0].id == "doc_algebra#c0"

    def test_duplicate_video_dropped(self, pipeline, sample_documents, web_results):
        pipeline.ingest(sample_documents)
        video = web_results[0].model_copy(update={"id": "video_dup"})
        result = pipeline.run(
            "cálculo", "derivadas", web_results, videos=[video], current_year=CURRENT_YEAR,
        )
        ids = [e.id for e in result.ranked]
        assert "web_mit" in ids
        assert "video_dup" not in ids

    def test_empty_corpus(self, pipeline):
        pipeline.ingest([])
        result = pipeline.run("cálculo", "derivadas", current_year=CURRENT_YEAR)
        assert result.ranked == []
        assert result.approved == []


class TestPipelineConfig:
    """Config-driven behavior."""

    def test_merge_small_chunks(self):
        config = EvirankConfig(
            _env_file=None,
            merge_small_chunks=True,
            chunking=ChunkingConfig(max_units=50, overlap_units=5),
        )
        text = "\n\n".join(
            f"{i} Seção\n\n" + make_paragraph(60) for i in range(1, 5)
        )
        pipeline = EvidencePipeline(config)
        chunks = pipeline.ingest([(text, None, "doc")])

        plain = EvidencePipeline(EvirankConfig(
            _env_file=None, chunking=ChunkingConfig(max_units=50, overlap_units=5),
        )).ingest([(text, None, "doc")])
        assert len(chunks) < len(plain)
        assert all(c.unit_count <= 50 for c in chunks)

    def test_threshold_from_config(self, sample_documents):
        config = EvirankConfig(
            _env_file=None, scoring=ScoringConfig(min_confidence_threshold=0.0),
        )
        pipeline = EvidencePipeline(config)
        pipeline.ingest(sample_documents)
        result = pipeline.run("x", "y", current_year=CURRENT_YEAR)
        assert result.needs_review == []
        assert len(result.approved) == 2

    def test_cap_from_config(self):
        config = EvirankConfig(
            _env_file=None,
            scoring=ScoringConfig(max_evidence_per_topic=3),
            chunking=ChunkingConfig(max_units=50, overlap_units=5),
        )
        pipeline = EvidencePipeline(config)
        text = "\n\n".join(make_paragraph(150, word=f"termo{i}") for i in range(8))
        pipeline.ingest([(text, None, "doc")])
        assert len(pipeline.chunks) == 8
        assert len(pipeline.run("termo", "", current_year=CURRENT_YEAR).ranked) == 3

    def test_logging_configured_from_config(self):
        config = EvirankConfig(_env_file=None, log_level="DEBUG", log_format="json")
        EvidencePipeline(config)

        logger = logging.getLogger("evirank")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert type(logger.handlers[0].formatter).__name__ == "JsonFormatter"
