"""
Evidence Schema
================

Defines the scored, attributable passages handed to content generation:
- Source provenance (label, kind, optional URL/title)
- Four sub-scores (authority, similarity, recency, license) in [0, 1]
- The single confidence score derived from them
- A relevance context explaining which topic/query terms matched

Design Decisions:
    - Sub-scores are kept alongside the confidence so any ranking can be
      recomputed and audited from the stored values
    - relevance_context is filled exactly once, by similarity scoring
    - RawEvidence is the loose input shape collaborators hand in; every
      field has a default so partial records can still be scored

Data Flow:
    Chunk / search result → RawEvidence → Scorer → Evidence → Reranker → Gate
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    """Closed set of evidence origins."""
    ACADEMIC_PAPER = "academic-paper"
    UNIVERSITY = "university"
    EDUCATIONAL_PLATFORM = "educational-platform"
    COMMERCIAL_SITE = "commercial-site"
    USER_DOCUMENT = "user-document"
    VIDEO = "video"
    WEB_SEARCH_RESULT = "web-search-result"
    GENERATED_TEXT = "generated-text"
    OTHER = "other"


class SubScores(BaseModel):
    """The four independent sub-scores of an evidence item."""
    authority: float = Field(default=0.0, ge=0.0, le=1.0, description="Source credibility")
    similarity: float = Field(default=0.0, ge=0.0, le=1.0, description="Lexical overlap with topic/query")
    recency: float = Field(default=0.0, ge=0.0, le=1.0, description="How current the source is")
    license: float = Field(default=0.0, ge=0.0, le=1.0, description="How freely the source can be cited")


class EvidenceMetadata(BaseModel):
    """Optional descriptive metadata; absent fields fall back to scoring defaults."""
    domain: Optional[str] = None
    publication_year: Optional[int] = None
    authors: list[str] = Field(default_factory=list)
    filename: Optional[str] = None
    page: Optional[int] = None
    chunk_index: Optional[int] = None
    unit_count: Optional[int] = None
    word_count: Optional[int] = None
    language: Optional[str] = None


class RelevanceContext(BaseModel):
    """Explains an evidence item's similarity score."""
    topic: str = ""
    query: str = ""
    matching_terms: list[str] = Field(
        default_factory=list,
        description="Matched terms (or stems), in match order, without duplicates"
    )
    context_snippet: str = Field(default="", description="Content window around the first match")


class RawEvidence(BaseModel):
    """
    Unscored evidence fields as supplied by a collaborator.

    Every field is optional so that partially described passages
    (e.g. a bare search snippet) can still be scored.
    """
    id: Optional[str] = None
    content: str = ""
    source_label: str = "unknown"
    source_kind: SourceKind = SourceKind.OTHER
    url: Optional[str] = None
    title: Optional[str] = None
    metadata: EvidenceMetadata = Field(default_factory=EvidenceMetadata)


class Evidence(BaseModel):
    """
    A scored, attributable candidate passage.

    Invariant:
        confidence == clamp01(Σ weight_i · sub_score_i) for the scoring
        config it was produced with (see evirank.scoring.signals.confidence)

    Schema:
        {
          "id": "doc1#c0",
          "content": "...",
          "source_label": "apostila.pdf",
          "source_kind": "user-document",
          "sub_scores": {"authority": 0.8, "similarity": 0.7, "recency": 1.0, "license": 1.0},
          "confidence": 0.815,
          "metadata": {"filename": "apostila.pdf", "chunk_index": 0},
          "relevance_context": {"topic": "cálculo", "query": "derivadas",
                                "matching_terms": ["cálculo"], "context_snippet": "..."}
        }
    """
    id: str = Field(description="Evidence ID")
    content: str = Field(description="Passage text")
    source_label: str = Field(description="Human-readable source (file name, site, channel)")
    source_kind: SourceKind = Field(default=SourceKind.OTHER)
    url: Optional[str] = None
    title: Optional[str] = None
    sub_scores: SubScores = Field(default_factory=SubScores)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    metadata: EvidenceMetadata = Field(default_factory=EvidenceMetadata)
    relevance_context: RelevanceContext = Field(default_factory=RelevanceContext)

    @property
    def matching_terms(self) -> list[str]:
        """Terms that matched during similarity scoring."""
        return self.relevance_context.matching_terms
