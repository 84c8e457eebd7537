"""
Chunk Schema
=============

Defines the bounded-size passages produced by the chunk builder:
- Positional provenance (source_id, chunk_index, character offsets)
- Optional structural context (filename, section label)
- An optional externally attached relevance score

Design Decisions:
    - Offsets are character offsets into the source document
    - total_chunks is only known once a document is fully chunked, so the
      builder assembles all chunks before creating any Chunk object
    - Chunks are treated as immutable; helpers return copies

Data Flow:
    Raw text → Chunk Builder → Chunk → Scorer → Evidence
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class StructureKind(str, Enum):
    """Line classification produced by the structure detector."""
    TITLE = "title"
    SECTION = "section"
    SUBSECTION = "subsection"
    PARAGRAPH = "paragraph"


class StructureElement(BaseModel):
    """One classified line of a document."""
    kind: StructureKind = Field(description="Detected line kind")
    content: str = Field(description="Line text (heading markers removed)")
    level: int = Field(ge=0, le=6, description="Heading level, 0 for paragraphs")


class ChunkMetadata(BaseModel):
    """
    Positional metadata for a chunk.

    Invariant:
        start_offset < end_offset
        chunk_index < total_chunks (once the document is fully processed)
    """
    source_id: str = Field(description="Identifier of the source document")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its document")
    total_chunks: int = Field(ge=1, description="Number of chunks produced for the document")
    start_offset: int = Field(ge=0, description="Start character offset in the source text")
    end_offset: int = Field(gt=0, description="End character offset (exclusive)")
    filename: Optional[str] = Field(default=None, description="Original file name, if any")
    section_label: Optional[str] = Field(default=None, description="Enclosing section heading")

    @model_validator(mode="after")
    def validate_positions(self) -> "ChunkMetadata":
        """Ensure offsets are ordered and the index fits the total."""
        if self.start_offset >= self.end_offset:
            raise ValueError(
                f"start_offset ({self.start_offset}) must be < end_offset ({self.end_offset})"
            )
        if self.chunk_index >= self.total_chunks:
            raise ValueError(
                f"chunk_index ({self.chunk_index}) must be < total_chunks ({self.total_chunks})"
            )
        return self


class Chunk(BaseModel):
    """
    A contiguous, trimmed slice of one source document.

    Schema:
        {
          "id": "doc42#c3",
          "content": "...",
          "unit_count": 143,
          "metadata": {"source_id": "doc42", "chunk_index": 3, "total_chunks": 9,
                       "start_offset": 1520, "end_offset": 2021,
                       "filename": "notes.pdf", "section_label": "2 LIMITES"},
          "relevance_score": null
        }
    """
    id: str = Field(description="Chunk ID, unique within a processing run")
    content: str = Field(description="Trimmed chunk text")
    unit_count: int = Field(ge=0, description="Estimated semantic-unit count of content")
    metadata: ChunkMetadata
    relevance_score: Optional[float] = Field(
        default=None,
        description="Relevance attached by an external collaborator (e.g. embedding search)"
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Chunk content must be non-empty after trimming."""
        if not v.strip():
            raise ValueError("Chunk content cannot be empty")
        return v

    def with_relevance(self, score: float) -> "Chunk":
        """Return a copy of this chunk carrying an external relevance score."""
        return self.model_copy(update={"relevance_score": score})
