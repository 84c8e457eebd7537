"""
Evirank Data Schemas
======================

Pydantic v2 models implementing the two core data contracts:

1. Chunk     : Bounded-size document slice with positional metadata
2. Evidence  : Scored, attributable passage with sub-scores + confidence

All schemas support:
- Runtime validation with Pydantic
- JSON Schema export for interoperability
- Serialization/deserialization for collaborators that persist results
"""

from evirank.schemas.chunk import (
    Chunk,
    ChunkMetadata,
    StructureElement,
    StructureKind,
)
from evirank.schemas.evidence import (
    Evidence,
    EvidenceMetadata,
    RawEvidence,
    RelevanceContext,
    SourceKind,
    SubScores,
)

__all__ = [
    # Chunk
    "Chunk",
    "ChunkMetadata",
    "StructureElement",
    "StructureKind",
    # Evidence
    "Evidence",
    "EvidenceMetadata",
    "RawEvidence",
    "RelevanceContext",
    "SourceKind",
    "SubScores",
]
