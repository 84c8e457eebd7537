"""Document ingestion: length estimation, segmentation, structure and chunking."""

from evirank.ingest.chunker import (
    DocumentChunker,
    SourceDocument,
    build_chunks,
    build_chunks_for_many,
)
from evirank.ingest.postprocess import filter_by_relevance, merge_small_chunks, summarize
from evirank.ingest.segmenter import split_paragraphs, split_sentences
from evirank.ingest.structure import detect_structure, is_section_heading
from evirank.ingest.tokens import estimate_units

__all__ = [
    "DocumentChunker",
    "SourceDocument",
    "build_chunks",
    "build_chunks_for_many",
    "detect_structure",
    "estimate_units",
    "filter_by_relevance",
    "is_section_heading",
    "merge_small_chunks",
    "split_paragraphs",
    "split_sentences",
    "summarize",
]
