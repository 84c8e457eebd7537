"""
Document Chunker
=================

Structure-aware document chunking with character offset tracking.

Architecture:
    Raw Text → Paragraph/Sentence Segmenter → Chunk Accumulator → Chunk objects

Key Properties:
    1. A document that fits the budget comes back as exactly one chunk
    2. Paragraph and sentence boundaries are preferred over mid-sentence cuts
    3. Every chunk records real character offsets into the source text
    4. chunk_index runs 0..total_chunks-1 with no gaps

Two Modes:
    - Structural (preserve_paragraphs=True): pack paragraphs greedily,
      splitting oversized paragraphs into sentences
    - Character-window (preserve_paragraphs=False): fixed-width windows
      with overlap, optionally trimmed back to a sentence/word boundary
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional

from evirank.config import ChunkingConfig
from evirank.ingest.segmenter import paragraph_spans, sentence_spans
from evirank.ingest.structure import is_section_heading
from evirank.ingest.tokens import estimate_units
from evirank.schemas.chunk import Chunk, ChunkMetadata

logger = logging.getLogger("evirank.ingest.chunker")

# Window trimming: fall back to the last period only if it lies in the
# final 30% of the window, else to the last space in the final 20%.
PERIOD_CUTOFF = 0.7
SPACE_CUTOFF = 0.8


class SourceDocument(NamedTuple):
    """One input document for multi-document chunking."""
    content: str
    filename: Optional[str]
    source_id: str


@dataclass
class _Draft:
    content: str
    start: int
    end: int
    section: Optional[str] = None


class _ChunkAccumulator:
    """
    Running chunk for structural packing, held as a span of the source text.

    ``flush()`` turns the span into a draft and starts over; the section
    label survives flushes until a new heading replaces it. Content is
    always the source slice, so separators between paragraphs and
    sentences are kept as written.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.start: Optional[int] = None
        self.end: Optional[int] = None
        self.section: Optional[str] = None
        self.drafts: list[_Draft] = []

    @property
    def content(self) -> str:
        if self.start is None:
            return ""
        return self.text[self.start:self.end]

    def extended_to(self, start: int, end: int) -> str:
        """Source text the chunk would cover after absorbing ``[start, end)``."""
        return self.text[start if self.start is None else self.start:end]

    def add(self, start: int, end: int) -> None:
        if self.start is None:
            self.start = start
        self.end = end

    def flush(self) -> None:
        if self.start is not None:
            self.drafts.append(_Draft(self.content, self.start, self.end, self.section))
        self.start = None
        self.end = None


class DocumentChunker:
    """
    Bounded-size, structure-aware document chunker.

    Usage:
        chunker = DocumentChunker(ChunkingConfig(max_units=300))
        chunks = chunker.chunk_document(text, source_id="doc1", filename="notes.txt")

    Args:
        config: Chunking budgets and mode flags. Invalid budgets are
            rejected when the ChunkingConfig is built.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or ChunkingConfig()

    # ── Structural packing ─────────────────────────────────────────

    def _hard_wrap(self, text: str, start: int, end: int) -> list[tuple[int, int]]:
        """Cut a single over-budget sentence into word-aligned windows."""
        max_chars = self.config.max_chars
        pieces: list[tuple[int, int]] = []
        cursor = start
        while cursor < end:
            stop = min(cursor + max_chars, end)
            if stop < end:
                last_space = text.rfind(" ", cursor, stop)
                if last_space - cursor > max_chars * SPACE_CUTOFF:
                    stop = last_space
            piece = text[cursor:stop].strip()
            if piece:
                lead = len(text[cursor:stop]) - len(text[cursor:stop].lstrip())
                pieces.append((cursor + lead, cursor + lead + len(piece)))
            cursor = stop
        return pieces

    def _pack_sentences(
        self, text: str, p_start: int, p_end: int, acc: _ChunkAccumulator
    ) -> None:
        """Greedily pack the sentences of one oversized paragraph."""
        max_units = self.config.max_units
        paragraph = text[p_start:p_end]

        spans: list[tuple[int, int]] = []
        for s_start, s_end in sentence_spans(paragraph):
            s_start, s_end = p_start + s_start, p_start + s_end
            if estimate_units(text[s_start:s_end]) > max_units:
                spans.extend(self._hard_wrap(text, s_start, s_end))
            else:
                spans.append((s_start, s_end))

        for s_start, s_end in spans:
            candidate = acc.extended_to(s_start, s_end)
            if acc.start is not None and estimate_units(candidate) > max_units:
                acc.flush()
            acc.add(s_start, s_end)

    def _chunk_by_structure(self, text: str) -> list[_Draft]:
        max_units = self.config.max_units
        acc = _ChunkAccumulator(text)
        spans = paragraph_spans(text)

        for p_start, p_end in spans:
            paragraph = text[p_start:p_end]

            if is_section_heading(paragraph):
                acc.flush()
                acc.section = paragraph

            if estimate_units(acc.extended_to(p_start, p_end)) > max_units:
                acc.flush()
                if estimate_units(paragraph) > max_units:
                    self._pack_sentences(text, p_start, p_end, acc)
                    continue
            acc.add(p_start, p_end)

        acc.flush()
        logger.debug(f"Structural packing: {len(spans)} paragraphs → {len(acc.drafts)} drafts")
        return acc.drafts

    # ── Character windows ──────────────────────────────────────────

    def _chunk_by_windows(self, text: str) -> list[_Draft]:
        cfg = self.config
        max_chars = cfg.max_chars
        overlap_chars = cfg.overlap_chars
        length = len(text)
        drafts: list[_Draft] = []
        cursor = 0

        while cursor < length:
            window_end = min(cursor + max_chars, length)
            window = text[cursor:window_end]

            if cfg.preserve_sentences and window_end < length:
                last_period = window.rfind(".")
                last_space = window.rfind(" ")
                if last_period > len(window) * PERIOD_CUTOFF:
                    window = window[:last_period + 1]
                elif last_space > len(window) * SPACE_CUTOFF:
                    window = window[:last_space]

            content = window.strip()
            if content and estimate_units(content) >= cfg.min_chunk_units:
                start = cursor + len(window) - len(window.lstrip())
                drafts.append(_Draft(content, start, start + len(content)))

            if cursor + len(window) >= length:
                break

            advance = len(window) - overlap_chars
            if advance <= 0:
                advance = max(len(window), 1)
            cursor += advance

        return drafts

    # ── Public API ─────────────────────────────────────────────────

    def chunk_document(
        self,
        text: str,
        source_id: str,
        filename: Optional[str] = None,
    ) -> list[Chunk]:
        """
        Split one document into bounded-size chunks.

        Algorithm:
            1. If the whole text fits max_units, return it as one chunk
            2. Structural mode: pack paragraphs, flushing at section
               headings and whenever the budget would overflow; oversized
               paragraphs are packed sentence by sentence
            3. Window mode: slide max_units-wide windows with overlap,
               dropping windows below min_chunk_units
            4. Number the chunks and stamp total_chunks on each

        Args:
            text: Full document text.
            source_id: Document identifier (used as chunk ID prefix).
            filename: Optional original file name.

        Returns:
            Ordered list of Chunk objects (empty for blank text).

        Example:
            >>> chunker = DocumentChunker()
            >>> [c.content for c in chunker.chunk_document("  Curto.  ", "d1")]
            ['Curto.']
        """
        stripped = text.strip()
        if not stripped:
            return []

        if estimate_units(text) <= self.config.max_units:
            start = len(text) - len(text.lstrip())
            drafts = [_Draft(stripped, start, start + len(stripped))]
        elif self.config.preserve_paragraphs:
            drafts = self._chunk_by_structure(text)
        else:
            drafts = self._chunk_by_windows(text)

        total = len(drafts)
        chunks = [
            Chunk(
                id=f"{source_id}#c{index}",
                content=draft.content,
                unit_count=estimate_units(draft.content),
                metadata=ChunkMetadata(
                    source_id=source_id,
                    chunk_index=index,
                    total_chunks=total,
                    start_offset=draft.start,
                    end_offset=draft.end,
                    filename=filename,
                    section_label=draft.section,
                ),
            )
            for index, draft in enumerate(drafts)
        ]

        logger.info(
            f"Chunked document '{filename or source_id}': {len(text)} chars "
            f"(~{estimate_units(text)} units) → {total} chunks"
        )
        if chunks:
            logger.debug(f"Chunk sizes: {', '.join(str(c.unit_count) for c in chunks)} units")
        return chunks

    def chunk_documents(
        self,
        documents: Iterable[SourceDocument | tuple[str, Optional[str], str]],
    ) -> list[Chunk]:
        """
        Chunk multiple documents.

        Args:
            documents: ``(content, filename, source_id)`` triples.

        Returns:
            Flat list of all chunks; IDs and indices are scoped per document.
        """
        all_chunks: list[Chunk] = []
        count = 0
        for content, filename, source_id in documents:
            all_chunks.extend(self.chunk_document(content, source_id, filename))
            count += 1

        logger.info(f"Chunked {count} documents → {len(all_chunks)} total chunks")
        return all_chunks


def build_chunks(
    text: str,
    source_id: str,
    config: Optional[ChunkingConfig] = None,
    filename: Optional[str] = None,
) -> list[Chunk]:
    """Functional form of :meth:`DocumentChunker.chunk_document`."""
    return DocumentChunker(config).chunk_document(text, source_id, filename)


def build_chunks_for_many(
    documents: Iterable[SourceDocument | tuple[str, Optional[str], str]],
    config: Optional[ChunkingConfig] = None,
) -> list[Chunk]:
    """Functional form of :meth:`DocumentChunker.chunk_documents`."""
    return DocumentChunker(config).chunk_documents(documents)
