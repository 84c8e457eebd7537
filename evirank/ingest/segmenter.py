"""
Text Segmenter
===============

Splits text into sentences and paragraphs.

Sentence boundaries are sentence-final punctuation (``.``, ``!``, ``?``)
followed by whitespace and a capital letter. A single period does not
end a sentence when it follows a known abbreviation (``Dr.``, ``Prof.``,
``etc.``) or a lone capital letter (an initial, as in ``J. Silva``).

Both splitters have a ``*_spans`` variant returning ``(start, end)``
character offsets into the input, which the chunk builder uses to keep
exact provenance.
"""

from __future__ import annotations

import re

# Uppercase letters, including the accented Latin-1 capitals common in
# Portuguese (Á, Ç, É, Õ, ...).
UPPERCASE = "A-ZÀ-ÖØ-Þ"

ABBREVIATIONS = frozenset({
    "Dr", "Dra", "Sr", "Sra", "Prof", "Profa", "Fig", "Eq", "etc", "vs", "p.ex",
})

_SENTENCE_BOUNDARY = re.compile(rf"[.!?]+(?=\s+[{UPPERCASE}])")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def _trimmed_span(text: str, start: int, end: int) -> tuple[int, int] | None:
    """Shrink [start, end) to exclude surrounding whitespace; None if nothing remains."""
    piece = text[start:end]
    stripped = piece.strip()
    if not stripped:
        return None
    lead = len(piece) - len(piece.lstrip())
    return start + lead, start + lead + len(stripped)


def _last_token(text: str, start: int, end: int) -> str:
    """Word ending at ``end`` (dots allowed, as in ``p.ex``), never reaching before ``start``."""
    i = end
    while i > start and (text[i - 1].isalnum() or text[i - 1] in "._"):
        i -= 1
    return text[i:end].lstrip(".")


def _ends_with_abbreviation(text: str, start: int, end: int) -> bool:
    """True if ``text[start:end]`` ends in an abbreviation or an initial."""
    token = _last_token(text, start, end)
    if token in ABBREVIATIONS:
        return True
    return len(token) == 1 and token.isupper()


def sentence_spans(text: str) -> list[tuple[int, int]]:
    """
    Locate sentences in ``text``.

    Returns:
        Ordered ``(start, end)`` offsets of trimmed, non-empty sentences.
        If no boundary is found the whole trimmed text is one span.
    """
    spans: list[tuple[int, int]] = []
    start = 0
    for match in _SENTENCE_BOUNDARY.finditer(text):
        if match.group() == "." and _ends_with_abbreviation(text, start, match.start()):
            continue
        span = _trimmed_span(text, start, match.end())
        if span:
            spans.append(span)
        start = match.end()

    tail = _trimmed_span(text, start, len(text))
    if tail:
        spans.append(tail)
    return spans


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences, keeping terminal punctuation.

    Example:
        >>> split_sentences("O Dr. Silva chegou. Ele falou!")
        ['O Dr. Silva chegou.', 'Ele falou!']
    """
    return [text[s:e] for s, e in sentence_spans(text)]


def paragraph_spans(text: str) -> list[tuple[int, int]]:
    """Locate blank-line separated paragraphs as trimmed ``(start, end)`` offsets."""
    spans: list[tuple[int, int]] = []
    start = 0
    for match in _PARAGRAPH_BREAK.finditer(text):
        span = _trimmed_span(text, start, match.start())
        if span:
            spans.append(span)
        start = match.end()

    tail = _trimmed_span(text, start, len(text))
    if tail:
        spans.append(tail)
    return spans


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping empty paragraphs."""
    return [text[s:e] for s, e in paragraph_spans(text)]
