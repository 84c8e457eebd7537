"""
Structure Detector
===================

Classifies document lines as title / section / subsection / paragraph.

Rules, applied per non-empty trimmed line in priority order:
    1. Markdown heading (``#`` .. ``######`` + space)
       → section if level <= 2, else subsection
    2. All-uppercase line (< 100 chars, at least one capital) → title, level 1
    3. Numbered section (``2 Limites``, ``3. Derivadas``)   → section, level 2
    4. Numbered subsection (``2.1 Definição``)              → subsection, level 3
    5. Anything else                                        → paragraph, level 0

The result is advisory labeling metadata, not a parser: ambiguous lines
fall through to paragraph.
"""

from __future__ import annotations

import re

from evirank.ingest.segmenter import UPPERCASE
from evirank.schemas.chunk import StructureElement, StructureKind

MAX_HEADING_CHARS = 100

_MARKDOWN_HEADING = re.compile(r"^(#{1,6})\s+")
_NUMBERED_SECTION = re.compile(rf"^\d+\.?\s+[{UPPERCASE}]")
_NUMBERED_SUBSECTION = re.compile(r"^\d+\.\d+\.?\s+")


def _is_all_caps(line: str) -> bool:
    return (
        len(line) < MAX_HEADING_CHARS
        and line == line.upper()
        and any(ch.isupper() for ch in line)
    )


def is_section_heading(line: str) -> bool:
    """
    True for short lines that open a new section for chunk labeling:
    an all-caps title or a numbered section.
    """
    line = line.strip()
    if not line or len(line) >= MAX_HEADING_CHARS:
        return False
    return _is_all_caps(line) or bool(_NUMBERED_SECTION.match(line))


def classify_line(line: str) -> StructureElement:
    """Classify one trimmed, non-empty line."""
    heading = _MARKDOWN_HEADING.match(line)
    if heading:
        level = len(heading.group(1))
        kind = StructureKind.SECTION if level <= 2 else StructureKind.SUBSECTION
        return StructureElement(kind=kind, content=line[heading.end():].strip(), level=level)

    if _is_all_caps(line):
        return StructureElement(kind=StructureKind.TITLE, content=line, level=1)

    if _NUMBERED_SECTION.match(line):
        return StructureElement(kind=StructureKind.SECTION, content=line, level=2)

    if _NUMBERED_SUBSECTION.match(line):
        return StructureElement(kind=StructureKind.SUBSECTION, content=line, level=3)

    return StructureElement(kind=StructureKind.PARAGRAPH, content=line, level=0)


def detect_structure(text: str) -> list[StructureElement]:
    """
    Classify every non-empty line of ``text``.

    Example:
        >>> [e.kind.value for e in detect_structure("# Cálculo\\nTexto livre.")]
        ['section', 'paragraph']
    """
    return [
        classify_line(line.strip())
        for line in text.splitlines()
        if line.strip()
    ]
