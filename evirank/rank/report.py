"""Plain-text scoring report for debugging a ranked evidence list."""

from __future__ import annotations

from typing import Sequence

from evirank.schemas.evidence import Evidence
from evirank.utils import normalize_whitespace

PREVIEW_CHARS = 100


def _format_item(position: int, evidence: Evidence) -> str:
    scores = evidence.sub_scores
    terms = ", ".join(evidence.relevance_context.matching_terms) or "N/A"
    preview = normalize_whitespace(evidence.content)[:PREVIEW_CHARS]
    return "\n".join([
        f"Evidence {position}:",
        f"- Source: {evidence.source_label} ({evidence.source_kind.value})",
        f"- Authority: {scores.authority:.3f}",
        f"- Similarity: {scores.similarity:.3f}",
        f"- Recency: {scores.recency:.3f}",
        f"- License: {scores.license:.3f}",
        f"- CONFIDENCE: {evidence.confidence:.3f}",
        f"- Matching terms: {terms}",
        f"- Content preview: {preview}...",
    ])


def scoring_report(evidence: Sequence[Evidence]) -> str:
    """Render every item's sub-scores, confidence and matched terms."""
    header = "EVIDENCE SCORING REPORT\n======================="
    body = "\n\n".join(_format_item(i, e) for i, e in enumerate(evidence, start=1))
    return f"{header}\n{body}" if body else header
