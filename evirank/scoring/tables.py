"""
Scoring Lookup Tables
======================

Static data behind the authority, recency and license sub-scores.
Domain tiers are ordered ``(score, patterns)`` pairs: the first tier with
a pattern contained in the lowercased URL wins.
"""

from __future__ import annotations

from evirank.schemas.evidence import SourceKind

# ── Authority ──────────────────────────────────────────────────────

AUTHORITY_BY_KIND: dict[SourceKind, float] = {
    SourceKind.ACADEMIC_PAPER: 0.9,
    SourceKind.UNIVERSITY: 0.85,
    SourceKind.EDUCATIONAL_PLATFORM: 0.7,
    SourceKind.USER_DOCUMENT: 0.8,
    SourceKind.VIDEO: 0.5,
    SourceKind.WEB_SEARCH_RESULT: 0.75,
    SourceKind.GENERATED_TEXT: 0.7,
    SourceKind.COMMERCIAL_SITE: 0.4,
    SourceKind.OTHER: 0.3,
}

# Lower bound applied after every adjustment.
AUTHORITY_FLOOR_BY_KIND: dict[SourceKind, float] = {
    SourceKind.USER_DOCUMENT: 0.8,
}

AUTHORITY_DOMAIN_TIERS: tuple[tuple[float, tuple[str, ...]], ...] = (
    (0.95, ("mit.edu", "stanford.edu", "harvard.edu", "usp.br", "unicamp.br", "ufsc.br")),
    (0.9, ("doi.org", "pubmed", "arxiv.org", "researchgate")),
    (0.8, (".edu", "edu.br")),
    (0.6, ("coursera", "edx", "khanacademy", "wikipedia")),
)

AUTHOR_BONUS = 0.05
SHORT_CONTENT_CHARS = 100
SHORT_CONTENT_PENALTY = 0.8

# ── Recency ────────────────────────────────────────────────────────

# (max age exclusive, score); anything older gets RECENCY_OLDEST.
RECENCY_BY_AGE: tuple[tuple[int, float], ...] = (
    (2, 1.0),
    (5, 0.8),
    (10, 0.6),
    (20, 0.4),
)
RECENCY_OLDEST = 0.2

# ── License / availability ────────────────────────────────────────

LICENSE_BY_KIND: dict[SourceKind, float] = {
    SourceKind.USER_DOCUMENT: 1.0,
    SourceKind.GENERATED_TEXT: 0.9,
    SourceKind.WEB_SEARCH_RESULT: 0.9,
}

LICENSE_DOMAIN_TIERS: tuple[tuple[float, tuple[str, ...]], ...] = (
    (1.0, ("arxiv", "pubmed", "wikipedia", ".gov", "researchgate")),
    (0.8, (".edu", "edu.br")),
    (0.6, ("coursera", "edx")),
    (0.4, ("springer", "elsevier", "wiley")),
)
LICENSE_DEFAULT = 0.7

# ── Similarity ─────────────────────────────────────────────────────

STOP_WORDS = frozenset({
    # pt
    "para", "com", "por", "que", "uma", "dos", "das", "como", "mais", "ser", "tem", "foi", "são",
    # en
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
})
MIN_TERM_LENGTH = 3
TOPIC_TERM_WEIGHT = 1.0
QUERY_TERM_WEIGHT = 0.7
STEM_MIN_LENGTH = 5
STEM_RATIO = 0.7
STEM_WEIGHT = 0.5
DENSITY_FACTOR = 10.0
MAX_DENSITY_BONUS = 0.2
SNIPPET_RADIUS = 50
SNIPPET_FALLBACK_CHARS = 100


def domain_tier(url: str, tiers: tuple[tuple[float, tuple[str, ...]], ...]) -> float | None:
    """Score of the first tier matching ``url``, or None."""
    lowered = url.lower()
    for score, patterns in tiers:
        if any(pattern in lowered for pattern in patterns):
            return score
    return None
