"""
Evidence Sub-score Functions
==============================

Four independent signals, each in [0, 1], plus their weighted combination:

    confidence = clamp01(w_a·authority + w_s·similarity + w_r·recency + w_l·license)

Defaults: w = 0.40 / 0.35 / 0.15 / 0.10.

All functions are pure except `similarity`, which fills the evidence's
relevance_context (matching terms + snippet) as an explanation of the
score it returns. The current year is always passed in explicitly.
"""

from __future__ import annotations

import re

from evirank.config import ScoringConfig
from evirank.schemas.evidence import Evidence, SourceKind, SubScores
from evirank.scoring import tables

_NON_WORD = re.compile(r"[^\w]")


def clamp01(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return min(1.0, max(0.0, value))


# ── Authority ──────────────────────────────────────────────────────

def authority(evidence: Evidence) -> float:
    """
    Perceived credibility of the evidence's source.

    Kind base score, raised (never lowered) to the URL's domain tier,
    +0.05 when authors are listed, x0.8 for content under 100 chars,
    then bounded by the per-kind floor and 1.0.
    """
    score = tables.AUTHORITY_BY_KIND.get(evidence.source_kind, tables.AUTHORITY_BY_KIND[SourceKind.OTHER])

    if evidence.url:
        tier = tables.domain_tier(evidence.url, tables.AUTHORITY_DOMAIN_TIERS)
        if tier is not None:
            score = max(score, tier)

    if evidence.metadata.authors:
        score += tables.AUTHOR_BONUS

    if len(evidence.content) < tables.SHORT_CONTENT_CHARS:
        score *= tables.SHORT_CONTENT_PENALTY

    score = max(score, tables.AUTHORITY_FLOOR_BY_KIND.get(evidence.source_kind, 0.0))
    return min(1.0, score)


# ── Similarity ─────────────────────────────────────────────────────

def extract_terms(text: str) -> list[str]:
    """
    Lowercased content words of ``text``, in order, without duplicates.

    Punctuation is stripped from each whitespace token; tokens shorter
    than three characters and stop words are dropped.
    """
    terms: list[str] = []
    for token in text.split():
        term = _NON_WORD.sub("", token).lower()
        if len(term) < tables.MIN_TERM_LENGTH or term in tables.STOP_WORDS:
            continue
        if term not in terms:
            terms.append(term)
    return terms


def _context_snippet(content: str, lowered: str, terms: list[str]) -> str:
    """Window of ±50 chars around the first matched term, else the content head."""
    source = content if len(content) == len(lowered) else lowered
    for term in terms:
        index = lowered.find(term)
        if index != -1:
            start = max(0, index - tables.SNIPPET_RADIUS)
            end = min(len(source), index + len(term) + tables.SNIPPET_RADIUS)
            return source[start:end].strip()
    head = source[:tables.SNIPPET_FALLBACK_CHARS].strip()
    return head + "..." if head else ""


def similarity(evidence: Evidence, topic: str, query: str) -> float:
    """
    Lexical overlap between the evidence content and a topic/query pair.

    Each distinct term found verbatim in the content scores 1.0 (topic
    term) or 0.7 (query-only term). A term longer than four characters
    that is not found may still match on its first 70% ("stem") for 0.5.
    The sum is divided by the number of distinct terms, then a density
    bonus of min(0.2, 10 · matches / words) is added.

    Side effect: sets ``evidence.relevance_context.matching_terms`` and
    ``context_snippet``.

    Example:
        content "Aulas de cálculo diferencial e integral", topic "cálculo",
        query "derivadas" → 1 of 2 terms matched (0.5) + density 0.2 = 0.7
    """
    content = evidence.content
    lowered = content.lower()

    topic_terms = extract_terms(topic)
    query_terms = extract_terms(query)
    all_terms = topic_terms + [t for t in query_terms if t not in topic_terms]

    score = 0.0
    matched: list[str] = []
    exact: set[str] = set()
    stem_hits = 0

    for term in all_terms:
        if term in lowered:
            exact.add(term)
            matched.append(term)
            score += tables.TOPIC_TERM_WEIGHT if term in topic_terms else tables.QUERY_TERM_WEIGHT

    for term in all_terms:
        if term in exact or len(term) < tables.STEM_MIN_LENGTH:
            continue
        stem = term[:int(len(term) * tables.STEM_RATIO)]
        if stem in lowered:
            stem_hits += 1
            if stem not in matched:
                matched.append(stem)
            score += tables.STEM_WEIGHT

    normalized = score / len(all_terms) if all_terms else 0.0
    word_count = len(content.split()) or 1
    density_bonus = min(
        tables.MAX_DENSITY_BONUS,
        tables.DENSITY_FACTOR * (len(exact) + stem_hits) / word_count,
    )

    context = evidence.relevance_context
    context.topic = topic
    context.query = query
    context.matching_terms = matched
    context.context_snippet = _context_snippet(content, lowered, matched)

    return min(1.0, normalized + density_bonus)


# ── Recency ────────────────────────────────────────────────────────

def recency(evidence: Evidence, current_year: int) -> float:
    """
    How current the source is, from its publication year.

    User documents without a year are assumed current (1.0). Otherwise a
    missing year counts as ``current_year`` and the age is bucketed:
    <2 → 1.0, <5 → 0.8, <10 → 0.6, <20 → 0.4, else 0.2.
    """
    year = evidence.metadata.publication_year
    if year is None and evidence.source_kind == SourceKind.USER_DOCUMENT:
        return 1.0

    age = current_year - (year if year is not None else current_year)
    for max_age, score in tables.RECENCY_BY_AGE:
        if age < max_age:
            return score
    return tables.RECENCY_OLDEST


# ── License ────────────────────────────────────────────────────────

def license_score(evidence: Evidence) -> float:
    """How freely the source can be used/cited (kind first, then domain)."""
    by_kind = tables.LICENSE_BY_KIND.get(evidence.source_kind)
    if by_kind is not None:
        return by_kind

    if evidence.url:
        tier = tables.domain_tier(evidence.url, tables.LICENSE_DOMAIN_TIERS)
        if tier is not None:
            return tier

    return tables.LICENSE_DEFAULT


# ── Combination ────────────────────────────────────────────────────

def confidence(sub_scores: SubScores, config: ScoringConfig) -> float:
    """
    Weighted sum of the four sub-scores, clamped to [0, 1].

    Weights are used as given; they are not renormalized.
    """
    return clamp01(
        config.authority_weight * sub_scores.authority
        + config.similarity_weight * sub_scores.similarity
        + config.recency_weight * sub_scores.recency
        + config.license_weight * sub_scores.license
    )
