"""Reranking, deduplication and review gating of scored evidence."""

from evirank.rank.gate import ReviewGate, ReviewSplit, gate_for_review
from evirank.rank.report import scoring_report
from evirank.rank.reranker import combine_sources, dedup_key, deduplicate, rerank

__all__ = [
    "ReviewGate",
    "ReviewSplit",
    "combine_sources",
    "dedup_key",
    "deduplicate",
    "gate_for_review",
    "rerank",
    "scoring_report",
]
