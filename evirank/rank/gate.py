"""
Review Gate
============

Splits evidence into auto-approved items and items that need a human
reviewer, using a single confidence threshold:

    approved      ⟺ confidence >= min_confidence_threshold
    needs_review  ⟺ confidence <  min_confidence_threshold

The gate is deterministic and order-preserving: each partition keeps the
input order. Rerank first if the consumer needs best-first output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from evirank.config import ScoringConfig
from evirank.schemas.evidence import Evidence

logger = logging.getLogger("evirank.rank.gate")


@dataclass
class ReviewSplit:
    """Outcome of gating one evidence list."""
    approved: list[Evidence] = field(default_factory=list)
    needs_review: list[Evidence] = field(default_factory=list)
    threshold: float = 0.6

    @property
    def stats(self) -> dict:
        """Summary counts."""
        return {
            "total": len(self.approved) + len(self.needs_review),
            "approved": len(self.approved),
            "needs_review": len(self.needs_review),
            "threshold": self.threshold,
        }

    def as_tuple(self) -> tuple[list[Evidence], list[Evidence]]:
        return self.approved, self.needs_review


class ReviewGate:
    """
    Confidence-threshold gate for human review.

    Usage:
        gate = ReviewGate(threshold=0.6)
        split = gate.split(ranked_evidence)
        publish(split.approved); queue_for_review(split.needs_review)

    Args:
        threshold: Minimum confidence for auto-approval, in [0, 1].
    """

    def __init__(self, threshold: float = 0.6):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be in [0,1], got {threshold}")
        self.threshold = threshold

    @classmethod
    def from_config(cls, config: ScoringConfig) -> "ReviewGate":
        """Create a ReviewGate from a scoring config."""
        return cls(threshold=config.min_confidence_threshold)

    def is_approved(self, evidence: Evidence) -> bool:
        return evidence.confidence >= self.threshold

    def split(self, evidence: Sequence[Evidence]) -> ReviewSplit:
        """Partition evidence, preserving input order within each side."""
        result = ReviewSplit(threshold=self.threshold)
        for item in evidence:
            if self.is_approved(item):
                result.approved.append(item)
            else:
                result.needs_review.append(item)

        logger.info(
            f"Review gate: {len(result.approved)} approved, "
            f"{len(result.needs_review)} need review (threshold={self.threshold})"
        )
        return result


def gate_for_review(
    evidence: Sequence[Evidence],
    config: Optional[ScoringConfig] = None,
) -> tuple[list[Evidence], list[Evidence]]:
    """Functional form of :meth:`ReviewGate.split` returning ``(approved, needs_review)``."""
    gate = ReviewGate.from_config(config or ScoringConfig())
    return gate.split(evidence).as_tuple()
