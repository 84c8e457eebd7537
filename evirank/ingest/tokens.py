"""Length estimation shared by every sizing decision."""

from __future__ import annotations

import math

from evirank.config import CHARS_PER_UNIT


def estimate_units(text: str) -> int:
    """
    Approximate the semantic-unit ("token") count of a text.

    This is a fixed characters-per-unit ratio, not a real tokenizer.
    All size thresholds in ChunkingConfig are calibrated against it.

    Example:
        >>> estimate_units("")
        0
        >>> estimate_units("x" * 2000)
        572
    """
    return math.ceil(len(text) / CHARS_PER_UNIT)
