"""
Evirank Configuration System
==============================

Central configuration using Pydantic Settings. Supports:
- Environment variables (EVIRANK_ prefix, ``__`` for nested fields)
- .env file loading
- YAML config file overrides

Size budgets and scoring weights are validated when the config object
is built, so a bad value fails at startup instead of inside the packing
loop. Scoring weights are NOT renormalized: if they do not sum to 1.0
the caller owns the consequences.

Usage:
    from evirank.config import get_config
    cfg = get_config()                        # loads from env / .env
    cfg = get_config("configs/strict.yaml")   # loads with YAML overrides
"""

from __future__ import annotations

import hashlib
import json
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Characters per semantic unit. Tuned for Portuguese prose; every size
# threshold below is expressed in units derived from this ratio.
CHARS_PER_UNIT = 3.5


# ── Sub-configs ────────────────────────────────────────────────────
class ChunkingConfig(BaseModel):
    """Configuration for the chunk builder."""
    max_units: int = Field(default=500, gt=0, description="Max estimated units per chunk")
    overlap_units: int = Field(
        default=50, ge=0,
        description="Overlap between windows in character-window mode"
    )
    min_chunk_units: int = Field(
        default=100, ge=0,
        description="Windows below this size are discarded in character-window mode"
    )
    preserve_sentences: bool = Field(
        default=True,
        description="Trim character windows back to a sentence or word boundary"
    )
    preserve_paragraphs: bool = Field(
        default=True,
        description="Pack paragraphs/sentences instead of sliding character windows"
    )

    @property
    def max_chars(self) -> int:
        """Window width in characters."""
        return int(self.max_units * CHARS_PER_UNIT)

    @property
    def overlap_chars(self) -> int:
        """Window overlap in characters."""
        return int(self.overlap_units * CHARS_PER_UNIT)


class ScoringConfig(BaseModel):
    """Configuration for evidence scoring, reranking and review gating."""
    authority_weight: float = Field(default=0.40, ge=0.0, description="Weight of source authority")
    similarity_weight: float = Field(default=0.35, ge=0.0, description="Weight of topical similarity")
    recency_weight: float = Field(default=0.15, ge=0.0, description="Weight of recency")
    license_weight: float = Field(default=0.10, ge=0.0, description="Weight of licensing/availability")
    min_confidence_threshold: float = Field(
        default=0.6,
        ge=0.0, le=1.0,
        description="Evidence at or above this confidence is auto-approved"
    )
    max_evidence_per_topic: int = Field(
        default=15, ge=1,
        description="Cap applied after reranking"
    )
    language_preference: Literal["pt", "en", "both"] = Field(
        default="both",
        description="Preferred evidence language, passed through to collaborators"
    )

    @property
    def weight_sum(self) -> float:
        """Sum of the four weights (expected, not enforced, to be 1.0)."""
        return (
            self.authority_weight
            + self.similarity_weight
            + self.recency_weight
            + self.license_weight
        )


# ── Main Config ────────────────────────────────────────────────────
class EvirankConfig(BaseSettings):
    """
    Root configuration for the evidence engine.

    Loads from environment variables (EVIRANK_ prefix) and .env file.
    Can be extended with YAML overrides via `get_config(yaml_path)`.

    Example:
        export EVIRANK_CHUNKING__MAX_UNITS=300
        export EVIRANK_SCORING__MIN_CONFIDENCE_THRESHOLD=0.7
    """
    model_config = SettingsConfigDict(
        env_prefix="EVIRANK_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format: 'json' or 'text'")
    merge_small_chunks: bool = Field(
        default=False,
        description="Merge consecutive small chunks after ingestion"
    )

    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)

    def config_hash(self) -> str:
        """
        Produce a deterministic SHA-256 hash of the configuration.

        Stamped on pipeline results so two runs can be compared: the
        same hash plus the same inputs and current year gives the same
        ranking.
        """
        config_dict = self.model_dump(mode="json")
        canonical = json.dumps(config_dict, sort_keys=True, default=str)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


# ── Config Loading ─────────────────────────────────────────────────
def get_config(yaml_path: Optional[str] = None) -> EvirankConfig:
    """
    Load evidence engine configuration.

    Priority (highest to lowest):
        1. Explicit YAML values (if provided)
        2. Environment variables (EVIRANK_ prefix)
        3. .env file
        4. Default values

    Args:
        yaml_path: Optional path to a YAML config file for overrides.

    Returns:
        Fully resolved EvirankConfig instance.

    Raises:
        pydantic.ValidationError: If any budget or weight is out of range.
    """
    if yaml_path:
        import yaml
        with open(yaml_path, encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        return EvirankConfig(**overrides)
    return EvirankConfig()
