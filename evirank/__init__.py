"""
Evirank: Chunking and Evidence Ranking for Grounded Content Generation
======================================================================

Evirank turns long-form source text into a ranked, deduplicated pool of
short passages that content generation can cite, and flags the passages
that need a human reviewer before use.

Architecture Overview:
    Documents → Chunk → Score → Dedupe/Rerank → Review Gate

Modules:
    - ingest:    Length estimation, segmentation, structure detection, chunking
    - scoring:   Authority / similarity / recency / license sub-scores + confidence
    - rank:      Reranking, deduplication, review gate, scoring report
    - pipeline:  End-to-end orchestrator
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
