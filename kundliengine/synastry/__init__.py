"""Relationship analysis between two natal charts."""

from __future__ import annotations

from .engine import SynastryEngine, SynastryResult, pairwise_separation
from .scoring import (
    AspectRecord,
    CompatibilityRating,
    SynastrySummary,
    communication_indicators,
    compatibility_score,
    rating_for,
    romantic_indicators,
    stability_indicators,
    summarize,
)

__all__ = [
    "AspectRecord",
    "CompatibilityRating",
    "SynastryEngine",
    "SynastryResult",
    "SynastrySummary",
    "communication_indicators",
    "compatibility_score",
    "pairwise_separation",
    "rating_for",
    "romantic_indicators",
    "stability_indicators",
    "summarize",
]
