"""Aspect catalogue and classifier."""

from __future__ import annotations

from .classifier import Aspect, AspectClassifier, AspectMatch
from .policy import (
    ASPECT_PRIORITY,
    DEFAULT_ORB_TABLE,
    DEFAULT_ORBS,
    AspectNature,
    AspectSpec,
    AspectType,
    OrbTable,
    nature_of,
)

__all__ = [
    "ASPECT_PRIORITY",
    "DEFAULT_ORB_TABLE",
    "DEFAULT_ORBS",
    "Aspect",
    "AspectClassifier",
    "AspectMatch",
    "AspectNature",
    "AspectSpec",
    "AspectType",
    "OrbTable",
    "nature_of",
]
