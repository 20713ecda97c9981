"""Vedic planetary relationship and strength analysis.

The package turns chart placements into ecliptic longitudes, classifies the
aspects between them, compares two charts (synastry), builds midpoint
composite charts and aggregates Shadbala strength.  Every engine is a small
immutable value; construct one (or obtain it from
:class:`kundliengine.config.Settings`) and pass it where it is needed.
"""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

from .aspects import (
    DEFAULT_ORB_TABLE,
    Aspect,
    AspectClassifier,
    AspectMatch,
    AspectNature,
    AspectType,
    OrbTable,
    nature_of,
)
from .chart.composite import CompositeChart, CompositeChartBuilder, CompositePlanet
from .chart.positions import NatalChart, PlanetPosition, resolve
from .core.signs import sign_index_for
from .engine.vedic import (
    PlanetaryStrength,
    ShadbalaAggregator,
    ShadbalaComponent,
    ShadbalaKind,
    ShadbalaSummary,
    StrengthLevel,
    StrengthThresholds,
)
from .errors import ConfigurationError, KundliEngineError, OutOfRange
from .synastry import SynastryEngine, SynastryResult, compatibility_score

try:
    __version__ = version("kundli-engine")
except PackageNotFoundError:  # pragma: no cover - editable checkouts without metadata
    __version__ = "0.0.0"

LOG = logging.getLogger(__name__)
LOG.addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Aspect",
    "AspectClassifier",
    "AspectMatch",
    "AspectNature",
    "AspectType",
    "CompositeChart",
    "CompositeChartBuilder",
    "CompositePlanet",
    "ConfigurationError",
    "DEFAULT_ORB_TABLE",
    "KundliEngineError",
    "NatalChart",
    "OrbTable",
    "OutOfRange",
    "PlanetPosition",
    "PlanetaryStrength",
    "ShadbalaAggregator",
    "ShadbalaComponent",
    "ShadbalaKind",
    "ShadbalaSummary",
    "StrengthLevel",
    "StrengthThresholds",
    "SynastryEngine",
    "SynastryResult",
    "compatibility_score",
    "nature_of",
    "resolve",
    "sign_index_for",
]
