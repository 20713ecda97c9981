"""Configuration models and helpers for kundliengine settings."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..aspects.classifier import AspectClassifier
from ..aspects.policy import DEFAULT_ORBS, AspectType, OrbTable
from ..chart.composite import CompositeChartBuilder
from ..core.bodies import SYNASTRY_WEIGHTS
from ..engine.vedic.constants import REQUIRED_STRENGTH
from ..engine.vedic.shadbala import ShadbalaAggregator, StrengthThresholds
from ..errors import ConfigurationError
from ..synastry.engine import SynastryEngine

__all__ = [
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "AspectsCfg",
    "SynastryCfg",
    "ThresholdsCfg",
    "ShadbalaCfg",
    "Settings",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]

LOG = logging.getLogger(__name__)

CURRENT_SETTINGS_SCHEMA_VERSION = 1

# -------------------- Settings Schema --------------------


def _finite_number(label: str, value: object) -> float:
    try:
        numeric = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number, got {value!r}") from None
    if not math.isfinite(numeric):
        raise ValueError(f"{label} must be finite, got {value!r}")
    return numeric


class AspectsCfg(BaseModel):
    """Maximum orb in degrees for each aspect type."""

    conjunction: float = DEFAULT_ORBS[AspectType.CONJUNCTION]
    opposition: float = DEFAULT_ORBS[AspectType.OPPOSITION]
    trine: float = DEFAULT_ORBS[AspectType.TRINE]
    square: float = DEFAULT_ORBS[AspectType.SQUARE]
    sextile: float = DEFAULT_ORBS[AspectType.SEXTILE]

    @field_validator("*", mode="before")
    @classmethod
    def _reject_negative_orb(cls, value: float) -> float:
        numeric = _finite_number("orb", value)
        if numeric < 0.0:
            raise ValueError(f"orb must be non-negative, got {value!r}")
        return numeric

    def orb_table(self) -> OrbTable:
        return OrbTable.from_mapping(self.model_dump())


class SynastryCfg(BaseModel):
    """Graha ranking weights used for key aspects and compatibility scoring."""

    weights: Dict[str, float] = Field(default_factory=lambda: dict(SYNASTRY_WEIGHTS))

    @field_validator("weights", mode="before")
    @classmethod
    def _check_weights(cls, data: Dict[str, float] | object) -> Dict[str, float] | object:
        if isinstance(data, dict):
            checked: Dict[str, float] = {}
            for name, value in data.items():
                numeric = _finite_number(f"weight for {name!r}", value)
                if numeric < 0.0:
                    raise ValueError(f"weight for {name!r} must be non-negative, got {value!r}")
                checked[str(name)] = numeric
            return checked
        return data


class ThresholdsCfg(BaseModel):
    """Strength-ratio lower bounds for each level."""

    very_strong: float = 1.5
    strong: float = 1.0
    moderate: float = 0.75
    weak: float = 0.5


class ShadbalaCfg(BaseModel):
    """Required strengths in Virupas and level thresholds."""

    required_strength: Dict[str, float] = Field(default_factory=lambda: dict(REQUIRED_STRENGTH))
    thresholds: ThresholdsCfg = Field(default_factory=ThresholdsCfg)

    @field_validator("required_strength", mode="before")
    @classmethod
    def _check_required(cls, data: Dict[str, float] | object) -> Dict[str, float] | object:
        if isinstance(data, dict):
            checked: Dict[str, float] = {}
            for name, value in data.items():
                numeric = _finite_number(f"required strength for {name!r}", value)
                if numeric <= 0.0:
                    raise ValueError(
                        f"required strength for {name!r} must be positive, got {value!r}"
                    )
                checked[str(name)] = numeric
            return checked
        return data


class Settings(BaseModel):
    """Root settings document persisted as YAML."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        description="Version marker used to upgrade older settings files.",
    )
    aspects: AspectsCfg = Field(default_factory=AspectsCfg)
    synastry: SynastryCfg = Field(default_factory=SynastryCfg)
    shadbala: ShadbalaCfg = Field(default_factory=ShadbalaCfg)

    def build_classifier(self) -> AspectClassifier:
        return AspectClassifier(orb_table=self.aspects.orb_table())

    def build_synastry_engine(self) -> SynastryEngine:
        return SynastryEngine(classifier=self.build_classifier(), weights=self.synastry.weights)

    def build_composite_builder(self) -> CompositeChartBuilder:
        return CompositeChartBuilder(classifier=self.build_classifier())

    def build_aggregator(self) -> ShadbalaAggregator:
        thresholds = StrengthThresholds(**self.shadbala.thresholds.model_dump())
        return ShadbalaAggregator(
            thresholds=thresholds,
            required_strengths=self.shadbala.required_strength,
        )


# -------------------- Persistence --------------------


def get_config_home() -> Path:
    """Return the directory holding the user's kundliengine configuration."""

    override = os.environ.get("KUNDLIENGINE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".kundliengine"


def config_path() -> Path:
    return get_config_home() / "settings.yaml"


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    """Return a normalised schema version value with sane bounds."""

    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return CURRENT_SETTINGS_SCHEMA_VERSION
    return max(1, value)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing.

    Malformed YAML and values rejected by validation raise
    :class:`~kundliengine.errors.ConfigurationError`.
    """

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    try:
        with source_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"cannot parse settings file {source_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"settings file {source_path} must contain a mapping")
    version = _coerce_schema_version(raw.get("schema_version"))
    if version > CURRENT_SETTINGS_SCHEMA_VERSION:
        LOG.warning(
            "settings file %s has schema_version %d, newer than supported %d",
            source_path,
            version,
            CURRENT_SETTINGS_SCHEMA_VERSION,
        )
    raw["schema_version"] = version
    try:
        return Settings(**raw)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid settings in {source_path}: {exc}") from exc
