"""Persisted YAML settings and environment-driven runtime settings."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from kundliengine.aspects import AspectType
from kundliengine.chart.positions import PlanetPosition
from kundliengine.config import (
    CURRENT_SETTINGS_SCHEMA_VERSION,
    AspectsCfg,
    Settings,
    config_path,
    default_settings,
    load_settings,
    save_settings,
)
from kundliengine.engine.vedic import ShadbalaKind, StrengthLevel
from kundliengine.errors import ConfigurationError
from kundliengine.runtime_config import RuntimeSettings, configure_logging, get_runtime_settings


def test_defaults_match_classical_tables() -> None:
    settings = default_settings()
    assert settings.schema_version == CURRENT_SETTINGS_SCHEMA_VERSION
    assert settings.aspects.conjunction == 10.0
    assert settings.aspects.sextile == 6.0
    assert settings.synastry.weights["venus"] == 9.0
    assert settings.shadbala.required_strength["mercury"] == 420.0


def test_missing_file_is_created_with_defaults(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "settings.yaml"
    settings = load_settings(target)
    assert target.exists()
    assert settings == default_settings()


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    settings = default_settings()
    settings.aspects.trine = 5.0
    settings.synastry.weights["mercury"] = 9.5
    target = save_settings(settings, tmp_path / "settings.yaml")
    loaded = load_settings(target)
    assert loaded.aspects.trine == 5.0
    assert loaded.synastry.weights["mercury"] == 9.5


def test_config_home_follows_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KUNDLIENGINE_HOME", str(tmp_path))
    assert config_path() == tmp_path / "settings.yaml"
    save_settings(default_settings())
    assert (tmp_path / "settings.yaml").exists()


def test_negative_orb_rejected() -> None:
    with pytest.raises(ValidationError):
        AspectsCfg(trine=-1.0)


def test_invalid_yaml_raises_configuration_error(tmp_path: Path) -> None:
    target = tmp_path / "settings.yaml"
    target.write_text("aspects: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(target)


def test_non_mapping_document_rejected(tmp_path: Path) -> None:
    target = tmp_path / "settings.yaml"
    target.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(target)


def test_validation_failure_raises_configuration_error(tmp_path: Path) -> None:
    target = tmp_path / "settings.yaml"
    target.write_text(yaml.safe_dump({"shadbala": {"required_strength": {"sun": 0}}}), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(target)


@pytest.mark.parametrize(
    "document",
    [
        {"aspects": {"trine": None}},
        {"aspects": {"square": [8]}},
        {"aspects": {"sextile": float("nan")}},
        {"synastry": {"weights": {"sun": None}}},
        {"synastry": {"weights": {"venus": float("nan")}}},
        {"shadbala": {"required_strength": {"sun": [1]}}},
        {"shadbala": {"required_strength": {"moon": {"value": 360}}}},
        {"shadbala": {"required_strength": {"mars": float("inf")}}},
    ],
)
def test_non_numeric_or_non_finite_values_raise_configuration_error(
    tmp_path: Path, document: dict[str, object]
) -> None:
    target = tmp_path / "settings.yaml"
    target.write_text(yaml.safe_dump(document), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(target)


def test_yaml_nan_weight_rejected(tmp_path: Path) -> None:
    target = tmp_path / "settings.yaml"
    target.write_text("synastry:\n  weights:\n    sun: .nan\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(target)


def test_newer_schema_version_logs_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    target = tmp_path / "settings.yaml"
    target.write_text(yaml.safe_dump({"schema_version": 99}), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="kundliengine.config.settings"):
        settings = load_settings(target)
    assert settings.schema_version == 99
    assert "newer than supported" in caplog.text


def test_factories_apply_configured_values() -> None:
    settings = Settings.model_validate(
        {
            "aspects": {"opposition": 1.0},
            "synastry": {"weights": {"mercury": 30.0}},
            "shadbala": {"required_strength": {"sun": 180.0}},
        }
    )
    classifier = settings.build_classifier()
    assert classifier.orb_table.max_orb(AspectType.OPPOSITION) == 1.0
    assert classifier.classify(0.0, 177.0) is None

    engine = settings.build_synastry_engine()
    venus = [PlanetPosition.from_longitude("Venus", 15.0)]
    mars = [PlanetPosition.from_longitude("Mars", 197.0)]
    assert engine.compute(venus, mars).aspects == ()

    composite = settings.build_composite_builder()
    assert composite.classifier.orb_table.max_orb(AspectType.OPPOSITION) == 1.0

    aggregator = settings.build_aggregator()
    summary = aggregator.aggregate_chart({"Sun": {kind: 30.0 for kind in ShadbalaKind}})
    assert summary.strengths[0].strength_level is StrengthLevel.STRONG


def test_misordered_thresholds_rejected_when_building() -> None:
    settings = Settings.model_validate({"shadbala": {"thresholds": {"strong": 2.0}}})
    with pytest.raises(ConfigurationError):
        settings.build_aggregator()


def test_runtime_settings_read_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "custom.yaml"
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("KUNDLI_SETTINGS_FILE", str(target))
    runtime = RuntimeSettings()
    assert runtime.log_level == "DEBUG"
    assert runtime.settings_file == target
    first = runtime.persisted()
    assert target.exists()
    first.aspects.trine = 1.0
    assert runtime.persisted().aspects.trine == 8.0
    runtime.clear_persisted_cache()
    assert runtime.persisted(fresh=True) == default_settings()


def test_runtime_settings_reject_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        RuntimeSettings()


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = configure_logging("info")
    assert logger.name == "kundliengine"
    assert logger.level == logging.INFO
    with pytest.raises(ConfigurationError):
        configure_logging("loud")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    get_runtime_settings.cache_clear()
    try:
        assert configure_logging().level == logging.ERROR
    finally:
        get_runtime_settings.cache_clear()
        logger.setLevel(logging.NOTSET)
