"""Shadbala totals, ratios and strength levels."""

from __future__ import annotations

import math

import pytest

from kundliengine.engine.vedic import (
    REQUIRED_STRENGTH,
    ShadbalaAggregator,
    ShadbalaComponent,
    ShadbalaKind,
    StrengthLevel,
    StrengthThresholds,
    required_strength_for,
)
from kundliengine.errors import ConfigurationError, OutOfRange

AGGREGATOR = ShadbalaAggregator()

VALUES = {
    ShadbalaKind.STHANA: 12.1,
    ShadbalaKind.DIK: 33.3,
    ShadbalaKind.KALA: 0.7,
    ShadbalaKind.CHESHTA: 59.9,
    ShadbalaKind.NAISARGIKA: 45.5,
    ShadbalaKind.DRIK: 1.0,
}


def test_total_is_independent_of_component_order() -> None:
    forward = [ShadbalaComponent(kind, value) for kind, value in VALUES.items()]
    backward = list(reversed(forward))
    one = AGGREGATOR.aggregate("Sun", forward, 390.0)
    two = AGGREGATOR.aggregate("Sun", backward, 390.0)
    assert one.total_shadbala == two.total_shadbala == math.fsum(VALUES.values())
    assert [c.kind for c in two.components] == list(ShadbalaKind)


def test_mapping_input_accepts_labels() -> None:
    strength = AGGREGATOR.aggregate(
        "Moon",
        {"Sthana Bala": 60, "dig": 60, "kala": 60, "chesta": 60, "natural": 60, "drig_bala": 60},
        360.0,
    )
    assert strength.total_shadbala == 360.0
    assert strength.component("Cheshta Bala").value == 60.0


def test_ratio_at_threshold_reaches_higher_level(balanced_components: list[ShadbalaComponent]) -> None:
    strength = AGGREGATOR.aggregate("Moon", balanced_components, required_strength_for("Moon"))
    assert strength.strength_ratio == 1.0
    assert strength.strength_level is StrengthLevel.STRONG


def test_ratio_just_below_threshold_stays_lower() -> None:
    components = [ShadbalaComponent(kind, 60.0) for kind in ShadbalaKind][:-1]
    components.append(ShadbalaComponent(ShadbalaKind.DRIK, 59.64))
    strength = AGGREGATOR.aggregate("Moon", components, 360.0)
    assert strength.strength_ratio == pytest.approx(0.999)
    assert strength.strength_level is StrengthLevel.MODERATE


@pytest.mark.parametrize(
    ("required", "level"),
    [
        (240.0, StrengthLevel.VERY_STRONG),
        (360.0, StrengthLevel.STRONG),
        (480.0, StrengthLevel.MODERATE),
        (720.0, StrengthLevel.WEAK),
        (721.0, StrengthLevel.VERY_WEAK),
    ],
)
def test_strength_levels(
    balanced_components: list[ShadbalaComponent], required: float, level: StrengthLevel
) -> None:
    assert AGGREGATOR.aggregate("Sun", balanced_components, required).strength_level is level


def test_missing_component_rejected(balanced_components: list[ShadbalaComponent]) -> None:
    with pytest.raises(OutOfRange):
        AGGREGATOR.aggregate("Sun", balanced_components[:5], 390.0)


def test_duplicate_component_rejected(balanced_components: list[ShadbalaComponent]) -> None:
    with pytest.raises(OutOfRange):
        AGGREGATOR.aggregate("Sun", balanced_components + [balanced_components[0]], 390.0)


@pytest.mark.parametrize("value", [-0.1, 60.5, math.nan])
def test_component_outside_range_rejected(value: float) -> None:
    with pytest.raises(OutOfRange):
        ShadbalaComponent(ShadbalaKind.KALA, value)


def test_unknown_kind_rejected() -> None:
    with pytest.raises(OutOfRange):
        ShadbalaKind.parse("ayana")


@pytest.mark.parametrize("required", [0.0, -5.0, math.inf])
def test_non_positive_requirement_rejected(
    balanced_components: list[ShadbalaComponent], required: float
) -> None:
    with pytest.raises(ConfigurationError):
        AGGREGATOR.aggregate("Sun", balanced_components, required)


def test_thresholds_must_decrease() -> None:
    with pytest.raises(ConfigurationError):
        StrengthThresholds(very_strong=1.0, strong=1.0)
    with pytest.raises(ConfigurationError):
        StrengthThresholds(weak=-0.1)


def test_custom_thresholds(balanced_components: list[ShadbalaComponent]) -> None:
    strict = ShadbalaAggregator(StrengthThresholds(2.0, 1.2, 0.9, 0.6))
    assert strict.aggregate("Moon", balanced_components, 360.0).strength_level is StrengthLevel.MODERATE


def test_required_strength_table() -> None:
    assert REQUIRED_STRENGTH["mercury"] == 420.0
    assert required_strength_for("Surya") == 390.0
    assert required_strength_for("Shani", {"Saturn": 250.0}) == 250.0
    with pytest.raises(ConfigurationError):
        required_strength_for("Rahu")


def test_aggregate_chart_summary() -> None:
    per_planet = {
        "Sun": {kind: 60.0 for kind in ShadbalaKind},
        "Mercury": {kind: 30.0 for kind in ShadbalaKind},
        "Saturn": {kind: 50.0 for kind in ShadbalaKind},
    }
    summary = AGGREGATOR.aggregate_chart(per_planet)
    assert [s.planet for s in summary.strengths] == ["Sun", "Mercury", "Saturn"]
    assert summary.strongest.planet == "Saturn"
    assert summary.weakest.planet == "Mercury"
    assert [s.planet for s in summary.weak_planets] == ["Mercury"]
    assert [s.planet for s in summary.strong_planets] == ["Saturn"]
    assert summary.strength_for("Budha").strength_level is StrengthLevel.VERY_WEAK
    assert summary.strength_for("Moon") is None
    assert summary.average_ratio == pytest.approx((360 / 390 + 180 / 420 + 300 / 300) / 3)


def test_aggregate_chart_uses_configured_constants() -> None:
    components = {kind: 30.0 for kind in ShadbalaKind}
    summary = ShadbalaAggregator(required_strengths={"Sun": 180.0}).aggregate_chart({"Sun": components})
    assert summary.strengths[0].strength_ratio == 1.0
    override = AGGREGATOR.aggregate_chart({"Sun": components}, constants={"sun": 90.0})
    assert override.strengths[0].strength_level is StrengthLevel.VERY_STRONG
    with pytest.raises(ConfigurationError):
        AGGREGATOR.aggregate_chart({"Rahu": components})


def test_planetary_strength_views(balanced_components: list[ShadbalaComponent]) -> None:
    strength = AGGREGATOR.aggregate("Jupiter", balanced_components, 390.0)
    assert strength.vedic_name == "Guru"
    assert strength.percentage_strength == pytest.approx(100.0)
    assert strength.rupas == pytest.approx(6.0)
    payload = strength.to_dict()
    assert payload["strength_level"] == "moderate"
    assert payload["components"]["drik"] == 60.0
    assert StrengthLevel.VERY_STRONG.label == "Very Strong"
    assert ShadbalaKind.DIK.english == "directional"
