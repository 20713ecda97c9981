"""Midpoint composite chart construction."""

from __future__ import annotations

import pytest

from kundliengine.aspects import AspectClassifier, AspectType, OrbTable
from kundliengine.chart.composite import CompositeChartBuilder, equal_house
from kundliengine.chart.positions import NatalChart, PlanetPosition
from kundliengine.errors import OutOfRange


def _chart(ascendant: float, **longitudes: float) -> NatalChart:
    return NatalChart(
        planets=tuple(PlanetPosition.from_longitude(name, lon) for name, lon in longitudes.items()),
        ascendant=ascendant,
    )


def test_midpoint_on_short_arc_across_seam() -> None:
    builder = CompositeChartBuilder()
    composite = builder.build(_chart(0.0, Sun=350.0), _chart(0.0, Sun=20.0))
    assert composite.planet("Sun").longitude == pytest.approx(5.0)


def test_midpoint_without_wrap() -> None:
    composite = CompositeChartBuilder().build(_chart(10.0, Moon=100.0), _chart(50.0, Moon=140.0))
    assert composite.planet("Moon").longitude == pytest.approx(120.0)
    assert composite.ascendant == pytest.approx(30.0)


def test_ascendant_uses_midpoint_rule(chart_a: NatalChart, chart_b: NatalChart) -> None:
    composite = CompositeChartBuilder().build(chart_a, chart_b)
    # 5° and 355° straddle the seam: the short-arc midpoint is 0°.
    assert composite.ascendant == pytest.approx(0.0)
    assert composite.ascendant_sign.name == "Aries"


def test_planets_missing_from_one_chart_are_omitted(chart_a: NatalChart, chart_b: NatalChart) -> None:
    composite = CompositeChartBuilder().build(chart_a, chart_b)
    names = [planet.name for planet in composite.planets]
    assert names == ["Sun", "Moon"]
    assert composite.planet("Venus") is None
    assert composite.planet("Mars") is None


def test_no_shared_planets_gives_empty_composite() -> None:
    composite = CompositeChartBuilder().build(_chart(0.0, Sun=10.0), _chart(0.0, Moon=10.0))
    assert composite.planets == ()
    assert composite.aspects == ()


def test_equal_houses_count_from_ascendant_degree() -> None:
    assert equal_house(15.0, 10.0) == 1
    assert equal_house(40.0, 10.0) == 2
    assert equal_house(5.0, 10.0) == 12
    composite = CompositeChartBuilder().build(
        _chart(0.0, Sun=0.0, Moon=90.0), _chart(20.0, Sun=20.0, Moon=110.0)
    )
    assert composite.ascendant == pytest.approx(10.0)
    assert composite.planet("Sun").house == 1
    assert composite.planet("Moon").house == 4
    assert [p.name for p in composite.planets_in_house(4)] == ["Moon"]
    with pytest.raises(OutOfRange):
        composite.planets_in_house(0)


def test_composite_aspects_cover_unordered_pairs() -> None:
    chart_one = _chart(0.0, Sun=0.0, Moon=120.0, Mars=180.0)
    chart_two = _chart(0.0, Sun=0.0, Moon=120.0, Mars=180.0)
    composite = CompositeChartBuilder().build(chart_one, chart_two)
    pairs = [(a.planet_a, a.planet_b, a.type) for a in composite.aspects]
    assert pairs == [
        ("Sun", "Moon", AspectType.TRINE),
        ("Sun", "Mars", AspectType.OPPOSITION),
        ("Moon", "Mars", AspectType.SEXTILE),
    ]


def test_builder_uses_injected_classifier() -> None:
    narrow = AspectClassifier(OrbTable.from_mapping({"conjunction": 1.0}))
    composite = CompositeChartBuilder(narrow).build(
        _chart(0.0, Sun=0.0, Moon=5.0), _chart(0.0, Sun=0.0, Moon=5.0)
    )
    assert composite.aspects == ()


def test_composite_placement_details() -> None:
    composite = CompositeChartBuilder().build(_chart(0.0, Sun=40.0), _chart(0.0, Sun=50.0))
    sun = composite.planet("sun")
    assert sun.sign.name == "Taurus"
    assert sun.sign_index == 1
    assert sun.degree_in_sign == pytest.approx(15.0)
    assert sun.nakshatra.name == "Rohini"
    assert 1 <= sun.pada <= 4
    assert sun.to_position().longitude == pytest.approx(45.0)
    payload = composite.to_dict()
    assert payload["planets"][0]["sign"] == "Taurus"
    assert payload["planets"][0]["symbol"] == "Su"
    assert composite.ascendant_nakshatra.name == "Ashwini"
    assert payload["ascendant_nakshatra"]["name"] == "Ashwini"
    assert payload["ascendant_nakshatra"]["pada"] == 1

