"""
Foundation recommendation tests
"""

import pytest

from structcalc.models import FoundationType
from structcalc.recommendation import (
    BuildingSummary,
    ConstructabilityFactors,
    SoilConditions,
    pressure_ratio,
    recommend_foundation_type,
    recommend_optimal_foundation,
)
from structcalc.soil import bearing_capacity_for

AREA = 100.0  # m²


def _load_for_ratio(ratio: float, soil_type: str) -> float:
    """Total load (N) giving the requested pressure ratio on AREA"""
    return ratio * bearing_capacity_for(soil_type) * 1000 * AREA


@pytest.mark.parametrize("soil_type", [
    "Soft clay", "Medium clay", "Dense sand", "Hard rock", "Peat", "Fill (compacted)", "made up ground", "",
])
@pytest.mark.parametrize("height", [5.0, 30.0, 80.0])
def test_piles_whenever_ratio_above_limit(soil_type, height):
    load = _load_for_ratio(1.6, soil_type)
    assert recommend_foundation_type(load, AREA, soil_type, height) == FoundationType.PILE_FOUNDATION, \
        f"Ratio 1.6 on '{soil_type}' must recommend piles"


@pytest.mark.parametrize("ratio, height, expected", [
    (0.2, 10.0, FoundationType.SPREAD_FOOTING),
    (0.5, 10.0, FoundationType.STRIP_FOOTING),
    (0.8, 10.0, FoundationType.MAT_FOUNDATION),
    (1.2, 10.0, FoundationType.MAT_FOUNDATION),
    (0.6, 50.0, FoundationType.MAT_FOUNDATION),
    (0.9, 50.0, FoundationType.PILE_FOUNDATION),
])
def test_pressure_ratio_rules(ratio, height, expected):
    load = _load_for_ratio(ratio, "Medium clay")
    assert recommend_foundation_type(load, AREA, "Medium clay", height) == expected


def test_pressure_ratio_needs_positive_area():
    with pytest.raises(ValueError):
        pressure_ratio(1e6, 0.0, "Medium clay")


def test_default_recommendation_has_rationale():
    print("\n" + "="*80)
    print("TEST: Optimal foundation, lightly loaded building on dense sand")
    print("="*80)

    building = BuildingSummary(total_load=_load_for_ratio(0.2, "Dense sand"), area=AREA, height=10.0,
                               column_spacing=5.0, maximum_column_load=500_000.0)
    rec = recommend_optimal_foundation(building, SoilConditions(soil_type="Dense sand"))

    print(f"  {rec.foundation_type.value} (alternative {rec.alternative_type.value}), "
          f"cost impact {rec.estimated_cost_impact}")
    print(f"  Rationale: {rec.rationale}")

    assert rec.foundation_type == FoundationType.SPREAD_FOOTING
    assert rec.alternative_type == FoundationType.STRIP_FOOTING
    assert rec.estimated_cost_impact == "low"
    assert rec.rationale == ("Soil bearing capacity adequate for isolated footings",)
    assert rec.dimensions is not None
    assert rec.dimensions.length == rec.dimensions.width
    assert rec.dimensions.depth >= 0.3


def test_organic_soil_forces_piles():
    building = BuildingSummary(total_load=_load_for_ratio(0.2, "Peat"), area=AREA, height=10.0)
    rec = recommend_optimal_foundation(building, SoilConditions(soil_type="Peat"))

    assert rec.foundation_type == FoundationType.PILE_FOUNDATION
    assert rec.alternative_type == FoundationType.MAT_FOUNDATION
    assert rec.estimated_cost_impact == "high"
    assert any("organic layer" in c for c in rec.special_considerations)


def test_high_groundwater_in_sand_switches_to_piles():
    building = BuildingSummary(total_load=_load_for_ratio(0.2, "Loose sand"), area=AREA, height=10.0)
    rec = recommend_optimal_foundation(building, SoilConditions(soil_type="Loose sand", groundwater_level=0.5))

    assert rec.foundation_type == FoundationType.PILE_FOUNDATION
    assert rec.alternative_type == FoundationType.SPREAD_FOOTING
    assert any("waterproofing" in c for c in rec.special_considerations)


def test_no_equipment_access_avoids_piles():
    building = BuildingSummary(total_load=_load_for_ratio(2.0, "Medium clay"), area=AREA, height=10.0)
    rec = recommend_optimal_foundation(
        building,
        SoilConditions(soil_type="Medium clay"),
        ConstructabilityFactors(access_for_equipment=False),
    )

    assert rec.foundation_type == FoundationType.MAT_FOUNDATION
    assert rec.alternative_type == FoundationType.PILE_FOUNDATION
    assert "Limited site access for pile driving equipment" in rec.rationale


def test_industrial_clay_prefers_piles():
    building = BuildingSummary(total_load=_load_for_ratio(0.6, "Stiff clay"), area=AREA, height=10.0,
                               building_type="industrial")
    rec = recommend_optimal_foundation(building, SoilConditions(soil_type="Stiff clay"))

    assert rec.foundation_type == FoundationType.PILE_FOUNDATION
    assert any("machinery" in c for c in rec.special_considerations)
