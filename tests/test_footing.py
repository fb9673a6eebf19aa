"""
Foundation designer tests

Covers:
1. Spread footing bearing check after the resize loop (concentric,
   eccentric, uplift) and the attempt bound
2. Strip footing width and moment warning
3. Mat foundation warnings and minimum thickness
4. Pile group count, efficiency, cap and settlement cap
"""

import math

import pytest

from structcalc.config import EngineSettings
from structcalc.errors import FoundationConvergenceError
from structcalc.footing_calculator import (
    ColumnLoadInput,
    FoundationDesigner,
    design_mat_foundation,
    design_spread_footing,
)
from structcalc.models import FoundationType, SoilProperties


def test_concentric_spread_footing(designer, column):
    print("\n" + "="*80)
    print("TEST: Concentric spread footing, P = 1000 kN, q = 300 kPa (FS 3)")
    print("="*80)

    footing = designer.design_spread_footing(column, 1_000_000.0, 0.0, 300.0)

    print(f"  {footing.length:.1f} x {footing.width:.1f} x {footing.depth:.2f} m, "
          f"q_max = {footing.max_soil_pressure / 1000:.1f} kPa")
    print(f"  {footing.reinforcement_details}")

    assert footing.foundation_type == FoundationType.SPREAD_FOOTING
    assert footing.length == footing.width
    assert math.isclose(footing.soil_bearing_capacity, 100_000.0)
    assert footing.max_soil_pressure <= footing.soil_bearing_capacity
    assert footing.depth >= 0.3
    assert footing.design_attempts == 1
    assert footing.reinforcement_details.startswith("Governing mode:")
    assert "mm²" in footing.reinforcement_details
    assert footing.reinforcement.bar_count >= 2


def test_eccentric_footing_resizes_until_bearing_passes(designer, column):
    footing = designer.design_spread_footing(column, 1_000_000.0, 300_000.0, 300.0)

    print(f"\n  Eccentric footing: B = {footing.width:.1f} m after {footing.design_attempts} attempts")
    assert footing.design_attempts > 1, "First trial size overstresses the soil"
    assert footing.max_soil_pressure <= footing.soil_bearing_capacity
    assert footing.min_soil_pressure >= 0.0


@pytest.mark.parametrize("ratio", [1.0, 1.5, 2.0, 4.0, 9.5])
@pytest.mark.parametrize("eccentricity", [0.0, 0.1, 0.3, 0.6])
def test_resize_loop_terminates_within_bound(designer, column, ratio, eccentricity):
    """Pressure ratio is P / (0.4 m column footprint × design capacity)"""
    capacity_kpa = 200.0
    design_capacity = capacity_kpa * 1000 / designer.settings.bearing_safety_factor
    axial = ratio * design_capacity * 4.0  # ratio over a 2 m square first guess
    footing = designer.design_spread_footing(column, axial, axial * eccentricity, capacity_kpa)

    assert footing.design_attempts <= designer.settings.max_resize_attempts
    assert footing.max_soil_pressure <= design_capacity * (1 + 1e-9)


def test_uplift_is_reported(designer, column):
    footing = designer.design_spread_footing(column, 500_000.0, 500_000.0, 300.0)

    assert any("uplift" in w for w in footing.warnings)
    assert footing.width >= 6 * 1.0, "Uplift redesign targets B >= 6e"
    assert footing.max_soil_pressure <= footing.soil_bearing_capacity


def test_resize_bound_raises_convergence_error(column):
    designer = FoundationDesigner(settings=EngineSettings(max_resize_attempts=1))
    with pytest.raises(FoundationConvergenceError) as excinfo:
        designer.design_spread_footing(column, 1_000_000.0, 300_000.0, 300.0)

    assert excinfo.value.attempts == 1
    assert excinfo.value.pressure_ratio > 1.0


def test_flexural_steel_follows_moment(designer):
    d = 0.6 - 0.075
    light = designer._design_flexural_steel(0.0, 3.0, 0.6)
    heavy = designer._design_flexural_steel(1.5e6, 3.0, 0.6)
    heavier = designer._design_flexural_steel(3.0e6, 3.0, 0.6)

    assert light.required_area == 0.0
    assert math.isclose(light.minimum_area, 0.0018 * 3.0 * 0.6)
    assert light.provided_area >= light.minimum_area, "Shrinkage steel governs without moment"

    assert math.isclose(heavy.required_area, 1.5e6 / (0.9 * 500e6 * 0.9 * d))
    assert heavy.required_area > heavy.minimum_area
    assert heavy.provided_area >= heavy.required_area
    assert math.isclose(heavier.required_area, 2 * heavy.required_area)


def test_spread_footing_rejects_bad_inputs(designer, column):
    with pytest.raises(ValueError):
        designer.design_spread_footing(column, 0.0, 0.0, 300.0)
    with pytest.raises(ValueError):
        designer.design_spread_footing(column, 1e6, 0.0, 0.0)


def test_module_level_entry_point(column):
    footing = design_spread_footing(column, 800_000.0, 0.0, 250.0)
    assert footing.max_soil_pressure <= footing.soil_bearing_capacity


def test_strip_footing(designer, column):
    print("\n" + "="*80)
    print("TEST: Strip footing under three 500 kN columns, 10 m long, q = 200 kPa")
    print("="*80)

    loads = [ColumnLoadInput(axial_load=500_000.0, x=x, section=column) for x in (0.0, 5.0, 10.0)]
    strip = designer.design_strip_footing(loads, 10.0, 200.0)

    print(f"  Width {strip.width:.1f} m, thickness {strip.depth:.2f} m ({strip.governing_mode})")
    assert strip.foundation_type == FoundationType.STRIP_FOOTING
    assert math.isclose(strip.width, 1.0)
    assert strip.depth == 0.4
    assert strip.governing_mode == "minimum thickness"
    assert strip.max_soil_pressure <= strip.soil_bearing_capacity
    assert strip.warnings == ()

    with_moment = designer.design_strip_footing(
        [ColumnLoadInput(axial_load=500_000.0, moment=20_000.0)], 5.0, 200.0)
    assert any("moments are ignored" in w for w in with_moment.warnings)


def test_mat_foundation(designer, column):
    loads = [ColumnLoadInput(axial_load=225_000.0, x=i * 5.0, z=j * 5.0, section=column)
             for i in range(5) for j in range(4)]
    mat = designer.design_mat_foundation(20.0, 15.0, 4_500_000.0, loads, 150.0)

    print(f"\n  Mat {mat.length:.0f} x {mat.width:.0f} x {mat.depth:.2f} m, warnings: {mat.warnings}")
    assert mat.foundation_type == FoundationType.MAT_FOUNDATION
    assert mat.depth >= 0.5
    assert math.isclose(mat.max_soil_pressure, 15_000.0)
    assert any("Individual footings" in w for w in mat.warnings), "Lightly loaded mat should be flagged"


def test_mat_without_columns_raises():
    with pytest.raises(ValueError, match="No columns found for mat foundation design"):
        design_mat_foundation(20.0, 15.0, 4_500_000.0, [], 150.0)


def test_pile_group_in_soft_clay(designer, column, soft_clay):
    print("\n" + "="*80)
    print("TEST: Pile group, P = 2000 kN in soft clay")
    print("="*80)

    piles = designer.design_pile_foundation(column, 2_000_000.0, 0.0, soft_clay)
    group = piles.pile_group

    print(f"  {group.pile_count} piles ({group.rows}x{group.columns}), L = {group.length:.1f} m, "
          f"efficiency {group.group_efficiency:.3f}, FS {group.group_safety_factor:.2f}")
    print(f"  {piles.reinforcement_details}")

    assert piles.foundation_type == FoundationType.PILE_FOUNDATION
    assert group.length == 15.0
    assert group.pile_count == group.rows * group.columns
    assert group.pile_count >= math.ceil(2_000_000.0 / group.single_pile_capacity)
    assert 0.0 < group.group_efficiency < 1.0
    assert math.isclose(group.spacing, 3 * group.diameter)
    assert group.settlement_mm <= 50.0
    assert piles.depth >= 0.6
    assert math.isclose(piles.depth_below_grade, group.length + piles.depth)
    if group.group_safety_factor < 1.5:
        assert any("safety factor" in w for w in piles.warnings)


def test_pile_group_in_sand_uses_spt(designer, column, dense_sand):
    piles = designer.design_pile_foundation(column, 1_500_000.0, 400_000.0, dense_sand)
    group = piles.pile_group

    assert group.length == max(10.0, 500.0 / 40)
    assert group.settlement_mm <= 50.0
    assert group.pile_count >= 2


def test_group_efficiency_formula():
    assert FoundationDesigner.group_efficiency(1, 1, 0.5, 1.5) == 1.0
    two_by_two = FoundationDesigner.group_efficiency(2, 2, 0.5, 1.5)
    theta = math.degrees(math.atan(0.5 / 1.5))
    assert math.isclose(two_by_two, 1 - theta * 4 / 360)


def test_pile_length_rules():
    assert FoundationDesigner._pile_length(SoilProperties("Medium clay")) == 15.0
    assert FoundationDesigner._pile_length(SoilProperties("Loose sand")) == 12.0
    assert FoundationDesigner._pile_length(SoilProperties("Loose sand", spt_n=10)) == 50.0


def test_clay_skin_friction_uses_cohesion(designer, column):
    default = designer.design_pile_foundation(column, 2_000_000.0, 0.0, SoilProperties("Soft clay"))
    stiffer = designer.design_pile_foundation(column, 2_000_000.0, 0.0,
                                              SoilProperties("Soft clay", cohesion=100_000.0))

    assert math.isclose(stiffer.pile_group.skin_friction, 2 * default.pile_group.skin_friction), \
        "α-method friction is proportional to cu (default 50 kPa)"
    assert FoundationDesigner._pile_length(SoilProperties("Clayey sand")) == 12.0, "Clayey sand is a sand"
