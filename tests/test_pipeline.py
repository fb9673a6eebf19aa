"""
End-to-end pipeline tests

1. Building results for the default 3-storey frame
2. Catalog sections replacing the rectangular members
3. Full run from inputs to foundation, settlement, cost and diagnostics
"""

import math

import pytest

from structcalc.errors import CatalogError
from structcalc.models import BuildingParameters, FoundationType, SoilProperties
from structcalc.pipeline import calculate_building_results, run_analysis


def test_building_results(params, registry):
    print("\n" + "="*80)
    print("TEST: Building results, 20 m x 15 m, 3 storeys")
    print("="*80)

    results = calculate_building_results(params, registry)

    print(f"  Beams: {len(results.beam_results)}, columns: {len(results.column_loads)}")
    print(f"  Max deflection {results.max_beam_deflection * 1000:.2f} mm "
          f"(allowable {results.allowable_deflection * 1000:.2f} mm)")
    print(f"  Weight {results.total_weight / 1000:,.0f} kN, f = {results.natural_frequency:.2f} Hz")

    assert len(results.beam_results) == 93
    assert len(results.column_loads) == 20
    assert math.isclose(sum(results.column_axial_loads), 5000.0 * 300.0 * 3)
    assert math.isclose(results.allowable_deflection, 5.0 / 360)
    assert math.isclose(results.allowable_stress, 0.6 * 250e6)
    assert math.isclose(results.max_beam_deflection, max(b.max_deflection for b in results.beam_results))
    assert math.isclose(results.period_of_vibration, 1 / results.natural_frequency)
    assert math.isclose(results.base_shear, 0.1 * results.total_weight)

    checks = results.structural_checks
    assert checks is not None
    assert checks.deflection_check == (checks.deflection_ratio <= 1.0)
    assert results.buckling is not None and results.buckling.critical_load > 0
    assert results.dynamic_analysis is not None
    assert results.foundation is None


def test_catalog_sections(params, registry):
    steel_frame = BuildingParameters(beam_section="IPE400", column_section="HE300B")
    results = calculate_building_results(steel_frame, registry)
    ipe400 = registry.section("IPE400")

    assert math.isclose(results.beam_results[0].max_stress,
                        results.beam_results[0].max_moment * ipe400.height / 2 / ipe400.I_x)

    with pytest.raises(CatalogError):
        calculate_building_results(BuildingParameters(beam_section="IPE999"), registry)


def test_run_analysis_default_building():
    print("\n" + "="*80)
    print("TEST: Full analysis on medium clay")
    print("="*80)

    analysis = run_analysis(inputs={"length": 20, "width": 15, "height": 12, "number_of_storeys": 3})

    print(f"  Recommended: {analysis.recommendation.foundation_type.value}")
    print(f"  Foundation: {analysis.foundation.length:.1f} x {analysis.foundation.width:.1f} x "
          f"{analysis.foundation.depth:.2f} m")
    print(f"  Settlement {analysis.settlement.total} mm, cost ${analysis.cost.total:,}")

    assert analysis.foundation.foundation_type == analysis.recommendation.foundation_type
    assert analysis.results.foundation is analysis.foundation
    assert analysis.settlement.total == (analysis.settlement.immediate + analysis.settlement.consolidation
                                         + analysis.settlement.secondary)
    assert analysis.cost.total > 0

    diagnostics = analysis.diagnostics
    for key in ("beams", "columns", "limits", "dynamic", "checks", "foundation", "seismic"):
        assert key in diagnostics, f"Missing diagnostics section '{key}'"
    assert diagnostics["foundation"]["type"] == analysis.foundation.foundation_type.value
    assert diagnostics["foundation"]["cost_total"] == analysis.cost.total


def test_run_analysis_soft_soil_goes_deeper():
    analysis = run_analysis(inputs={}, soil=SoilProperties(soil_type="Soft clay"), region="Europe")

    assert analysis.foundation.foundation_type in (FoundationType.MAT_FOUNDATION,
                                                   FoundationType.PILE_FOUNDATION)
    assert analysis.settlement.differential_risk == "high"
    assert analysis.cost.region == "Europe"


def test_run_analysis_rejects_invalid_inputs():
    with pytest.raises(ValueError):
        run_analysis(inputs={"columns_along_width": 1})
