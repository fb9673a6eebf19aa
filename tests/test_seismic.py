"""
Seismic and modal estimate tests
"""

import math

import pytest

from structcalc.config import EngineSettings
from structcalc.loads.weight import structural_weight
from structcalc.models import BuildingParameters, SeismicParameters
from structcalc.seismic import (
    estimate_modal_properties,
    estimate_seismic_response,
    storey_stiffness,
)


def test_modal_properties_default_building(params, registry):
    print("\n" + "="*80)
    print("TEST: Modal estimate, 3-storey frame")
    print("="*80)

    modal = estimate_modal_properties(params, registry)
    for m, (f, gamma) in enumerate(zip(modal.frequencies, modal.participation_factors), start=1):
        print(f"  Mode {m}: f = {f:.2f} Hz, Γ = {gamma:.3f}")

    assert len(modal.frequencies) == 3
    assert math.isclose(modal.frequencies[1], 2 * modal.frequencies[0])
    assert math.isclose(modal.frequencies[2], 3 * modal.frequencies[0])

    first = modal.mode_shapes[0]
    assert len(first) == 3
    assert math.isclose(first[0], 0.5, rel_tol=1e-12)
    assert math.isclose(first[-1], 1.0, rel_tol=1e-12), "First mode peaks at the roof"
    assert math.isclose(modal.participation_factors[0], (0.5 + math.sqrt(3) / 2 + 1) / 2, rel_tol=1e-9)


def test_mode_count_capped_at_storeys(registry):
    two_storey = BuildingParameters(height=8.0, number_of_storeys=2)
    modal = estimate_modal_properties(two_storey, registry, EngineSettings(modal_count=5))
    assert len(modal.frequencies) == 2
    assert len(modal.mode_shapes) == 2


def test_storey_stiffness(params, registry):
    expected = 12 * params.elastic_modulus * (0.4 * 0.4 ** 3 / 12) / 4.0 ** 3 * 20
    assert math.isclose(storey_stiffness(params, registry), expected)


def test_base_shear_and_drifts(params, registry):
    print("\n" + "="*80)
    print("TEST: Equivalent lateral force, Sa = 1.0, Ie = 1.0, R = 8")
    print("="*80)

    result = estimate_seismic_response(params, SeismicParameters(), registry)
    weight = structural_weight(params, registry.material("steel"))

    print(f"  W = {weight / 1000:,.0f} kN, V = {result.base_shear / 1000:,.0f} kN, "
          f"amplification {result.dynamic_amplification:.3f}")

    assert math.isclose(result.seismic_coefficient, 0.125)
    assert math.isclose(result.base_shear, 0.125 * weight)
    assert math.isclose(result.building_weight, weight)

    gammas = [abs(g) for g in result.modal.participation_factors]
    assert math.isclose(result.dynamic_amplification, max([1.0] + gammas))

    assert len(result.storey_drifts) == params.number_of_storeys
    assert all(d >= 0 for d in result.storey_drifts)
    assert all(math.isclose(r, d / params.storey_height)
               for r, d in zip(result.drift_ratios, result.storey_drifts))
    assert math.isclose(result.max_displacement, sum(result.storey_drifts))


def test_critical_elements(params, registry):
    result = estimate_seismic_response(params, registry=registry)

    assert len(result.critical_elements) == 4 * params.number_of_storeys
    ground = [e for e in result.critical_elements if e.storey == 0]
    assert all(e.stress_ratio == 1.0 for e in ground)
    top = [e for e in result.critical_elements if e.storey == params.number_of_storeys - 1]
    assert all(math.isclose(e.stress_ratio, 1 - 2 / 3 * 0.6) for e in top)


def test_weak_direction_drifts_more(params, registry):
    along_x = estimate_seismic_response(params, SeismicParameters(direction="x"), registry)
    along_z = estimate_seismic_response(params, SeismicParameters(direction="z"), registry)

    # The plan is longer in x, so bending about the short side is more flexible
    assert along_z.max_displacement > along_x.max_displacement


def test_seismic_parameter_validation():
    with pytest.raises(ValueError):
        SeismicParameters(direction="y")
    with pytest.raises(ValueError):
        SeismicParameters(soil_class="F")
    with pytest.raises(ValueError):
        SeismicParameters(response_modification_factor=0.0)
