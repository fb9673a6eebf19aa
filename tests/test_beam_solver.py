"""
Beam solver tests

Closed-form checks for the uniform-load support cases and the general
solver with point loads:
1. Simply supported IPE200 under 10 kN/m
2. Cantilever reactions and fixed-end moment
3. Fixed-fixed and propped cantilever support actions
4. Point loads against textbook formulas
5. Diagram sampling and input errors
"""

import math

import pytest

from structcalc.beam_solver import (
    BeamLoadCase,
    MomentLoad,
    SupportCondition,
    point_loads,
    solve_beam,
    solve_uniform_beam,
)
from structcalc.config import EngineSettings
from structcalc.errors import BeamSolverError

W = 10_000.0  # N/m
L = 5.0  # m
E = 2.1e11  # Pa
I_IPE200 = 1.94e-4  # m^4
H = 0.2  # m


def test_simply_supported_uniform_load():
    print("\n" + "="*80)
    print("TEST: Simply supported beam, w = 10 kN/m, L = 5 m (IPE200)")
    print("="*80)

    result = solve_uniform_beam(W, L, E, I_IPE200, H, "simple")
    expected = 5 * W * L ** 4 / (384 * E * I_IPE200)

    print(f"  Max deflection: {result.max_deflection * 1000:.3f} mm (expected {expected * 1000:.3f} mm)")
    print(f"  Reactions: {result.reaction_left:,.0f} N / {result.reaction_right:,.0f} N")

    assert math.isclose(result.max_deflection, expected, rel_tol=1e-9), \
        f"Deflection {result.max_deflection} != closed form {expected}"
    assert math.isclose(result.reaction_left, 25_000.0, rel_tol=1e-12)
    assert math.isclose(result.reaction_right, 25_000.0, rel_tol=1e-12)
    assert math.isclose(result.max_moment, W * L ** 2 / 8, rel_tol=1e-12)
    assert result.support == "simple"


def test_cantilever_uniform_load():
    print("\n" + "="*80)
    print("TEST: Cantilever, w = 10 kN/m, L = 5 m")
    print("="*80)

    result = solve_uniform_beam(W, L, E, I_IPE200, H, SupportCondition.CANTILEVER)

    print(f"  Fixed-end reaction: {result.reaction_left:,.0f} N")
    print(f"  Fixed-end moment: {result.support_moment_left:,.0f} N·m")

    assert math.isclose(result.reaction_left, 50_000.0, rel_tol=1e-12), "Cantilever reaction must be wL"
    assert result.reaction_right == 0.0
    assert math.isclose(abs(result.support_moment_left), 125_000.0, rel_tol=1e-12), \
        "Fixed-end moment must be wL²/2"
    assert math.isclose(result.max_moment, 125_000.0, rel_tol=1e-12)
    assert math.isclose(result.max_deflection, W * L ** 4 / (8 * E * I_IPE200), rel_tol=1e-12)


def test_fixed_fixed_end_moments():
    result = solve_uniform_beam(W, L, E, I_IPE200, H, "fixed-fixed")

    assert math.isclose(result.support_moment_left, -W * L ** 2 / 12, rel_tol=1e-12)
    assert math.isclose(result.support_moment_right, -W * L ** 2 / 12, rel_tol=1e-12)
    assert math.isclose(result.max_deflection, W * L ** 4 / (384 * E * I_IPE200), rel_tol=1e-12)


def test_fixed_pinned_reactions():
    result = solve_uniform_beam(W, L, E, I_IPE200, H, "fixed-pinned")

    # Pinned at x = 0, fixed at x = L
    assert math.isclose(result.reaction_left, 3 * W * L / 8, rel_tol=1e-12)
    assert math.isclose(result.reaction_right, 5 * W * L / 8, rel_tol=1e-12)
    assert result.support_moment_left == 0.0
    assert math.isclose(result.support_moment_right, -W * L ** 2 / 8, rel_tol=1e-12)


def test_continuous_span_is_stiffer_than_simple():
    simple = solve_uniform_beam(W, L, E, I_IPE200, H, "simple")
    continuous = solve_uniform_beam(W, L, E, I_IPE200, H, "continuous")

    assert continuous.max_deflection < simple.max_deflection
    assert continuous.max_moment < simple.max_moment


def test_simple_beam_central_point_load():
    print("\n" + "="*80)
    print("TEST: Simple beam with a central point load")
    print("="*80)

    P, span = 10_000.0, 4.0
    case = BeamLoadCase(span=span, point_loads=point_loads([(span / 2, P)]))
    result = solve_beam(case, E, I_IPE200, H)

    print(f"  Max moment: {result.max_moment:,.1f} N·m (expected {P * span / 4:,.1f})")

    assert math.isclose(result.reaction_left, P / 2, rel_tol=1e-9)
    assert math.isclose(result.reaction_right, P / 2, rel_tol=1e-9)
    assert math.isclose(result.max_moment, P * span / 4, rel_tol=1e-6)
    assert math.isclose(result.max_deflection, P * span ** 3 / (48 * E * I_IPE200), rel_tol=1e-6)


def test_cantilever_tip_point_load():
    P, span = 5_000.0, 3.0
    case = BeamLoadCase(span=span, point_loads=point_loads([(span, P)]),
                        support=SupportCondition.CANTILEVER)
    result = solve_beam(case, E, I_IPE200, H)

    assert math.isclose(result.reaction_left, P, rel_tol=1e-9)
    assert math.isclose(result.support_moment_left, -P * span, rel_tol=1e-9)
    assert math.isclose(result.max_deflection, P * span ** 3 / (3 * E * I_IPE200), rel_tol=1e-6)


def test_fixed_fixed_central_point_load():
    P, span = 8_000.0, 6.0
    case = BeamLoadCase(span=span, point_loads=point_loads([(span / 2, P)]),
                        support=SupportCondition.FIXED_FIXED)
    result = solve_beam(case, E, I_IPE200, H)

    assert math.isclose(result.support_moment_left, -P * span / 8, rel_tol=1e-9)
    assert math.isclose(result.max_deflection, P * span ** 3 / (192 * E * I_IPE200), rel_tol=1e-6)


def test_uniform_only_case_matches_closed_form():
    case = BeamLoadCase(span=L, uniform_load=W)
    general = solve_beam(case, E, I_IPE200, H)
    closed = solve_uniform_beam(W, L, E, I_IPE200, H)

    assert general.max_deflection == closed.max_deflection
    assert general.max_moment == closed.max_moment


def test_applied_moment_reactions_balance():
    span = 4.0
    case = BeamLoadCase(span=span, moment_loads=(MomentLoad(position=2.0, magnitude=1_000.0),))
    result = solve_beam(case, E, I_IPE200, H)

    # A pure couple is resisted by equal and opposite reactions
    assert math.isclose(result.reaction_left + result.reaction_right, 0.0, abs_tol=1e-6)
    assert math.isclose(abs(result.reaction_left), 1_000.0 / span, rel_tol=1e-9)


def test_diagrams_sampled_at_configured_points():
    result = solve_uniform_beam(W, L, E, I_IPE200, H)
    d = result.diagrams

    assert d is not None
    assert len(d.positions) == len(d.moment) == len(d.shear) == len(d.deflection) == 100
    assert d.positions[0] == 0.0 and math.isclose(d.positions[-1], L)
    assert max(d.deflection) <= result.max_deflection * (1 + 1e-9)
    assert max(d.deflection) > 0.99 * result.max_deflection

    coarse = solve_uniform_beam(W, L, E, I_IPE200, H, settings=EngineSettings(diagram_points=11))
    assert len(coarse.diagrams.positions) == 11

    bare = solve_uniform_beam(W, L, E, I_IPE200, H, include_diagrams=False)
    assert bare.diagrams is None


def test_invalid_inputs_raise():
    with pytest.raises(BeamSolverError):
        solve_uniform_beam(W, 0.0, E, I_IPE200, H)
    with pytest.raises(BeamSolverError):
        solve_uniform_beam(W, L, E, -1.0, H)
    with pytest.raises(BeamSolverError, match="Unknown support condition"):
        solve_uniform_beam(W, L, E, I_IPE200, H, "hinged")
    with pytest.raises(BeamSolverError, match="outside"):
        solve_beam(BeamLoadCase(span=L, point_loads=point_loads([(6.0, 1_000.0)])), E, I_IPE200, H)
    with pytest.raises(BeamSolverError, match="continuous"):
        solve_beam(BeamLoadCase(span=L, point_loads=point_loads([(1.0, 1_000.0)]),
                                support=SupportCondition.CONTINUOUS), E, I_IPE200, H)


def test_beam_solver_error_is_value_error():
    with pytest.raises(ValueError):
        solve_uniform_beam(W, -2.0, E, I_IPE200, H)
