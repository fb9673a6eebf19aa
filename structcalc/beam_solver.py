"""
Single-span beam solver

Two entry points share one set of statics:
- solve_uniform_beam: uniformly loaded span, closed-form peak values per
  support case (simple, fixed-fixed, cantilever, continuous, fixed-pinned)
- solve_beam: uniform load plus point loads and applied moments, any
  support case except the continuous approximation

Sign convention: loads act downward when positive, sagging moment is
positive, reported deflections are downward-positive. Diagrams are sampled
at EngineSettings.diagram_points equally spaced stations, both ends
included, for every call site.

The redundant support actions are found by compatibility. With unknowns
[M_A, R_A, EI·θ0] at the left end (x = 0), each support case contributes
three boundary equations and the 3x3 system is solved with numpy.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .config import DEFAULT_SETTINGS, EngineSettings
from .errors import BeamSolverError
from .models import BeamDiagrams, BeamResult


class SupportCondition(Enum):
    SIMPLE = "simple"
    FIXED_FIXED = "fixed-fixed"
    CANTILEVER = "cantilever"  # fixed at x = 0, free at x = L
    CONTINUOUS = "continuous"  # interior span of a continuous beam (approximate)
    FIXED_PINNED = "fixed-pinned"  # pinned at x = 0, fixed at x = L


@dataclass(frozen=True)
class PointLoad:
    position: float  # m from left support
    magnitude: float  # N, downward positive


@dataclass(frozen=True)
class MomentLoad:
    position: float  # m from left support
    magnitude: float  # N·m, steps the moment diagram up


@dataclass(frozen=True)
class BeamLoadCase:
    span: float
    uniform_load: float = 0.0
    point_loads: Tuple[PointLoad, ...] = ()
    moment_loads: Tuple[MomentLoad, ...] = ()
    support: SupportCondition = SupportCondition.SIMPLE

    @property
    def is_uniform_only(self) -> bool:
        return not self.point_loads and not self.moment_loads

    @property
    def total_vertical_load(self) -> float:
        return self.uniform_load * self.span + sum(p.magnitude for p in self.point_loads)


# Boundary equations: row coefficients on [M_A, R_A, φ] and the right-hand side
# built from the load terms at x = L.
_CONDITIONS = {
    SupportCondition.SIMPLE: ("M_A=0", "M(L)=0", "v(L)=0"),
    SupportCondition.CANTILEVER: ("theta0=0", "M(L)=0", "V(L)=0"),
    SupportCondition.FIXED_FIXED: ("theta0=0", "theta(L)=0", "v(L)=0"),
    SupportCondition.FIXED_PINNED: ("M_A=0", "theta(L)=0", "v(L)=0"),
}

# Propped cantilever peak deflection coefficient (exact root of the elastic curve)
_FIXED_PINNED_DEFLECTION = (39 + 55 * math.sqrt(33)) / 65536


def _as_support(support) -> SupportCondition:
    if isinstance(support, SupportCondition):
        return support
    try:
        return SupportCondition(str(support).lower())
    except ValueError:
        raise BeamSolverError(
            f"Unknown support condition '{support}'. "
            f"Expected one of: {', '.join(s.value for s in SupportCondition)}"
        ) from None


def _check_section(span: float, E: float, I: float, h: float) -> None:
    if not span > 0:
        raise BeamSolverError(f"Span must be positive, got {span}")
    if not E > 0:
        raise BeamSolverError(f"Elastic modulus must be positive, got {E}")
    if not I > 0:
        raise BeamSolverError(f"Moment of inertia must be positive, got {I}")
    if not h > 0:
        raise BeamSolverError(f"Section depth must be positive, got {h}")


def _load_terms(case: BeamLoadCase, x) -> Dict[str, np.ndarray]:
    """
    Load-only contributions (support actions excluded) at positions x

    Returns shear, moment, EI·slope and EI·deflection terms. The step at a
    concentrated load is taken just past its position.
    """
    x = np.asarray(x, dtype=float)
    w = case.uniform_load
    shear = -w * x
    moment = -w * x ** 2 / 2
    slope = -w * x ** 3 / 6
    defl = -w * x ** 4 / 24
    for p in case.point_loads:
        arm = np.maximum(x - p.position, 0.0)
        shear = shear - p.magnitude * (x > p.position)
        moment = moment - p.magnitude * arm
        slope = slope - p.magnitude * arm ** 2 / 2
        defl = defl - p.magnitude * arm ** 3 / 6
    for m in case.moment_loads:
        arm = np.maximum(x - m.position, 0.0)
        moment = moment + m.magnitude * (x > m.position)
        slope = slope + m.magnitude * arm
        defl = defl + m.magnitude * arm ** 2 / 2
    return {"shear": shear, "moment": moment, "slope": slope, "deflection": defl}


def _solve_support_actions(case: BeamLoadCase) -> Tuple[float, float, float]:
    """Return (M_A, R_A, EI·θ0) for the case's support condition."""
    L = case.span
    end = {k: float(v[0]) for k, v in _load_terms(case, np.array([L])).items()}
    # M(L) from the load terms must include a moment applied exactly at x = L
    end_moment = end["moment"] + sum(m.magnitude for m in case.moment_loads if m.position >= L)

    rows = {
        "M_A=0": ([1.0, 0.0, 0.0], 0.0),
        "theta0=0": ([0.0, 0.0, 1.0], 0.0),
        "M(L)=0": ([1.0, L, 0.0], -end_moment),
        "V(L)=0": ([0.0, 1.0, 0.0], case.total_vertical_load),
        "theta(L)=0": ([L, L ** 2 / 2, 1.0], -end["slope"]),
        "v(L)=0": ([L ** 2 / 2, L ** 3 / 6, L], -end["deflection"]),
    }
    names = _CONDITIONS[case.support]
    A = np.array([rows[n][0] for n in names])
    b = np.array([rows[n][1] for n in names])
    M_A, R_A, phi = np.linalg.solve(A, b)
    return float(M_A), float(R_A), float(phi)


def _validate_case(case: BeamLoadCase) -> None:
    for p in case.point_loads:
        if not 0 <= p.position <= case.span:
            raise BeamSolverError(f"Point load at {p.position} m lies outside the {case.span} m span")
    for m in case.moment_loads:
        if not 0 <= m.position <= case.span:
            raise BeamSolverError(f"Moment load at {m.position} m lies outside the {case.span} m span")
    if case.support == SupportCondition.CONTINUOUS and not case.is_uniform_only:
        raise BeamSolverError("The continuous-span approximation only supports a uniform load")


def _evaluate(case: BeamLoadCase, actions: Tuple[float, float, float], E: float, I: float, x) -> Dict[str, np.ndarray]:
    M_A, R_A, phi = actions
    x = np.asarray(x, dtype=float)
    terms = _load_terms(case, x)
    shear = R_A + terms["shear"]
    moment = M_A + R_A * x + terms["moment"]
    v = phi * x + M_A * x ** 2 / 2 + R_A * x ** 3 / 6 + terms["deflection"]
    return {"shear": shear, "moment": moment, "deflection": -v / (E * I)}


def _utilization(
    *,
    span: float,
    max_moment: float,
    max_shear: float,
    max_deflection: float,
    I: float,
    h: float,
    yield_strength: float,
    shear_area: Optional[float],
    settings: EngineSettings,
) -> Dict[str, float]:
    max_stress = max_moment * (h / 2) / I
    allowable_stress = settings.allowable_stress_ratio * yield_strength
    allowable_deflection = span / settings.deflection_limit_ratio

    area_v = shear_area if shear_area and shear_area > 0 else h * h / 10
    shear_stress = max_shear / area_v
    allowable_shear = 0.4 * yield_strength

    bending = max_stress / allowable_stress
    deflection = max_deflection / allowable_deflection
    shear = shear_stress / allowable_shear
    return {
        "max_stress": max_stress,
        "bending_utilization": bending,
        "deflection_utilization": deflection,
        "shear_utilization": shear,
        "utilization_ratio": max(bending, deflection),
        "interaction_ratio": math.sqrt(bending ** 2 + shear ** 2),
    }


def _diagrams(x: np.ndarray, curves: Dict[str, np.ndarray]) -> BeamDiagrams:
    return BeamDiagrams(
        positions=tuple(float(v) for v in x),
        moment=tuple(float(v) for v in curves["moment"]),
        shear=tuple(float(v) for v in curves["shear"]),
        deflection=tuple(float(v) for v in curves["deflection"]),
    )


def solve_uniform_beam(
    w: float,
    L: float,
    E: float,
    I: float,
    h: float,
    support="simple",
    *,
    yield_strength: float = 250e6,
    shear_area: Optional[float] = None,
    include_diagrams: bool = True,
    settings: Optional[EngineSettings] = None,
    label: str = "",
) -> BeamResult:
    """
    Uniformly loaded span with closed-form peak values

    Args:
        w: Line load (N/m), downward positive
        L: Span (m)
        E: Elastic modulus (Pa)
        I: Second moment of area (m⁴)
        h: Section depth (m), stress is taken at c = h/2
        support: SupportCondition or its string value
        yield_strength: fy used for the allowable stresses (Pa)
        shear_area: Shear area (m²); h·h/10 is used when omitted
        include_diagrams: Attach sampled moment/shear/deflection curves

    Returns:
        BeamResult

    Raises:
        BeamSolverError: non-positive span or section properties
    """
    settings = settings or DEFAULT_SETTINGS
    support = _as_support(support)
    _check_section(L, E, I, h)

    simple_deflection = 5 * w * L ** 4 / (384 * E * I)
    if support == SupportCondition.SIMPLE:
        max_deflection, max_moment = simple_deflection, w * L ** 2 / 8
        r_left = r_right = w * L / 2
        m_left = m_right = 0.0
    elif support == SupportCondition.FIXED_FIXED:
        max_deflection, max_moment = w * L ** 4 / (384 * E * I), w * L ** 2 / 12
        r_left = r_right = w * L / 2
        m_left = m_right = -w * L ** 2 / 12
    elif support == SupportCondition.CANTILEVER:
        max_deflection, max_moment = w * L ** 4 / (8 * E * I), w * L ** 2 / 2
        r_left, r_right = w * L, 0.0
        m_left, m_right = -w * L ** 2 / 2, 0.0
    elif support == SupportCondition.CONTINUOUS:
        max_deflection, max_moment = 0.8 * simple_deflection, w * L ** 2 / 10
        r_left = r_right = w * L / 2
        m_left = m_right = -w * L ** 2 / 10
    else:
        max_deflection = _FIXED_PINNED_DEFLECTION * w * L ** 4 / (E * I)
        max_moment = w * L ** 2 / 8
        r_left, r_right = 3 * w * L / 8, 5 * w * L / 8
        m_left, m_right = 0.0, -w * L ** 2 / 8
    max_shear = max(abs(r_left), abs(r_right))

    diagrams = None
    if include_diagrams:
        x = np.linspace(0.0, L, settings.diagram_points)
        if support == SupportCondition.CONTINUOUS:
            curves = {
                "shear": w * L / 2 - w * x,
                "moment": w * x * (L - x) / 2 - w * L ** 2 / 10,
                "deflection": 0.8 * w * x * (L ** 3 - 2 * L * x ** 2 + x ** 3) / (24 * E * I),
            }
        else:
            case = BeamLoadCase(span=L, uniform_load=w, support=support)
            curves = _evaluate(case, _solve_support_actions(case), E, I, x)
        diagrams = _diagrams(x, curves)

    util = _utilization(
        span=L, max_moment=abs(max_moment), max_shear=max_shear,
        max_deflection=abs(max_deflection), I=I, h=h,
        yield_strength=yield_strength, shear_area=shear_area, settings=settings,
    )
    return BeamResult(
        support=support.value,
        span=L,
        load=w,
        max_deflection=abs(max_deflection),
        max_stress=util["max_stress"],
        max_moment=abs(max_moment),
        max_shear=max_shear,
        reaction_left=r_left,
        reaction_right=r_right,
        support_moment_left=m_left,
        support_moment_right=m_right,
        utilization_ratio=util["utilization_ratio"],
        bending_utilization=util["bending_utilization"],
        deflection_utilization=util["deflection_utilization"],
        shear_utilization=util["shear_utilization"],
        interaction_ratio=util["interaction_ratio"],
        diagrams=diagrams,
        label=label,
    )


def solve_beam(
    case: BeamLoadCase,
    E: float,
    I: float,
    h: float,
    *,
    yield_strength: float = 250e6,
    shear_area: Optional[float] = None,
    include_diagrams: bool = True,
    settings: Optional[EngineSettings] = None,
    label: str = "",
) -> BeamResult:
    """
    General single span: uniform load, point loads and applied moments

    A uniform-only case is delegated to solve_uniform_beam so both paths
    report identical peaks. Otherwise peaks are taken over a dense grid plus
    both sides of every concentrated load.
    """
    settings = settings or DEFAULT_SETTINGS
    case = BeamLoadCase(
        span=case.span,
        uniform_load=case.uniform_load,
        point_loads=tuple(case.point_loads),
        moment_loads=tuple(case.moment_loads),
        support=_as_support(case.support),
    )
    _check_section(case.span, E, I, h)
    _validate_case(case)

    if case.is_uniform_only:
        return solve_uniform_beam(
            case.uniform_load, case.span, E, I, h, case.support,
            yield_strength=yield_strength, shear_area=shear_area,
            include_diagrams=include_diagrams, settings=settings, label=label,
        )

    L = case.span
    actions = _solve_support_actions(case)
    M_A, R_A, _ = actions
    logger.debug(f"Beam {label or case.support.value}: M_A={M_A:.1f} N·m, R_A={R_A:.1f} N")

    # Dense search grid plus both sides of every step
    eps = L * 1e-9
    stations: List[float] = list(np.linspace(0.0, L, settings.diagram_points * 10 + 1))
    for pos in [p.position for p in case.point_loads] + [m.position for m in case.moment_loads]:
        stations.extend([max(pos - eps, 0.0), pos, min(pos + eps, L)])
    search = _evaluate(case, actions, E, I, np.array(sorted(stations)))

    max_moment = float(np.max(np.abs(search["moment"])))
    max_shear = float(np.max(np.abs(search["shear"])))
    max_deflection = float(np.max(np.abs(search["deflection"])))

    r_right = case.total_vertical_load - R_A
    end_moment = float(_evaluate(case, actions, E, I, np.array([L]))["moment"][0])
    end_moment += sum(m.magnitude for m in case.moment_loads if m.position >= L)

    diagrams = None
    if include_diagrams:
        x = np.linspace(0.0, L, settings.diagram_points)
        diagrams = _diagrams(x, _evaluate(case, actions, E, I, x))

    util = _utilization(
        span=L, max_moment=max_moment, max_shear=max_shear, max_deflection=max_deflection,
        I=I, h=h, yield_strength=yield_strength, shear_area=shear_area, settings=settings,
    )
    return BeamResult(
        support=case.support.value,
        span=L,
        load=case.uniform_load,
        max_deflection=max_deflection,
        max_stress=util["max_stress"],
        max_moment=max_moment,
        max_shear=max_shear,
        reaction_left=R_A,
        reaction_right=r_right,
        support_moment_left=M_A,
        support_moment_right=end_moment if case.support in (
            SupportCondition.FIXED_FIXED, SupportCondition.FIXED_PINNED) else 0.0,
        utilization_ratio=util["utilization_ratio"],
        bending_utilization=util["bending_utilization"],
        deflection_utilization=util["deflection_utilization"],
        shear_utilization=util["shear_utilization"],
        interaction_ratio=util["interaction_ratio"],
        diagrams=diagrams,
        label=label,
    )


def point_loads(pairs: Sequence[Tuple[float, float]]) -> Tuple[PointLoad, ...]:
    """Build point loads from (position, magnitude) pairs."""
    return tuple(PointLoad(position=float(a), magnitude=float(p)) for a, p in pairs)
