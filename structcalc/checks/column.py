from enum import Enum
from typing import Dict
import math

from ..errors import StructCalcError
from ..models import BucklingResult, Material, MaterialFamily, SectionProfile


class EffectiveLengthFactor(Enum):
    """Theoretical K for the standard end conditions"""
    FIXED_FIXED = 0.5
    FIXED_PINNED = 0.7
    PINNED_PINNED = 1.0
    FIXED_ROTATION_FREE = 1.5
    FIXED_FREE = 2.0


def _k_value(K) -> float:
    return K.value if isinstance(K, EffectiveLengthFactor) else float(K)


def euler_critical_load(E: float, I: float, L: float, K=1.0) -> float:
    """
    Euler elastic buckling load Pcr = π²EI/(KL)²

    Raises:
        ValueError: for non-positive E, I, L or K
    """
    k = _k_value(K)
    if E <= 0 or I <= 0 or L <= 0 or k <= 0:
        raise ValueError(f"Euler load needs positive E, I, L and K (got E={E}, I={I}, L={L}, K={k})")
    return math.pi ** 2 * E * I / (k * L) ** 2


def check_column(
    *,
    E: float,
    I: float,
    area: float,
    length: float,
    axial_load: float,
    K=1.0,
) -> BucklingResult:
    """
    Axial stress, Euler load and slenderness for one column.

    The column fails when Pcr / P < 1.0. A column with no axial demand
    cannot buckle and reports an infinite factor.
    """
    if area <= 0:
        raise ValueError(f"Column area must be positive, got {area}")
    k = _k_value(K)
    p_cr = euler_critical_load(E, I, length, k)
    demand = abs(axial_load)
    factor = p_cr / demand if demand > 0 else math.inf
    r = math.sqrt(I / area)
    return BucklingResult(
        critical_load=p_cr,
        buckling_factor=factor,
        effective_length_factor=k,
        effective_length=k * length,
        radius_of_gyration=r,
        slenderness_ratio=k * length / r,
        axial_stress=demand / area,
        passes=factor >= 1.0,
    )


def _status(utilization: float) -> str:
    if utilization <= 0.7:
        return "Adequate"
    if utilization <= 1.0:
        return "Warning"
    return "Overstressed"


def check_column_section(
    *,
    section: SectionProfile,
    material: Material,
    length: float,
    axial_load: float,
    moment_x: float = 0.0,
    moment_y: float = 0.0,
    eccentricity: float = 0.0,
    K=1.0,
) -> Dict:
    """
    Two-axis column check for a catalog section.

    Steel members use an inelastic/elastic allowable-stress curve keyed to
    the critical slenderness π√(E / 0.5fy); other materials are checked
    against fy directly.

    Args:
        section: Column cross-section
        material: Column material
        length: Unbraced length (m)
        axial_load: Compression (N)
        moment_x / moment_y: End moments about each axis (N·m)
        eccentricity: Load eccentricity about x (m)
        K: Effective length factor

    Returns:
        dict with slenderness per axis, governing Euler load and axis,
        combined stress, allowable stress, utilization and status
    """
    k = _k_value(K)
    if length <= 0:
        raise ValueError(f"Column length must be positive, got {length}")
    effective_length = k * length

    slenderness_x = effective_length / section.r_x
    slenderness_y = effective_length / section.r_y
    critical_slenderness = math.pi * math.sqrt(material.elastic_modulus / (0.5 * material.yield_strength))

    p_cr_x = euler_critical_load(material.elastic_modulus, section.I_x, length, k)
    p_cr_y = euler_critical_load(material.elastic_modulus, section.I_y, length, k)
    governing_load = min(p_cr_x, p_cr_y)
    governing_axis = "x-axis" if p_cr_x <= p_cr_y else "y-axis"
    demand = abs(axial_load)

    axial_stress = demand / section.area
    bending_x = abs(moment_x) / section.S_x
    bending_y = abs(moment_y) / section.S_y
    eccentricity_stress = abs(eccentricity) * demand / section.S_x
    combined = axial_stress + bending_x + bending_y + eccentricity_stress

    governing_slenderness = max(slenderness_x, slenderness_y)
    allowable = material.yield_strength
    if material.family == MaterialFamily.STEEL:
        ratio = governing_slenderness / critical_slenderness
        if governing_slenderness < critical_slenderness:
            allowable = material.yield_strength * (1 - 0.5 * ratio ** 2)
        else:
            allowable = material.yield_strength * 0.877 / ratio ** 2
    if allowable <= 0:
        raise StructCalcError(f"Non-positive allowable stress for {section.name}")

    utilization = combined / allowable
    return {
        'effective_length': effective_length,
        'radius_of_gyration_x': section.r_x,
        'radius_of_gyration_y': section.r_y,
        'slenderness_x': slenderness_x,
        'slenderness_y': slenderness_y,
        'critical_slenderness': critical_slenderness,
        'euler_load_x': p_cr_x,
        'euler_load_y': p_cr_y,
        'governing_load': governing_load,
        'governing_axis': governing_axis,
        'buckling_factor': governing_load / demand if demand > 0 else math.inf,
        'axial_stress': axial_stress,
        'bending_stress_x': bending_x,
        'bending_stress_y': bending_y,
        'eccentricity_stress': eccentricity_stress,
        'combined_stress': combined,
        'allowable_stress': allowable,
        'utilization': utilization,
        'status': _status(utilization),
    }
