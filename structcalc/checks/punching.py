from typing import Dict
import math

PHI_SHEAR = 0.75  # shear strength reduction factor


def _alpha_s(column_position: str) -> int:
    """
    Location factor for two-way shear:
    - corner: 20
    - edge: 30
    - interior: 40
    """
    return {'corner': 20, 'edge': 30}.get(column_position, 40)


def size_effect_factor(d: float) -> float:
    """λs = sqrt(2 / (1 + d/250)) with d in mm, capped at 1.0"""
    d_mm = d * 1000.0
    return min(1.0, math.sqrt(2.0 / (1.0 + d_mm / 250.0)))


def punching_shear_check(
    *,
    fc: float,
    d: float,
    column_width: float,
    column_depth: float,
    factored_load: float,
    soil_pressure: float,
    column_position: str = 'interior'
) -> Dict:
    """
    Two-way shear around a column on a footing or mat (ACI 318 style, SI).

    Args:
        fc: Concrete f'c (Pa)
        d: Effective depth (m)
        column_width / column_depth: Column plan dimensions (m)
        factored_load: Column reaction Pu (N)
        soil_pressure: Factored upward pressure under the slab (Pa)
        column_position: 'corner', 'edge' or 'interior'

    Returns:
        dict with capacity, demand and utilization
    """
    # Critical perimeter at d/2 from column face
    bo = 2 * (column_width + d) + 2 * (column_depth + d)

    lambda_s = size_effect_factor(d)
    beta = max(column_width, column_depth) / max(1e-9, min(column_width, column_depth))
    alpha_s = _alpha_s(column_position)

    # Nominal stress (MPa) per ACI 22.6.5.2, SI coefficients
    sqrt_fc = math.sqrt(fc / 1e6)
    vc_mpa = min(
        0.17 * (1 + 2 / beta),
        0.083 * (2 + alpha_s * d / bo),
        0.33
    ) * lambda_s * sqrt_fc

    phi_vc = PHI_SHEAR * vc_mpa * 1e6 * bo * d

    # Load inside the critical perimeter goes straight into the soil
    inside = soil_pressure * (column_width + d) * (column_depth + d)
    vu = max(0.0, factored_load - inside)
    return {
        'phi_vc': phi_vc,
        'vu': vu,
        'utilization': vu / phi_vc if phi_vc > 0 else math.inf,
        'bo': bo,
        'd': d,
        'alpha_s': alpha_s
    }


def one_way_shear_check(
    *,
    fc: float,
    d: float,
    width: float,
    cantilever: float,
    soil_pressure: float
) -> Dict:
    """
    Beam shear at d from the column face.

    Args:
        width: Width of the critical section (m)
        cantilever: Projection from column face to footing edge (m)
    """
    lambda_s = size_effect_factor(d)
    vc_mpa = 0.17 * lambda_s * math.sqrt(fc / 1e6)
    phi_vc = PHI_SHEAR * vc_mpa * 1e6 * width * d

    lever = max(cantilever - d, 0.0)
    vu = soil_pressure * width * lever
    return {
        'phi_vc': phi_vc,
        'vu': vu,
        'utilization': vu / phi_vc if phi_vc > 0 else math.inf,
        'd': d
    }
