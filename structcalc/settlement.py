"""
Settlement analysis

Three additive components, each reported in whole millimetres:

1. Immediate (elastic):  s = q·B·(1 - ν²)·If·Df / Es
2. Primary consolidation (clays, silts, organic soil, peat), one-
   dimensional log10 theory over the influence depth with normally
   consolidated, partially and fully overconsolidated stress paths
3. Secondary compression (organic soil, peat, clay with PI > 30) over
   the design life after 90% consolidation

The total is the sum of the rounded components. The result also carries a
differential-settlement risk class, design recommendations, and for mat
foundations a 3x3 settlement profile.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from .config import DEFAULT_SETTINGS, EngineSettings
from .models import Foundation, FoundationType, SoilProperties
from .soil import DerivedSoil, derive_soil_properties

T90 = 0.848
DAYS_PER_MONTH = 30
DEFAULT_PILE_LENGTH = 10.0


@dataclass(frozen=True)
class LoadParameters:
    """
    Load on the foundation

    Attributes:
        total_load: Total service load (N)
        average_pressure: Bearing pressure (kPa); total_load / area when None
        eccentricity: (x, y) load eccentricity (m), x across the width and
            y along the length
    """
    total_load: float
    average_pressure: Optional[float] = None
    eccentricity: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class SettlementResult:
    """
    Settlement estimate (mm, days)

    settlement_profile is None unless the foundation is a mat settling more
    than 10 mm; check has_profile before reading it.
    """
    immediate: int
    consolidation: int
    secondary: int
    total: int
    time_to_90_percent: int
    differential_risk: str
    design_recommendations: Tuple[str, ...]
    soil: DerivedSoil
    influence_depth: float
    settlement_profile: Optional[Tuple[Tuple[int, ...], ...]] = None

    @property
    def has_profile(self) -> bool:
        return self.settlement_profile is not None


def influence_depth(foundation: Foundation) -> float:
    """Depth of significant stress increase below the foundation (m)"""
    ftype = foundation.foundation_type
    if ftype in (FoundationType.SPREAD_FOOTING, FoundationType.STRIP_FOOTING):
        return min(foundation.width, foundation.length) * 2
    if ftype == FoundationType.MAT_FOUNDATION:
        return min(foundation.width, foundation.length)
    if ftype == FoundationType.PILE_FOUNDATION:
        pile_length = foundation.pile_group.length if foundation.pile_group else DEFAULT_PILE_LENGTH
        return pile_length * 1.2
    raise ValueError(f"No settlement model for foundation type {ftype.value}")


def shape_factor(foundation: Foundation) -> float:
    """Influence factor If by foundation type and aspect ratio"""
    ftype = foundation.foundation_type
    if ftype == FoundationType.SPREAD_FOOTING:
        aspect = foundation.length / foundation.width
        if aspect <= 1.5:
            return 0.82
        if aspect <= 5:
            return 0.75
        return 0.67
    if ftype == FoundationType.STRIP_FOOTING:
        return 0.67
    if ftype == FoundationType.MAT_FOUNDATION:
        return 0.85
    return 0.5


def immediate_settlement(pressure_kpa: float, foundation: Foundation, soil: DerivedSoil) -> float:
    """Elastic settlement (mm)"""
    depth_factor = max(0.5, 1 - 0.5 * foundation.depth / foundation.width)
    settlement_m = (pressure_kpa * foundation.width * (1 - soil.poisson_ratio ** 2)
                    * shape_factor(foundation) * depth_factor / (soil.elastic_modulus * 1000))
    return settlement_m * 1000


def consolidation_settlement(soil: DerivedSoil, stress_increase: float, layer: float) -> float:
    """
    Primary consolidation (mm) of a layer of thickness H

    - Normally consolidated (σ0 >= σp): H·Cc/(1+e0)·log10(σf/σ0)
    - Partially overconsolidated (σ0 < σp < σf): recompression to σp,
      virgin compression beyond
    - Fully overconsolidated (σf <= σp): H·Cr/(1+e0)·log10(σf/σ0)
    """
    sigma_0 = soil.overburden_pressure
    sigma_p = soil.preconsolidation_pressure
    sigma_f = sigma_0 + stress_increase
    if stress_increase <= 0:
        return 0.0
    e0 = soil.void_ratio
    if sigma_f > sigma_p:
        if sigma_0 < sigma_p:
            strain = (soil.recompression_index / (1 + e0) * math.log10(sigma_p / sigma_0)
                      + soil.compression_index / (1 + e0) * math.log10(sigma_f / sigma_p))
        else:
            strain = soil.compression_index / (1 + e0) * math.log10(sigma_f / sigma_0)
    else:
        strain = soil.recompression_index / (1 + e0) * math.log10(sigma_f / sigma_0)
    return max(0.0, layer * strain * 1000)


def time_to_90_percent(soil: DerivedSoil, layer: float) -> float:
    """Terzaghi t90 = T90·H²/cv with double drainage (days)"""
    drainage_path = layer / 2
    months = T90 * drainage_path ** 2 / soil.consolidation_coefficient
    return months * DAYS_PER_MONTH


def secondary_settlement(soil: DerivedSoil, layer: float, t90_days: float, design_life_years: float) -> float:
    """Creep after primary consolidation (mm)"""
    if soil.secondary_index <= 0 or t90_days <= 0:
        return 0.0
    time_factor = max(0.0, math.log10(design_life_years * 365 / t90_days))
    return layer * soil.secondary_index / (1 + soil.void_ratio) * time_factor * 1000


def settlement_profile(total: int, foundation: Foundation,
                       eccentricity: Optional[Tuple[float, float]]) -> Tuple[Tuple[int, ...], ...]:
    """
    3x3 grid of settlements (mm): corners 70%, edges 85%, centre 100%

    Eccentric load tilts the grid by up to ±30% per direction toward the
    side the load is offset to.
    """
    weights = np.array([[0.7, 0.85, 0.7],
                        [0.85, 1.0, 0.85],
                        [0.7, 0.85, 0.7]])
    grid = weights * total
    if eccentricity:
        ex, ey = eccentricity
        x_factor = 1 + ex / (foundation.width / 2) * 0.3
        y_factor = 1 + ey / (foundation.length / 2) * 0.3
        positions = np.array([-1.0, 0.0, 1.0])
        ecc = 1 + positions[np.newaxis, :] * (x_factor - 1) + positions[:, np.newaxis] * (y_factor - 1)
        grid = grid * np.clip(ecc, 0.0, None)
    return tuple(tuple(int(round(v)) for v in row) for row in grid)


def calculate_settlement(
    foundation: Foundation,
    soil: SoilProperties,
    load: LoadParameters,
    settings: Optional[EngineSettings] = None,
) -> SettlementResult:
    """
    Immediate, consolidation and secondary settlement of one foundation

    Args:
        foundation: Designed foundation (any type except NONE)
        soil: Soil description; missing properties are derived from the label
        load: Total load, optional average pressure and eccentricity
        settings: Engine settings (design life)

    Returns:
        SettlementResult

    Raises:
        ValueError: non-positive plan dimensions, negative load, or an
            unsupported foundation type
    """
    settings = settings or DEFAULT_SETTINGS
    if foundation.length <= 0 or foundation.width <= 0:
        raise ValueError("Foundation length and width must be positive for settlement analysis")
    if load.total_load < 0:
        raise ValueError(f"Total load cannot be negative, got {load.total_load}")

    area = foundation.length * foundation.width
    pressure = load.average_pressure if load.average_pressure is not None else load.total_load / area / 1000
    layer = influence_depth(foundation)
    z = layer / 2

    # Overburden at the middle of the compressible layer
    founding_depth = foundation.depth_below_grade or foundation.depth
    derived = derive_soil_properties(soil, reference_depth=founding_depth + z)

    immediate = immediate_settlement(pressure, foundation, derived)

    consolidation = 0.0
    t90 = 0.0
    secondary = 0.0
    if derived.cohesive:
        # 2:1 stress distribution
        stress_increase = pressure * area / ((foundation.width + z) * (foundation.length + z))
        consolidation = consolidation_settlement(derived, stress_increase, layer)
        t90 = time_to_90_percent(derived, layer)
        secondary = secondary_settlement(derived, layer, t90, settings.design_life_years)

    immediate_mm = int(round(immediate))
    consolidation_mm = int(round(consolidation))
    secondary_mm = int(round(secondary))
    total = immediate_mm + consolidation_mm + secondary_mm

    recommendations: List[str] = []
    risk = 'low'
    if load.eccentricity and (abs(load.eccentricity[0]) > foundation.width / 6
                              or abs(load.eccentricity[1]) > foundation.length / 6):
        risk = 'high'
        recommendations.append(
            "High load eccentricity detected. Consider enlarging foundation or adding counterbalance.")
    elif derived.soft:
        risk = 'high'
        recommendations.append(
            f"High differential settlement risk due to {derived.soil_type}. "
            f"Consider soil improvement or structural measures.")
    elif total > 50:
        risk = 'medium'
        recommendations.append("Significant total settlement expected. Monitor during and after construction.")

    profile = None
    if foundation.foundation_type == FoundationType.MAT_FOUNDATION and total > 10:
        profile = settlement_profile(total, foundation, load.eccentricity)

    if total > 100:
        recommendations.append(
            "Settlement exceeds 100mm. Consider changing foundation type or improving soil conditions.")
    if foundation.foundation_type == FoundationType.SPREAD_FOOTING and total > 25:
        recommendations.append(
            "For spread footings, settlement exceeds typical limits. Consider connecting footings with grade beams.")
    if t90 > 180:
        recommendations.append(
            f"Long consolidation time ({round(t90 / DAYS_PER_MONTH)} months). "
            f"Consider ground improvement or preloading.")

    for message in recommendations:
        logger.warning(message)
    logger.info(f"Settlement for {foundation.foundation_type.value}: {total} mm total ({risk} differential risk)")

    return SettlementResult(
        immediate=immediate_mm,
        consolidation=consolidation_mm,
        secondary=secondary_mm,
        total=total,
        time_to_90_percent=int(round(t90)),
        differential_risk=risk,
        design_recommendations=tuple(recommendations),
        soil=derived,
        influence_depth=layer,
        settlement_profile=profile,
    )
