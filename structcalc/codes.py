"""
Load combinations and code-compliance checks

Static catalog of factored (LRFD / Eurocode ULS) and allowable-stress (ASD)
combinations over dead, live, snow, wind and seismic components, plus the
code-specific deflection and stress limits used by verify_design.

Wind and seismic enter a combination as single representative scalars
(basic wind speed and SDS) rather than reconstructed pressures or forces.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Optional, Tuple, Union

from .models import CombinationType, DesignCode, LoadCombination

LOAD_TYPES = ("dead", "live", "snow", "wind", "seismic")


def _combo(name, description, formula, factors, code, kind) -> LoadCombination:
    return LoadCombination(
        name=name, description=description, formula=formula,
        factors=MappingProxyType(dict(factors)), code=code, combination_type=kind,
    )


_ASCE, _EC = DesignCode.ASCE7_16, DesignCode.EUROCODE
_LRFD, _ASD = CombinationType.LRFD, CombinationType.ASD

ASCE7_16_LRFD: Tuple[LoadCombination, ...] = (
    _combo("ASCE 7-16 LRFD 1", "Dead only", "1.4D", {"dead": 1.4}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 2", "Dead + Live + Snow", "1.2D + 1.6L + 0.5S",
           {"dead": 1.2, "live": 1.6, "snow": 0.5}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 3a", "Dead + Snow + Live", "1.2D + 1.6S + 1.0L",
           {"dead": 1.2, "snow": 1.6, "live": 1.0}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 3b", "Dead + Snow + Wind", "1.2D + 1.6S + 0.5W",
           {"dead": 1.2, "snow": 1.6, "wind": 0.5}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 4", "Dead + Wind + Live + Snow", "1.2D + 1.0W + 1.0L + 0.5S",
           {"dead": 1.2, "wind": 1.0, "live": 1.0, "snow": 0.5}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 5", "Dead + Seismic + Live + Snow", "1.2D + 1.0E + 1.0L + 0.2S",
           {"dead": 1.2, "seismic": 1.0, "live": 1.0, "snow": 0.2}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 6", "Dead + Wind (uplift)", "0.9D + 1.0W",
           {"dead": 0.9, "wind": 1.0}, _ASCE, _LRFD),
    _combo("ASCE 7-16 LRFD 7", "Dead + Seismic (uplift)", "0.9D + 1.0E",
           {"dead": 0.9, "seismic": 1.0}, _ASCE, _LRFD),
)

ASCE7_16_ASD: Tuple[LoadCombination, ...] = (
    _combo("ASCE 7-16 ASD 1", "Dead only", "D", {"dead": 1.0}, _ASCE, _ASD),
    _combo("ASCE 7-16 ASD 2", "Dead + Live", "D + L", {"dead": 1.0, "live": 1.0}, _ASCE, _ASD),
    _combo("ASCE 7-16 ASD 3", "Dead + Live + Snow", "D + 0.75L + 0.75S",
           {"dead": 1.0, "live": 0.75, "snow": 0.75}, _ASCE, _ASD),
    _combo("ASCE 7-16 ASD 4", "Dead + Wind", "D + 0.6W", {"dead": 1.0, "wind": 0.6}, _ASCE, _ASD),
    _combo("ASCE 7-16 ASD 5", "Dead + Seismic", "D + 0.7E", {"dead": 1.0, "seismic": 0.7}, _ASCE, _ASD),
    _combo("ASCE 7-16 ASD 6", "Dead + Wind (uplift)", "0.6D + 0.6W",
           {"dead": 0.6, "wind": 0.6}, _ASCE, _ASD),
)

# Eurocode ULS sets are factored, so they are catalogued under LRFD
EUROCODE_ULS: Tuple[LoadCombination, ...] = (
    _combo("Eurocode ULS 1", "Dead + Live", "1.35G + 1.5Q", {"dead": 1.35, "live": 1.5}, _EC, _LRFD),
    _combo("Eurocode ULS 2", "Dead + Live + Wind", "1.35G + 1.5Q + 0.9W",
           {"dead": 1.35, "live": 1.5, "wind": 0.9}, _EC, _LRFD),
    _combo("Eurocode ULS 3", "Dead + Wind + Live", "1.35G + 1.5W + 1.05Q",
           {"dead": 1.35, "wind": 1.5, "live": 1.05}, _EC, _LRFD),
    _combo("Eurocode ULS 4", "Seismic design situation", "1.0G + 0.3Q + 1.0E",
           {"dead": 1.0, "live": 0.3, "seismic": 1.0}, _EC, _LRFD),
)

ALL_LOAD_COMBINATIONS: Tuple[LoadCombination, ...] = ASCE7_16_LRFD + ASCE7_16_ASD + EUROCODE_ULS


@dataclass(frozen=True)
class WindLoad:
    basic_wind_speed: float  # mph
    velocity_pressure: float  # psf
    windward_pressure: float
    leeward_pressure: float
    design_wind_pressure: float
    base_shear: float


@dataclass(frozen=True)
class Location:
    wind_zone: int = 1
    terrain: str = "urban"  # 'urban', 'open' or 'flat'
    importance: int = 0  # risk category offset, 0-4


@dataclass(frozen=True)
class Loads:
    """Load components; wind is a WindLoad or a representative scalar"""
    dead: float = 0.0
    live: float = 0.0
    snow: Optional[float] = None
    wind: Optional[Union[WindLoad, float]] = None
    seismic: Optional[float] = None  # SDS


@dataclass(frozen=True)
class DesignDefaults:
    allowable_deflection_ratio: float
    allowable_stress_ratio: float


@dataclass(frozen=True)
class CheckResult:
    deflection_check: bool
    stress_check: bool
    deflection_ratio: float
    stress_ratio: float

    @property
    def passes(self) -> bool:
        return self.deflection_check and self.stress_check


def _as_code(code) -> DesignCode:
    return code if isinstance(code, DesignCode) else DesignCode(code)


def _as_type(kind) -> CombinationType:
    return kind if isinstance(kind, CombinationType) else CombinationType(str(kind).upper())


def calculate_wind_load(location: Location, building_height: float, building_width: float) -> WindLoad:
    """
    Simplified ASCE 7-16 wind load

    Basic wind speed is 115 mph plus 10 mph per wind zone. Velocity
    pressure qz = 0.00256·V²·Kz·Kzt·Kd·I (psf) with windward/leeward
    coefficients +0.8 / -0.5. Base shear is the net pressure over the
    windward face height × width, in the units of the face dimensions.
    """
    if building_height <= 0 or building_width <= 0:
        raise ValueError("Building height and width must be positive")
    basic_wind_speed = 115 + 10 * location.wind_zone

    exposure = {"open": 1.2, "flat": 1.4}.get(location.terrain, 1.0)
    importance = 1.0 + 0.1 * location.importance
    topographic = 1.0
    directionality = 0.85

    qz = 0.00256 * basic_wind_speed ** 2 * exposure * topographic * directionality * importance
    windward = 0.8 * qz
    leeward = -0.5 * qz
    net = windward - leeward
    return WindLoad(
        basic_wind_speed=basic_wind_speed,
        velocity_pressure=qz,
        windward_pressure=windward,
        leeward_pressure=leeward,
        design_wind_pressure=net,
        base_shear=net * building_height * building_width,
    )


def _component(loads: Loads, load_type: str) -> Optional[float]:
    value = getattr(loads, load_type)
    if isinstance(value, WindLoad):
        return value.basic_wind_speed
    return value


def apply_load_combination(loads: Loads, combination: LoadCombination) -> float:
    """Sum component × factor over the components present in both."""
    total = 0.0
    for load_type, factor in combination.factors.items():
        value = _component(loads, load_type)
        if value is not None and factor:
            total += value * factor
    return total


def get_load_combinations(code, combination_type) -> Tuple[LoadCombination, ...]:
    """
    Combinations for one code and type

    Args:
        code: DesignCode or 'ASCE7-16' / 'Eurocode'
        combination_type: CombinationType or 'LRFD' / 'ASD'
    """
    code, kind = _as_code(code), _as_type(combination_type)
    return tuple(c for c in ALL_LOAD_COMBINATIONS if c.code == code and c.combination_type == kind)


def governing_combination(loads: Loads, code, combination_type) -> Dict:
    """Combination producing the largest combined load."""
    combos = get_load_combinations(code, combination_type)
    if not combos:
        raise ValueError(f"No {combination_type} combinations defined for {code}")
    values = [(apply_load_combination(loads, c), c) for c in combos]
    value, combo = max(values, key=lambda item: item[0])
    return {"combination": combo, "value": value,
            "all": {c.name: v for v, c in values}}


def get_design_defaults(code) -> DesignDefaults:
    if _as_code(code) == DesignCode.EUROCODE:
        return DesignDefaults(allowable_deflection_ratio=300.0, allowable_stress_ratio=0.66)
    return DesignDefaults(allowable_deflection_ratio=360.0, allowable_stress_ratio=0.6)


def verify_design(code, span_length: float, max_deflection: float, max_stress: float,
                  yield_stress: float) -> CheckResult:
    """
    Deflection and stress check against the code defaults

    deflection_ratio = span / deflection (larger is better) and passes when
    it reaches the code limit; zero deflection passes with an infinite
    ratio. stress_ratio = stress / (fraction × fy) and passes at <= 1.0.

    Raises:
        ValueError: non-positive span or yield stress, or negative deflection
    """
    if span_length <= 0:
        raise ValueError(f"Span must be positive, got {span_length}")
    if yield_stress <= 0:
        raise ValueError(f"Yield stress must be positive, got {yield_stress}")
    if max_deflection < 0:
        raise ValueError(f"Deflection magnitude cannot be negative, got {max_deflection}")

    defaults = get_design_defaults(code)
    deflection_ratio = span_length / max_deflection if max_deflection > 0 else float("inf")
    stress_ratio = abs(max_stress) / (yield_stress * defaults.allowable_stress_ratio)
    return CheckResult(
        deflection_check=deflection_ratio >= defaults.allowable_deflection_ratio,
        stress_check=stress_ratio <= 1.0,
        deflection_ratio=deflection_ratio,
        stress_ratio=stress_ratio,
    )
