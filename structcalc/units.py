"""
Metric / imperial conversion of result records

Every dataclass field tagged with ``unit`` metadata (see models.measure) is
rescaled; nested records and tuples of records are walked recursively, so
per-beam diagrams, column loads, the foundation and its pile group all
convert in one call. Untagged fields (ratios, counts, labels) are copied.
"""

from dataclasses import fields, is_dataclass, replace
from typing import Any, Dict, Union

from .models import UnitSystem

LENGTH_FACTOR = 3.28084  # m -> ft
FORCE_FACTOR = 0.224809  # N -> lbf
STRESS_FACTOR = 0.000145038  # Pa -> psi

METRIC_TO_IMPERIAL: Dict[str, float] = {
    "length": LENGTH_FACTOR,
    "force": FORCE_FACTOR,
    "stress": STRESS_FACTOR,
    "moment": FORCE_FACTOR * LENGTH_FACTOR,  # N·m -> lbf·ft
    "line_load": FORCE_FACTOR / LENGTH_FACTOR,  # N/m -> lbf/ft
    "area": LENGTH_FACTOR ** 2,  # m² -> ft²
}

IMPERIAL_TO_METRIC: Dict[str, float] = {unit: 1.0 / factor for unit, factor in METRIC_TO_IMPERIAL.items()}


def _as_system(system: Union[UnitSystem, str]) -> UnitSystem:
    return system if isinstance(system, UnitSystem) else UnitSystem(system)


def _scale(value: Any, factor: float) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, (int, float)):
        return value * factor
    if isinstance(value, tuple):
        return tuple(_scale(v, factor) for v in value)
    if isinstance(value, list):
        return [_scale(v, factor) for v in value]
    return value


def _convert(value: Any, factors: Dict[str, float], target: UnitSystem) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        changes = {}
        for f in fields(value):
            current = getattr(value, f.name)
            unit = f.metadata.get("unit")
            if unit is not None:
                changes[f.name] = _scale(current, factors[unit])
            elif isinstance(current, UnitSystem):
                changes[f.name] = target
            else:
                changes[f.name] = _convert(current, factors, target)
        return replace(value, **changes)
    if isinstance(value, tuple):
        return tuple(_convert(v, factors, target) for v in value)
    if isinstance(value, list):
        return [_convert(v, factors, target) for v in value]
    return value


def convert_results(results, from_system: Union[UnitSystem, str], to_system: Union[UnitSystem, str]):
    """
    Convert a result record between unit systems

    Args:
        results: Any record from structcalc.models (CalculationResults,
            BeamResult, Foundation, ...)
        from_system: System the record is currently in
        to_system: Target system

    Returns:
        A new record; the input is left untouched. Same-system conversion
        returns the input itself.

    Raises:
        ValueError: the record declares a unit_system other than from_system
    """
    source, target = _as_system(from_system), _as_system(to_system)
    declared = getattr(results, "unit_system", None)
    if isinstance(declared, UnitSystem) and declared != source:
        raise ValueError(f"Record is in {declared.value} units, not {source.value}")
    if source == target:
        return results
    factors = METRIC_TO_IMPERIAL if source == UnitSystem.METRIC else IMPERIAL_TO_METRIC
    return _convert(results, factors, target)
