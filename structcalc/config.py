"""
Engine settings.

Every tunable the calculators read lives on EngineSettings so a caller can
override a limit for one run without touching module state. Settings can be
loaded from a JSON file; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class EngineSettings:
    """
    Tunable limits and assumptions used across the engine

    Attributes:
        diagram_points: Sample stations per beam diagram (both ends included)
        deflection_limit_ratio: Allowable deflection is span / this value
        allowable_stress_ratio: Allowable bending stress as a fraction of fy
        bearing_safety_factor: Ultimate bearing capacity / design capacity
        max_resize_attempts: Bound on the spread footing resize loop
        pile_safety_factor: Single pile ultimate / allowable capacity
        design_life_years: Horizon for secondary compression
        modal_count: Number of modes in the simplified modal estimate
        seismic_coefficient: Base shear / weight for the building summary
        default_material: Catalog material used when a name is unknown
        concrete_material: Catalog material used for foundations
        rebar_yield_strength: Reinforcement fy (Pa)
        ultimate_load_factor: Service to factored load multiplier for RC design
    """
    diagram_points: int = 100
    deflection_limit_ratio: float = 360.0
    allowable_stress_ratio: float = 0.6
    bearing_safety_factor: float = 3.0
    max_resize_attempts: int = 10
    pile_safety_factor: float = 2.0
    design_life_years: float = 50.0
    modal_count: int = 3
    seismic_coefficient: float = 0.1
    default_material: str = "steel"
    concrete_material: str = "concrete"
    rebar_yield_strength: float = 500e6
    ultimate_load_factor: float = 1.5

    def __post_init__(self):
        if self.diagram_points < 2:
            raise ValueError(f"diagram_points must be >= 2, got {self.diagram_points}")
        if self.max_resize_attempts < 1:
            raise ValueError(f"max_resize_attempts must be >= 1, got {self.max_resize_attempts}")
        if self.bearing_safety_factor <= 0 or self.pile_safety_factor <= 0:
            raise ValueError("Safety factors must be positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineSettings":
        """Build settings from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS = EngineSettings()


def load_settings(path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """
    Load settings from a JSON file.

    A missing file yields the defaults; a malformed file raises, since
    silently running with the wrong limits is worse than stopping.
    """
    if path is None:
        return DEFAULT_SETTINGS
    p = Path(path)
    if not p.exists():
        return DEFAULT_SETTINGS
    return EngineSettings.from_dict(json.loads(p.read_text(encoding="utf-8")))


def save_settings(settings: EngineSettings, path: Union[str, Path]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
