"""
Building parameter validation

Collects every violated rule instead of stopping at the first one, so a
caller can show the whole list before any calculation runs.
"""

from dataclasses import dataclass, field
from typing import List

from .models import BuildingParameters

MAX_PLAN_DIMENSION = 100  # m
MAX_STOREYS = 100
MIN_STOREY_HEIGHT = 2.0  # m
MAX_STOREY_HEIGHT = 6.0  # m

_POSITIVE_FIELDS = [
    ('length', "Building length must be positive"),
    ('width', "Building width must be positive"),
    ('height', "Building height must be positive"),
    ('number_of_storeys', "Number of storeys must be positive"),
]

_POSITIVE_MEMBER_FIELDS = [
    ('beam_width', "Beam width must be positive"),
    ('beam_height', "Beam height must be positive"),
    ('slab_thickness', "Slab thickness must be positive"),
    ('slab_load', "Slab load must be positive"),
    ('elastic_modulus', "Elastic modulus must be positive"),
    ('column_width', "Column width must be positive"),
    ('column_depth', "Column depth must be positive"),
]


@dataclass(frozen=True)
class ValidationReport:
    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def validate_parameters(params: BuildingParameters) -> ValidationReport:
    """
    Check geometry, member sizes and storey height

    Returns:
        ValidationReport with valid=True and no errors, or every message
    """
    errors: List[str] = []

    for name, message in _POSITIVE_FIELDS:
        if getattr(params, name) <= 0:
            errors.append(message)
    if params.columns_along_length < 2:
        errors.append("Must have at least 2 columns along length")
    if params.columns_along_width < 2:
        errors.append("Must have at least 2 columns along width")
    for name, message in _POSITIVE_MEMBER_FIELDS:
        if getattr(params, name) <= 0:
            errors.append(message)

    if params.length > MAX_PLAN_DIMENSION:
        errors.append(f"Building length should not exceed {MAX_PLAN_DIMENSION}m")
    if params.width > MAX_PLAN_DIMENSION:
        errors.append(f"Building width should not exceed {MAX_PLAN_DIMENSION}m")
    if params.number_of_storeys > MAX_STOREYS:
        errors.append(f"Number of storeys should not exceed {MAX_STOREYS}")

    # Storey height is only meaningful when both terms are positive
    if params.height > 0 and params.number_of_storeys > 0:
        if params.storey_height < MIN_STOREY_HEIGHT:
            errors.append(f"Story height seems too low (< {MIN_STOREY_HEIGHT:g}m)")
        if params.storey_height > MAX_STOREY_HEIGHT:
            errors.append(f"Story height seems too high (> {MAX_STOREY_HEIGHT:g}m)")

    return ValidationReport(valid=not errors, errors=errors)
