"""
Material and Section Catalog

Named materials and cross-sections used as inputs by the calculators.
The catalog is an explicit value: every engine call receives a
CatalogRegistry instead of reading module-level tables, so tests can swap in
fixture materials without touching shared state.

KEY PRINCIPLE: Code asks for a material or section by name; the registry
owns the tables and tells you what exists when a name is wrong.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .errors import CatalogError
from .models import Material, MaterialFamily, SectionProfile


# ===== SECTION PROPERTY CALCULATORS ==========================================

def rectangular_section(name: str, width: float, height: float, role: str = "beam") -> SectionProfile:
    """
    Solid rectangle properties

    Args:
        name: Section designation (e.g. 'B300x500')
        width: Breadth b (m)
        height: Depth h (m)
        role: 'beam' or 'column'

    Returns:
        SectionProfile with shear areas taken as 5/6 of the gross area
    """
    area = width * height
    I_x = width * height ** 3 / 12
    I_y = height * width ** 3 / 12
    a, b = max(width, height), min(width, height)
    J = (1 / 3) * a * b ** 3 * (1 - 0.63 * (b / a) * (1 - b ** 4 / (12 * a ** 4)))
    return SectionProfile(
        name=name,
        shape="Rectangular",
        width=width,
        height=height,
        area=area,
        I_x=I_x,
        I_y=I_y,
        S_x=I_x / (height / 2),
        S_y=I_y / (width / 2),
        Z_x=width * height ** 2 / 4,
        Z_y=height * width ** 2 / 4,
        J=J,
        shear_area_x=5 / 6 * area,
        shear_area_y=5 / 6 * area,
        role=role,
    )


def i_section(name: str, h: float, b: float, tw: float, tf: float,
              role: str = "beam", designation_code: Optional[str] = None) -> SectionProfile:
    """
    Doubly symmetric I-shape from plate dimensions (fillets ignored)

    Args:
        h: Overall depth (m)
        b: Flange width (m)
        tw: Web thickness (m)
        tf: Flange thickness (m)
    """
    hw = h - 2 * tf
    A_f = b * tf
    A_w = hw * tw
    area = 2 * A_f + A_w

    d_f = (h - tf) / 2
    I_x = 2 * (b * tf ** 3 / 12 + A_f * d_f ** 2) + tw * hw ** 3 / 12
    I_y = 2 * (tf * b ** 3 / 12) + tw ** 3 * hw / 12

    return SectionProfile(
        name=name,
        shape="WShape",
        width=b,
        height=h,
        area=area,
        I_x=I_x,
        I_y=I_y,
        S_x=I_x / (h / 2),
        S_y=I_y / (b / 2),
        Z_x=b * tf * (h - tf) + tw * hw ** 2 / 4,
        Z_y=tf * b ** 2 / 2 + hw * tw ** 2 / 4,
        J=(2 * b * tf ** 3 + hw * tw ** 3) / 3,
        shear_area_x=A_w,
        shear_area_y=area / 5,
        flange_thickness=tf,
        web_thickness=tw,
        designation_code=designation_code,
        role=role,
    )


# ===== SHIPPED TABLES ========================================================

MATERIALS: List[Material] = [
    Material("steel", "Structural Steel", 2.1e11, 7850, 250e6, 400e6, 0.3, 12e-6, MaterialFamily.STEEL, "A36"),
    Material("Steel_S275", "Structural Steel S275", 2.1e11, 7850, 275e6, 430e6, 0.3, 12e-6, MaterialFamily.STEEL, "S275"),
    Material("Steel_S355", "Structural Steel S355", 2.1e11, 7850, 355e6, 510e6, 0.3, 12e-6, MaterialFamily.STEEL, "S355"),
    # Concrete yield_strength holds f'c
    Material("concrete", "Reinforced Concrete", 3.0e10, 2400, 30e6, 35e6, 0.2, 10e-6, MaterialFamily.CONCRETE, "C30/37"),
    Material("Concrete_C25", "Concrete C25/30", 3.1e10, 2500, 25e6, 30e6, 0.2, 10e-6, MaterialFamily.CONCRETE, "C25/30"),
    Material("aluminum", "Aluminum Alloy", 6.9e10, 2700, 240e6, 290e6, 0.33, 23e-6, MaterialFamily.ALUMINUM, "6061-T6"),
    Material("timber", "Structural Timber", 1.2e10, 600, 24e6, 40e6, 0.2, 5e-6, MaterialFamily.TIMBER, "C24"),
    Material("Timber_C24", "Timber C24", 1.1e10, 420, 24e6, 40e6, 0.2, 5e-6, MaterialFamily.TIMBER, "C24"),
    Material("compositeFRP", "Fiber Reinforced Polymer", 4.0e10, 1800, 300e6, 600e6, 0.28, 7e-6, MaterialFamily.COMPOSITE, "GFRP"),
]

# (name, b, h)
_RECTANGULAR_BEAMS = [
    ("B300x500", 0.30, 0.50),
    ("B250x450", 0.25, 0.45),
    ("B200x400", 0.20, 0.40),
    ("B350x600", 0.35, 0.60),
    ("B400x700", 0.40, 0.70),
]

_RECTANGULAR_COLUMNS = [
    ("C300x300", 0.30, 0.30),
    ("C350x350", 0.35, 0.35),
    ("C400x400", 0.40, 0.40),
    ("C300x400", 0.30, 0.40),
    ("C250x250", 0.25, 0.25),
]

# (name, h, b, tw, tf, code)
_I_BEAMS = [
    ("W12x26", 0.3048, 0.1651, 0.0071, 0.0113, "AISC"),
    ("W14x30", 0.3556, 0.1702, 0.0071, 0.0111, "AISC"),
    ("W16x36", 0.4064, 0.1778, 0.0071, 0.0114, "AISC"),
    ("W18x50", 0.4572, 0.1905, 0.0095, 0.0160, "AISC"),
    ("W21x62", 0.5334, 0.2093, 0.0103, 0.0163, "AISC"),
    ("W24x76", 0.6096, 0.2286, 0.0112, 0.0175, "AISC"),
    ("W30x108", 0.7620, 0.2654, 0.0140, 0.0216, "AISC"),
    ("IPE200", 0.200, 0.100, 0.0056, 0.0085, "EN"),
    ("IPE300", 0.300, 0.150, 0.0071, 0.0107, "EN"),
    ("IPE400", 0.400, 0.180, 0.0086, 0.0135, "EN"),
    ("IPE500", 0.500, 0.200, 0.0102, 0.0160, "EN"),
]

_I_COLUMNS = [
    ("W10x33", 0.2540, 0.2032, 0.0079, 0.0130, "AISC"),
    ("W12x40", 0.3048, 0.2032, 0.0079, 0.0135, "AISC"),
    ("W14x53", 0.3556, 0.2032, 0.0089, 0.0155, "AISC"),
    ("HE200B", 0.200, 0.200, 0.0090, 0.0150, "EN"),
    ("HE240B", 0.240, 0.240, 0.0100, 0.0170, "EN"),
    ("HE300B", 0.300, 0.300, 0.0110, 0.0190, "EN"),
]


def _shipped_sections() -> List[SectionProfile]:
    sections = [rectangular_section(n, b, h, "beam") for n, b, h in _RECTANGULAR_BEAMS]
    sections += [rectangular_section(n, b, h, "column") for n, b, h in _RECTANGULAR_COLUMNS]
    sections += [i_section(n, h, b, tw, tf, "beam", code) for n, h, b, tw, tf, code in _I_BEAMS]
    sections += [i_section(n, h, b, tw, tf, "column", code) for n, h, b, tw, tf, code in _I_COLUMNS]
    return sections


# ===== REGISTRY ==============================================================

class CatalogRegistry:
    """
    Lookup of named materials and sections

    Names are matched case-insensitively. The registry is never mutated;
    with_material / with_section return a new registry.

    Example:
        registry = default_registry()
        steel = registry.material('Steel_S355')
        ipe = registry.section('IPE300')
    """

    def __init__(
        self,
        materials: Iterable[Material],
        sections: Iterable[SectionProfile],
        default_material: str = "steel",
    ):
        self._materials: Dict[str, Material] = {m.name.lower(): m for m in materials}
        self._sections: Dict[str, SectionProfile] = {s.name.lower(): s for s in sections}
        self.default_material = default_material
        self._validate()

    def _validate(self) -> None:
        if self.default_material.lower() not in self._materials:
            raise ValueError(
                f"Default material '{self.default_material}' is not in the catalog "
                f"({', '.join(self.material_names())})"
            )
        for m in self._materials.values():
            if m.elastic_modulus <= 0 or m.density <= 0 or m.yield_strength <= 0:
                raise ValueError(f"Material '{m.name}' must have positive E, density and strength")
        for s in self._sections.values():
            if s.area <= 0 or s.I_x <= 0 or s.I_y <= 0:
                raise ValueError(f"Section '{s.name}' must have positive area and inertia")

    def material(self, name: str) -> Material:
        """
        Look up a material by name

        Raises:
            CatalogError: if the name is unknown (message lists valid names)
        """
        try:
            return self._materials[name.lower()]
        except KeyError:
            raise CatalogError(
                f"Unknown material '{name}'. Available: {', '.join(self.material_names())}"
            ) from None

    def material_or_default(self, name: Optional[str]) -> Material:
        """Material by name, falling back to the registry default."""
        if name and name.lower() in self._materials:
            return self._materials[name.lower()]
        return self._materials[self.default_material.lower()]

    def section(self, name: str) -> SectionProfile:
        try:
            return self._sections[name.lower()]
        except KeyError:
            raise CatalogError(
                f"Unknown section '{name}'. Available: {', '.join(self.section_names())}"
            ) from None

    def has_material(self, name: str) -> bool:
        return name.lower() in self._materials

    def material_names(self) -> List[str]:
        return sorted(m.name for m in self._materials.values())

    def section_names(self) -> List[str]:
        return sorted(s.name for s in self._sections.values())

    def list_materials(self, family: Optional[MaterialFamily] = None) -> List[Material]:
        return [m for m in self._materials.values() if family is None or m.family == family]

    def list_sections(self, role: Optional[str] = None) -> List[SectionProfile]:
        return [s for s in self._sections.values() if role is None or s.role == role]

    def with_material(self, material: Material) -> "CatalogRegistry":
        materials = dict(self._materials)
        materials[material.name.lower()] = material
        return CatalogRegistry(materials.values(), self._sections.values(), self.default_material)

    def with_section(self, section: SectionProfile) -> "CatalogRegistry":
        sections = dict(self._sections)
        sections[section.name.lower()] = section
        return CatalogRegistry(self._materials.values(), sections.values(), self.default_material)

    def __repr__(self) -> str:
        return f"CatalogRegistry({len(self._materials)} materials, {len(self._sections)} sections)"


def default_registry(default_material: str = "steel") -> CatalogRegistry:
    """Registry built from the shipped tables."""
    return CatalogRegistry(MATERIALS, _shipped_sections(), default_material)
