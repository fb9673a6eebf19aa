"""
Grid and tributary-area builder for a regular rectangular frame

Implements the midpoint method on a uniform grid:
- Each column receives the area from midpoint to adjacent columns in both directions
- Edge lines get half a bay, interior lines a full bay
- Preserves equilibrium (sum of tributary areas = total slab area)

Example:
    Columns A -(5 m)- B -(5 m)- C along x
    - Column A gets: 2.5 m in x
    - Column B gets: 5.0 m in x
    - Column C gets: 2.5 m in x
"""

from dataclasses import dataclass
from typing import List

from ..models import BuildingParameters


@dataclass(frozen=True)
class GridLayout:
    length: float
    width: float
    columns_x: int
    columns_z: int
    storeys: int
    dx: float
    dz: float
    storey_height: float

    @property
    def column_count(self) -> int:
        return self.columns_x * self.columns_z

    def x(self, i: int) -> float:
        return i * self.dx

    def z(self, j: int) -> float:
        return j * self.dz


@dataclass(frozen=True)
class BeamSegment:
    """One beam span between two adjacent columns on one storey"""
    direction: str  # 'x' or 'z'
    storey: int
    line: int
    index: int
    span: float
    tributary_width: float
    load: float  # N/m
    support: str  # 'simple' or 'continuous'

    @property
    def label(self) -> str:
        return f"B{self.direction}-{self.storey}-{self.line}-{self.index}"


@dataclass(frozen=True)
class ColumnTributary:
    i: int
    j: int
    x: float
    z: float
    tributary_x: float
    tributary_z: float
    column_type: str
    axial_load: float  # N, all storeys

    @property
    def tributary_area(self) -> float:
        return self.tributary_x * self.tributary_z

    @property
    def column_id(self) -> str:
        return f"C{self.i}-{self.j}"


def build_grid(params: BuildingParameters) -> GridLayout:
    """
    Column spacing and storey height from the building parameters

    Raises:
        ValueError: if either column count is below 2 (spacing undefined)
    """
    if params.columns_along_length < 2 or params.columns_along_width < 2:
        raise ValueError(
            "Grid needs at least 2 columns along each axis "
            f"(got {params.columns_along_length} x {params.columns_along_width})"
        )
    return GridLayout(
        length=params.length,
        width=params.width,
        columns_x=params.columns_along_length,
        columns_z=params.columns_along_width,
        storeys=params.number_of_storeys,
        dx=params.length / (params.columns_along_length - 1),
        dz=params.width / (params.columns_along_width - 1),
        storey_height=params.height / params.number_of_storeys,
    )


def _tributary_width(line: int, line_count: int, spacing: float) -> float:
    # edge lines carry half a bay
    if line == 0 or line == line_count - 1:
        return spacing / 2.0
    return spacing


def _segment_support(index: int, segment_count: int) -> str:
    if 0 < index < segment_count - 1:
        return "continuous"
    return "simple"


def beam_segments(grid: GridLayout, slab_load: float) -> List[BeamSegment]:
    """
    Every beam span on every storey, x-direction beams first

    Args:
        grid: Layout from build_grid()
        slab_load: Floor surface load (Pa)

    Returns:
        list of BeamSegment with line load = slab_load × tributary width
    """
    segments: List[BeamSegment] = []
    for storey in range(grid.storeys):
        # Beams along x sit on z-lines
        for j in range(grid.columns_z):
            trib = _tributary_width(j, grid.columns_z, grid.dz)
            for i in range(grid.columns_x - 1):
                segments.append(BeamSegment(
                    direction="x", storey=storey, line=j, index=i, span=grid.dx,
                    tributary_width=trib, load=slab_load * trib,
                    support=_segment_support(i, grid.columns_x - 1),
                ))
        # Beams along z sit on x-lines
        for i in range(grid.columns_x):
            trib = _tributary_width(i, grid.columns_x, grid.dx)
            for j in range(grid.columns_z - 1):
                segments.append(BeamSegment(
                    direction="z", storey=storey, line=i, index=j, span=grid.dz,
                    tributary_width=trib, load=slab_load * trib,
                    support=_segment_support(j, grid.columns_z - 1),
                ))
    return segments


def column_tributaries(grid: GridLayout, slab_load: float) -> List[ColumnTributary]:
    """
    Tributary area and accumulated axial load for every column

    Axial load = slab_load × tributary area × storeys (slab load only).
    """
    columns: List[ColumnTributary] = []
    for i in range(grid.columns_x):
        for j in range(grid.columns_z):
            trib_x = _tributary_width(i, grid.columns_x, grid.dx)
            trib_z = _tributary_width(j, grid.columns_z, grid.dz)

            on_x_edge = i in (0, grid.columns_x - 1)
            on_z_edge = j in (0, grid.columns_z - 1)
            if on_x_edge and on_z_edge:
                column_type = "corner"
            elif on_x_edge or on_z_edge:
                column_type = "edge"
            else:
                column_type = "interior"

            columns.append(ColumnTributary(
                i=i, j=j, x=grid.x(i), z=grid.z(j),
                tributary_x=trib_x, tributary_z=trib_z,
                column_type=column_type,
                axial_load=slab_load * trib_x * trib_z * grid.storeys,
            ))
    return columns
