"""
Self-weight of the structural frame

Volume of columns, beams and slabs times material density. Beam runs span
the full building length/width on every column line.
"""

from ..models import BuildingParameters, Material

GRAVITY = 9.81  # m/s²


def structural_volume(params: BuildingParameters) -> dict:
    """
    Concrete/steel volume by element type (m³)

    Returns:
        dict with 'columns', 'beams_x', 'beams_z', 'slabs' and 'total'
    """
    Ns = params.number_of_storeys
    M, N = params.columns_along_length, params.columns_along_width
    beam_area = params.beam_width * params.beam_height

    columns = M * N * params.storey_height * Ns * params.column_width * params.column_depth
    beams_x = Ns * N * params.length * beam_area
    beams_z = Ns * M * params.width * beam_area
    slabs = Ns * params.length * params.width * params.slab_thickness
    return {
        'columns': columns,
        'beams_x': beams_x,
        'beams_z': beams_z,
        'slabs': slabs,
        'total': columns + beams_x + beams_z + slabs,
    }


def structural_weight(params: BuildingParameters, material: Material) -> float:
    """Total frame weight (N)"""
    return structural_volume(params)['total'] * material.density * GRAVITY
