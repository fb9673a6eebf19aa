"""
Parametric structural analysis and foundation design engine.
"""

from loguru import logger

from .beam_solver import BeamLoadCase, MomentLoad, PointLoad, SupportCondition, solve_beam, solve_uniform_beam
from .catalog import CatalogRegistry, default_registry
from .checks.column import EffectiveLengthFactor, check_column, euler_critical_load
from .codes import apply_load_combination, get_load_combinations, verify_design
from .config import EngineSettings, load_settings
from .cost_engine import estimate_foundation_cost
from .errors import (
    BeamSolverError,
    CatalogError,
    FoundationConvergenceError,
    ParameterValidationError,
    StructCalcError,
)
from .footing_calculator import (
    FoundationDesigner,
    design_mat_foundation,
    design_pile_foundation,
    design_spread_footing,
    design_strip_footing,
)
from .logging_utils import configure_logging
from .models import BuildingParameters, FoundationType, SeismicParameters, SoilProperties, UnitSystem
from .pipeline import calculate_building_results, run_analysis
from .recommendation import recommend_foundation_type, recommend_optimal_foundation
from .seismic import estimate_modal_properties, estimate_seismic_response
from .settlement import LoadParameters, calculate_settlement
from .soil import derive_soil_properties
from .units import convert_results
from .validation import validate_parameters
from .visualization import (
    create_beam_diagrams,
    create_column_load_plan,
    create_drift_profile,
    create_settlement_heatmap,
)

# Silent until an application opts in with configure_logging()
logger.disable("structcalc")

__version__ = "0.1.0"
