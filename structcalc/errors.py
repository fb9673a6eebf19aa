"""
Exception types raised by the structural engine.

Validation problems are collected before any calculation runs; the
exceptions here are only raised when a caller asks for a result that
cannot be produced.
"""

from typing import List, Optional


class StructCalcError(Exception):
    """Base class for every failure raised by structcalc"""


class ParameterValidationError(StructCalcError, ValueError):
    """
    Raised when a calculation is requested on an invalid parameter set.

    Carries the full list of violated constraints, not only the first one.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid building parameters: " + "; ".join(self.errors))


class FoundationConvergenceError(StructCalcError):
    """
    The footing resize loop ran out of attempts.

    This means the strategy cannot satisfy the bearing capacity for the
    given loads, not that the input was malformed.
    """

    def __init__(self, foundation_type: str, attempts: int, pressure_ratio: Optional[float] = None):
        self.foundation_type = foundation_type
        self.attempts = attempts
        self.pressure_ratio = pressure_ratio
        message = f"{foundation_type} did not converge after {attempts} resize attempts"
        if pressure_ratio is not None:
            message += f" (last q_max/q_design = {pressure_ratio:.3f})"
        super().__init__(message)


class BeamSolverError(StructCalcError, ValueError):
    """Malformed beam problem (bad span, stiffness, or load positions)"""


class CatalogError(StructCalcError, KeyError):
    """Unknown material or section name"""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
