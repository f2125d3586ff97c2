"""LinSolver — step-by-step solver for small linear systems.

Public entry points::

    solve_direct(coefficients, constants)
    solve_jacobi(coefficients, constants, tolerance=1e-6, max_iterations=100)
    validate_jacobi_input(coefficients, constants)
    check_diagonal_dominance(coefficients)
"""

from linsolver.engine import solve_system
from linsolver.errors import (
    DimensionError,
    DimensionMismatchError,
    LinearSystemError,
    SingularMatrixError,
    UnsupportedSizeError,
)
from linsolver.formatting import format_number
from linsolver.inverse import solve_direct
from linsolver.jacobi import (
    check_diagonal_dominance,
    solve_jacobi,
    validate_jacobi_input,
)
from linsolver.trace import IterationRecord, SolutionResult, Step, ValidationResult

__version__ = "1.0.0"

__all__ = [
    "solve_direct",
    "solve_jacobi",
    "validate_jacobi_input",
    "check_diagonal_dominance",
    "solve_system",
    "format_number",
    "Step",
    "IterationRecord",
    "SolutionResult",
    "ValidationResult",
    "LinearSystemError",
    "DimensionError",
    "DimensionMismatchError",
    "SingularMatrixError",
    "UnsupportedSizeError",
]
