"""Inverse-matrix (direct) method for 2×2 and 3×3 systems.

Solves ``AX = B`` as ``X = A⁻¹B`` and records one :class:`Step` per
stage: matrix form, determinant, inverse, product.  Any engine error is
reported as a failed :class:`SolutionResult` that keeps the steps
computed so far.
"""

import logging

from linsolver import matrix_ops
from linsolver.errors import LinearSystemError, UnsupportedSizeError
from linsolver.formatting import (
    format_determinant_2x2,
    format_determinant_3x3,
    format_linear_equation,
    format_solution_lines,
)
from linsolver.trace import SolutionResult, Step
from linsolver.verification import verify_solution

logger = logging.getLogger(__name__)

METHOD = "inverse"


def _matrix_form_step(coefficients, constants) -> Step:
    equations = "\n".join(
        format_linear_equation(row, c) for row, c in zip(coefficients, constants)
    )
    return Step(
        title="Step 1: System in Matrix Form",
        description=(
            "We represent the system AX = B where A is the coefficient matrix, "
            "X is the variable vector, and B is the constants vector."
        ),
        matrix=coefficients,
        constants=constants,
        calculation=equations,
        explanation=(
            "This is the standard matrix representation of a system of "
            "linear equations."
        ),
    )


def _determinant_step(coefficients, det: float) -> Step:
    if len(coefficients) == 2:
        description = "For a 2×2 matrix [[a, b], [c, d]], det = ad - bc"
        calculation = format_determinant_2x2(coefficients, det)
    else:
        description = (
            "For a 3×3 matrix, we use cofactor expansion along the first row: "
            "det = a·M11 - b·M12 + c·M13"
        )
        calculation = format_determinant_3x3(
            coefficients, matrix_ops.first_row_minors(coefficients), det,
        )
    return Step(
        title="Step 2: Calculate Determinant",
        description=description,
        calculation=calculation,
        result=det,
        explanation=(
            "The determinant tells us if the matrix has an inverse. "
            "If det ≠ 0, the inverse exists."
        ),
    )


def _inverse_step(inverse) -> Step:
    n = len(inverse)
    if n == 2:
        description = (
            "For a 2×2 matrix, swap a and d, negate b and c, and divide by "
            "det: A⁻¹ = (1/det(A)) × [[d, -b], [-c, a]]"
        )
    else:
        description = (
            "We calculate A⁻¹ using the formula A⁻¹ = (1/det(A)) × adj(A), "
            "where adj(A) is the transpose of the cofactor matrix"
        )
    return Step(
        title="Step 3: Calculate Inverse Matrix",
        description=description,
        matrix=inverse,
        explanation=(
            "The inverse matrix allows us to solve for X by computing X = A⁻¹B."
        ),
    )


def _solution_step(solution) -> Step:
    return Step(
        title="Step 4: Calculate Solution",
        description="Multiply A⁻¹ by B to get X = A⁻¹B",
        calculation=format_solution_lines(solution),
        result=solution,
        solution=solution,
        explanation="This gives us the values of our variables.",
    )


def solve_direct(coefficients, constants) -> SolutionResult:
    """
    Solve ``AX = B`` with the inverse-matrix method.

    Parameters
    ----------
    coefficients : sequence of sequences
        Square 2×2 or 3×3 coefficient matrix A.
    constants : sequence
        Right-hand side vector B, one entry per row of A.

    Returns
    -------
    SolutionResult
        ``success=True`` with ``solution``, ``determinant`` and ``inverse``;
        otherwise ``success=False`` with ``error`` and the partial trace.
    """
    a = matrix_ops.as_matrix(coefficients)
    b = matrix_ops.as_vector(constants)
    n = len(a)
    steps = [_matrix_form_step(a, b)]

    try:
        if n not in matrix_ops.SUPPORTED_SIZES:
            raise UnsupportedSizeError("Only 2x2 and 3x3 systems are supported")

        det = matrix_ops.determinant(a)
        steps.append(_determinant_step(a, det))

        inverse = matrix_ops.inverse(a)
        steps.append(_inverse_step(inverse))

        product = matrix_ops.multiply(inverse, matrix_ops.as_column(b))
        solution = matrix_ops.column_to_vector(product)
        steps.append(_solution_step(solution))
    except LinearSystemError as exc:
        logger.warning("Inverse method failed for %d×%d system: %s", n, n, exc)
        return SolutionResult(
            success=False,
            method=METHOD,
            steps=tuple(steps),
            error=str(exc),
        )

    return SolutionResult(
        success=True,
        method=METHOD,
        steps=tuple(steps),
        solution=solution,
        determinant=det,
        inverse=inverse,
        verification_steps=verify_solution(a, b, solution),
    )
