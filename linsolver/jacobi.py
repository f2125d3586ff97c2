"""Jacobi iteration method.

Three pieces live here:

- :func:`validate_jacobi_input` – structural checks the caller runs
  before iterating (square matrix, matching vector, non-zero diagonal).
- :func:`check_diagonal_dominance` – advisory convergence diagnostic.
- :func:`solve_jacobi` – the relaxation itself, driven by the
  :class:`JacobiRun` state machine::

      SETUP → REWRITE_EQUATIONS → INITIAL_GUESS → ITERATING
            → CONVERGED | MAX_ITERATIONS_REACHED

  Both terminal phases are normal outcomes; there is no error terminal.
"""

from __future__ import annotations

import enum
import logging
from typing import List, Optional

import numpy as np

from linsolver import matrix_ops
from linsolver.formatting import (
    format_update_expression,
    format_vector,
    variable_name,
)
from linsolver.trace import (
    IterationRecord,
    SolutionResult,
    Step,
    ValidationResult,
)
from linsolver.verification import verify_solution

logger = logging.getLogger(__name__)

METHOD = "jacobi"
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 100

# Same epsilon as the singularity guard, but applied to single diagonal entries.
DIAGONAL_EPSILON = matrix_ops.SINGULARITY_EPSILON


# ── Diagnostics & validation ────────────────────────────────────────────

def check_diagonal_dominance(coefficients) -> bool:
    """True when every row satisfies ``|a_ii| > Σ_{j≠i} |a_ij|``."""
    for i, row in enumerate(coefficients):
        diagonal = abs(row[i])
        off_diagonal = sum(abs(v) for j, v in enumerate(row) if j != i)
        if diagonal <= off_diagonal:
            return False
    return True


is_diagonally_dominant = check_diagonal_dominance


def validate_jacobi_input(coefficients, constants) -> ValidationResult:
    """Check that Jacobi iteration can be applied to ``(A, b)``.

    Stops at the first failing check.  On success the result also carries
    the (non-blocking) diagonal dominance flag.
    """
    n = len(coefficients)

    if not all(len(row) == n for row in coefficients):
        return ValidationResult(valid=False, error="Coefficient matrix must be square")

    if len(constants) != n:
        return ValidationResult(
            valid=False, error="Constants vector length must match matrix size",
        )

    for i in range(n):
        if abs(coefficients[i][i]) < DIAGONAL_EPSILON:
            return ValidationResult(
                valid=False,
                error=(
                    f"Diagonal element at position ({i + 1}, {i + 1}) is zero "
                    f"or very small. Jacobi method requires non-zero diagonal "
                    f"elements."
                ),
            )

    return ValidationResult(
        valid=True, is_diagonally_dominant=check_diagonal_dominance(coefficients),
    )


# ── State machine ───────────────────────────────────────────────────────

class JacobiPhase(enum.Enum):
    SETUP = "setup"
    REWRITE_EQUATIONS = "rewrite_equations"
    INITIAL_GUESS = "initial_guess"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"

    @property
    def is_terminal(self) -> bool:
        return self in (JacobiPhase.CONVERGED, JacobiPhase.MAX_ITERATIONS_REACHED)


def _off_diagonal_terms(row, i: int, operands) -> list:
    """``(-a_ij, operand_j)`` pairs for every j ≠ i."""
    return [(-row[j], operands[j]) for j in range(len(row)) if j != i]


def jacobi_sweep(coefficients, constants, x) -> tuple:
    """One simultaneous Jacobi update computed from the full previous iterate."""
    n = len(coefficients)
    new = []
    for i in range(n):
        total = constants[i]
        for j in range(n):
            if j != i:
                total -= coefficients[i][j] * x[j]
        # A zero diagonal gives inf/nan instead of raising.
        with np.errstate(divide="ignore", invalid="ignore"):
            new.append(float(np.float64(total) / coefficients[i][i]))
    return tuple(new)


class JacobiRun:
    """
    One Jacobi solve, advanced one phase (or one sweep) at a time.

    Usage:
        run = JacobiRun(A, b, tolerance=1e-6, max_iterations=100)
        while not run.phase.is_terminal:
            run.advance()
        result = run.result()
    """

    def __init__(self, coefficients, constants,
                 tolerance: float = DEFAULT_TOLERANCE,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        self.coefficients = matrix_ops.as_matrix(coefficients)
        self.constants = matrix_ops.as_vector(constants)
        self.n = len(self.coefficients)
        self.tolerance = tolerance
        self.max_iterations = max(0, int(max_iterations))

        self.phase = JacobiPhase.SETUP
        self.steps: List[Step] = []
        self.records: List[IterationRecord] = []
        self.x: tuple = ()
        self.dominant: Optional[bool] = None

    # ------------------------------------------------------------------

    def advance(self) -> JacobiPhase:
        """Perform the work of the current phase and move to the next one."""
        if self.phase.is_terminal:
            return self.phase

        handler = {
            JacobiPhase.SETUP: self._setup,
            JacobiPhase.REWRITE_EQUATIONS: self._rewrite_equations,
            JacobiPhase.INITIAL_GUESS: self._initial_guess,
            JacobiPhase.ITERATING: self._iterate,
        }[self.phase]
        previous = self.phase
        self.phase = handler()
        if self.phase is not previous:
            logger.debug("Jacobi phase %s → %s", previous.value, self.phase.value)
        if self.phase.is_terminal:
            self._finish()
        return self.phase

    def _setup(self) -> JacobiPhase:
        self.dominant = check_diagonal_dominance(self.coefficients)
        if not self.dominant:
            logger.warning("Matrix is not diagonally dominant; convergence is not guaranteed")
        self.steps.append(Step(
            title="Step 1: System Setup and Diagonal Dominance Check",
            description=(
                "We check if the coefficient matrix is diagonally dominant "
                "to ensure convergence."
            ),
            matrix=self.coefficients,
            constants=self.constants,
            is_diagonally_dominant=self.dominant,
            explanation=(
                "The matrix is diagonally dominant, so the Jacobi method will converge."
                if self.dominant else
                "Warning: The matrix is not diagonally dominant. "
                "Convergence is not guaranteed."
            ),
        ))
        return JacobiPhase.REWRITE_EQUATIONS

    def _rewrite_equations(self) -> JacobiPhase:
        names = [variable_name(j + 1) for j in range(self.n)]
        equations = tuple(
            format_update_expression(
                i + 1,
                self.constants[i],
                _off_diagonal_terms(row, i, names),
                row[i],
            )
            for i, row in enumerate(self.coefficients)
        )
        self.steps.append(Step(
            title="Step 2: Rewrite Equations for Iteration",
            description="We solve each equation for its diagonal variable.",
            equations=equations,
            explanation=(
                "Each equation is rearranged to express one variable in "
                "terms of the others."
            ),
        ))
        return JacobiPhase.INITIAL_GUESS

    def _initial_guess(self) -> JacobiPhase:
        self.x = (0.0,) * self.n
        self.steps.append(Step(
            title="Step 3: Initial Guess",
            description="We start with an initial guess for all variables.",
            initial_guess=self.x,
            explanation="A common choice is to set all variables to 0 initially.",
        ))
        if self.max_iterations == 0:
            return JacobiPhase.MAX_ITERATIONS_REACHED
        return JacobiPhase.ITERATING

    def _iterate(self) -> JacobiPhase:
        index = len(self.records) + 1
        old = self.x
        new = jacobi_sweep(self.coefficients, self.constants, old)

        calculations = tuple(
            format_update_expression(
                i + 1,
                self.constants[i],
                _off_diagonal_terms(row, i, old),
                row[i],
                iteration=index,
                value=new[i],
            )
            for i, row in enumerate(self.coefficients)
        )
        errors = tuple(abs(n_i - o_i) for n_i, o_i in zip(new, old))
        max_error = float(np.max(errors)) if errors else 0.0
        converged = max_error < self.tolerance

        self.records.append(IterationRecord(
            index=index,
            old_values=old,
            new_values=new,
            per_variable_calculations=calculations,
            per_variable_absolute_errors=errors,
            max_absolute_error=max_error,
            converged=converged,
        ))
        self.x = new
        logger.debug("Jacobi sweep %d: x=%s max error=%g", index, format_vector(new), max_error)

        if converged:
            return JacobiPhase.CONVERGED
        if index >= self.max_iterations:
            return JacobiPhase.MAX_ITERATIONS_REACHED
        return JacobiPhase.ITERATING

    def _finish(self) -> None:
        self.steps.append(Step(
            title="Step 4: Iterations",
            description="We iterate until convergence or maximum iterations reached.",
            iterations=tuple(self.records),
            explanation=(
                "In each iteration, we use the previous values to calculate "
                "new values for all variables simultaneously."
            ),
        ))

        count = len(self.records)
        if self.converged:
            self.steps.append(Step(
                title="Step 5: Convergence Achieved",
                description=(
                    f"Solution converged after {count} iterations with "
                    f"tolerance {self.tolerance}."
                ),
                solution=self.x,
                converged=True,
                iteration_count=count,
                tolerance=self.tolerance,
                explanation="The solution has converged to the desired accuracy.",
            ))
        else:
            logger.warning(
                "Jacobi did not converge within %d iterations", self.max_iterations,
            )
            self.steps.append(Step(
                title="Step 5: Maximum Iterations Reached",
                description=(
                    f"Maximum iterations ({self.max_iterations}) reached. "
                    f"Solution may not be accurate."
                ),
                solution=self.x,
                converged=False,
                iteration_count=count,
                tolerance=self.tolerance,
                explanation=(
                    "Consider increasing the maximum iterations or checking "
                    "if the system is suitable for Jacobi iteration."
                ),
            ))

    # ------------------------------------------------------------------

    @property
    def converged(self) -> bool:
        return self.phase is JacobiPhase.CONVERGED

    def result(self) -> SolutionResult:
        if not self.phase.is_terminal:
            raise RuntimeError(f"Jacobi run is still in phase {self.phase.value!r}")
        return SolutionResult(
            success=True,
            method=METHOD,
            steps=tuple(self.steps),
            solution=self.x,
            converged=self.converged,
            iteration_count=len(self.records),
            tolerance=self.tolerance,
            is_diagonally_dominant=self.dominant,
            verification_steps=verify_solution(
                self.coefficients, self.constants, self.x,
            ),
        )


def solve_jacobi(coefficients, constants,
                 tolerance: float = DEFAULT_TOLERANCE,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS) -> SolutionResult:
    """
    Solve ``AX = B`` by Jacobi iteration starting from the zero vector.

    The input is expected to have passed :func:`validate_jacobi_input`;
    a zero diagonal is not re-checked and yields non-finite values.
    """
    run = JacobiRun(coefficients, constants, tolerance, max_iterations)
    while not run.phase.is_terminal:
        run.advance()
    return run.result()
