"""Tests for Jacobi validation, diagonal dominance and iteration."""

import math

import numpy as np
import pytest

from linsolver import (
    check_diagonal_dominance,
    solve_direct,
    solve_jacobi,
    validate_jacobi_input,
)
from linsolver.jacobi import (
    JacobiPhase,
    JacobiRun,
    is_diagonally_dominant,
    jacobi_sweep,
)

A = [[4, -1, 0], [-1, 4, -1], [0, -1, 4]]
B = [15, 10, 10]


# ── Diagonal dominance ──────────────────────────────────────────────────

class TestDiagonalDominance:
    def test_dominant(self):
        assert check_diagonal_dominance(A) is True

    def test_not_dominant(self):
        assert check_diagonal_dominance([[1, 2], [3, 1]]) is False

    def test_equality_is_not_strict_dominance(self):
        assert check_diagonal_dominance([[2, 2], [0, 1]]) is False

    def test_negative_diagonal_uses_magnitude(self):
        assert check_diagonal_dominance([[-5, 2], [1, -3]]) is True

    def test_alias(self):
        assert is_diagonally_dominant([[4, -1], [-1, 4]]) is True


# ── Validator ───────────────────────────────────────────────────────────

class TestValidator:
    def test_valid_input_reports_dominance(self):
        result = validate_jacobi_input(A, B)
        assert result.valid is True
        assert result.error is None
        assert result.is_diagonally_dominant is True

    def test_valid_but_not_dominant(self):
        result = validate_jacobi_input([[1, 2], [3, 1]], [1, 1])
        assert result.valid is True
        assert result.is_diagonally_dominant is False

    def test_non_square(self):
        result = validate_jacobi_input([[1, 2, 3], [4, 5, 6]], [1, 2])
        assert result.valid is False
        assert result.error == "Coefficient matrix must be square"

    def test_length_mismatch(self):
        result = validate_jacobi_input([[1, 0], [0, 1]], [1, 2, 3])
        assert result.valid is False
        assert result.error == "Constants vector length must match matrix size"

    def test_zero_diagonal_reports_first_position(self):
        result = validate_jacobi_input([[1, 2, 0], [3, 0, 1], [0, 1, 0]], [1, 2, 3])
        assert result.valid is False
        assert result.error.startswith("Diagonal element at position (2, 2) is zero or very small")
        assert result.is_diagonally_dominant is None

    def test_tiny_diagonal_rejected(self):
        result = validate_jacobi_input([[1e-11, 0], [0, 1]], [1, 1])
        assert result.valid is False
        assert "(1, 1)" in result.error

    def test_checks_short_circuit_in_order(self):
        # non-square wins over length mismatch and zero diagonal
        result = validate_jacobi_input([[0, 1], [1]], [1, 2, 3])
        assert result.error == "Coefficient matrix must be square"

    def test_messages_are_distinct(self):
        errors = {
            validate_jacobi_input([[1, 2, 3], [4, 5, 6]], [1, 2]).error,
            validate_jacobi_input([[1, 0], [0, 1]], [1]).error,
            validate_jacobi_input([[0, 1], [1, 1]], [1, 1]).error,
        }
        assert len(errors) == 3

    def test_singular_matrix_with_nonzero_diagonal_passes(self):
        # the zero-diagonal guard is not a singularity test
        result = validate_jacobi_input([[1, 2], [2, 4]], [1, 2])
        assert result.valid is True


# ── Solver ──────────────────────────────────────────────────────────────

class TestSolveJacobi:
    def test_converges_to_direct_solution(self):
        jacobi = solve_jacobi(A, B, tolerance=1e-6, max_iterations=100)
        direct = solve_direct(A, B)
        assert jacobi.success is True
        assert jacobi.method == "jacobi"
        assert jacobi.converged is True
        assert jacobi.is_diagonally_dominant is True
        assert jacobi.tolerance == 1e-6
        assert np.allclose(jacobi.solution, direct.solution, atol=1e-4)
        assert 0 < jacobi.iteration_count <= 100

    def test_step_structure(self):
        result = solve_jacobi(A, B)
        titles = [s.title for s in result.steps]
        assert titles == [
            "Step 1: System Setup and Diagonal Dominance Check",
            "Step 2: Rewrite Equations for Iteration",
            "Step 3: Initial Guess",
            "Step 4: Iterations",
            "Step 5: Convergence Achieved",
        ]
        assert result.steps[0].is_diagonally_dominant is True
        assert result.steps[2].initial_guess == (0.0, 0.0, 0.0)
        final = result.steps[-1]
        assert final.converged is True
        assert final.iteration_count == result.iteration_count
        assert final.tolerance == 1e-6
        assert final.solution == result.solution

    def test_rewritten_equations(self):
        result = solve_jacobi(A, B)
        equations = result.steps[1].equations
        assert equations[0] == "x1 = (15 + 1·x2 + 0·x3) / 4"
        assert equations[1] == "x2 = (10 + 1·x1 + 1·x3) / 4"
        assert len(equations) == 3

    def test_first_iteration_record(self):
        result = solve_jacobi(A, B)
        records = result.steps[3].iterations
        assert len(records) == result.iteration_count
        first = records[0]
        assert first.index == 1
        assert first.old_values == (0.0, 0.0, 0.0)
        assert first.new_values == pytest.approx((3.75, 2.5, 2.5))
        assert first.per_variable_absolute_errors == pytest.approx((3.75, 2.5, 2.5))
        assert first.max_absolute_error == pytest.approx(3.75)
        assert first.converged is False
        assert first.per_variable_calculations[0] == "x1^(1) = (15 + 1·0 + 0·0) / 4 = 3.750000"

    def test_sweeps_use_previous_iterate_only(self):
        result = solve_jacobi(A, B, max_iterations=2)
        second = result.steps[3].iterations[1]
        # x2 uses x1 and x3 from sweep 1, not the freshly updated x1
        assert second.new_values[1] == pytest.approx((10 + 3.75 + 2.5) / 4)
        assert second.old_values == result.steps[3].iterations[0].new_values

    def test_only_last_record_converged(self):
        records = solve_jacobi(A, B).steps[3].iterations
        assert records[-1].converged is True
        assert not any(r.converged for r in records[:-1])
        assert records[-1].max_absolute_error < 1e-6

    def test_max_iterations_reached(self):
        result = solve_jacobi(A, B, tolerance=1e-12, max_iterations=3)
        assert result.success is True
        assert result.converged is False
        assert result.iteration_count == 3
        assert result.steps[-1].title == "Step 5: Maximum Iterations Reached"
        assert "Maximum iterations (3)" in result.steps[-1].description

    def test_zero_iterations(self):
        result = solve_jacobi(A, B, max_iterations=0)
        assert result.converged is False
        assert result.iteration_count == 0
        assert result.solution == (0.0, 0.0, 0.0)
        assert result.steps[3].iterations == ()

    def test_non_dominant_system_warns_and_runs(self):
        result = solve_jacobi([[1, 2], [3, 1]], [1, 1], max_iterations=10)
        assert result.is_diagonally_dominant is False
        assert "not diagonally dominant" in result.steps[0].explanation
        assert result.converged is False
        assert result.iteration_count == 10

    def test_hidden_zero_diagonal_propagates_non_finite(self):
        result = solve_jacobi([[0, 1], [1, 2]], [1, 1], max_iterations=2)
        assert result.success is True
        assert not math.isfinite(result.solution[0])
        assert result.converged is False

    def test_nan_error_in_later_position_never_converges(self):
        result = solve_jacobi([[1, 0, 0], [0, 1, 0], [0, 0, 0]], [0, 0, 0], max_iterations=5)
        first = result.steps[3].iterations[0]
        assert first.per_variable_absolute_errors[:2] == (0.0, 0.0)
        assert math.isnan(first.max_absolute_error)
        assert not first.converged
        assert result.converged is False
        assert result.iteration_count == 5

    def test_idempotent_and_inputs_untouched(self):
        a = [row[:] for row in A]
        b = list(B)
        assert solve_jacobi(a, b) == solve_jacobi(a, b)
        assert a == A and b == B

    def test_verification_attached(self):
        result = solve_jacobi(A, B)
        assert result.verification_steps[-1].title == "All equations verified"


# ── State machine ───────────────────────────────────────────────────────

def test_run_walks_through_phases():
    run = JacobiRun(A, B, tolerance=1e-6, max_iterations=100)
    phases = [run.phase]
    while not run.phase.is_terminal:
        phases.append(run.advance())
    assert phases[:4] == [
        JacobiPhase.SETUP,
        JacobiPhase.REWRITE_EQUATIONS,
        JacobiPhase.INITIAL_GUESS,
        JacobiPhase.ITERATING,
    ]
    assert phases[-1] is JacobiPhase.CONVERGED
    # advancing a finished run is a no-op
    assert run.advance() is JacobiPhase.CONVERGED
    assert run.result() == solve_jacobi(A, B)


def test_result_before_terminal_raises():
    run = JacobiRun(A, B)
    with pytest.raises(RuntimeError):
        run.result()


def test_zero_iterations_skips_iterating_phase():
    run = JacobiRun(A, B, max_iterations=0)
    for _ in range(3):
        run.advance()
    assert run.phase is JacobiPhase.MAX_ITERATIONS_REACHED


def test_jacobi_sweep():
    assert jacobi_sweep(A, B, (0.0, 0.0, 0.0)) == pytest.approx((3.75, 2.5, 2.5))
