"""Tests for the inverse-matrix (direct) solver."""

import numpy as np
import pytest

from linsolver import matrix_ops, solve_direct


def _as_column_product(a, solution):
    return matrix_ops.column_to_vector(
        matrix_ops.multiply(a, matrix_ops.as_column(solution))
    )


# ── Concrete scenarios ──────────────────────────────────────────────────

class TestTwoByTwo:
    def test_known_system(self):
        result = solve_direct([[2, 3], [1, -1]], [7, 1])
        assert result.success is True
        assert result.method == "inverse"
        assert result.determinant == -5
        assert result.solution == pytest.approx((2.0, 1.0))
        assert np.allclose(result.inverse, [[0.2, 0.6], [0.2, -0.4]])

    def test_step_sequence(self):
        result = solve_direct([[2, 3], [1, -1]], [7, 1])
        titles = [s.title for s in result.steps]
        assert titles == [
            "Step 1: System in Matrix Form",
            "Step 2: Calculate Determinant",
            "Step 3: Calculate Inverse Matrix",
            "Step 4: Calculate Solution",
        ]
        assert result.steps[0].matrix == ((2.0, 3.0), (1.0, -1.0))
        assert result.steps[0].constants == (7.0, 1.0)
        assert "2·x1 + 3·x2 = 7" in result.steps[0].calculation
        assert result.steps[1].calculation == "det = (2)(-1) - (3)(1) = -5.000000"
        assert result.steps[1].result == -5
        assert result.steps[3].solution == result.solution
        assert "x1 = 2.000000" in result.steps[3].calculation

    def test_singular_matrix(self):
        result = solve_direct([[1, 2], [2, 4]], [1, 2])
        assert result.success is False
        assert "singular" in result.error
        assert result.error == "Matrix is singular (determinant is zero)"
        # matrix form and determinant are kept
        assert len(result.steps) == 2
        assert result.steps[1].result == 0
        assert result.solution is None
        assert result.verification_steps == ()


class TestThreeByThree:
    A = [[4, -1, 0], [-1, 4, -1], [0, -1, 4]]
    B = [15, 10, 10]

    def test_matches_numpy(self):
        result = solve_direct(self.A, self.B)
        expected = np.linalg.solve(np.array(self.A, dtype=float), self.B)
        assert result.success is True
        assert np.allclose(result.solution, expected)
        assert result.determinant == pytest.approx(56)

    def test_determinant_narration_lists_minors(self):
        result = solve_direct(self.A, self.B)
        calc = result.steps[1].calculation
        assert "M11 = (4)(4) - (-1)(-1) = 15.000000" in calc
        assert calc.splitlines()[-1].endswith("= 56.000000")

    def test_singular_three_by_three(self):
        result = solve_direct([[1, 2, 3], [4, 5, 6], [7, 8, 9]], [1, 2, 3])
        assert result.success is False
        assert "singular" in result.error.lower()


# ── Properties ──────────────────────────────────────────────────────────

@pytest.mark.parametrize("a,b", [
    ([[2, 3], [1, -1]], [7, 1]),
    ([[0.5, -2.25], [3.1, 4]], [1.5, -2]),
    ([[2, -1, 3], [1, 5, -2], [4, 0, 1]], [5, -3, 7]),
    ([[1, 1, 1], [0, 2, 5], [2, 5, -1]], [6, -4, 27]),
])
def test_solution_satisfies_system(a, b):
    result = solve_direct(a, b)
    assert result.success
    assert np.allclose(_as_column_product(a, result.solution), b, atol=1e-9)
    assert result.verification_steps[-1].title == "All equations verified"


@pytest.mark.parametrize("a,b", [
    ([[5]], [1]),
    ([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]], [1, 1, 1, 1]),
])
def test_unsupported_sizes_are_reported(a, b):
    result = solve_direct(a, b)
    assert result.success is False
    assert "2x2 and 3x3" in result.error
    assert [s.title for s in result.steps] == ["Step 1: System in Matrix Form"]


def test_ragged_rows_are_reported():
    result = solve_direct([[1, 2], [3]], [1, 2])
    assert result.success is False
    assert "square" in result.error


def test_constants_length_mismatch_is_reported():
    result = solve_direct([[2, 3], [1, -1]], [7, 1, 4])
    assert result.success is False
    assert "incompatible" in result.error
    # everything up to the product is preserved
    assert len(result.steps) == 3


def test_inputs_untouched_and_idempotent():
    a = [[2.0, 3.0], [1.0, -1.0]]
    b = [7.0, 1.0]
    first = solve_direct(a, b)
    second = solve_direct(a, b)
    assert first == second
    assert a == [[2.0, 3.0], [1.0, -1.0]]
    assert b == [7.0, 1.0]


def test_to_dict_omits_unset_fields():
    data = solve_direct([[2, 3], [1, -1]], [7, 1]).to_dict()
    assert data["success"] is True
    assert "converged" not in data
    assert data["inverse"][0] == pytest.approx([0.2, 0.6])
    assert data["steps"][0]["title"].startswith("Step 1")
    assert "iterations" not in data["steps"][0]
