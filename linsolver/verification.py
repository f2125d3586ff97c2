"""Substitute a solution back into ``AX = B`` and narrate the check."""

import numpy as np

from linsolver.formatting import format_linear_equation, format_number
from linsolver.trace import Step

# Absolute tolerance, scaled by the size of each row.
VERIFY_TOLERANCE = 1e-6


def verify_solution(coefficients, constants, solution) -> tuple:
    """Return verification steps: one per equation plus a summary."""
    a = np.asarray(coefficients, dtype=float)
    x = np.asarray(solution, dtype=float)
    lhs_values = a @ x
    steps = []
    all_ok = True

    for i, (row, rhs, lhs) in enumerate(zip(a, constants, lhs_values), 1):
        scale = max(1.0, abs(float(rhs)), float(np.abs(row).sum()))
        diff = abs(float(lhs) - float(rhs))
        ok = bool(np.isfinite(lhs)) and diff <= VERIFY_TOLERANCE * scale
        all_ok = all_ok and ok
        steps.append(Step(
            title=f"Check equation {i}",
            description=format_linear_equation(row, rhs),
            calculation=(
                f"LHS = {format_number(float(lhs))}, "
                f"RHS = {format_number(float(rhs))}"
                f"  →  {'✓' if ok else '✗'}"
            ),
            result=float(lhs),
            explanation=(
                "Both sides agree." if ok
                else "Sides differ — the values do not satisfy this equation."
            ),
        ))

    res = lhs_values - np.asarray(constants, dtype=float)
    max_residual = float(np.max(np.abs(res))) if res.size else 0.0
    steps.append(Step(
        title="All equations verified" if all_ok else "Verification failed",
        description="Substitute the solution back into every equation.",
        calculation=f"max |A·x - b| = {format_number(max_residual, 10)}",
        result=max_residual,
        explanation=(
            "The solution is correct." if all_ok
            else "At least one equation is not satisfied to within tolerance."
        ),
    ))
    return tuple(steps)
