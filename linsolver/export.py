"""
LinSolver — Plain-text export

Renders a :class:`SolutionResult` as a readable text trail (used by the
command-line entry point and for copy/paste).
"""

from linsolver.engine import METHODS
from linsolver.formatting import (
    format_linear_equation,
    format_matrix,
    format_number,
    format_solution_lines,
    format_vector,
)


def _indent(text: str, prefix: str = "      ") -> list[str]:
    return [prefix + line for line in str(text).split("\n")]


def _step_lines(step, show_iterations: bool) -> list[str]:
    lines = [f"\n  {step.title}", f"    {step.description}"]
    if step.matrix is not None:
        lines.append("    Matrix:")
        lines.extend(_indent(format_matrix(step.matrix)))
    if step.constants is not None:
        lines.append(f"    Constants: {format_vector(step.constants)}")
    if step.equations:
        lines.append("    Equations:")
        lines.extend(_indent("\n".join(step.equations)))
    if step.initial_guess is not None:
        lines.append(f"    Initial guess: {format_vector(step.initial_guess)}")
    if step.calculation:
        lines.extend(_indent(step.calculation, "    "))
    if step.is_diagonally_dominant is not None:
        lines.append(f"    Diagonally dominant: {'yes' if step.is_diagonally_dominant else 'no'}")
    if step.iterations:
        lines.append(f"    {len(step.iterations)} iteration(s)")
        if show_iterations:
            for rec in step.iterations:
                lines.append(
                    f"    k={rec.index:<3d} x = {format_vector(rec.new_values)}"
                    f"   max error = {format_number(rec.max_absolute_error)}"
                    f"{'  ✓' if rec.converged else ''}"
                )
                lines.extend(_indent("\n".join(rec.per_variable_calculations), "        "))
    if step.solution is not None:
        lines.append("    Solution:")
        lines.extend(_indent(format_solution_lines(step.solution)))
    if step.explanation:
        lines.append(f"    → {step.explanation}")
    return lines


def _given_system(result, coefficients, constants):
    if coefficients is None and result.steps:
        coefficients, constants = result.steps[0].matrix, result.steps[0].constants
    if coefficients is None or constants is None:
        return None
    return coefficients, constants


def build_plain_text(result, show_iterations: bool = True,
                     coefficients=None, constants=None) -> str:
    """Convert a solver result into a readable plain-text trail.

    The GIVEN section uses *coefficients* and *constants* when passed,
    otherwise the system recorded in the first step.
    """
    lines: list[str] = []
    lines.append("=" * 56)
    lines.append("  LinSolver — Solution Trail")
    lines.append("=" * 56)

    given = _given_system(result, coefficients, constants)
    if given is not None:
        lines.append("\n── GIVEN ──────────────────────────────────")
        for row, constant in zip(*given):
            lines.append(f"  {format_linear_equation(row, constant)}")

    lines.append("\n── METHOD ─────────────────────────────────")
    lines.append(f"  {METHODS.get(result.method, result.method)}")
    if result.tolerance is not None:
        lines.append(f"  Tolerance: {result.tolerance:g}")

    lines.append("\n── STEPS ──────────────────────────────────")
    if not result.steps:
        lines.append("  (none)")
    for step in result.steps:
        lines.extend(_step_lines(step, show_iterations))

    if result.verification_steps:
        lines.append("\n── VERIFICATION ───────────────────────────")
        for step in result.verification_steps:
            lines.append(f"  {step.title}: {step.description}")
            if step.calculation:
                lines.extend(_indent(step.calculation, "    "))

    lines.append("\n── RESULT ─────────────────────────────────")
    if not result.success:
        lines.append(f"  Error: {result.error}")
    else:
        if result.determinant is not None:
            lines.append(f"  det(A) = {format_number(result.determinant)}")
        if result.converged is not None:
            state = "converged" if result.converged else "did not converge"
            lines.append(f"  Jacobi {state} after {result.iteration_count} iteration(s)")
        lines.extend(_indent(format_solution_lines(result.solution), "  "))
    lines.append("=" * 56)
    return "\n".join(lines)
