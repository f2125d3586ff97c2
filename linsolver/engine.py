"""
Solver dispatcher for LinSolver.

Routes a system to the selected method:

  - ``"inverse"`` : :func:`linsolver.inverse.solve_direct`
  - ``"jacobi"``  : :func:`linsolver.jacobi.validate_jacobi_input`, then
                    :func:`linsolver.jacobi.solve_jacobi`

and folds every failure (including malformed input the solvers cannot
represent) into a failed :class:`SolutionResult`, so callers never need
their own ``try``/``except``.
"""

import logging
import time
from typing import Optional

from linsolver.inverse import solve_direct
from linsolver.jacobi import solve_jacobi, validate_jacobi_input
from linsolver.settings import get_settings
from linsolver.trace import SolutionResult

logger = logging.getLogger(__name__)

METHODS = {
    "inverse": "Inverse Matrix Method",
    "jacobi": "Jacobi Iteration Method",
}


# ── Input defaults ──────────────────────────────────────────────────────

def default_coefficients(n: int) -> list:
    """Identity pattern used for cells the user left empty."""
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def default_constants(n: int) -> list:
    return [1.0] * n


def fill_defaults(coefficients, constants, n: int) -> tuple:
    """Replace missing (``None``) or absent cells with the identity pattern.

    *coefficients* and *constants* may be shorter than *n* or contain
    ``None``; the returned lists are always n×n and n long.
    """
    coefficients = coefficients or []
    constants = constants or []
    matrix = default_coefficients(n)
    for i, row in enumerate(coefficients[:n]):
        for j, value in enumerate((row or [])[:n]):
            if value is not None:
                matrix[i][j] = float(value)
    vector = default_constants(n)
    for i, value in enumerate(constants[:n]):
        if value is not None:
            vector[i] = float(value)
    return matrix, vector


# ── Dispatcher ──────────────────────────────────────────────────────────

def _run(coefficients, constants, method, tolerance, max_iterations) -> SolutionResult:
    if method == "inverse":
        return solve_direct(coefficients, constants)

    validation = validate_jacobi_input(coefficients, constants)
    if not validation.valid:
        logger.info("Jacobi input rejected: %s", validation.error)
        return SolutionResult(success=False, method=method, error=validation.error)
    return solve_jacobi(coefficients, constants, tolerance, max_iterations)


def solve_system(coefficients, constants, method: Optional[str] = None,
                 tolerance: Optional[float] = None,
                 max_iterations: Optional[int] = None) -> SolutionResult:
    """
    Solve ``AX = B`` with the requested *method*.

    Parameters
    ----------
    coefficients, constants :
        The system.  Nothing is modified in place.
    method : str, optional
        ``"inverse"`` or ``"jacobi"``; defaults to the stored setting.
    tolerance, max_iterations : optional
        Jacobi stopping criteria; default to the stored settings.

    Raises
    ------
    ValueError
        Only for an unknown *method*.  Every solver-side failure comes back
        as ``SolutionResult(success=False)``.
    """
    settings = get_settings()
    method = method or settings["default_method"]
    if method not in METHODS:
        raise ValueError(f"Unknown method {method!r}. Choose from: {', '.join(METHODS)}")
    if tolerance is None:
        tolerance = settings["tolerance"]
    if max_iterations is None:
        max_iterations = settings["max_iterations"]

    t_start = time.perf_counter()
    try:
        result = _run(coefficients, constants, method, tolerance, max_iterations)
    except (TypeError, ValueError, IndexError) as exc:
        logger.warning("Malformed input for %s method: %s", method, exc)
        result = SolutionResult(
            success=False,
            method=method,
            error=f"Invalid input: {exc}",
        )
    runtime_ms = round((time.perf_counter() - t_start) * 1000, 2)

    logger.info(
        "%s on %d equation(s): success=%s%s in %.2f ms",
        METHODS[method],
        len(coefficients) if hasattr(coefficients, "__len__") else 0,
        result.success,
        f", converged={result.converged}" if result.converged is not None else "",
        runtime_ms,
    )
    return result
