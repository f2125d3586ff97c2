"""Trace and result records shared by both solvers.

Every record is a frozen dataclass whose sequences are tuples, so a
trace cannot be modified once a solver has returned it.  ``to_dict``
gives the JSON-ready view used by the API and the exporters.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional, Union

Vector = tuple
Matrix = tuple


def _plain(value: Any) -> Any:
    if isinstance(value, (Step, IterationRecord)):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


def _as_dict(record) -> dict:
    """Field dict of *record* without the fields that were never set."""
    out = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if value is None:
            continue
        out[f.name] = _plain(value)
    return out


@dataclass(frozen=True)
class IterationRecord:
    """One Jacobi sweep.

    Attributes:
        index                        - sweep number, starting at 1
        old_values                   - iterate the sweep started from
        new_values                   - iterate the sweep produced
        per_variable_calculations    - rendered derivation of every new component
        per_variable_absolute_errors - |new - old| per variable
        max_absolute_error           - largest error; NaN if any error is NaN
        converged                    - whether this sweep met the tolerance
    """
    index: int
    old_values: Vector
    new_values: Vector
    per_variable_calculations: tuple
    per_variable_absolute_errors: Vector
    max_absolute_error: float
    converged: bool

    def to_dict(self) -> dict:
        return _as_dict(self)


@dataclass(frozen=True)
class Step:
    """One narrated stage of a solve."""
    title: str
    description: str
    matrix: Optional[Matrix] = None
    constants: Optional[Vector] = None
    calculation: Optional[str] = None
    result: Optional[Union[float, Vector]] = None
    solution: Optional[Vector] = None
    equations: Optional[tuple] = None
    initial_guess: Optional[Vector] = None
    iterations: Optional[tuple] = None
    converged: Optional[bool] = None
    is_diagonally_dominant: Optional[bool] = None
    iteration_count: Optional[int] = None
    tolerance: Optional[float] = None
    explanation: Optional[str] = None

    def to_dict(self) -> dict:
        return _as_dict(self)


@dataclass(frozen=True)
class SolutionResult:
    """Uniform outcome of :func:`solve_direct` and :func:`solve_jacobi`.

    ``success`` is False only for hard failures (bad shape, singular
    matrix, failed validation); a Jacobi run that hits the iteration cap
    is still a success with ``converged=False``.
    """
    success: bool
    method: str
    steps: tuple = ()
    solution: Optional[Vector] = None
    error: Optional[str] = None
    # inverse-matrix method
    determinant: Optional[float] = None
    inverse: Optional[Matrix] = None
    # Jacobi method
    converged: Optional[bool] = None
    iteration_count: Optional[int] = None
    tolerance: Optional[float] = None
    is_diagonally_dominant: Optional[bool] = None
    verification_steps: tuple = field(default=())

    def to_dict(self) -> dict:
        return _as_dict(self)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate_jacobi_input`."""
    valid: bool
    error: Optional[str] = None
    is_diagonally_dominant: Optional[bool] = None

    def to_dict(self) -> dict:
        return _as_dict(self)


__all__ = [
    "Vector",
    "Matrix",
    "IterationRecord",
    "Step",
    "SolutionResult",
    "ValidationResult",
]
