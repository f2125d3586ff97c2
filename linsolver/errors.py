"""Exception hierarchy for the LinSolver engine.

Primitives raise these; the solvers catch them and turn them into a
failed :class:`~linsolver.trace.SolutionResult` so callers get a
structured answer instead of a traceback.
"""


class LinearSystemError(ValueError):
    """Base class for every error raised by the solver engine."""


class DimensionError(LinearSystemError):
    """The matrix does not have the shape the operation needs."""


class DimensionMismatchError(DimensionError):
    """Two operands have incompatible shapes (e.g. for multiplication)."""


class UnsupportedSizeError(DimensionError):
    """The direct method was asked to solve a system that is not 2×2 or 3×3."""


class SingularMatrixError(LinearSystemError):
    """The determinant is (numerically) zero, so no inverse exists."""
