"""Small dense linear-algebra primitives (2×2 and 3×3).

Matrices are plain nested sequences (rows outer, columns inner).  Every
function returns new tuples and never touches its arguments, so results
can be dropped straight into an immutable trace.
"""

from linsolver.errors import (
    DimensionError,
    DimensionMismatchError,
    SingularMatrixError,
)

# Single singularity threshold shared by the whole engine.
SINGULARITY_EPSILON = 1e-10

SINGULAR_MESSAGE = "Matrix is singular (determinant is zero)"

SUPPORTED_SIZES = (2, 3)


# ── Shape helpers ───────────────────────────────────────────────────────

def as_matrix(matrix) -> tuple:
    """Copy *matrix* into a tuple of float tuples."""
    return tuple(tuple(float(v) for v in row) for row in matrix)


def as_vector(vector) -> tuple:
    """Copy *vector* into a tuple of floats."""
    return tuple(float(v) for v in vector)


def is_square(matrix) -> bool:
    n = len(matrix)
    return n > 0 and all(len(row) == n for row in matrix)


def _require_square(matrix, sizes=SUPPORTED_SIZES) -> int:
    n = len(matrix)
    if not is_square(matrix):
        raise DimensionError("Matrix must be square")
    if n not in sizes:
        raise DimensionError(
            f"Matrix must be 2×2 or 3×3, got {n}×{n}"
        )
    return n


def identity(n: int) -> tuple:
    """Return the n×n identity matrix."""
    return tuple(
        tuple(1.0 if i == j else 0.0 for j in range(n)) for i in range(n)
    )


def as_column(vector) -> tuple:
    """Reshape a length-n vector into an n×1 matrix."""
    return tuple((float(v),) for v in vector)


def column_to_vector(matrix) -> tuple:
    """Flatten an n×1 matrix back into a vector."""
    return tuple(row[0] for row in matrix)


# ── Primitives ──────────────────────────────────────────────────────────

def transpose(matrix) -> tuple:
    """Swap rows and columns of a rectangular matrix."""
    if len(matrix) == 0:
        return ()
    cols = len(matrix[0])
    return tuple(
        tuple(matrix[i][j] for i in range(len(matrix))) for j in range(cols)
    )


def minor(matrix, row: int, col: int) -> tuple:
    """Return *matrix* with row *row* and column *col* removed."""
    return tuple(
        tuple(v for j, v in enumerate(r) if j != col)
        for i, r in enumerate(matrix)
        if i != row
    )


def multiply(a, b) -> tuple:
    """Standard matrix product ``a · b``.

    Raises :class:`DimensionMismatchError` when the number of columns of
    *a* differs from the number of rows of *b*.
    """
    rows_a = len(a)
    cols_a = len(a[0]) if rows_a else 0
    rows_b = len(b)
    cols_b = len(b[0]) if rows_b else 0
    if cols_a != rows_b:
        raise DimensionMismatchError(
            "Matrix dimensions are incompatible for multiplication "
            f"({rows_a}×{cols_a} · {rows_b}×{cols_b})"
        )

    result = []
    for i in range(rows_a):
        row = []
        for j in range(cols_b):
            total = 0.0
            for k in range(cols_a):
                total += a[i][k] * b[k][j]
            row.append(total)
        result.append(tuple(row))
    return tuple(result)


def _det2(m) -> float:
    return m[0][0] * m[1][1] - m[0][1] * m[1][0]


def first_row_minors(matrix) -> tuple:
    """Determinants of the three 2×2 minors along the first row of a 3×3."""
    return tuple(_det2(minor(matrix, 0, j)) for j in range(3))


def determinant(matrix) -> float:
    """Determinant of a 2×2 or 3×3 matrix.

    The 3×3 case uses cofactor expansion along the first row.  Any other
    shape raises :class:`DimensionError`.
    """
    n = _require_square(matrix)
    if n == 2:
        return _det2(matrix)
    m1, m2, m3 = first_row_minors(matrix)
    return matrix[0][0] * m1 - matrix[0][1] * m2 + matrix[0][2] * m3


def cofactor_matrix(matrix) -> tuple:
    """Signed minors ``(-1)^(i+j) · det(minor(i, j))`` of a 3×3 matrix."""
    return tuple(
        tuple(
            (-1) ** (i + j) * _det2(minor(matrix, i, j)) for j in range(3)
        )
        for i in range(3)
    )


def inverse(matrix) -> tuple:
    """Inverse of a 2×2 or 3×3 matrix via the adjugate.

    Raises :class:`SingularMatrixError` when ``|det| < 1e-10``.
    """
    det = determinant(matrix)
    if abs(det) < SINGULARITY_EPSILON:
        raise SingularMatrixError(SINGULAR_MESSAGE)

    if len(matrix) == 2:
        (a, b), (c, d) = matrix
        return (
            (d / det, -b / det),
            (-c / det, a / det),
        )

    adjugate = transpose(cofactor_matrix(matrix))
    return tuple(tuple(v / det for v in row) for row in adjugate)


__all__ = [
    "SINGULARITY_EPSILON",
    "SINGULAR_MESSAGE",
    "SUPPORTED_SIZES",
    "as_matrix",
    "as_vector",
    "is_square",
    "identity",
    "as_column",
    "column_to_vector",
    "transpose",
    "minor",
    "multiply",
    "first_row_minors",
    "determinant",
    "cofactor_matrix",
    "inverse",
]
