"""Display formatting for the solver trace.

Solvers keep full-precision floats in their records; the strings built
here are only the human-readable narration shown next to them.  None of
the decision logic ever reads these strings back.
"""

import math

# Magnitudes below this render as "0".
DISPLAY_ZERO = 1e-10
DISPLAY_PRECISION = 6


# ── Numbers ─────────────────────────────────────────────────────────────

def format_number(value: float, precision: int = DISPLAY_PRECISION) -> str:
    """Round *value* to *precision* decimals; near-zero values become ``0``."""
    if abs(value) < DISPLAY_ZERO:
        return "0"
    return f"{value:.{precision}f}"


def format_operand(value: float, max_decimals: int = 10) -> str:
    """Compact rendering for user-supplied coefficients.

    - Integers lose the decimal point (``7`` not ``7.0``).
    - Trailing zeros are stripped (``2.5`` not ``2.5000000000``).
    """
    if not math.isfinite(value):
        return str(value)
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    return f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")


def _wrap_negative(text: str) -> str:
    return f"({text})" if text.startswith("-") else text


def format_vector(values, precision: int = DISPLAY_PRECISION) -> str:
    return "[" + ", ".join(format_number(v, precision) for v in values) + "]"


def format_matrix(matrix, precision: int = DISPLAY_PRECISION) -> str:
    """One bracketed row per line, values display-rounded."""
    return "\n".join(format_vector(row, precision) for row in matrix)


def variable_name(index: int) -> str:
    """``x1``, ``x2``, … for a 1-based *index*."""
    return f"x{index}"


# ── Equations ───────────────────────────────────────────────────────────

def format_linear_equation(row, constant) -> str:
    """Render one row of ``AX = B`` as ``2·x1 + 3·x2 = 7``."""
    parts = []
    for j, coeff in enumerate(row):
        term = f"{format_operand(abs(coeff))}·{variable_name(j + 1)}"
        if not parts:
            parts.append(f"-{term}" if coeff < 0 else term)
        else:
            parts.append(f"- {term}" if coeff < 0 else f"+ {term}")
    return f"{' '.join(parts)} = {format_operand(constant)}"


def format_update_expression(index: int, constant: float, terms, diagonal: float,
                             iteration=None, value=None) -> str:
    """Render a Jacobi update for variable *index* (1-based).

    *terms* holds ``(coefficient, operand)`` pairs where *coefficient* is
    the already negated off-diagonal entry ``-a_ij`` and *operand* is
    either a variable name or the numeric value of the previous iterate.

    ``x1 = (15 + 1·x2 + 0·x3) / 4`` for the rearranged equation, or
    ``x1^(1) = (15 + 1·0 + 0·0) / 4 = 3.750000`` for a sweep when
    *iteration* and *value* are given.
    """
    lhs = variable_name(index)
    if iteration is not None:
        lhs += f"^({iteration})"

    body = f"({format_operand(constant)}"
    for coeff, operand in terms:
        sign = "-" if coeff < 0 else "+"
        if isinstance(operand, str):
            operand_text = operand
        else:
            operand_text = _wrap_negative(format_number(operand))
        body += f" {sign} {format_operand(abs(coeff))}·{operand_text}"
    body += f") / {_wrap_negative(format_operand(diagonal))}"

    text = f"{lhs} = {body}"
    if value is not None:
        text += f" = {format_number(value)}"
    return text


def format_solution_lines(values) -> str:
    """``x1 = 2.000000`` per line."""
    return "\n".join(
        f"{variable_name(i + 1)} = {format_number(v)}"
        for i, v in enumerate(values)
    )


# ── Determinants ────────────────────────────────────────────────────────

def format_determinant_2x2(matrix, det: float) -> str:
    (a, b), (c, d) = matrix
    f = format_operand
    return f"det = ({f(a)})({f(d)}) - ({f(b)})({f(c)}) = {format_number(det)}"


def format_determinant_3x3(matrix, minors, det: float) -> str:
    """First-row cofactor expansion with every 2×2 minor spelled out."""
    f = format_operand
    lines = []
    for j, m in enumerate(minors):
        sub = [
            [matrix[r][c] for c in range(3) if c != j] for r in (1, 2)
        ]
        lines.append(
            f"M1{j + 1} = ({f(sub[0][0])})({f(sub[1][1])}) - "
            f"({f(sub[0][1])})({f(sub[1][0])}) = {format_number(m)}"
        )
    a, b, c = matrix[0]
    m1, m2, m3 = (format_number(m) for m in minors)
    lines.append(
        f"det = ({f(a)})({m1}) - ({f(b)})({m2}) + ({f(c)})({m3}) "
        f"= {format_number(det)}"
    )
    return "\n".join(lines)
