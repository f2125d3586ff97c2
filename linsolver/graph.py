"""
Graph builder for LinSolver.

Produces themed matplotlib Figures for a solve result:
  - convergence : max absolute error per Jacobi sweep (log scale)
  - system      : the two lines of a 2×2 system and their intersection
"""

import numpy as np

# ── palette ────────────────────────────────────────────────────────────────
_DARK_GRAPH = {
    "C_BG":    "#0f0f0f",
    "C_AX":    "#181818",
    "C_GRID":  "#252525",
    "C_TICK":  "#666666",
    "C_SPINE": "#333333",
    "C_LINE1": "#1a8cff",   # primary line
    "C_LINE2": "#ff8c42",   # secondary line / tolerance
    "C_DOT":   "#4caf50",   # intersection / converged point
    "C_TEXT":  "#cccccc",
}
_LIGHT_GRAPH = {
    "C_BG":    "#ffffff",
    "C_AX":    "#f7f7f7",
    "C_GRID":  "#dddddd",
    "C_TICK":  "#555555",
    "C_SPINE": "#bbbbbb",
    "C_LINE1": "#0066cc",
    "C_LINE2": "#e06600",
    "C_DOT":   "#2e7d32",
    "C_TEXT":  "#222222",
}
_THEMES = {"dark": _DARK_GRAPH, "light": _LIGHT_GRAPH}


def _style_axes(ax, fig, colors: dict, axis_lines: bool = True) -> None:
    fig.patch.set_facecolor(colors["C_BG"])
    ax.set_facecolor(colors["C_AX"])
    ax.tick_params(colors=colors["C_TICK"], labelsize=9)
    ax.xaxis.label.set_color(colors["C_TEXT"])
    ax.yaxis.label.set_color(colors["C_TEXT"])
    ax.title.set_color(colors["C_TEXT"])
    for spine in ax.spines.values():
        spine.set_edgecolor(colors["C_SPINE"])
    ax.grid(True, color=colors["C_GRID"], linewidth=0.8, linestyle="--", alpha=0.7)
    if axis_lines:
        ax.axhline(0, color=colors["C_SPINE"], linewidth=0.8)
        ax.axvline(0, color=colors["C_SPINE"], linewidth=0.8)


def _legend(ax, colors: dict) -> None:
    ax.legend(fontsize=8, facecolor=colors["C_AX"], edgecolor=colors["C_SPINE"],
              labelcolor=colors["C_TEXT"])


def _iteration_records(result) -> tuple:
    for step in result.steps:
        if step.iterations:
            return step.iterations
    return ()


# ── Jacobi convergence ──────────────────────────────────────────────────────

def build_convergence_figure(result, theme: str = "dark"):
    """
    Plot the max absolute error of every Jacobi sweep.

    Returns None when *result* has no iteration records (direct method,
    failed validation, or ``max_iterations = 0``).
    """
    from matplotlib.figure import Figure

    records = _iteration_records(result)
    if not records:
        return None
    colors = _THEMES.get(theme, _DARK_GRAPH)

    idx = np.array([r.index for r in records])
    err = np.array([r.max_absolute_error for r in records], dtype=float)
    finite = np.isfinite(err) & (err > 0)

    fig = Figure(figsize=(7, 3.4), dpi=100)
    ax = fig.add_subplot(111)
    _style_axes(ax, fig, colors, axis_lines=False)

    if finite.any():
        ax.semilogy(idx[finite], err[finite], color=colors["C_LINE1"], linewidth=2,
                    marker="o", markersize=3, label="max |x⁽ᵏ⁾ − x⁽ᵏ⁻¹⁾|")
    if result.tolerance:
        ax.axhline(result.tolerance, color=colors["C_LINE2"], linewidth=1,
                   linestyle=":", label=f"tolerance = {result.tolerance:g}")
        if not finite.any():
            ax.set_yscale("log")

    if result.converged:
        last = records[-1]
        if last.max_absolute_error > 0:
            ax.scatter([last.index], [last.max_absolute_error], color=colors["C_DOT"],
                       s=70, zorder=5, label=f"Converged after {last.index} iterations")
        ax.set_title(f"Converged after {len(records)} iterations",
                     color=colors["C_TEXT"], fontsize=10)
    else:
        ax.set_title(f"Not converged after {len(records)} iterations",
                     color=colors["C_TEXT"], fontsize=10)

    ax.set_xlabel("iteration", color=colors["C_TEXT"])
    ax.set_ylabel("max absolute error", color=colors["C_TEXT"])
    _legend(ax, colors)
    fig.tight_layout(pad=1.2)
    return fig


# ── System of two equations ─────────────────────────────────────────────────

def _line_points(row, constant, x_range):
    """Points of ``a·x1 + b·x2 = c``; vertical lines return x = c/a."""
    a, b = float(row[0]), float(row[1])
    if abs(b) > 1e-12:
        return x_range, (constant - a * x_range) / b
    if abs(a) > 1e-12:
        x0 = constant / a
        ys = np.linspace(-8, 8, len(x_range))
        return np.full_like(ys, x0), ys
    return None, None


def build_system_figure(coefficients, constants, solution=None, theme: str = "dark"):
    """
    Draw both equations of a 2×2 system and mark the solution point.

    Returns None for any other size or when an equation has no variables.
    """
    from matplotlib.figure import Figure

    if len(coefficients) != 2 or len(constants) != 2:
        return None
    colors = _THEMES.get(theme, _DARK_GRAPH)

    sol = None
    if solution is not None and all(np.isfinite(solution)):
        sol = (float(solution[0]), float(solution[1]))
    cx = sol[0] if sol else 0.0
    x_range = np.linspace(cx - 8, cx + 8, 400)

    lines = [_line_points(row, c, x_range) for row, c in zip(coefficients, constants)]
    if any(xs is None for xs, _ in lines):
        return None

    fig = Figure(figsize=(7, 3.8), dpi=100)
    ax = fig.add_subplot(111)
    _style_axes(ax, fig, colors)

    for k, ((xs, ys), row, c) in enumerate(zip(lines, coefficients, constants)):
        label = f"{row[0]:g}·x1 + {row[1]:g}·x2 = {c:g}"
        color = colors["C_LINE1"] if k == 0 else colors["C_LINE2"]
        ax.plot(xs, ys, color=color, linewidth=2, label=label)

    if sol is not None:
        ax.scatter([sol[0]], [sol[1]], color=colors["C_DOT"], s=90, zorder=5,
                   label=f"Intersection: ({sol[0]:g}, {sol[1]:g})")
        ax.set_title(f"One solution — lines intersect at ({sol[0]:g}, {sol[1]:g})",
                     color=colors["C_TEXT"], fontsize=9)
    else:
        ax.set_title("No unique intersection", color=colors["C_TEXT"], fontsize=9)

    ax.set_xlabel("x1", color=colors["C_TEXT"])
    ax.set_ylabel("x2", color=colors["C_TEXT"])

    # Clip y-axis to avoid extreme values
    y_all = np.concatenate([ys for _, ys in lines])
    y_finite = y_all[np.isfinite(y_all)]
    if len(y_finite):
        ylo, yhi = np.percentile(y_finite, 2), np.percentile(y_finite, 98)
        pad = max((yhi - ylo) * 0.2, 1.0)
        ax.set_ylim(ylo - pad, yhi + pad)

    _legend(ax, colors)
    fig.tight_layout(pad=1.2)
    return fig


def build_figure(result, coefficients, constants, theme: str = "dark"):
    """
    Build and return the most useful Figure for *result*.

    Jacobi runs show their convergence history; other 2×2 results show the
    line intersection.  Returns None if nothing can be drawn.
    """
    if result.method == "jacobi":
        fig = build_convergence_figure(result, theme)
        if fig is not None:
            return fig
    return build_system_figure(coefficients, constants, result.solution, theme)
