"""
LinSolver — Entry point.

Solve a small linear system from the command line and print the
step-by-step trail.

Usage:
    python main.py --matrix "2,3;1,-1" --constants "7,1"
    python main.py --method jacobi --matrix "4,-1,0;-1,4,-1;0,-1,4" --constants "15,10,10"

Options:
    --method METHOD         inverse (default from settings) or jacobi
    --matrix ROWS           rows separated by ';', entries by ','
    --constants VALUES      right-hand side, entries separated by ','
    --size N                fill missing cells with the identity pattern
    --tolerance TOL         Jacobi convergence tolerance
    --max-iterations N      Jacobi iteration cap
    --summary               hide per-iteration calculations
    --plot PATH             save a convergence or line-intersection graph
    --theme THEME           graph palette, light (default) or dark
    --verbose               debug logging
"""

import argparse
import logging
import sys
from typing import List, Optional

from linsolver.engine import METHODS, fill_defaults, solve_system
from linsolver.export import build_plain_text
from linsolver.graph import build_figure
from linsolver.logging_config import setup_logging
from linsolver.settings import get_settings

logger = logging.getLogger("linsolver.cli")


def _parse_cell(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return None
    return float(text)


def parse_matrix(text: str) -> list:
    """``"2,3;1,-1"`` → ``[[2.0, 3.0], [1.0, -1.0]]``; empty cells become None."""
    return [[_parse_cell(c) for c in row.split(",")] for row in text.split(";")]


def parse_vector(text: str) -> list:
    return [_parse_cell(c) for c in text.split(",")]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linsolver",
        description="Solve a 2×2 / 3×3 linear system step by step.",
    )
    parser.add_argument("--method", choices=sorted(METHODS), default=None)
    parser.add_argument("--matrix", default="", help="rows separated by ';', entries by ','")
    parser.add_argument("--constants", default="", help="entries separated by ','")
    parser.add_argument("--size", type=int, default=None,
                        help="system size; missing cells default to the identity pattern")
    parser.add_argument("--tolerance", type=float, default=None)
    parser.add_argument("--max-iterations", type=int, default=None)
    parser.add_argument("--summary", action="store_true",
                        help="hide per-iteration calculations")
    parser.add_argument("--plot", metavar="PATH", default=None,
                        help="save a graph of the result (convergence or 2×2 lines)")
    parser.add_argument("--theme", choices=["dark", "light"], default="light")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging("DEBUG" if args.verbose else settings["log_level"])

    try:
        matrix = parse_matrix(args.matrix) if args.matrix else []
        constants = parse_vector(args.constants) if args.constants else []
    except ValueError as exc:
        print(f"Could not read the system: {exc}", file=sys.stderr)
        return 2

    size = args.size or len(matrix)
    if size == 0:
        print("Provide --matrix or --size.", file=sys.stderr)
        return 2
    matrix, constants = fill_defaults(matrix, constants, size)

    result = solve_system(
        matrix,
        constants,
        method=args.method,
        tolerance=args.tolerance,
        max_iterations=args.max_iterations,
    )
    print(build_plain_text(result, show_iterations=not args.summary,
                           coefficients=matrix, constants=constants))
    if args.plot and result.success:
        fig = build_figure(result, matrix, constants, theme=args.theme)
        if fig is None:
            print("Nothing to plot for this system.", file=sys.stderr)
        else:
            fig.savefig(args.plot)
            logger.info("Saved graph to %s", args.plot)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
