from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import ParseError
from .lp.parser import parse_problem
from .lp.simplex import simplex_solve
from .schemas import LPProblem, SolveOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-simplex",
        description="Solve a linear program given as algebraic constraint strings.",
    )
    parser.add_argument(
        "problem",
        nargs="?",
        help="Problem text, e.g. 'maximize 3x + 2y subject to x + y <= 4, x + 2y <= 5'",
    )
    parser.add_argument("--file", type=Path, default=None, help="LPProblem JSON document")
    parser.add_argument("--pivot-rule", choices=["dantzig", "bland"], default="dantzig")
    parser.add_argument("--max-iters", type=int, default=None, help="Iteration cap")
    parser.add_argument(
        "--single-phase",
        action="store_true",
        help="Report rows without a starting basic variable as infeasible instead of running Phase I",
    )
    parser.add_argument("--fractions", action="store_true", help="Also render values as fractions")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every pivot")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if (args.problem is None) == (args.file is None):
        parser.error("give either problem text or --file")

    try:
        if args.file is not None:
            problem = LPProblem.model_validate(json.loads(args.file.read_text()))
        else:
            problem = parse_problem(args.problem)
        opts = SolveOptions(
            max_iters=args.max_iters,
            pivot_rule=args.pivot_rule,
            two_phase=not args.single_phase,
            as_fractions=args.fractions,
        )
        solution = simplex_solve(problem, opts)
    except ParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(solution.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
