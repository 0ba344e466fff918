"""MCP Simplex: linear programs from algebraic constraint strings."""

from .errors import CycleDetected, InfeasibleError, ParseError, SimplexError, UnboundedError
from .schemas import LPProblem, LPSolution, SolveOptions
from .lp import Constraint, Expression, Simplex, Tableau, parse_problem, simplex_solve

__all__ = [
    "Constraint",
    "CycleDetected",
    "Expression",
    "InfeasibleError",
    "LPProblem",
    "LPSolution",
    "ParseError",
    "Simplex",
    "SimplexError",
    "SolveOptions",
    "Tableau",
    "UnboundedError",
    "parse_problem",
    "simplex_solve",
]
