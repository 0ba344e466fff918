"""Expression/constraint normalisation and the tableau simplex engine."""

from .expression import Expression
from .constraint import Constraint
from .tableau import Tableau
from .simplex import Simplex, SimplexResult, simplex_solve
from .parser import parse_problem

__all__ = [
    "Expression",
    "Constraint",
    "Tableau",
    "Simplex",
    "SimplexResult",
    "simplex_solve",
    "parse_problem",
]
