from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..errors import ParseError
from ..utils import CONSTANT_TERM, get_unique_array
from .constraint import Constraint
from .expression import Expression

logger = logging.getLogger(__name__)

_RESERVED_NAME = re.compile(r"^(slack|surplus|artificial)(_\d+)?$")


class Tableau:
    """
    Simplex tableau built from standard-max-form constraints and an objective.

    ``matrix`` holds one row per constraint, one column per variable in
    ``variables`` and a trailing right-hand-side column. ``objective`` is the
    objective row: the coefficients of the quantity being maximised, with
    ``-z`` kept in its last slot. ``basis[i]`` names the variable that is
    basic in row ``i`` (``None`` while the row has no starting variable).
    """

    def __init__(self, constraints: Sequence[Constraint], objective: Expression) -> None:
        seen = set()
        for cons in constraints:
            _check_standard_form(cons)
            if cons.slack_name is None:
                continue
            if cons.slack_name in seen:
                raise ValueError(
                    f"Column '{cons.slack_name}' is added by more than one constraint; "
                    "index the standard max form of each row."
                )
            seen.add(cons.slack_name)

        self.constraints = list(constraints)
        self.objective_expression = objective
        self.variables: List[str] = self.build_variable_order()
        self.auxiliary_variables: List[str] = [c.slack_name for c in self.constraints if c.slack_name]
        self.artificial_variables: List[str] = []

        width = len(self.variables) + 1
        rows = [self.build_row(cons) for cons in self.constraints]
        self.matrix = np.array(rows, dtype=float).reshape(len(rows), width)
        self.objective = self.build_objective_row()
        self.basis: List[Optional[str]] = [cons.slack_name for cons in self.constraints]

    @classmethod
    def from_problem(cls, objective: str, constraints: Sequence[str], sense: str = "max") -> "Tableau":
        """Parse objective and constraint strings into a ready-to-solve tableau."""

        objective_expr = Expression.parse(objective)
        parsed = [Constraint.parse(text) for text in constraints]

        for name in objective_expr.get_term_names():
            _check_name(name)
        for cons in parsed:
            for name in cons.get_term_names():
                _check_name(name)

        if sense == "min":
            objective_expr.inverse()
        standard = [cons.get_standard_max_form(index=idx) for idx, cons in enumerate(parsed, start=1)]
        tableau = cls(standard, objective_expr)
        logger.debug("Built %d x %d tableau over %s", *tableau.shape, tableau.variables)
        return tableau

    def build_variable_order(self) -> List[str]:
        names: List[str] = []
        for cons in self.constraints:
            names.extend(cons.left_side.get_term_names())
        names.extend(self.objective_expression.get_term_names())
        return [name for name in get_unique_array(names) if name != CONSTANT_TERM]

    def build_row(self, constraint: Constraint) -> List[float]:
        row = [constraint.left_side.get_term_value(name) for name in self.variables]
        row.append(constraint.right_side.get_term_value(CONSTANT_TERM))
        return row

    def build_objective_row(self) -> np.ndarray:
        row = [self.objective_expression.get_term_value(name) for name in self.variables]
        row.append(-self.objective_expression.get_term_value(CONSTANT_TERM))
        return np.array(row, dtype=float)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    @property
    def decision_variables(self) -> List[str]:
        hidden = set(self.auxiliary_variables) | set(self.artificial_variables)
        return [name for name in self.variables if name not in hidden]

    def column_index(self, name: str) -> int:
        return self.variables.index(name)

    def rhs(self, row: int) -> float:
        return float(self.matrix[row, -1])

    def add_artificial(self, row: int) -> str:
        """Append an artificial column that is basic in ``row``."""

        name = f"artificial_{row + 1}"
        column = np.zeros((self.matrix.shape[0], 1))
        column[row, 0] = 1.0
        self.matrix = np.hstack([self.matrix[:, :-1], column, self.matrix[:, -1:]])
        self.objective = np.concatenate([self.objective[:-1], [0.0], self.objective[-1:]])
        self.variables.append(name)
        self.artificial_variables.append(name)
        self.basis[row] = name
        return name

    def __str__(self) -> str:
        header = " ".join(f"{name:>10}" for name in self.variables + ["rhs"])
        lines = [f"{'':>12} {header}"]
        for label, row in zip(self.basis, self.matrix):
            cells = " ".join(f"{value:>10.4g}" for value in row)
            lines.append(f"{str(label or '-'):>12} {cells}")
        cells = " ".join(f"{value:>10.4g}" for value in self.objective)
        lines.append(f"{'z':>12} {cells}")
        return "\n".join(lines)


def _check_standard_form(cons: Constraint) -> None:
    in_form = (
        cons.comparison == "="
        and not cons.left_side.has_term(CONSTANT_TERM)
        and all(name == CONSTANT_TERM for name in cons.right_side.get_term_names())
    )
    if not in_form:
        raise ValueError(f"Constraint '{cons}' is not in standard max form.")


def _check_name(name: str) -> None:
    if _RESERVED_NAME.match(name):
        raise ParseError(f"Variable name '{name}' is reserved for generated columns.")
