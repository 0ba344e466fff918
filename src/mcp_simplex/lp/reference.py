from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
from scipy.optimize import linprog

from ..schemas import LPProblem, LPSolution, SolveOptions
from ..utils import CONSTANT_TERM, get_unique_array
from .constraint import Constraint
from .expression import Expression


def reference_solve(problem: LPProblem, options: Optional[SolveOptions] = None) -> LPSolution:
    """
    Solve ``problem`` with SciPy's HiGHS backend.

    Used to cross-check the tableau engine; constraints go through the same
    parsing and normalisation (including the strict-inequality epsilon), and
    every variable is bounded below by 0.
    """

    opts = options or SolveOptions()
    objective = Expression.parse(problem.objective)
    constraints = [Constraint.parse(text).normalize() for text in problem.constraints]
    names = _variable_names(objective, constraints)

    c = np.array([objective.get_term_value(name) for name in names], dtype=float)
    A_ub, b_ub, A_eq, b_eq = _build_constraint_matrices(constraints, names)

    sense_factor = 1.0 if problem.sense == "min" else -1.0
    res = linprog(
        c * sense_factor,
        A_ub=A_ub if A_ub.size else None,
        b_ub=b_ub if b_ub.size else None,
        A_eq=A_eq if A_eq.size else None,
        b_eq=b_eq if b_eq.size else None,
        bounds=[(0, None)] * len(names),
        method="highs",
        options={"maxiter": opts.max_iters} if opts.max_iters is not None else None,
    )

    if not res.success:
        return LPSolution(
            status=_map_status(res.status),
            objective_value=None,
            x=None,
            slack=None,
            iterations=res.nit,
            message=res.message,
        )

    values = {name: float(value) for name, value in zip(names, res.x)}
    constant = objective.get_term_value(CONSTANT_TERM)
    return LPSolution(
        status="optimal",
        objective_value=float(res.fun * sense_factor + constant),
        x=values,
        slack=None,
        iterations=res.nit,
        message=res.message or "",
    )


def _variable_names(objective: Expression, constraints: List[Constraint]) -> List[str]:
    names: List[str] = []
    for cons in constraints:
        names.extend(cons.left_side.get_term_names())
    names.extend(objective.get_term_names())
    return [name for name in get_unique_array(names) if name != CONSTANT_TERM]


def _build_constraint_matrices(
    constraints: List[Constraint], names: List[str]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    n = len(names)
    A_ub: List[List[float]] = []
    b_ub: List[float] = []
    A_eq: List[List[float]] = []
    b_eq: List[float] = []

    for cons in constraints:
        row = [cons.left_side.get_term_value(name) for name in names]
        rhs = cons.right_side.get_term_value(CONSTANT_TERM)
        if cons.comparison == "<=":
            A_ub.append(row)
            b_ub.append(rhs)
        elif cons.comparison == ">=":
            A_ub.append([-value for value in row])
            b_ub.append(-rhs)
        else:
            A_eq.append(row)
            b_eq.append(rhs)

    return (
        np.array(A_ub, dtype=float) if A_ub else np.empty((0, n)),
        np.array(b_ub, dtype=float) if b_ub else np.empty(0),
        np.array(A_eq, dtype=float) if A_eq else np.empty((0, n)),
        np.array(b_eq, dtype=float) if b_eq else np.empty(0),
    )


def _map_status(code: int) -> str:
    mapping = {
        0: "optimal",
        1: "cycle_detected",
        2: "infeasible",
        3: "unbounded",
    }
    return mapping.get(code, "cycle_detected")
