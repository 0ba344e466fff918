from __future__ import annotations

import logging
from typing import List, Optional, Set

import numpy as np
from pydantic import BaseModel, ConfigDict

from ..errors import CycleDetected, InfeasibleError, UnboundedError
from ..schemas import LPProblem, LPSolution, SolveOptions, Status
from .output import extract_auxiliary_values, extract_values, objective_value, to_fractions
from .tableau import Tableau

logger = logging.getLogger(__name__)

_ERRORS = {
    "unbounded": UnboundedError,
    "infeasible": InfeasibleError,
    "cycle_detected": CycleDetected,
}


class SimplexResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: Status
    tableau: Tableau
    iterations: int = 0
    message: str = ""

    def raise_for_status(self) -> "SimplexResult":
        error = _ERRORS.get(self.status)
        if error is not None:
            raise error(self.message or self.status)
        return self


class Simplex:
    """
    Primal tableau simplex for maximisation problems.

    Rows whose slack or surplus cannot start the basis (equalities, or a
    negative basic value) get an artificial variable and are resolved by a
    Phase I run first, unless ``two_phase`` is disabled, in which case the
    problem is reported infeasible straight away.
    """

    def __init__(self, options: Optional[SolveOptions] = None) -> None:
        self.options = options or SolveOptions()
        self.iterations = 0

    def solve(self, tableau: Tableau) -> SimplexResult:
        self.iterations = 0
        tol = self.options.tol

        missing = self._canonicalize_basis(tableau)
        logger.debug("Initial tableau:\n%s", tableau)
        if missing and not self.options.two_phase:
            rows = ", ".join(str(row + 1) for row in missing)
            return self._result("infeasible", tableau, f"No feasible starting basic variable in row(s) {rows}.")

        if missing:
            for row in missing:
                if tableau.matrix[row, -1] < 0:
                    tableau.matrix[row] *= -1
                tableau.add_artificial(row)
        cap = self._iteration_cap(tableau)

        if missing:
            logger.debug("Phase I with artificial variables %s", tableau.artificial_variables)
            tableau.objective = self._phase_one_row(tableau)
            _price_out(tableau)
            status = self._run(tableau, forbidden=set(), cap=cap)
            if status == "cycle_detected":
                return self._result(status, tableau, "Hit iteration limit in Phase I.")
            if status == "unbounded":
                return self._result(status, tableau, "Phase I detected unbounded auxiliary problem.")
            if objective_value(tableau) < -tol:
                return self._result("infeasible", tableau, "Infeasible.")
            self._drive_out_artificials(tableau)

        tableau.objective = tableau.build_objective_row()
        _price_out(tableau)
        forbidden = {tableau.column_index(name) for name in tableau.artificial_variables}
        status = self._run(tableau, forbidden=forbidden, cap=cap)
        messages = {
            "optimal": "",
            "unbounded": "Unbounded.",
            "cycle_detected": "Hit iteration limit; the problem may be degenerate.",
        }
        return self._result(status, tableau, messages[status])

    def _result(self, status: str, tableau: Tableau, message: str) -> SimplexResult:
        logger.debug("Simplex finished: %s after %d iteration(s)", status, self.iterations)
        return SimplexResult(status=status, tableau=tableau, iterations=self.iterations, message=message)

    def _iteration_cap(self, tableau: Tableau) -> int:
        if self.options.max_iters is not None:
            return max(self.options.max_iters, 0)
        rows, columns = tableau.shape
        return self.options.iteration_factor * max(rows, 1) * columns

    def _canonicalize_basis(self, tableau: Tableau) -> List[int]:
        """Scale each row so its basic coefficient is 1; return rows left without a basis."""

        tol = self.options.tol
        missing: List[int] = []
        for row, name in enumerate(tableau.basis):
            if name is not None:
                coef = tableau.matrix[row, tableau.column_index(name)]
                if abs(coef) > tol:
                    tableau.matrix[row] /= coef
                    if tableau.matrix[row, -1] >= -tol:
                        continue
            tableau.basis[row] = None
            missing.append(row)
        return missing

    def _phase_one_row(self, tableau: Tableau) -> np.ndarray:
        row = np.zeros(tableau.matrix.shape[1])
        for name in tableau.artificial_variables:
            row[tableau.column_index(name)] = -1.0
        return row

    def _drive_out_artificials(self, tableau: Tableau) -> None:
        artificial = {tableau.column_index(name) for name in tableau.artificial_variables}
        for row, name in enumerate(tableau.basis):
            if name not in tableau.artificial_variables:
                continue
            for col in range(tableau.matrix.shape[1] - 1):
                if col not in artificial and abs(tableau.matrix[row, col]) > self.options.tol:
                    _pivot(tableau, row, col)
                    break
            # Otherwise the row is redundant and its artificial stays basic at 0.

    def _run(self, tableau: Tableau, forbidden: Set[int], cap: int) -> str:
        while True:
            entering = self._choose_entering(tableau, forbidden)
            if entering is None:
                return "optimal"
            if self.iterations >= cap:
                return "cycle_detected"
            leaving = self._choose_leaving(tableau, entering)
            if leaving is None:
                logger.debug("Column %s has no limiting row", tableau.variables[entering])
                return "unbounded"
            logger.debug(
                "Pivot %d: %s enters, %s leaves (row %d)",
                self.iterations + 1,
                tableau.variables[entering],
                tableau.basis[leaving],
                leaving + 1,
            )
            _pivot(tableau, leaving, entering)
            self.iterations += 1

    def _choose_entering(self, tableau: Tableau, forbidden: Set[int]) -> Optional[int]:
        tol = self.options.tol
        best: Optional[int] = None
        for col, value in enumerate(tableau.objective[:-1]):
            if col in forbidden or value <= tol:
                continue
            if self.options.pivot_rule == "bland":
                return col
            if best is None or value > tableau.objective[best]:
                best = col
        return best

    def _choose_leaving(self, tableau: Tableau, col: int) -> Optional[int]:
        tol = self.options.tol
        best: Optional[int] = None
        best_ratio = np.inf
        for row in range(tableau.matrix.shape[0]):
            coef = tableau.matrix[row, col]
            if coef <= tol:
                continue
            ratio = max(tableau.matrix[row, -1], 0.0) / coef
            if best is None or ratio < best_ratio:
                best, best_ratio = row, ratio
            elif ratio == best_ratio and self.options.pivot_rule == "bland":
                if _basis_column(tableau, row) < _basis_column(tableau, best):
                    best = row
        return best


def _basis_column(tableau: Tableau, row: int) -> int:
    name = tableau.basis[row]
    return tableau.column_index(name) if name is not None else -1


def _pivot(tableau: Tableau, row: int, col: int) -> None:
    matrix = tableau.matrix
    matrix[row] = matrix[row] / matrix[row, col]
    factors = matrix[:, col].copy()
    factors[row] = 0.0
    matrix -= np.outer(factors, matrix[row])
    tableau.objective = tableau.objective - tableau.objective[col] * matrix[row]
    matrix[:, col] = 0.0
    matrix[row, col] = 1.0
    tableau.objective[col] = 0.0
    tableau.basis[row] = tableau.variables[col]


def _price_out(tableau: Tableau) -> None:
    """Zero the objective coefficients of the current basic variables."""
    for row, name in enumerate(tableau.basis):
        if name is None:
            continue
        coef = tableau.objective[tableau.column_index(name)]
        if coef != 0.0:
            tableau.objective = tableau.objective - coef * tableau.matrix[row]


def simplex_solve(problem: LPProblem, opts: Optional[SolveOptions] = None) -> LPSolution:
    """
    Parse, standardise and solve ``problem``.

    ParseError propagates to the caller; unbounded, infeasible and
    cycle-detected outcomes are reported through ``LPSolution.status``.
    """

    opts = opts or SolveOptions()
    tableau = Tableau.from_problem(problem.objective, problem.constraints, problem.sense)
    result = Simplex(opts).solve(tableau)

    if result.status != "optimal":
        return LPSolution(
            status=result.status,
            objective_value=None,
            x=None,
            slack=None,
            iterations=result.iterations,
            message=result.message,
        )

    values = extract_values(tableau, opts.tol)
    objective = objective_value(tableau)
    if problem.sense == "min":
        objective = -objective

    return LPSolution(
        status="optimal",
        objective_value=float(objective),
        x=values,
        slack=extract_auxiliary_values(tableau, opts.tol),
        fractions=to_fractions(values, opts.max_denominator) if opts.as_fractions else None,
        iterations=result.iterations,
        message="",
    )
