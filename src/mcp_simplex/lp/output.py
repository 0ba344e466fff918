from __future__ import annotations

from fractions import Fraction
from typing import Dict, Iterable, Mapping

from .tableau import Tableau


def extract_values(tableau: Tableau, tol: float = 1e-12) -> Dict[str, float]:
    """Value of every decision variable: its row's RHS when basic, else 0."""
    return _values_for(tableau, tableau.decision_variables, tol)


def extract_auxiliary_values(tableau: Tableau, tol: float = 1e-12) -> Dict[str, float]:
    return _values_for(tableau, tableau.auxiliary_variables, tol)


def objective_value(tableau: Tableau) -> float:
    # The objective row keeps -z in its right-hand-side slot.
    return -float(tableau.objective[-1])


def to_fractions(values: Mapping[str, float], max_denominator: int = 1_000_000) -> Dict[str, str]:
    """Render values as reduced fractions, e.g. ``0.8 -> "4/5"``."""
    return {
        name: str(Fraction(value).limit_denominator(max_denominator))
        for name, value in values.items()
    }


def _values_for(tableau: Tableau, names: Iterable[str], tol: float) -> Dict[str, float]:
    rows = {name: row for row, name in enumerate(tableau.basis) if name is not None}
    result: Dict[str, float] = {}
    for name in names:
        value = tableau.rhs(rows[name]) if name in rows else 0.0
        if abs(value) < tol:
            value = 0.0
        result[name] = value
    return result
