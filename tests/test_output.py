import numpy as np
import pytest

from mcp_simplex.lp.output import extract_auxiliary_values, extract_values, objective_value, to_fractions
from mcp_simplex.lp.tableau import Tableau


def make_solved_tableau() -> Tableau:
    tableau = Tableau.from_problem("3x + 2y", ["x + y <= 4", "x + 2y <= 5"])
    # Hand-pivoted: x enters on row 1.
    tableau.matrix = np.array(
        [
            [1.0, 1.0, 1.0, 0.0, 4.0],
            [0.0, 1.0, -1.0, 1.0, 1.0],
        ]
    )
    tableau.objective = np.array([0.0, -1.0, -3.0, 0.0, -12.0])
    tableau.basis = ["x", "slack_2"]
    return tableau


def test_basic_variables_take_row_rhs():
    tableau = make_solved_tableau()

    assert extract_values(tableau) == {"x": 4.0, "y": 0.0}
    assert extract_auxiliary_values(tableau) == {"slack_1": 0.0, "slack_2": 1.0}


def test_objective_value_is_negated_rhs():
    assert objective_value(make_solved_tableau()) == pytest.approx(12.0)


def test_tiny_values_snap_to_zero():
    tableau = make_solved_tableau()
    tableau.matrix[0, -1] = 1e-14

    assert extract_values(tableau)["x"] == 0.0


def test_to_fractions():
    assert to_fractions({"a": 0.5, "b": 4.0, "c": 1 / 3}) == {"a": "1/2", "b": "4", "c": "1/3"}
