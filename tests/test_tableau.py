import numpy as np
import pytest

from mcp_simplex.errors import ParseError
from mcp_simplex.lp.constraint import Constraint
from mcp_simplex.lp.expression import Expression
from mcp_simplex.lp.tableau import Tableau


def make_tableau() -> Tableau:
    constraints = [
        Constraint.parse("x + y <= 4").get_standard_max_form(index=1),
        Constraint.parse("x + 2y >= 2").get_standard_max_form(index=2),
        Constraint.parse("x - z = 1").get_standard_max_form(index=3),
    ]
    return Tableau(constraints, Expression.parse("3x + 2y + w + 5"))


def test_variable_order_is_first_seen_without_constant():
    tableau = make_tableau()

    assert tableau.variables == ["x", "y", "slack_1", "surplus_2", "z", "w"]


def test_shape_matches_constraints_and_variables():
    tableau = make_tableau()

    assert tableau.shape == (3, len(tableau.variables) + 1)


def test_rows_are_padded_with_zeros():
    tableau = make_tableau()

    np.testing.assert_allclose(
        tableau.matrix,
        [
            [1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 4.0],
            [1.0, 2.0, 0.0, -1.0, 0.0, 0.0, 2.0],
            [1.0, 0.0, 0.0, 0.0, -1.0, 0.0, 1.0],
        ],
    )


def test_objective_row_keeps_negated_constant():
    tableau = make_tableau()

    np.testing.assert_allclose(tableau.objective, [3.0, 2.0, 0.0, 0.0, 0.0, 1.0, -5.0])


def test_initial_basis_uses_slack_and_surplus():
    tableau = make_tableau()

    assert tableau.basis == ["slack_1", "surplus_2", None]
    assert tableau.auxiliary_variables == ["slack_1", "surplus_2"]
    assert tableau.decision_variables == ["x", "y", "z", "w"]


def test_rejects_constraints_not_in_standard_form():
    with pytest.raises(ValueError):
        Tableau([Constraint.parse("x <= 4")], Expression.parse("x"))


def test_rejects_unindexed_rows_sharing_a_slack_column():
    constraints = [
        Constraint.parse("x + y <= 4").get_standard_max_form(),
        Constraint.parse("x - y <= 1").get_standard_max_form(),
    ]

    with pytest.raises(ValueError, match="slack"):
        Tableau(constraints, Expression.parse("x + y"))


@pytest.mark.parametrize("text", ["x = y", "x + 2 = 5"])
def test_rejects_equalities_with_terms_on_the_wrong_side(text):
    constraints = [
        Constraint.parse(text),
        Constraint.parse("y <= 3").get_standard_max_form(index=2),
    ]

    with pytest.raises(ValueError):
        Tableau(constraints, Expression.parse("x"))


def test_accepts_raw_equality_already_in_standard_form():
    tableau = Tableau([Constraint.parse("x + y = 4")], Expression.parse("x"))

    assert tableau.basis == [None]
    np.testing.assert_allclose(tableau.matrix, [[1.0, 1.0, 4.0]])


def test_add_artificial_keeps_column_invariant():
    tableau = make_tableau()
    name = tableau.add_artificial(2)

    assert name == "artificial_3"
    assert tableau.basis[2] == "artificial_3"
    assert tableau.shape == (3, len(tableau.variables) + 1)
    assert tableau.matrix[2, tableau.column_index(name)] == 1.0
    assert tableau.matrix[2, -1] == 1.0
    assert tableau.objective.shape == (tableau.shape[1],)
    assert "artificial_3" not in tableau.decision_variables


def test_from_problem_indexes_slack_names():
    tableau = Tableau.from_problem("3x + 2y", ["x + y <= 4", "x + 2y <= 5"])

    assert tableau.variables == ["x", "y", "slack_1", "slack_2"]
    assert tableau.basis == ["slack_1", "slack_2"]


def test_from_problem_negates_objective_for_minimisation():
    tableau = Tableau.from_problem("3x - y", ["x <= 1"], sense="min")

    assert tableau.variables == ["x", "slack_1", "y"]
    np.testing.assert_allclose(tableau.objective, [-3.0, 0.0, 1.0, 0.0])


def test_from_problem_rejects_reserved_names():
    with pytest.raises(ParseError):
        Tableau.from_problem("x + slack_1", ["x <= 4"])


def test_str_lists_basis_labels():
    text = str(make_tableau())

    assert "slack_1" in text
    assert "rhs" in text
