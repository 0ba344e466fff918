import pytest

from mcp_simplex.errors import ParseError
from mcp_simplex.lp.expression import Expression
from mcp_simplex.lp.tokenizer import tokenize


def test_tokenize_signed_terms():
    assert tokenize("3x - y + 2") == [(3.0, "x"), (-1.0, "y"), (2.0, "1")]
    assert tokenize("-2.5 * cats") == [(-2.5, "cats")]
    assert tokenize(".5x1") == [(0.5, "x1")]


@pytest.mark.parametrize("text", ["", "   ", "x +", "x ++ y", "x +- y", "a b", "2 x", "3 *", "* x", "x $ y"])
def test_tokenize_rejects_malformed_text(text):
    with pytest.raises(ParseError):
        tokenize(text)


def test_parse_constants_and_bare_names():
    expr = Expression.parse("x + 4 - 2y")

    assert expr.terms == {"x": 1.0, "1": 4.0, "y": -2.0}
    assert Expression.parse("12").terms == {"1": 12.0}


def test_parse_accumulates_repeated_names():
    expr = Expression.parse("x + 2x - 3 + 1")

    assert expr.get_term_value("x") == pytest.approx(3.0)
    assert expr.get_term_value("1") == pytest.approx(-2.0)


def test_term_access_and_removal():
    expr = Expression.parse("a + 2b")

    assert expr.has_term("b")
    assert expr.get_term_value("missing") == 0
    expr.remove_term("b").remove_term("missing")
    assert not expr.has_term("b")
    assert expr.get_term_names() == ["a"]


def test_scale_and_inverse_include_constant():
    expr = Expression.parse("2x - y + 3").scale(2)
    assert expr.terms == {"x": 4.0, "y": -2.0, "1": 6.0}

    expr.inverse()
    assert expr.terms == {"x": -4.0, "y": 2.0, "1": -6.0}


def test_for_each_variable_and_constant():
    expr = Expression.parse("x + 5 + y")
    seen_vars = []
    seen_consts = []

    expr.for_each_variable(lambda name, value: seen_vars.append((name, value)))
    expr.for_each_constant(lambda name, value: seen_consts.append((name, value)))

    assert seen_vars == [("x", 1.0), ("y", 1.0)]
    assert seen_consts == [("1", 5.0)]


def test_for_each_variable_tolerates_removal():
    expr = Expression.parse("x + y + 1")
    expr.for_each_variable(lambda name, value: expr.remove_term(name))

    assert expr.terms == {"1": 1.0}


@pytest.mark.parametrize(
    "text",
    ["3x + 2y", "-a - b + 7", "0.25x - 12", "x - x", "-4", "2.5 * rate + 0.000001"],
)
def test_to_string_reparses_to_same_terms(text):
    expr = Expression.parse(text)

    assert Expression.parse(expr.to_string()).terms == expr.terms


def test_to_string_renders_readable_form():
    assert str(Expression.parse("1x - 1y + 3")) == "x - y + 3"
    assert str(Expression()) == "0"
    assert str(Expression({"1": 1e-06})) == "0.000001"


def test_equality_ignores_zero_terms():
    assert Expression.parse("x + 0y") == Expression.parse("x")
    assert Expression.parse("x + y") != Expression.parse("x + 2y")


def test_copy_is_independent():
    expr = Expression.parse("x + 1")
    clone = expr.copy()
    clone.add_term("x", 1)

    assert expr.get_term_value("x") == 1.0
    assert clone.get_term_value("x") == 2.0


def test_tokenize_exponent_coefficients():
    assert tokenize("1e3x - 2.5E-2y") == [(1000.0, "x"), (-0.025, "y")]
    assert Expression.parse("x + 1e2").terms == {"x": 1.0, "1": 100.0}
