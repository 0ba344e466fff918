from __future__ import annotations

import re
from typing import Callable, List, Optional

from ..errors import ParseError
from ..utils import CONSTANT_TERM, EPSILON, get_unique_array
from .expression import Expression

_COMPARES = re.compile(r"[<>]=?|=")
_INCOMPLETE_OPERATOR = re.compile(r"[+\-][><=+\-]|[><=+\-]$")
_SIDES = ("left", "right")
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_OPPOSITE_COMPARE = {
    ">=": "<",
    ">": "<=",
    "<=": ">",
    "<": ">=",
}

IterTerms = Callable[[Expression, Callable[[str, float], None]], Expression]


class Constraint:
    """
    Two expressions joined by one of ``=``, ``<``, ``>``, ``<=``, ``>=``.

    The normalisation methods rewrite the constraint in place towards
    standard max form: variables on the left, constants on the right, an
    equality with at most one slack or surplus term. Each method returns
    the constraint so the steps can be chained.
    """

    EPSILON = EPSILON

    def __init__(
        self,
        left_side: Optional[Expression] = None,
        comparison: str = "=",
        right_side: Optional[Expression] = None,
    ) -> None:
        self.left_side = left_side if left_side is not None else Expression()
        self.right_side = right_side if right_side is not None else Expression()
        self.comparison = comparison
        self.slack_value = 0
        self.slack_name: Optional[str] = None

    # -- input checks -------------------------------------------------

    @staticmethod
    def has_many_compares(text: str) -> bool:
        return len(_COMPARES.findall(re.sub(r"\s", "", str(text)))) > 1

    @staticmethod
    def has_incomplete_binary_operator(text: str) -> bool:
        return bool(_INCOMPLETE_OPERATOR.search(re.sub(r"\s", "", str(text))))

    @classmethod
    def get_error_message(cls, text: str) -> Optional[str]:
        if cls.has_many_compares(text):
            return "Only 1 comparison (<, >, =, >=, <=) is allowed in a constraint."
        if cls.has_incomplete_binary_operator(text):
            return "Math operators must be in between terms. Good: (a+b=c). Bad: (a+=c)."
        return None

    @classmethod
    def check_input(cls, text: str) -> None:
        message = cls.get_error_message(text)
        if message:
            raise ParseError(f"{message} Got '{text}'.")

    @classmethod
    def parse(cls, text: str) -> "Constraint":
        if text is None or not str(text).strip():
            raise ParseError("Constraint is empty.")
        cls.check_input(text)

        match = _COMPARES.search(text)
        if not match:
            return cls(Expression.parse(text), "=", Expression.parse("0"))
        left = text[: match.start()]
        right = text[match.end() :]
        return cls(Expression.parse(left), match.group(0), Expression.parse(right))

    # -- moving terms -------------------------------------------------

    @staticmethod
    def switch_sides(side_a: Expression, side_b: Expression, iter_fn: IterTerms) -> None:
        """Move every term ``iter_fn`` visits on ``side_a`` over to ``side_b``."""

        def move(name: str, value: float) -> None:
            side_b.add_term(name, -value)
            side_a.remove_term(name)

        iter_fn(side_a, move)

    def get_swapped_sides(self, do_swap: bool):
        """Return ``(source, target)``; ``do_swap`` makes the right side the source."""
        if do_swap:
            return self.right_side, self.left_side
        return self.left_side, self.right_side

    def move_type_to_one_side(self, var_side: Optional[str], num_side: Optional[str]) -> "Constraint":
        if var_side in _SIDES:
            source, target = self.get_swapped_sides(var_side == "left")
            self.switch_sides(source, target, Expression.for_each_variable)
        if num_side in _SIDES:
            source, target = self.get_swapped_sides(num_side == "left")
            self.switch_sides(source, target, Expression.for_each_constant)
        return self

    def var_switch_side(self, name, move_to: str) -> "Constraint":
        if move_to not in _SIDES:
            return self
        name = CONSTANT_TERM if _is_number(name) else str(name)
        source, target = self.get_swapped_sides(move_to == "left")
        if source.has_term(name):
            target.add_term(name, -source.get_term_value(name))
            source.remove_term(name)
        return self

    # -- rewriting ----------------------------------------------------

    def inverse(self) -> "Constraint":
        self.left_side.inverse()
        self.right_side.inverse()
        return self

    def scale(self, factor: float) -> "Constraint":
        self.left_side.scale(factor)
        self.right_side.scale(factor)
        return self

    def negate_comparison(self) -> "Constraint":
        opposite = _OPPOSITE_COMPARE.get(self.comparison)
        if opposite:
            self.comparison = opposite
            self.inverse()
        return self

    def remove_strict_inequality(self) -> "Constraint":
        # x < b becomes x <= b - EPSILON, x > b becomes x >= b + EPSILON.
        if self.comparison in ("<", ">"):
            self.comparison += "="
            eps = self.EPSILON if self.comparison == ">=" else -self.EPSILON
            self.right_side.add_term(CONSTANT_TERM, eps)
        return self

    def normalize(self) -> "Constraint":
        return self.move_type_to_one_side("left", "right").remove_strict_inequality()

    def add_slack(self, name: str = "slack") -> "Constraint":
        self.slack_value = 1
        self.slack_name = name
        self.left_side.add_term(name, 1)
        return self

    def add_surplus(self, name: str = "surplus") -> "Constraint":
        self.slack_value = -1
        self.slack_name = name
        self.left_side.add_term(name, -1)
        return self

    def get_standard_max_form(self, index: Optional[int] = None) -> "Constraint":
        """
        Normalise and turn the constraint into an equality.

        ``<=`` gains a slack term and ``>=`` a surplus term; with ``index``
        the added term is named ``slack_<index>`` / ``surplus_<index>`` so
        constraints of one tableau do not share a column.
        """
        suffix = "" if index is None else f"_{index}"
        self.normalize()
        if self.comparison == "<=":
            self.add_slack(f"slack{suffix}")
        elif self.comparison == ">=":
            self.add_surplus(f"surplus{suffix}")
        self.comparison = "="
        return self

    # -- inspection ---------------------------------------------------

    def get_term_names(self) -> List[str]:
        return get_unique_array(self.left_side.get_term_names() + self.right_side.get_term_names())

    def copy(self) -> "Constraint":
        clone = Constraint(self.left_side.copy(), self.comparison, self.right_side.copy())
        clone.slack_value = self.slack_value
        clone.slack_name = self.slack_name
        return clone

    def equals(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return False
        return (
            self.comparison == other.comparison
            and self.slack_value == other.slack_value
            and self.left_side == other.left_side
            and self.right_side == other.right_side
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self.equals(other)

    def __str__(self) -> str:
        return f"{self.left_side} {self.comparison} {self.right_side}"

    def __repr__(self) -> str:
        return f"Constraint({str(self)!r})"


def _is_number(name) -> bool:
    if isinstance(name, (int, float)):
        return True
    return bool(_NUMBER.fullmatch(str(name).strip()))
