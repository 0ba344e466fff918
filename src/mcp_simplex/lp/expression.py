from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional

import numpy as np

from ..utils import CONSTANT_TERM, are_objects_same
from .tokenizer import tokenize

TermCallback = Callable[[str, float], None]


class Expression:
    """
    Linear combination of named terms, e.g. ``3x - y + 2``.

    ``terms`` maps a term name to its coefficient; the constant lives under
    the reserved name ``"1"``. Mutating methods work in place and return the
    instance so calls can be chained.
    """

    def __init__(self, terms: Optional[Mapping[str, float]] = None) -> None:
        self.terms: Dict[str, float] = {}
        for name, value in (terms or {}).items():
            self.add_term(name, value)

    @classmethod
    def parse(cls, text: str) -> "Expression":
        expr = cls()
        for value, name in tokenize(text):
            expr.add_term(name, value)
        return expr

    def copy(self) -> "Expression":
        return Expression(self.terms)

    def add_term(self, name: str, value: float) -> "Expression":
        name = str(name)
        self.terms[name] = self.terms.get(name, 0.0) + float(value)
        return self

    def remove_term(self, name: str) -> "Expression":
        self.terms.pop(str(name), None)
        return self

    def has_term(self, name: str) -> bool:
        return str(name) in self.terms

    def get_term_value(self, name: str) -> float:
        return self.terms.get(str(name), 0.0)

    def get_term_names(self) -> List[str]:
        return list(self.terms)

    def scale(self, factor: float) -> "Expression":
        for name in self.terms:
            self.terms[name] *= factor
        return self

    def inverse(self) -> "Expression":
        return self.scale(-1)

    def for_each_variable(self, fn: TermCallback) -> "Expression":
        for name, value in list(self.terms.items()):
            if name != CONSTANT_TERM:
                fn(name, value)
        return self

    def for_each_constant(self, fn: TermCallback) -> "Expression":
        if CONSTANT_TERM in self.terms:
            fn(CONSTANT_TERM, self.terms[CONSTANT_TERM])
        return self

    def to_string(self) -> str:
        parts: List[str] = []
        for name, value in self.terms.items():
            sign = "-" if value < 0 else "+"
            magnitude = _format_number(abs(value))
            if name == CONSTANT_TERM:
                body = magnitude
            elif magnitude == "1":
                body = name
            else:
                body = f"{magnitude}{name}"
            if not parts:
                parts.append(body if sign == "+" else f"-{body}")
            else:
                parts.append(f"{sign} {body}")
        return " ".join(parts) if parts else "0"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Expression({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return are_objects_same(_non_zero(self.terms), _non_zero(other.terms))


def _non_zero(terms: Mapping[str, float]) -> Dict[str, float]:
    return {name: value for name, value in terms.items() if value != 0}


def _format_number(value: float) -> str:
    # Positional notation only: "1e-06" would not survive a re-parse.
    return np.format_float_positional(float(value), trim="-")
