from __future__ import annotations

import re
from typing import List, Tuple

from ..errors import ParseError
from ..utils import CONSTANT_TERM

_TERM = re.compile(
    r"(?P<sign>[+-])?\s*"
    r"(?P<coef>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)?"
    r"(?P<star>\s*\*\s*)?"
    r"(?P<name>[A-Za-z_]\w*)?"
)
_SPACE = re.compile(r"\s*")


def tokenize(text: str) -> List[Tuple[float, str]]:
    """
    Split a signed sum such as ``"3x - y + 2"`` into ``(coefficient, name)`` pairs.

    Constants are reported under the reserved name ``"1"``. Every term after
    the first must be introduced by ``+`` or ``-``; an operator without an
    operand, or two operands without an operator, is a ParseError.
    """

    if text is None or not str(text).strip():
        raise ParseError("Expression is empty.")

    source = str(text).strip()
    pos = 0
    terms: List[Tuple[float, str]] = []
    while pos < len(source):
        match = _TERM.match(source, pos)
        sign, coef, star, name = match.group("sign", "coef", "star", "name")
        if not coef and not name:
            if sign:
                raise ParseError(f"Operator '{sign}' is missing an operand in '{source}'.")
            raise ParseError(f"Unexpected token '{source[pos:]}' in '{source}'.")
        if terms and not sign:
            raise ParseError(f"Missing operator before '{source[pos:]}' in '{source}'.")
        if star and not (coef and name):
            raise ParseError(f"Incomplete product in '{source}'.")

        value = float(coef) if coef else 1.0
        if sign == "-":
            value = -value
        terms.append((value, name or CONSTANT_TERM))
        pos = _SPACE.match(source, match.end()).end()

    return terms
