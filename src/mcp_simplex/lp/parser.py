import re
from typing import List

from ..errors import ParseError
from ..schemas import LPProblem

_SECTION_SPLIT = re.compile(r"subject to|such that|s\.t\.", re.IGNORECASE)
_TOKEN_SPLIT = re.compile(r",|;|\band\b", re.IGNORECASE)
_OBJECTIVE = re.compile(r"^(maximize|minimize|maximise|minimise|max|min)\b\s*:?\s*(.*)$", re.IGNORECASE)
_OBJECTIVE_LABEL = re.compile(r"^[A-Za-z_]\w*\s*=(?![<>=])\s*")
_COMPARATOR = re.compile(r"[<>]=?|=")
_MULTI_BOUND = re.compile(
    r"^([A-Za-z_]\w*(?:\s*,\s*[A-Za-z_]\w*)+)\s*([<>]=?|=)\s*(.+)$"
)


def parse_problem(spec: str, name: str = "parsed") -> LPProblem:
    """
    Small rule-based parser for problems written like:
      "maximize z = 3x + 2y subject to x + y <= 4, x + 2y <= 5, x, y >= 0"
    The objective label (``z =``) is optional. A variable list in front of a
    comparison expands to one constraint per variable.
    """

    if not spec or not spec.strip():
        raise ParseError("Specification is empty.")

    normalized = " ".join(spec.replace("\n", " ").split())
    pieces = _SECTION_SPLIT.split(normalized, maxsplit=1)
    objective_part = pieces[0].strip()
    constraints_part = pieces[1].strip() if len(pieces) > 1 else ""

    match = _OBJECTIVE.match(objective_part)
    if not match:
        raise ParseError("Objective must start with 'maximize' or 'minimize'.")
    sense = "max" if match.group(1).lower().startswith("max") else "min"
    objective = _OBJECTIVE_LABEL.sub("", match.group(2).strip(), count=1)
    if not objective:
        raise ParseError("Objective expression is missing.")

    return LPProblem(
        name=name,
        sense=sense,
        objective=objective,
        constraints=_split_constraints(constraints_part),
    )


def _split_constraints(text: str) -> List[str]:
    if not text:
        return []

    # Commas also separate names in "x, y >= 0", so pieces without a
    # comparison are carried forward until one is found.
    constraints: List[str] = []
    buffer: List[str] = []
    for piece in [tok.strip() for tok in _TOKEN_SPLIT.split(text) if tok.strip()]:
        buffer.append(piece)
        if not _COMPARATOR.search(piece):
            continue
        segment = ", ".join(buffer)
        buffer.clear()
        multi = _MULTI_BOUND.match(segment)
        if multi:
            names, cmp, rhs = multi.groups()
            constraints.extend(f"{var.strip()} {cmp} {rhs.strip()}" for var in names.split(","))
        else:
            constraints.append(segment)

    if buffer:
        raise ParseError(f"Could not parse constraint segment '{', '.join(buffer)}'.")
    return constraints
