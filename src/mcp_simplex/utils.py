from __future__ import annotations

from typing import Any, Hashable, Iterable, List, Mapping

# Used to relax strict inequalities and as the default numeric tolerance.
EPSILON = 1e-6

# Reserved term name holding the constant of an expression.
CONSTANT_TERM = "1"


def get_unique_array(items: Iterable[Hashable]) -> List[Hashable]:
    """Return ``items`` without duplicates, keeping first-seen order."""

    seen = set()
    result = []
    for item in items or ():
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def are_objects_same(first: Any, second: Any) -> bool:
    """
    Structural comparison for the plain data held by expressions and constraints.

    Mappings are compared key by key (recursively), sequences element by
    element, everything else with ``==``.
    """

    if first is second:
        return True
    if isinstance(first, Mapping) and isinstance(second, Mapping):
        if set(first) != set(second):
            return False
        return all(are_objects_same(first[key], second[key]) for key in first)
    if isinstance(first, (list, tuple)) and isinstance(second, (list, tuple)):
        if len(first) != len(second):
            return False
        return all(are_objects_same(a, b) for a, b in zip(first, second))
    return first == second
