"""Exception types raised by the parser and reported by the simplex engine."""


class ParseError(ValueError):
    """Malformed term, constraint or problem text."""


class SimplexError(Exception):
    """Base class for terminal simplex outcomes other than optimality."""

    status = "error"


class UnboundedError(SimplexError):
    status = "unbounded"


class InfeasibleError(SimplexError):
    status = "infeasible"


class CycleDetected(SimplexError):
    """Iteration cap exceeded before an optimal tableau was reached."""

    status = "cycle_detected"
