from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .utils import EPSILON

Sense = Literal["min", "max"]
PivotRule = Literal["dantzig", "bland"]
Status = Literal["optimal", "infeasible", "unbounded", "cycle_detected"]


class LPProblem(BaseModel):
    name: str = "problem"
    sense: Sense = "max"
    objective: str
    constraints: List[str] = Field(default_factory=list)


class SolveOptions(BaseModel):
    # None -> iteration_factor * rows * columns
    max_iters: Optional[int] = None
    iteration_factor: int = 50
    tol: float = EPSILON
    pivot_rule: PivotRule = "dantzig"
    two_phase: bool = True
    as_fractions: bool = False
    max_denominator: int = 1_000_000


class LPSolution(BaseModel):
    status: Status
    objective_value: Optional[float]
    x: Dict[str, float] | None
    slack: Dict[str, float] | None
    fractions: Dict[str, str] | None = None
    iterations: int
    message: str = ""
