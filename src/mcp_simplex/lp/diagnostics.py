from __future__ import annotations

from typing import Dict, List, Optional

from ..schemas import LPProblem, SolveOptions
from .simplex import simplex_solve


def analyze_infeasibility(problem: LPProblem, options: Optional[SolveOptions] = None) -> Dict[str, object]:
    """Very small IIS-style heuristic: drop each constraint and re-solve."""

    opts = options or SolveOptions()
    base_solution = simplex_solve(problem, opts)
    if base_solution.status != "infeasible":
        return {
            "status": base_solution.status,
            "message": base_solution.message or "Problem is not infeasible.",
            "conflicting_constraints": [],
            "suggestions": [],
        }

    conflicts: List[str] = []
    for idx, cons in enumerate(problem.constraints):
        relaxed = problem.model_copy(deep=True)
        relaxed.constraints.pop(idx)
        if simplex_solve(relaxed, opts).status != "infeasible":
            conflicts.append(cons)

    if conflicts:
        suggestions = ["Relax or inspect the conflicting constraints above."]
    else:
        suggestions = ["Consider relaxing bounds or checking for contradictory requirements."]

    return {
        "status": "infeasible",
        "message": "Detected infeasibility; listed constraints critical to infeasibility.",
        "conflicting_constraints": conflicts,
        "suggestions": suggestions,
    }
