import numpy as np
import pytest

from mcp_simplex.lp.reference import reference_solve
from mcp_simplex.lp.simplex import simplex_solve
from mcp_simplex.schemas import LPProblem, SolveOptions


def make_random_problem(seed: int, num_vars: int = 4, num_constraints: int = 5) -> LPProblem:
    rng = np.random.default_rng(seed)
    constraints = []
    for _ in range(num_constraints):
        coefs = rng.uniform(0.5, 5.0, size=num_vars)
        lhs = " + ".join(f"{coef:.3f}x{i}" for i, coef in enumerate(coefs))
        constraints.append(f"{lhs} <= {rng.uniform(5.0, 20.0):.3f}")
    objective = " + ".join(f"{coef:.3f}x{i}" for i, coef in enumerate(rng.uniform(1.0, 4.0, size=num_vars)))
    return LPProblem(name=f"random-{seed}", sense="max", objective=objective, constraints=constraints)


@pytest.mark.parametrize("seed", range(5))
def test_random_problems_match_reference(seed):
    problem = make_random_problem(seed)
    solution = simplex_solve(problem)
    reference = reference_solve(problem)

    assert solution.status == reference.status == "optimal"
    assert solution.objective_value == pytest.approx(reference.objective_value, rel=1e-6, abs=1e-6)


@pytest.mark.parametrize(
    "sense, objective, constraints",
    [
        ("min", "3x + 2y", ["x + 2y >= 8", "3x + y >= 6"]),
        ("max", "x + y", ["x + y = 4", "x - y = 0"]),
        ("max", "2a + 3b - c", ["a + b + c <= 10", "a - b >= -2", "b + c = 4", "a <= 6"]),
        ("min", "x + 4", ["x > 1"]),
    ],
)
def test_mixed_problems_match_reference(sense, objective, constraints):
    problem = LPProblem(sense=sense, objective=objective, constraints=constraints)
    solution = simplex_solve(problem)
    reference = reference_solve(problem)

    assert solution.status == reference.status == "optimal"
    assert solution.objective_value == pytest.approx(reference.objective_value, rel=1e-6, abs=1e-6)


def test_reference_reports_infeasible_and_unbounded():
    infeasible = LPProblem(objective="x", constraints=["x + y <= 2", "x + y >= 5"])
    unbounded = LPProblem(objective="x", constraints=["x >= 0"])

    assert reference_solve(infeasible).status == simplex_solve(infeasible).status == "infeasible"
    assert simplex_solve(unbounded).status == "unbounded"
    # HiGHS presolve may only classify this as "infeasible or unbounded".
    assert reference_solve(unbounded).status != "optimal"


def test_reference_respects_iteration_option():
    problem = make_random_problem(0)

    assert reference_solve(problem, SolveOptions(max_iters=1000)).status == "optimal"
