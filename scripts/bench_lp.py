#!/usr/bin/env python3
import json
import time
from pathlib import Path

from mcp_simplex.lp.reference import reference_solve
from mcp_simplex.lp.simplex import simplex_solve
from mcp_simplex.schemas import LPProblem, SolveOptions
from scripts.generate_instances import generate_random_lp


def load_example(name: str) -> LPProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return LPProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    opts = SolveOptions()
    cases = [
        ("examples/small_lp.json", load_example("small_lp.json")),
        ("examples/diet_min.json", load_example("diet_min.json")),
    ]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(3, 3, seed)))

    print("name,status,objective,reference,iterations,time_ms")
    for name, problem in cases:
        start = time.perf_counter()
        solution = simplex_solve(problem, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        reference = reference_solve(problem, opts)
        print(
            f"{name},{solution.status},{solution.objective_value},"
            f"{reference.objective_value},{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
