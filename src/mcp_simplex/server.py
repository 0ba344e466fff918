from __future__ import annotations

import os
import sys

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .errors import ParseError
from .lp.constraint import Constraint
from .lp.diagnostics import analyze_infeasibility as analyze_infeasibility_problem
from .lp.parser import parse_problem as parse_problem_text
from .lp.simplex import simplex_solve
from .schemas import LPProblem, SolveOptions

mcp = FastMCP("MCP Simplex")


@mcp.tool()
def solve_lp(problem: LPProblem, options: SolveOptions | None = None) -> dict:
    "Solve a linear program written as constraint strings via tableau simplex."
    opts = options or SolveOptions()
    try:
        return simplex_solve(problem, opts).model_dump()
    except ParseError as exc:
        return {"error": str(exc), "solution": None}


@mcp.tool()
def parse_problem(spec: str) -> dict:
    "Parse 'maximize ... subject to ...' text into LPProblem JSON."
    return parse_problem_text(spec).model_dump()


@mcp.tool()
def standard_form(constraint: str, index: int | None = None) -> dict:
    "Rewrite one constraint into standard max form (slack/surplus-augmented equality)."
    cons = Constraint.parse(constraint).get_standard_max_form(index=index)
    return {
        "constraint": str(cons),
        "left_side": dict(cons.left_side.terms),
        "right_side": dict(cons.right_side.terms),
        "slack_value": cons.slack_value,
        "slack_name": cons.slack_name,
    }


@mcp.tool()
def analyze_infeasibility(problem: LPProblem) -> dict:
    "Return basic infeasibility diagnostics (drop-one conflicting constraints)."
    return analyze_infeasibility_problem(problem)


def main() -> None:
    # MCP_TRANSPORT=stdio (default) for desktop clients, anything else serves HTTP.
    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio" or "--stdio" in sys.argv:
        mcp.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.settings.streamable_http_path = "/mcp"
        mcp.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
