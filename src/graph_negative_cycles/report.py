from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel

from .bellman_ford import Outcome, PathResult, PathStatus
from .graph import Graph


class PathReport(BaseModel):
    start: int
    finish: int
    ok: bool
    status: str
    path: list[int]
    names: list[str]
    cost: float | None


class RunReport(BaseModel):
    scenario: Optional[str] = None
    strategy: str
    source: int
    negative_cycle: bool | None
    converged: bool
    passes: int
    paths: List[PathReport] = []


def _safe_cost(result: PathResult) -> float | None:
    cost = result.cost
    if result.path and not (math.isinf(cost) or math.isnan(cost)):
        return cost
    return None


def build_path_report(graph: Graph, result: PathResult, start: int, finish: int) -> PathReport:
    return PathReport(
        start=start,
        finish=finish,
        ok=result.ok,
        status=result.status.value,
        path=result.path,
        names=[graph.name(i) for i in result.path],
        cost=_safe_cost(result),
    )


def build_run_report(
    graph: Graph,
    outcome: Outcome,
    source: int,
    results: List[PathResult],
    scenario: Optional[str] = None,
) -> RunReport:
    """``results[i]`` must be the path from ``source`` to node ``i``."""
    return RunReport(
        scenario=scenario,
        strategy=outcome.strategy,
        source=source,
        negative_cycle=outcome.negative_cycle,
        converged=outcome.converged,
        passes=outcome.passes,
        paths=[build_path_report(graph, r, source, finish) for finish, r in enumerate(results)],
    )


def format_path_line(graph: Graph, result: PathResult, start: int, finish: int) -> str:
    if result.status is PathStatus.NOT_SOLVED:
        return "Not solved."
    prefix = f"Path from {start} to {finish} is : "
    if result.status is PathStatus.NEGATIVE_CYCLE:
        return prefix + "Infinite number of shortest paths (negative cycle)."
    if result.status is PathStatus.NO_PATH:
        return prefix + "No path."
    line = prefix + " ".join(f"{i}({graph.name(i)})" for i in result.path)
    if result.status is PathStatus.UNSAFE:
        line += " [unsafe: relaxation did not converge]"
    return line
