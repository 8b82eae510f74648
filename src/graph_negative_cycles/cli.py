from __future__ import annotations

import argparse
from typing import List, Optional

from .bellman_ford import STRATEGIES, make_engine
from .config import load_settings
from .graph import Graph
from .logger import log_event
from .report import build_run_report, format_path_line
from .scenarios import SCENARIOS, Scenario, build_graph, get_scenario, scenario_names


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="graph-negative-cycles", description="Negative cycle detection and shortest paths")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("scenarios", help="List the built-in reference graphs")

    run = sub.add_parser("run", help="Run one or all strategies on a built-in graph")
    run.add_argument("--scenario", required=True, help="Scenario name, see 'scenarios'")
    run.add_argument("--strategy", default=None,
                     help=f"One of {', '.join(STRATEGIES)} or 'all' (default from NC_DEFAULT_STRATEGY)")
    run.add_argument("--source", type=int, default=None, help="Source node index (default: scenario source)")

    sub.add_parser("demo", help="Replay every scenario with its reference strategies")

    return p


def run_strategy(graph: Graph, strategy: str, source: int, scenario: Optional[str] = None) -> bool:
    """Run one strategy, print a path line per destination and log the run.

    Returns the negative-cycle flag (False for strategies that do not check).
    """
    engine = make_engine(strategy)
    outcome = engine.run(graph, source)
    if outcome.negative_cycle:
        print("Graph contains negative cycle.")
    if not outcome.converged:
        print("Warning: relaxation stopped on its round limit, paths are unsafe.")

    results = [engine.reconstruct_path(source, finish) for finish in range(len(graph))]
    for finish, res in enumerate(results):
        print(format_path_line(graph, res, source, finish))

    report = build_run_report(graph, outcome, source, results, scenario=scenario)
    log_event("run", **report.model_dump())
    return bool(outcome.negative_cycle)


def _run_scenario(scenario: Scenario, strategies: List[str], source: int, graph: Graph) -> None:
    build_graph(scenario, graph)
    print(f"/////// {scenario.description} ///////")
    for strategy in strategies:
        print(f"/////// {strategy} ///////")
        run_strategy(graph, strategy, source, scenario=scenario.name)


def cmd_scenarios(args: argparse.Namespace) -> int:
    for s in SCENARIOS:
        print(f"{s.name}\t{s.description}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    try:
        scenario = get_scenario(args.scenario)
    except ValueError as exc:
        log_event("error", action="run", error=str(exc), known=scenario_names())
        return 2

    strategy = args.strategy or load_settings().default_strategy
    strategies = list(STRATEGIES) if strategy == "all" else [strategy]
    source = scenario.source if args.source is None else args.source

    try:
        _run_scenario(scenario, strategies, source, Graph())
    except ValueError as exc:
        log_event("error", action="run", scenario=scenario.name, error=str(exc))
        return 2
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    graph = Graph()
    for scenario in SCENARIOS:
        _run_scenario(scenario, list(scenario.strategies), scenario.source, graph)
    return 0


def main(argv: List[str] | None = None) -> int:
    p = build_arg_parser()
    args = p.parse_args(argv)
    if args.cmd == "scenarios":
        return cmd_scenarios(args)
    if args.cmd == "run":
        return cmd_run(args)
    if args.cmd == "demo":
        return cmd_demo(args)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
