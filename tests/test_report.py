from graph_negative_cycles.bellman_ford import EarlyExitBellmanFord, FifoShortestPaths, PathResult, PathStatus
from graph_negative_cycles.graph import INF, Graph
from graph_negative_cycles.report import build_path_report, build_run_report, format_path_line
from graph_negative_cycles.scenarios import build_graph, get_scenario


def _graph() -> Graph:
    return Graph.from_matrix(["USD", "CHF"], [[0.0, INF], [1.0, 0.0]])


def test_format_lines_for_each_status():
    g = _graph()
    assert format_path_line(g, EarlyExitBellmanFord().reconstruct_path(0, 1), 0, 1) == "Not solved."

    engine = EarlyExitBellmanFord()
    engine.run(g, 0)
    assert format_path_line(g, engine.reconstruct_path(0, 1), 0, 1) == "Path from 0 to 1 is : No path."
    assert format_path_line(g, engine.reconstruct_path(0, 0), 0, 0) == "Path from 0 to 0 is : 0(USD)"

    unsafe = PathResult([0, 1], 1.0, PathStatus.UNSAFE)
    assert format_path_line(g, unsafe, 0, 1).endswith("[unsafe: relaxation did not converge]")


def test_path_report_hides_infinite_costs():
    g = _graph()
    report = build_path_report(g, PathResult([], INF, PathStatus.NO_PATH), 0, 1)
    assert report.cost is None
    assert report.ok is False
    assert report.status == "no path"


def test_run_report_for_unconverged_fifo():
    g = build_graph(get_scenario("negative-cycle"))
    engine = FifoShortestPaths()
    outcome = engine.run(g, 0)
    results = [engine.reconstruct_path(0, f) for f in range(len(g))]
    report = build_run_report(g, outcome, 0, results, scenario="negative-cycle")
    assert report.converged is False
    assert report.negative_cycle is None
    assert report.paths[1].names == ["USD", "CHF"]
    assert report.paths[1].status == "relaxation stopped before converging"
    assert report.model_dump()["scenario"] == "negative-cycle"
