import json

import pytest

from graph_negative_cycles.cli import main


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("NC_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("NC_DEFAULT_STRATEGY", raising=False)
    return tmp_path / "logs"


def _events(out: str):
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


def test_scenarios_lists_names(capsys):
    assert main(["scenarios"]) == 0
    out = capsys.readouterr().out
    assert "basic-no-cycle" in out
    assert "real-cycle" in out


def test_run_prints_paths_and_logs(capsys, log_dir):
    assert main(["run", "--scenario", "basic-no-cycle", "--strategy", "early-exit"]) == 0
    out = capsys.readouterr().out
    assert "Path from 0 to 1 is : 0(USD) 2(YEN) 4(CNY) 1(CHF)" in out
    assert "Path from 0 to 0 is : 0(USD)" in out

    (event,) = [e for e in _events(out) if e["event"] == "run"]
    assert event["strategy"] == "early-exit"
    assert event["negative_cycle"] is False
    assert event["paths"][1]["names"] == ["USD", "YEN", "CNY", "CHF"]
    assert event["paths"][1]["cost"] == 2.0

    logged = (log_dir / "events.log").read_text(encoding="utf-8").splitlines()
    assert json.loads(logged[-1])["event"] == "run"


def test_run_negative_cycle_uses_default_strategy(capsys):
    assert main(["run", "--scenario", "negative-cycle"]) == 0
    out = capsys.readouterr().out
    assert "Graph contains negative cycle." in out
    assert "Path from 0 to 2 is : Infinite number of shortest paths (negative cycle)." in out
    assert "Path from 0 to 7 is : 0(USD) 1(CHF) 5(EUR) 7(YYY)" in out
    (event,) = [e for e in _events(out) if e["event"] == "run"]
    assert event["strategy"] == "cycle-marking"
    assert event["paths"][2]["cost"] is None


def test_run_all_strategies(capsys):
    assert main(["run", "--scenario", "sedgewick-no-cycle", "--strategy", "all"]) == 0
    runs = [e for e in _events(capsys.readouterr().out) if e["event"] == "run"]
    assert [r["strategy"] for r in runs] == ["early-exit", "fixed-pass", "cycle-marking", "fifo"]
    assert all(r["source"] == 4 for r in runs)


def test_run_usage_errors(capsys):
    assert main(["run", "--scenario", "nope"]) == 2
    assert main(["run", "--scenario", "basic-no-cycle", "--strategy", "dijkstra"]) == 2
    assert main(["run", "--scenario", "basic-no-cycle", "--source", "42"]) == 2
    errors = [e for e in _events(capsys.readouterr().out) if e["event"] == "error"]
    assert len(errors) == 3


def test_demo_runs_every_scenario(capsys):
    assert main(["demo"]) == 0
    out = capsys.readouterr().out
    scenarios = {e["scenario"] for e in _events(out) if e["event"] == "run"}
    assert "real-no-cycle" in scenarios
    assert "arbitrage-sedgewick" in scenarios
