from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .graph import INF, Graph


ALL_STRATEGIES: Tuple[str, ...] = ("early-exit", "cycle-marking", "fixed-pass", "fifo")


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    nodes: Sequence[str]
    matrix: Sequence[Sequence[float]]
    source: int = 0
    strategies: Tuple[str, ...] = ("cycle-marking",)
    expect_negative_cycle: bool = False


SCENARIOS: List[Scenario] = [
    Scenario(
        name="basic-no-cycle",
        description="Simple graph without negative cycles",
        nodes=("USD", "CHF", "YEN", "GBP", "CNY"),
        #        USD  CHF  YEN  GBP   CNY
        matrix=((0.0, 6.0, 7.0, INF, INF),    # USD
                (INF, 0.0, 8.0, -4.0, 5.0),   # CHF
                (INF, INF, 0.0, 9.0, -3.0),   # YEN
                (INF, INF, INF, 0.0, 7.0),    # GBP
                (INF, -2.0, INF, INF, 0.0)),  # CNY
        strategies=ALL_STRATEGIES,
    ),
    Scenario(
        name="sedgewick-no-cycle",
        description="Sedgewick figure 21.26, no negative cycles",
        nodes=("USD", "CHF", "YEN", "GBP", "CNY", "EUR"),
        #        USD   CHF    YEN   GBP   CNY   EUR
        matrix=((0.0, 0.41, INF, INF, INF, 0.29),     # USD
                (INF, 0.0, 0.51, INF, 0.32, INF),     # CHF
                (INF, INF, 0.0, 0.50, INF, INF),      # YEN
                (0.45, INF, INF, 0.0, INF, -0.38),    # GBP
                (INF, INF, 0.32, 0.36, 0.0, INF),     # CNY
                (INF, -0.29, INF, INF, 0.21, 0.0)),   # EUR
        source=4,
        strategies=ALL_STRATEGIES,
    ),
    Scenario(
        name="negative-cycle",
        description="YEN -> CNY -> GBP -> YEN is a negative cycle",
        nodes=("USD", "CHF", "YEN", "GBP", "CNY", "EUR", "XXX", "YYY"),
        #        USD  CHF  YEN  GBP   CNY  EUR  XXX  YYY
        matrix=((0.0, 1.0, INF, INF, INF, INF, INF, INF),   # USD
                (INF, 0.0, 1.0, INF, INF, 4.0, 4.0, INF),   # CHF
                (INF, INF, 0.0, INF, 1.0, INF, INF, INF),   # YEN
                (INF, INF, 1.0, 0.0, INF, INF, INF, INF),   # GBP
                (INF, INF, INF, -3.0, 0.0, INF, INF, INF),  # CNY
                (INF, INF, INF, INF, INF, 0.0, 5.0, 3.0),   # EUR
                (INF, INF, INF, INF, INF, INF, 0.0, 4.0),   # XXX
                (INF, INF, INF, INF, INF, INF, INF, 0.0)),  # YYY
        expect_negative_cycle=True,
    ),
    Scenario(
        name="arbitrage-sedgewick",
        description="Sedgewick p.343 log-rate table, arbitrage everywhere",
        nodes=("USD", "CHF", "YEN", "GBP", "CNY"),
        matrix=((0.0, 0.489, -0.402, -4.791, -0.378),
                (-0.489, 0.0, -0.891, -5.278, -0.865),
                (0.402, 0.89, 0.0, -4.391, 0.027),
                (4.791, 5.285, 4.392, 0.0, 4.418),
                (0.378, 0.865, -0.027, -4.415, 0.0)),
        expect_negative_cycle=True,
    ),
    Scenario(
        name="arbitrage-small",
        description="Three currencies, CHF <-> YEN loses 0.001 per turn",
        nodes=("USD", "CHF", "YEN"),
        matrix=((0.0, 0.489, -0.402),
                (-0.489, 0.0, -0.891),
                (0.402, 0.89, 0.0)),
        expect_negative_cycle=True,
    ),
    Scenario(
        name="arbitrage-small-balanced",
        description="Three currencies with every loop slightly positive",
        nodes=("USD", "CHF", "YEN"),
        matrix=((0.0, 0.490, -0.402),
                (-0.489, 0.0, -0.891),
                (0.403, 0.892, 0.0)),
    ),
    Scenario(
        name="arbitrage-small-tilted",
        description="Three currencies, cheapest USD -> CHF goes through YEN",
        nodes=("USD", "CHF", "YEN"),
        matrix=((0.0, 0.490, -0.402),
                (-0.489, 0.0, -0.891),
                (0.403, 0.891, 0.0)),
    ),
    Scenario(
        name="arbitrage-bigger",
        description="Five currencies without arbitrage",
        nodes=("USD", "CHF", "YEN", "GBP", "CNY"),
        matrix=((0.0, 0.490, -0.402, 0.7, 0.413),
                (-0.489, 0.0, -0.891, 0.89, 0.360),
                (0.403, 0.891, 0.0, 0.91, 0.581),
                (0.340, 0.405, 0.607, 0.0, 0.72),
                (0.403, 0.350, 0.571, 0.71, 0.0)),
    ),
    Scenario(
        name="real-cycle",
        description="USD -> YEN -> USD loses 0.01",
        nodes=("USD", "CHF", "YEN"),
        matrix=((0.0, 0.1, -5.01),
                (-0.09, 0.0, -5.1),
                (5.0, 5.09, 0.0)),
        expect_negative_cycle=True,
    ),
    Scenario(
        name="real-no-cycle",
        description="Same currencies with the arbitrage priced out",
        nodes=("USD", "CHF", "YEN"),
        matrix=((0.0, 0.12, -5.01),
                (-0.09, 0.0, -5.1),
                (5.02, 5.11, 0.0)),
    ),
]

_BY_NAME: Dict[str, Scenario] = {s.name: s for s in SCENARIOS}


def scenario_names() -> List[str]:
    return [s.name for s in SCENARIOS]


def get_scenario(name: str) -> Scenario:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown scenario: {name}") from None


def build_graph(scenario: Scenario, graph: Optional[Graph] = None) -> Graph:
    """Clear ``graph`` (or start a new one) and load ``scenario`` into it."""
    g = graph if graph is not None else Graph()
    g.clear()
    for name in scenario.nodes:
        g.add_node(name)
    g.set_matrix(scenario.matrix)
    return g
