from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from .graph import Graph


def rate_to_weight(rate: float) -> float:
    """Edge weight for an exchange rate: a profitable loop sums below zero."""
    if rate <= 0:
        raise ValueError("exchange rate must be > 0")
    return -math.log(rate)


def graph_from_rates(names: Iterable[str], rates: Sequence[Sequence[Optional[float]]]) -> Graph:
    """Build a currency graph from a rate table ``rates[from][to]``.

    Missing or non-positive rates become absent edges. The diagonal is
    always weight 0 regardless of what the table says.
    """
    names = list(names)
    rows: List[List[Optional[float]]] = []
    for i, row in enumerate(rates):
        out: List[Optional[float]] = []
        for j, rate in enumerate(row):
            if i == j:
                out.append(0.0)
            elif rate is None or rate <= 0:
                out.append(None)
            else:
                out.append(rate_to_weight(rate))
        rows.append(out)
    return Graph.from_matrix(names, rows)


def path_rate_product(graph: Graph, path: Sequence[int]) -> float:
    """Product of exchange rates along ``path``; > 1 on a closed loop means profit."""
    total = 0.0
    for u, v in zip(path, path[1:]):
        w = graph.edge_weight(u, v)
        if w is None:
            raise ValueError(f"no edge {u}->{v} on path")
        total += w
    return math.exp(-total)
