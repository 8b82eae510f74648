from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence


INF = float("inf")  # "no edge" marker accepted in literal matrices

Weight = Optional[float]  # None means the edge is absent


class GraphShapeError(ValueError):
    """Matrix does not match the node list or holds unusable weights."""


@dataclass(frozen=True)
class Node:
    index: int
    name: str


@dataclass
class Edge:
    u: int
    v: int
    w: float


def _normalize(cell: Optional[float]) -> Weight:
    if cell is None:
        return None
    value = float(cell)
    if value == INF:
        return None
    return value


class Graph:
    """Dense weighted digraph over nodes ``0..n-1``.

    ``matrix[i][j]`` holds the weight of edge i->j or ``None`` when there is no
    such edge. The diagonal is conventionally 0. The graph is populated by
    appending nodes and then assigning the whole matrix at once; it is never
    mutated while an algorithm runs over it.
    """

    def __init__(self) -> None:
        self.nodes: List[Node] = []
        self.matrix: List[List[Weight]] = []
        self._edges: List[Edge] = []

    @classmethod
    def from_matrix(cls, names: Iterable[str], rows: Sequence[Sequence[Optional[float]]]) -> "Graph":
        g = cls()
        for name in names:
            g.add_node(name)
        g.set_matrix(rows)
        return g

    def __len__(self) -> int:
        return len(self.nodes)

    def clear(self) -> None:
        self.nodes.clear()
        self.matrix.clear()
        self._edges.clear()

    def add_node(self, name: str) -> int:
        node = Node(len(self.nodes), name)
        self.nodes.append(node)
        return node.index

    def set_matrix(self, rows: Sequence[Sequence[Optional[float]]]) -> None:
        """Bulk-assign the weight matrix (row-major, ``rows[from][to]``).

        ``INF`` and ``None`` both mean "no edge". Shape is checked by
        :meth:`validate`, not here, so a matrix may be assigned before the
        nodes it describes.
        """
        self.matrix = [[_normalize(cell) for cell in row] for row in rows]
        self._edges = [
            Edge(u, v, w)
            for u, row in enumerate(self.matrix)
            for v, w in enumerate(row)
            if w is not None
        ]

    def edge_weight(self, i: int, j: int) -> Weight:
        return self.matrix[i][j]

    def has_edge(self, i: int, j: int) -> bool:
        return self.matrix[i][j] is not None

    def edges(self) -> List[Edge]:
        """Present edges as a flat list, kept in step with ``matrix`` by :meth:`set_matrix`."""
        return list(self._edges)

    def name(self, i: int) -> str:
        return self.nodes[i].name

    def index_of(self, name: str) -> int:
        for node in self.nodes:
            if node.name == name:
                return node.index
        raise KeyError(f"no node named {name!r}")

    def validate(self) -> None:
        n = len(self.nodes)
        if len(self.matrix) != n:
            raise GraphShapeError(f"matrix has {len(self.matrix)} rows but graph has {n} nodes")
        for i, row in enumerate(self.matrix):
            if len(row) != n:
                raise GraphShapeError(f"matrix row {i} has {len(row)} columns, expected {n}")
            for j, w in enumerate(row):
                if w is not None and (math.isnan(w) or math.isinf(w)):
                    raise GraphShapeError(f"weight {i}->{j} must be finite, got {w}")
            # a negative self-loop is a one-node negative cycle the relaxation passes cannot bound
            if row[i] is not None and row[i] < 0:
                raise GraphShapeError(f"self-loop weight {i}->{i} must be >= 0, got {row[i]}")
