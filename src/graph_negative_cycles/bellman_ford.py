from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional, Tuple, Type, Union

from .graph import Graph


NEG_INF = float("-inf")


class Mark(Enum):
    """Predecessor tags that are not a node index."""

    SOURCE = "source"
    UNREACHED = "unreached"
    NEGATIVE_CYCLE = "negative-cycle"


Predecessor = Union[int, Mark]


class EngineState(Enum):
    UNSOLVED = "unsolved"
    RUNNING = "running"
    SOLVED = "solved"
    SOLVED_WITH_CYCLE = "solved-with-cycle"
    UNCONVERGED = "unconverged"


class PathStatus(Enum):
    FOUND = "found"
    NOT_SOLVED = "not solved"
    NEGATIVE_CYCLE = "infinite number of shortest paths (negative cycle)"
    NO_PATH = "no path"
    UNSAFE = "relaxation stopped before converging"


@dataclass
class Outcome:
    """Summary of one engine run.

    ``negative_cycle`` is ``None`` for strategies that do not check for
    negative cycles at all. ``converged`` is False only when a run was cut
    off by its round bound.
    """

    strategy: str
    negative_cycle: Optional[bool]
    passes: int
    converged: bool = True


@dataclass
class PathResult:
    path: List[int]
    cost: float
    status: PathStatus

    @property
    def ok(self) -> bool:
        return self.status is PathStatus.FOUND

    @property
    def reason(self) -> str:
        return "" if self.ok else self.status.value


class ShortestPathEngine(ABC):
    """Single-source shortest paths with a negative-cycle policy.

    Subclasses differ only in how they iterate relaxations and when they stop.
    One instance holds the result of its latest run; running it again
    overwrites that result. Use separate instances to keep several results.
    """

    name: str = ""
    # True when a cycle run tags every affected node with NEG_INF
    marks_cycle_members: bool = False

    def __init__(self) -> None:
        self.distance: List[float] = []
        self.predecessor: List[Predecessor] = []
        self.state = EngineState.UNSOLVED
        self.source: Optional[int] = None

    @property
    def solved(self) -> bool:
        return self.state in (EngineState.SOLVED, EngineState.SOLVED_WITH_CYCLE, EngineState.UNCONVERGED)

    def run(self, graph: Graph, source: int) -> Outcome:
        graph.validate()
        n = len(graph)
        if not 0 <= source < n:
            raise ValueError(f"source {source} out of range for graph with {n} nodes")

        self.state = EngineState.RUNNING
        self.source = source
        self.distance = [math.inf] * n
        self.predecessor = [Mark.UNREACHED] * n
        self.distance[source] = 0.0
        self.predecessor[source] = Mark.SOURCE

        outcome = self._solve(graph, source)

        if outcome.negative_cycle:
            self.state = EngineState.SOLVED_WITH_CYCLE
        elif not outcome.converged:
            self.state = EngineState.UNCONVERGED
        else:
            self.state = EngineState.SOLVED
        return outcome

    @abstractmethod
    def _solve(self, graph: Graph, source: int) -> Outcome:
        raise NotImplementedError

    def _relax(self, graph: Graph, u: int, v: int) -> bool:
        w = graph.matrix[u][v]
        if w is None:
            return False
        candidate = self.distance[u] + w
        if self.distance[v] > candidate:
            self.distance[v] = candidate
            self.predecessor[v] = u
            return True
        return False

    def _relax_all(self, graph: Graph) -> bool:
        n = len(graph)
        updated = False
        for u in range(n):
            for v in range(n):
                if self._relax(graph, u, v):
                    updated = True
        return updated

    def _improvable(self, graph: Graph) -> bool:
        n = len(graph)
        for u in range(n):
            for v in range(n):
                w = graph.matrix[u][v]
                if w is not None and self.distance[v] > self.distance[u] + w:
                    return True
        return False

    def reconstruct_path(self, start: int, finish: int) -> PathResult:
        """Walk predecessors from ``finish`` back to ``start``.

        ``start`` must be the source of the latest run. Querying an engine
        that has not finished a run reports NOT_SOLVED instead of raising.
        """
        if not self.solved:
            return PathResult([], math.inf, PathStatus.NOT_SOLVED)
        if start != self.source:
            raise ValueError(f"paths are only known from source {self.source}, not {start}")
        if not 0 <= finish < len(self.distance):
            raise ValueError(f"finish {finish} out of range")

        if self.distance[finish] == NEG_INF:
            return PathResult([], NEG_INF, PathStatus.NEGATIVE_CYCLE)
        # membership unknown, so no path from this run can be trusted
        if self.state is EngineState.SOLVED_WITH_CYCLE and not self.marks_cycle_members:
            return PathResult([], NEG_INF, PathStatus.NEGATIVE_CYCLE)

        path = [finish]
        seen = {finish}
        at = finish
        while at != start:
            pred = self.predecessor[at]
            if pred is Mark.UNREACHED:
                return PathResult([], math.inf, PathStatus.NO_PATH)
            if isinstance(pred, Mark) or pred in seen:
                return PathResult([], NEG_INF, PathStatus.NEGATIVE_CYCLE)
            seen.add(pred)
            path.append(pred)
            at = pred
        path.reverse()

        status = PathStatus.UNSAFE if self.state is EngineState.UNCONVERGED else PathStatus.FOUND
        return PathResult(path, self.distance[finish], status)


class EarlyExitBellmanFord(ShortestPathEngine):
    """Up to n-1 passes over all pairs, stopping at the first pass with no update.

    If the last executed pass still updated something, one verification pass
    decides whether a negative cycle exists. Only presence is reported, not
    which nodes are affected.
    """

    name = "early-exit"

    def _solve(self, graph: Graph, source: int) -> Outcome:
        passes = 0
        updated = False
        for _ in range(len(graph) - 1):
            passes += 1
            updated = self._relax_all(graph)
            if not updated:
                break

        if updated:
            passes += 1
            if self._improvable(graph):
                return Outcome(self.name, True, passes)
        return Outcome(self.name, False, passes)


class FixedPassBellmanFord(ShortestPathEngine):
    """Exactly n passes; a cycle exists iff the last pass still updates.

    Relaxation only starts from nodes already reached from the source.
    """

    name = "fixed-pass"

    def _solve(self, graph: Graph, source: int) -> Outcome:
        n = len(graph)
        for i in range(n):
            updated = False
            for u in range(n):
                if self.predecessor[u] is Mark.UNREACHED:
                    continue
                for v in range(n):
                    if self._relax(graph, u, v):
                        updated = True
            if i == n - 1 and updated:
                return Outcome(self.name, True, n)
        return Outcome(self.name, False, n)


class CycleMarkingBellmanFord(ShortestPathEngine):
    """Two rounds of n-1 passes; the second round tags cycle-affected nodes.

    Any edge that still relaxes after the first round leads into a node whose
    distance is unbounded. Such nodes get ``NEG_INF`` and the NEGATIVE_CYCLE
    mark, and the infinity spreads to everything reachable from them during
    the rest of the second round.
    """

    name = "cycle-marking"
    marks_cycle_members = True

    def _solve(self, graph: Graph, source: int) -> Outcome:
        n = len(graph)
        for _ in range(n - 1):
            self._relax_all(graph)

        negative_cycle = False
        for _ in range(n - 1):
            for u in range(n):
                for v in range(n):
                    w = graph.matrix[u][v]
                    if w is None:
                        continue
                    if self.distance[v] > self.distance[u] + w:
                        self.distance[v] = NEG_INF
                        self.predecessor[v] = Mark.NEGATIVE_CYCLE
                        negative_cycle = True
        return Outcome(self.name, negative_cycle, 2 * (n - 1))


class FifoShortestPaths(ShortestPathEngine):
    """Queue-driven relaxation for graphs known to have no negative cycle.

    Unsafe on inputs with a negative cycle: it never reports one. A marker
    equal to the node count separates rounds in the queue; after more than n
    rounds the run stops and the result is flagged as not converged.
    """

    name = "fifo"

    def _solve(self, graph: Graph, source: int) -> Outcome:
        n = len(graph)
        round_mark = n
        queue: Deque[int] = deque([source, round_mark])
        rounds = 0

        while True:
            u = queue.popleft()
            if u == round_mark:
                if not queue:
                    return Outcome(self.name, None, rounds, converged=True)
                rounds += 1
                if rounds > n:
                    return Outcome(self.name, None, rounds, converged=False)
                queue.append(round_mark)
                continue

            for v in range(n):
                if self._relax(graph, u, v):
                    queue.append(v)


STRATEGIES: Dict[str, Type[ShortestPathEngine]] = {
    cls.name: cls
    for cls in (EarlyExitBellmanFord, FixedPassBellmanFord, CycleMarkingBellmanFord, FifoShortestPaths)
}


def make_engine(name: str) -> ShortestPathEngine:
    key = name.lower()
    if key not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {name}")
    return STRATEGIES[key]()


def shortest_paths(graph: Graph, source: int, strategy: str = "cycle-marking") -> Tuple[ShortestPathEngine, Outcome]:
    """Run ``strategy`` on a fresh engine and return it with its outcome."""
    engine = make_engine(strategy)
    outcome = engine.run(graph, source)
    return engine, outcome
