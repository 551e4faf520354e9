"""
bellman_ford.py — Bellman-Ford Shortest Paths
==============================================
One edge relaxation per step, in edge-list order, for |V|-1 passes
(ITERATING), then one more full pass (CHECKING_CYCLES).  Undirected
graphs contribute every edge in both directions.

If an edge still relaxes during the checking pass a negative cycle is
reachable from the source.  The cycle is recovered by following
predecessors |V| times from that edge's head (guaranteed to land inside
the cycle), then walking predecessors until a node repeats.  The walk
can pick up a few nodes in front of the true cycle entry on unusual
graphs; that is reported as-is.

A negative cycle is a terminal outcome (phase DONE with
`negative_cycle` populated), never an exception.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from algorithms.step import AlgoState
from graph.edge import Edge


PSEUDOCODE: List[str] = [
    "dist ← {v: ∞};  dist[source] ← 0",
    "repeat |V|-1 times:",
    "    for (u, v, w) in edges:",
    "        if dist[u] + w < dist[v]: dist[v] ← dist[u] + w;  prev[v] ← u",
    "for (u, v, w) in edges:",
    "    if dist[u] + w < dist[v]: NEGATIVE CYCLE",
]

INF = float("inf")


class Phase(Enum):
    IDLE            = "IDLE"
    ITERATING       = "ITERATING"
    CHECKING_CYCLES = "CHECKING_CYCLES"
    DONE            = "DONE"


@dataclass(frozen=True)
class BellmanFordState(AlgoState):
    TERMINAL = frozenset({Phase.DONE})

    phase:          Phase                     = Phase.IDLE
    distances:      Dict[str, float]          = field(default_factory=dict)
    predecessors:   Dict[str, Optional[str]]  = field(default_factory=dict)
    edges:          Tuple[Edge, ...]          = ()
    edge_index:     int                       = 0
    iteration:      int                       = 0
    negative_cycle: Tuple[str, ...]           = ()
    edge_highlight: Optional[Tuple[str, str]] = None

    @property
    def has_negative_cycle(self) -> bool:
        return bool(self.negative_cycle)

    @property
    def outcome(self) -> str:
        if not self.is_done:
            return ""
        return "negative_cycle" if self.negative_cycle else "done"


def initial_state(problem) -> BellmanFordState:
    nodes = problem.graph.node_ids()
    return BellmanFordState(
        distances={n: INF for n in nodes},
        predecessors={n: None for n in nodes},
        edges=tuple(problem.graph.edge_list()),
        explanation="Ready. Press play to relax edges.",
    )


def find_cycle(predecessors: Dict[str, Optional[str]], head: str, node_count: int) -> Tuple[str, ...]:
    """Walk back node_count times from `head`, then collect predecessors until one repeats."""
    anchor = head
    for _ in range(node_count):
        prev = predecessors.get(anchor)
        if prev is None:
            break
        anchor = prev

    cycle = [anchor]
    node = predecessors.get(anchor)
    while node is not None and node != anchor and node not in cycle:
        cycle.append(node)
        node = predecessors.get(node)
    cycle.append(anchor)
    cycle.reverse()
    return tuple(cycle)


def step(state: BellmanFordState, problem) -> BellmanFordState:
    if state.is_done:
        return state
    node_count = problem.graph.node_count()

    if state.phase is Phase.IDLE:
        distances = dict(state.distances)
        distances[problem.start_node] = 0
        checking = node_count <= 1
        return state.advance(
            phase=Phase.CHECKING_CYCLES if checking else Phase.ITERATING,
            distances=distances,
            iteration=1,
            edge_index=0,
            explanation=f"Starting from {problem.start_node}. Iteration 1.",
        )

    # end of a pass
    if state.edge_index >= len(state.edges):
        if state.phase is Phase.ITERATING:
            iteration = state.iteration + 1
            if iteration >= node_count:
                return state.advance(
                    phase=Phase.CHECKING_CYCLES,
                    iteration=iteration,
                    edge_index=0,
                    edge_highlight=None,
                    explanation="Checking for negative-weight cycles.",
                )
            return state.advance(
                iteration=iteration,
                edge_index=0,
                edge_highlight=None,
                explanation=f"Starting iteration {iteration}.",
            )
        return state.advance(
            phase=Phase.DONE,
            edge_highlight=None,
            explanation="Finished. No negative cycle; shortest paths are found.",
        )

    edge = state.edges[state.edge_index]
    u, v, w = edge.u, edge.v, edge.weight
    dist_u = state.distances[u]

    if dist_u != INF and dist_u + w < state.distances[v]:
        if state.phase is Phase.CHECKING_CYCLES:
            cycle = find_cycle(state.predecessors, v, node_count)
            return state.advance(
                phase=Phase.DONE,
                negative_cycle=cycle,
                edge_highlight=(u, v),
                explanation=f"Negative cycle detected at edge {u} -> {v}!",
            )
        distances = dict(state.distances)
        distances[v] = dist_u + w
        predecessors = dict(state.predecessors)
        predecessors[v] = u
        return state.advance(
            distances=distances,
            predecessors=predecessors,
            edge_index=state.edge_index + 1,
            edge_highlight=(u, v),
            explanation=f"Relaxed {u} -> {v} (weight {w}): distance to {v} is now {dist_u + w}.",
        )

    return state.advance(
        edge_index=state.edge_index + 1,
        edge_highlight=(u, v),
        explanation=f"Edge {u} -> {v} (weight {w}) does not improve {v}.",
    )
