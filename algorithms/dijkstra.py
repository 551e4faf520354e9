"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Phase machine over a min-heap (heapq) of (distance, node_id) entries.

    IDLE           dist[start] = 0, pq = [(0, start)]
    DEQUEUE        pop the minimum; skip stale entries for finalised nodes;
                   stop with the path when the end node is popped
    RELAX_EDGE     one neighbour of the current node per step; a strictly
                   shorter distance removes the neighbour's old queue entry
                   and re-inserts it with the new one
    FINISHED_NODE  mark the current node visited
    DONE           end node reached, or queue exhausted

Ties between equal distances break on node id.  With no end node every
reachable node is finalised.

Correctness note: Dijkstra requires non-negative weights.
"""

import heapq
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from algorithms.step import AlgoState


PSEUDOCODE: List[str] = [
    "dist ← {v: ∞};  dist[source] ← 0;  pq ← [(0, source)]",
    "while pq is not empty:",
    "    (d, u) ← pq.pop_min()",
    "    if u visited: continue",
    "    if u == target: return path",
    "    for (v, w) in adj(u):",
    "        if dist[u] + w < dist[v]: dist[v] ← dist[u] + w;  prev[v] ← u",
    "    visited.add(u)",
]

INF = float("inf")


class Phase(Enum):
    IDLE          = "IDLE"
    DEQUEUE       = "DEQUEUE"
    RELAX_EDGE    = "RELAX_EDGE"
    FINISHED_NODE = "FINISHED_NODE"
    DONE          = "DONE"


@dataclass(frozen=True)
class DijkstraState(AlgoState):
    TERMINAL = frozenset({Phase.DONE})

    phase:           Phase                          = Phase.IDLE
    distances:       Dict[str, float]               = field(default_factory=dict)
    predecessors:    Dict[str, Optional[str]]       = field(default_factory=dict)
    pq:              Tuple[Tuple[float, str], ...]  = ()
    visited:         FrozenSet[str]                 = frozenset()
    current:         Optional[str]                  = None
    neighbour_index: int                            = 0
    path:            Tuple[str, ...]                = ()
    edge_highlight:  Optional[Tuple[str, str]]      = None

    @property
    def outcome(self) -> str:
        if not self.is_done:
            return ""
        return "path_found" if self.path else "done"


def initial_state(problem) -> DijkstraState:
    nodes = problem.graph.node_ids()
    return DijkstraState(
        distances={n: INF for n in nodes},
        predecessors={n: None for n in nodes},
        explanation="Ready. Press play to find shortest paths.",
    )


def reconstruct_path(predecessors: Dict[str, Optional[str]], start: str, end: str) -> Tuple[str, ...]:
    path = [end]
    node = end
    while node != start:
        node = predecessors.get(node)
        if node is None:
            return ()
        path.append(node)
    return tuple(reversed(path))


def step(state: DijkstraState, problem) -> DijkstraState:
    if state.is_done:
        return state
    graph, start, end = problem.graph, problem.start_node, problem.end_node

    if state.phase is Phase.IDLE:
        distances = dict(state.distances)
        distances[start] = 0
        return state.advance(
            phase=Phase.DEQUEUE,
            distances=distances,
            pq=((0, start),),
            explanation=f"Starting from {start}: distance 0, all others ∞.",
        )

    if state.phase is Phase.DEQUEUE:
        return _dequeue(state, graph, start, end)

    if state.phase is Phase.RELAX_EDGE:
        return _relax(state, graph)

    # FINISHED_NODE
    return state.advance(
        phase=Phase.DEQUEUE,
        visited=state.visited | {state.current},
        edge_highlight=None,
        explanation=f"All neighbours of {state.current} processed; {state.current} is final.",
    )


def _dequeue(state: DijkstraState, graph, start: str, end: Optional[str]) -> DijkstraState:
    if not state.pq:
        if end is not None:
            note = f"Queue empty: {end} is unreachable from {start}."
        else:
            note = f"Queue empty: all nodes reachable from {start} are final."
        return state.advance(phase=Phase.DONE, current=None, edge_highlight=None, explanation=note)

    pq = list(state.pq)
    dist, node = heapq.heappop(pq)

    if node in state.visited:
        return state.advance(
            pq=tuple(pq),
            current=node,
            edge_highlight=None,
            explanation=f"Skipping stale entry for {node}; it is already final.",
        )

    if node == end:
        path = reconstruct_path(state.predecessors, start, end)
        return state.advance(
            phase=Phase.DONE,
            pq=tuple(pq),
            current=node,
            visited=state.visited | {node},
            path=path,
            edge_highlight=None,
            explanation=f"Reached {end}. Shortest distance {dist}: {' → '.join(path)}.",
        )

    has_edges = bool(graph.neighbours(node))
    return state.advance(
        phase=Phase.RELAX_EDGE if has_edges else Phase.FINISHED_NODE,
        pq=tuple(pq),
        current=node,
        neighbour_index=0,
        edge_highlight=None,
        explanation=f"Dequeued {node} with distance {dist}.",
    )


def _relax(state: DijkstraState, graph) -> DijkstraState:
    u = state.current
    neighbours = graph.neighbours(u)
    v, w = neighbours[state.neighbour_index]
    last = state.neighbour_index + 1 >= len(neighbours)
    changes = dict(
        phase=Phase.FINISHED_NODE if last else Phase.RELAX_EDGE,
        neighbour_index=state.neighbour_index + 1,
        edge_highlight=(u, v),
    )

    if v in state.visited:
        return state.advance(explanation=f"{v} is already final; skipping edge {u} → {v}.", **changes)

    new_dist = state.distances[u] + w
    if new_dist < state.distances[v]:
        pq = [entry for entry in state.pq if entry[1] != v]
        heapq.heapify(pq)
        heapq.heappush(pq, (new_dist, v))
        distances = dict(state.distances)
        distances[v] = new_dist
        predecessors = dict(state.predecessors)
        predecessors[v] = u
        return state.advance(
            pq=tuple(pq),
            distances=distances,
            predecessors=predecessors,
            explanation=f"Relaxed {u} → {v}: distance {new_dist} (was {_fmt(state.distances[v])}).",
            **changes,
        )
    return state.advance(
        explanation=f"{u} → {v} gives {new_dist}, not better than {_fmt(state.distances[v])}.",
        **changes,
    )


def _fmt(d: float) -> str:
    return "∞" if d == INF else str(d)
