"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Edges deduplicated and sorted ascending by weight (stable: equal
weights keep input order).  One step = consider the next edge; a
disjoint-set-union with path compression says whether its endpoints
are already connected.  Different components → take the edge and
union; same component → discard it (it would close a cycle).

Terminal when every edge has been considered or |V|-1 edges are taken.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from algorithms.step import AlgoState
from graph.edge import Edge


PSEUDOCODE: List[str] = [
    "edges ← sort(edges, by weight)",
    "for (u, v, w) in edges:",
    "    if find(u) != find(v):",
    "        mst.add((u, v, w));  union(u, v)",
    "    if |mst| == |V| - 1: stop",
]


class Phase(Enum):
    IDLE       = "IDLE"
    PROCESSING = "PROCESSING"
    DONE       = "DONE"


@dataclass(frozen=True)
class KruskalState(AlgoState):
    TERMINAL = frozenset({Phase.DONE})

    phase:          Phase                     = Phase.IDLE
    sorted_edges:   Tuple[Edge, ...]          = ()
    edge_index:     int                       = 0
    parent:         Dict[str, str]            = field(default_factory=dict)
    mst:            Tuple[Edge, ...]          = ()
    rejected:       Tuple[Edge, ...]          = ()
    mst_weight:     int                       = 0
    edge_highlight: Optional[Tuple[str, str]] = None


def initial_state(problem) -> KruskalState:
    graph = problem.graph
    return KruskalState(
        sorted_edges=tuple(sorted(graph.unique_edges(), key=lambda e: e.weight)),
        parent={n: n for n in graph.node_ids()},
        explanation="Ready. Edges sorted by weight.",
    )


def find(parent: Dict[str, str], node: str) -> str:
    """Root of `node`'s set.  Compresses the path in `parent` (caller's copy)."""
    root = node
    while parent[root] != root:
        root = parent[root]
    while parent[node] != root:
        parent[node], node = root, parent[node]
    return root


def step(state: KruskalState, problem) -> KruskalState:
    if state.is_done:
        return state
    target = problem.graph.node_count() - 1

    if state.edge_index >= len(state.sorted_edges) or len(state.mst) >= target:
        return state.advance(
            phase=Phase.DONE,
            edge_highlight=None,
            explanation=f"Finished. MST has {len(state.mst)} edge(s), total weight {state.mst_weight}.",
        )

    edge = state.sorted_edges[state.edge_index]
    parent = dict(state.parent)
    ru, rv = find(parent, edge.u), find(parent, edge.v)

    if ru != rv:
        parent[ru] = rv
        mst, weight = state.mst + (edge,), state.mst_weight + edge.weight
        added = f"Added {edge.u} - {edge.v} (weight {edge.weight}) to the MST."
        if len(mst) >= target:
            return state.advance(
                phase=Phase.DONE,
                edge_index=state.edge_index + 1,
                parent=parent,
                mst=mst,
                mst_weight=weight,
                edge_highlight=(edge.u, edge.v),
                explanation=f"{added} MST complete: {len(mst)} edge(s), total weight {weight}.",
            )
        return state.advance(
            phase=Phase.PROCESSING,
            edge_index=state.edge_index + 1,
            parent=parent,
            mst=mst,
            mst_weight=weight,
            edge_highlight=(edge.u, edge.v),
            explanation=added,
        )
    return state.advance(
        phase=Phase.PROCESSING,
        edge_index=state.edge_index + 1,
        parent=parent,
        rejected=state.rejected + (edge,),
        edge_highlight=(edge.u, edge.v),
        explanation=f"Skipped {edge.u} - {edge.v}: it would form a cycle.",
    )
