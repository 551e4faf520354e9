"""
topological_sort.py — Kahn's Algorithm
=======================================
    INIT_INDEGREES   count incoming edges for every node
    INIT_QUEUE       queue every in-degree-0 node (sorted by id)
    PROCESSING_NODE  dequeue one node, append it to the order, decrement
                     its successors, enqueue any that reach zero
    DONE             queue empty

Nodes never processed when the queue runs dry sit on or behind a cycle;
they are reported as `cycle_nodes`, not raised.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from algorithms.step import AlgoState


PSEUDOCODE: List[str] = [
    "indeg ← {v: number of edges into v}",
    "queue ← [v for v if indeg[v] == 0]",
    "while queue:",
    "    u ← queue.popleft();  order.append(u)",
    "    for v in adj(u): indeg[v] -= 1;  if indeg[v] == 0: queue.append(v)",
    "if |order| < |V|: cycle ← V - order",
]


class Phase(Enum):
    IDLE            = "IDLE"
    INIT_INDEGREES  = "INIT_INDEGREES"
    INIT_QUEUE      = "INIT_QUEUE"
    PROCESSING_NODE = "PROCESSING_NODE"
    DONE            = "DONE"


@dataclass(frozen=True)
class TopoState(AlgoState):
    TERMINAL = frozenset({Phase.DONE})

    phase:          Phase                     = Phase.IDLE
    in_degree:      Dict[str, int]            = field(default_factory=dict)
    queue:          Tuple[str, ...]           = ()
    result:         Tuple[str, ...]           = ()
    cycle_nodes:    Tuple[str, ...]           = ()
    current:        Optional[str]             = None
    edge_highlight: Optional[Tuple[str, str]] = None

    @property
    def outcome(self) -> str:
        if not self.is_done:
            return ""
        return "cycle" if self.cycle_nodes else "done"


def initial_state(problem) -> TopoState:
    return TopoState(explanation="Ready. Press play to order the nodes.")


def step(state: TopoState, problem) -> TopoState:
    if state.is_done:
        return state
    graph = problem.graph

    if state.phase is Phase.IDLE:
        return state.advance(
            phase=Phase.INIT_INDEGREES,
            in_degree={n: 0 for n in graph.node_ids()},
            explanation="Initialising in-degrees to zero.",
        )

    if state.phase is Phase.INIT_INDEGREES:
        in_degree = dict(state.in_degree)
        for e in graph.edge_list():
            in_degree[e.v] += 1
        return state.advance(
            phase=Phase.INIT_QUEUE,
            in_degree=in_degree,
            explanation="Counted incoming edges for every node.",
        )

    if state.phase is Phase.INIT_QUEUE:
        queue = tuple(n for n in sorted(state.in_degree) if state.in_degree[n] == 0)
        return state.advance(
            phase=Phase.PROCESSING_NODE,
            queue=queue,
            explanation=f"Queued in-degree-0 nodes: {', '.join(queue) or 'none'}.",
        )

    # PROCESSING_NODE
    if not state.queue:
        remaining = tuple(n for n in sorted(state.in_degree) if n not in state.result)
        if remaining:
            note = f"Cycle detected! Nodes never freed: {', '.join(remaining)}."
        else:
            note = f"Done. Topological order: {' → '.join(state.result)}."
        return state.advance(
            phase=Phase.DONE,
            cycle_nodes=remaining,
            current=None,
            edge_highlight=None,
            explanation=note,
        )

    node, queue = state.queue[0], list(state.queue[1:])
    in_degree = dict(state.in_degree)
    freed = []
    for v, _ in graph.neighbours(node):
        in_degree[v] -= 1
        if in_degree[v] == 0:
            queue.append(v)
            freed.append(v)
    note = f"Took {node}."
    if freed:
        note += f" Freed {', '.join(freed)}."
    return state.advance(
        queue=tuple(queue),
        in_degree=in_degree,
        result=state.result + (node,),
        current=node,
        explanation=note,
    )
