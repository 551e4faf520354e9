"""
problem.py — Problem Instances
===============================
The immutable input to one run: an array of values, a tree, or a graph,
plus the user's selections (search target, start / end node) and the
per-algorithm options the state machines read (traversal kind, heap
type, heap capacity).

    problem = build_problem(get_algorithm("dijkstra"), resolve("dijkstra"), rng)
    problem = problem.with_selection(start_node="C")

Built on every reset, never mutated afterwards.  Sorts copy the values
into their own state; searches, traversals and graph algorithms only
read.
"""

import random
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from config import SessionConfig, defaults_for
from errors import ConfigError, InvalidNode
from graph import Graph
from tree import Tree


@dataclass(frozen=True)
class ProblemInstance:
    """
    Attributes:
        algorithm   : Registry key the instance was built for.
        values      : Array values (sorts, searches) or heap build values.
        graph       : Graph for graph algorithms.
        tree        : Tree for traversals.
        target      : Parsed search target; None when the raw text is not a number.
        target_text : Search target exactly as supplied.
        start_node  : Graph source node id.
        end_node    : Graph destination node id (Dijkstra).
        traversal   : Traversal kind.
        heap_type   : "min" | "max".
        capacity    : Heap capacity.
    """

    algorithm:   str
    values:      Tuple[int, ...] = ()
    graph:       Optional[Graph] = None
    tree:        Optional[Tree]  = None
    target:      Optional[int]   = None
    target_text: str             = ""
    start_node:  Optional[str]   = None
    end_node:    Optional[str]   = None
    traversal:   str             = "inorder"
    heap_type:   str             = "min"
    capacity:    int             = 0

    def with_selection(
        self,
        target: Any = None,
        start_node: Optional[str] = None,
        end_node: Optional[str] = None,
    ) -> "ProblemInstance":
        """Same instance with a new target / start / end.  Unknown nodes → InvalidNode."""
        changes = {}
        if target is not None:
            changes["target"], changes["target_text"] = parse_target(target)
        if start_node is not None:
            changes["start_node"] = self._check_node(start_node)
        if end_node is not None:
            changes["end_node"] = self._check_node(end_node)
        return replace(self, **changes)

    def _check_node(self, node_id: str) -> str:
        if self.graph is None or not self.graph.has_node(node_id):
            raise InvalidNode(f"Node {node_id!r} is not in the graph.")
        return node_id

    def to_dict(self) -> dict:
        return {
            "algorithm":   self.algorithm,
            "values":      list(self.values),
            "graph":       self.graph.to_dict() if self.graph else None,
            "tree":        self.tree.to_dict() if self.tree else None,
            "target":      self.target,
            "target_text": self.target_text,
            "start_node":  self.start_node,
            "end_node":    self.end_node,
            "traversal":   self.traversal,
            "heap_type":   self.heap_type,
            "capacity":    self.capacity,
        }


# ---------------------------------------------------------------------------
# Target parsing
# ---------------------------------------------------------------------------
def parse_target(raw: Any) -> Tuple[Optional[int], str]:
    """(int value or None, raw text).  Booleans and fractions are not targets."""
    text = str(raw).strip()
    if isinstance(raw, bool):
        return None, text
    if isinstance(raw, int):
        return raw, text
    try:
        return int(text), text
    except ValueError:
        return None, text


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
def _random_values(rng: random.Random, size: int, low: int, high: int) -> Tuple[int, ...]:
    return tuple(rng.randint(low, high) for _ in range(size))


def _distinct_values(rng: random.Random, size: int, low: int, high: int) -> Tuple[int, ...]:
    pool = range(low, high + 1)
    return tuple(rng.sample(pool, min(size, len(pool))))


def build_values(info, config: SessionConfig, rng: random.Random) -> Tuple[int, ...]:
    low, high = defaults_for(info.key).value_range
    distinct = info.problem in ("sorted_array", "tree", "heap")

    if config.values is not None:
        values = tuple(config.values)
        if distinct:
            values = tuple(dict.fromkeys(values))
    elif distinct:
        values = _distinct_values(rng, config.size, low, high)
    else:
        values = _random_values(rng, config.size, low, high)

    if info.problem == "sorted_array":
        values = tuple(sorted(values))
    return values


def build_graph(info, config: SessionConfig, rng: random.Random) -> Graph:
    directed = info.problem == "dag"
    if config.graph_text:
        graph = Graph.from_adjacency_list(config.graph_text, directed=directed)
        if graph.node_count() == 0:
            raise ConfigError("Graph text contains no nodes.")
        if info.problem == "graph" and graph.has_negative_edges():
            raise ConfigError("Dijkstra requires non-negative edge weights.")
        return graph

    size, extra = config.size, config.extra_edges
    if info.problem == "graph":
        return Graph.generate_connected(size, extra, tree_weights=(1, 15), extra_weights=(1, 20), rng=rng)
    if info.problem == "signed_graph":
        return Graph.generate_with_negative_weights(size, extra, rng=rng)
    if info.problem == "mst_graph":
        return Graph.generate_connected(size, extra, tree_weights=(1, 20), extra_weights=(1, 25), rng=rng)
    if config.cyclic:
        return Graph.generate_with_cycle(size, extra, rng=rng)
    return Graph.generate_dag(size, extra, rng=rng)


def build_problem(info, config: SessionConfig, rng: random.Random) -> ProblemInstance:
    """Fresh random (or explicitly supplied) instance for `info`, honouring `config`."""
    base = ProblemInstance(
        algorithm=info.key,
        traversal=config.traversal,
        heap_type=config.heap_type,
        capacity=config.capacity,
    )

    if info.problem in ("array", "sorted_array"):
        values = build_values(info, config, rng)
        problem = replace(base, values=values)
        if info.family == "searching":
            raw = config.target if config.target is not None else (rng.choice(values) if values else "")
            target, text = parse_target(raw)
            problem = replace(problem, target=target, target_text=text)
        return problem

    if info.problem == "tree":
        values = build_values(info, config, rng)
        if config.tree_type == "random":
            tree = Tree.generate_random(values, rng=rng)
        else:
            tree = Tree.generate_bst(values)
        return replace(base, tree=tree, values=values)

    if info.problem == "heap":
        return replace(base, values=build_values(info, config, rng))

    graph = build_graph(info, config, rng)
    ids = graph.node_ids()
    problem = replace(
        base,
        graph=graph,
        start_node=ids[0] if ids else None,
        end_node=ids[-1] if ids else None,
    )
    return problem.with_selection(start_node=config.start_node, end_node=config.end_node)
