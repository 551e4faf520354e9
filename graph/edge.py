"""
edge.py — Weighted Edge Record
==============================
A flattened (u, v, weight) triple.  The Graph stores adjacency maps on
its nodes; algorithms that walk an edge LIST (Bellman-Ford, Kruskal)
get these records from `Graph.edge_list()` / `Graph.unique_edges()`.

`u` and `v` are node-id strings, never GraphNode references, so an
Edge is hashable, immutable and serialisable as-is.
"""

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class Edge:
    u:      str
    v:      str
    weight: int

    def key(self) -> FrozenSet[str]:
        """Direction-free identity, used to dedupe undirected edges."""
        return frozenset((self.u, self.v))

    def to_dict(self) -> dict:
        return {"u": self.u, "v": self.v, "weight": self.weight}

    def __repr__(self) -> str:
        return f"Edge({self.u}→{self.v}, w={self.weight})"
