"""
graph.py — Graph Container & Generators
========================================
Single source of truth for a graph problem instance.  Algorithms read
it; nothing mutates it once a session has been built around it.

Responsibilities:
  1. Node / edge construction               (add_node / add_edge)
  2. Adjacency queries                      (neighbours, weight, edge_list, …)
  3. Random generators                      (connected weighted, negative weights,
                                             DAG, DAG with an injected cycle)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation                          (to_dict / from_dict)

Design decisions:
  - Nodes stored in a dict keyed by id; each node keeps its own
    {neighbour: weight} map, so neighbour queries are O(degree).
  - Undirected graphs store every edge on both endpoints with the same
    weight (symmetric).  Directed graphs store it on the tail only.
  - Node ids are letters "A".."Z" in creation order, so insertion order
    and sorted order coincide for generated graphs.
  - Generators take a `random.Random` so sessions can be reproduced
    from a seed without touching the global RNG.
"""

import math
import random
from typing import Dict, List, Optional, Set, Tuple

from errors import ConfigError
from graph.edge import Edge
from graph.node import GraphNode


CANVAS_W = 800
CANVAS_H = 600


def node_label(i: int) -> str:
    """0 → "A", 1 → "B", …"""
    return chr(65 + i)


class Graph:
    """
    Attributes:
        nodes    : {node_id: GraphNode}
        directed : bool – graph-level directedness
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, GraphNode] = {}
        self.directed: bool                 = directed

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_node(self, node: GraphNode) -> GraphNode:
        self.nodes[node.id] = node
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0) -> GraphNode:
        return self.add_node(GraphNode(node_id, x=x, y=y))

    def add_edge(self, u: str, v: str, weight: int = 1) -> None:
        if u not in self.nodes:
            self.create_node(u)
        if v not in self.nodes:
            self.create_node(v)
        self.nodes[u].edges[v] = weight
        if not self.directed:
            self.nodes[v].edges[u] = weight

    # ==================================================================
    # QUERIES
    # ==================================================================
    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def has_edge(self, u: str, v: str) -> bool:
        node = self.nodes.get(u)
        return node is not None and v in node.edges

    def weight(self, u: str, v: str) -> int:
        return self.nodes[u].edges[v]

    def neighbours(self, node_id: str) -> List[Tuple[str, int]]:
        """[(neighbour_id, weight)] in adjacency insertion order."""
        return list(self.nodes[node_id].edges.items())

    def node_ids(self) -> List[str]:
        return sorted(self.nodes)

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_list(self) -> List[Edge]:
        """Every adjacency entry as a directed record; undirected edges appear twice."""
        return [
            Edge(u, v, w)
            for u, node in self.nodes.items()
            for v, w in node.edges.items()
        ]

    def unique_edges(self) -> List[Edge]:
        """Edge list with undirected duplicates removed; first occurrence wins."""
        if self.directed:
            return self.edge_list()
        seen: Set[frozenset] = set()
        result = []
        for e in self.edge_list():
            if e.key() in seen:
                continue
            seen.add(e.key())
            result.append(e)
        return result

    def edge_count(self) -> int:
        return len(self.unique_edges())

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edge_list())

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", False))
        for nd in data.get("nodes", []):
            g.add_node(GraphNode.from_dict(nd))
        return g

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================

    # ---------- Connected weighted (undirected) ----------
    @classmethod
    def generate_connected(
        cls,
        num_nodes: int = 10,
        extra_edges: int = 4,
        tree_weights: Tuple[int, int] = (1, 15),
        extra_weights: Tuple[int, int] = (1, 20),
        rng: Optional[random.Random] = None,
    ) -> "Graph":
        """
        Random spanning tree (each new node hooks onto a random node that is
        already connected) plus `extra_edges` random chords to create cycles.
        """
        rng = rng or random.Random()
        g   = cls(directed=False)
        ids = [g.create_node(node_label(i)).id for i in range(num_nodes)]
        g._place_on_circle(rng=rng)
        if num_nodes <= 1:
            return g

        # spanning-tree backbone
        connected = [ids[0]]
        for u in ids[1:]:
            v = rng.choice(connected)
            g.add_edge(u, v, rng.randint(*tree_weights))
            connected.append(u)

        # chords
        max_extra = num_nodes * (num_nodes - 1) // 2 - (num_nodes - 1)
        for _ in range(min(extra_edges, max_extra)):
            while True:
                a, b = rng.choice(ids), rng.choice(ids)
                if a != b and not g.has_edge(a, b):
                    break
            g.add_edge(a, b, rng.randint(*extra_weights))

        return g

    # ---------- Negative chord weights (Bellman-Ford demos) ----------
    @classmethod
    def generate_with_negative_weights(
        cls,
        num_nodes: int = 8,
        extra_edges: int = 4,
        rng: Optional[random.Random] = None,
    ) -> "Graph":
        """Positive backbone, chords weighted -10..15.  A negative chord is a negative cycle."""
        return cls.generate_connected(
            num_nodes, extra_edges, tree_weights=(1, 15), extra_weights=(-10, 15), rng=rng,
        )

    # ---------- DAG (topological sort) ----------
    @classmethod
    def generate_dag(
        cls,
        num_nodes: int = 10,
        extra_edges: int = 3,
        rng: Optional[random.Random] = None,
    ) -> "Graph":
        """
        Edges only ever point from a lower-index node to a higher-index one,
        which guarantees acyclicity.  Every node but the last gets one
        outgoing edge first, then extra edges are sprinkled on top.
        """
        rng   = rng or random.Random()
        g     = cls(directed=True)
        nodes = [g.create_node(node_label(i)) for i in range(num_nodes)]
        g._place_on_circle(rng=rng)
        if num_nodes <= 1:
            return g

        for i in range(num_nodes - 1):
            j = i + 1 + rng.randrange(num_nodes - 1 - i)
            g.add_edge(nodes[i].id, nodes[j].id, 1)

        max_edges = num_nodes * (num_nodes - 1) // 2
        wanted    = min(num_nodes - 1 + extra_edges, max_edges)
        added     = num_nodes - 1
        while added < wanted:
            i = rng.randrange(num_nodes - 1)
            j = i + 1 + rng.randrange(num_nodes - 1 - i)
            if not g.has_edge(nodes[i].id, nodes[j].id):
                g.add_edge(nodes[i].id, nodes[j].id, 1)
                added += 1

        return g

    # ---------- DAG + one injected cycle ----------
    @classmethod
    def generate_with_cycle(
        cls,
        num_nodes: int = 10,
        extra_edges: int = 3,
        rng: Optional[random.Random] = None,
    ) -> "Graph":
        """
        Start from a DAG, find a path a → b → c and add the back-edge c → a.
        Falls back to reversing an existing edge (2-node cycle) when no such
        path exists.  Fewer than 3 nodes → the plain DAG is returned.
        """
        rng = rng or random.Random()
        g   = cls.generate_dag(num_nodes, extra_edges, rng=rng)
        if num_nodes < 3:
            return g

        starts = list(g.nodes)
        rng.shuffle(starts)
        for a in starts:
            mids = list(g.nodes[a].edges)
            rng.shuffle(mids)
            for b in mids:
                ends = list(g.nodes[b].edges)
                if not ends:
                    continue
                c = rng.choice(ends)
                if c == a or g.has_edge(c, a):
                    continue
                g.add_edge(c, a, 1)
                return g

        edges = g.edge_list()
        if edges:
            e = rng.choice(edges)
            if not g.has_edge(e.v, e.u):
                g.add_edge(e.v, e.u, 1)
        return g

    # ---------- Import from adjacency-list text ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            A -> B(3), C(-2)    → alternate arrow syntax, comma-separated

        Blank lines and lines starting with '#' are ignored.
        """
        adjacency: Dict[str, List[Tuple[str, int]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                raise ConfigError(f"Cannot parse adjacency line: {line!r}")

            src = parts[0].strip()
            adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        w = int(w_str)
                    except ValueError:
                        raise ConfigError(f"Edge weight must be an integer: {token!r}") from None
                else:
                    tgt, w = token, 1
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        g = cls(directed=directed)
        for label in adjacency:
            g.create_node(label)
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = (src, tgt) if directed else frozenset((src, tgt))
                if key in seen:
                    continue
                seen.add(key)
                g.add_edge(src, tgt, w)
        g._place_on_circle(jitter=0.0)
        return g

    # ==================================================================
    # LAYOUT (display only)
    # ==================================================================
    def _place_on_circle(self, rng: Optional[random.Random] = None, jitter: float = 30.0) -> None:
        """Nodes on a circle with a little jitter so it looks natural."""
        n = len(self.nodes)
        if n == 0:
            return
        margin = 50
        cx, cy = CANVAS_W / 2, CANVAS_H / 2
        radius = min(CANVAS_W, CANVAS_H) * 0.35
        for i, node in enumerate(self.nodes.values()):
            angle = 2 * math.pi * i / n
            dx = rng.uniform(-jitter, jitter) if rng and jitter else 0.0
            dy = rng.uniform(-jitter, jitter) if rng and jitter else 0.0
            node.x = max(margin, min(CANVAS_W - margin, cx + radius * math.cos(angle) + dx))
            node.y = max(margin, min(CANVAS_H - margin, cy + radius * math.sin(angle) + dy))

    # ==================================================================
    # DUNDER
    # ==================================================================
    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"
