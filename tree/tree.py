"""
tree.py — Binary Tree Container & Generators
=============================================
Read-only input for the traversal state machines.

    Tree.generate_bst([...])      → balanced BST over the sorted values
    Tree.generate_random([...])   → random shape; each node is hung on a
                                    random free child slot of the tree so far

Node ids are small integers.  The BST builder hands them out in
pre-order (root = 0); the random builder hands them out in insertion
order (root = 0, i-th value = i).
"""

import random
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from tree.node import TreeNode


class Tree:
    """
    Attributes:
        nodes   : {node_id: TreeNode}
        root_id : id of the root, or None for an empty tree
    """

    def __init__(self, nodes: Optional[Dict[int, TreeNode]] = None, root_id: Optional[int] = None):
        self.nodes:   Dict[int, TreeNode] = dict(nodes or {})
        self.root_id: Optional[int]       = root_id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, node_id: Optional[int]) -> Optional[TreeNode]:
        if node_id is None:
            return None
        return self.nodes.get(node_id)

    def value(self, node_id: int) -> int:
        return self.nodes[node_id].value

    def left(self, node_id: int) -> Optional[int]:
        return self.nodes[node_id].left

    def right(self, node_id: int) -> Optional[int]:
        return self.nodes[node_id].right

    def is_empty(self) -> bool:
        return self.root_id is None

    def __len__(self) -> int:
        return len(self.nodes)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "root": self.root_id,
            "nodes": [n.to_dict() for n in self.nodes.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Tree":
        nodes = {
            int(nd["id"]): TreeNode(int(nd["id"]), int(nd["value"]), nd.get("left"), nd.get("right"))
            for nd in data.get("nodes", [])
        }
        return cls(nodes, data.get("root"))

    # ==================================================================
    # GENERATORS
    # ==================================================================
    @classmethod
    def generate_bst(cls, values: Sequence[int]) -> "Tree":
        """Balanced BST: the middle of each sorted slice becomes the subtree root."""
        ordered = sorted(values)
        nodes: Dict[int, TreeNode] = {}
        counter = [0]

        def build(lo: int, hi: int) -> Optional[int]:
            if lo > hi:
                return None
            mid     = (lo + hi) // 2
            node_id = counter[0]
            counter[0] += 1
            nodes[node_id] = TreeNode(node_id, ordered[mid])
            left  = build(lo, mid - 1)
            right = build(mid + 1, hi)
            nodes[node_id] = replace(nodes[node_id], left=left, right=right)
            return node_id

        root = build(0, len(ordered) - 1)
        return cls(nodes, root)

    @classmethod
    def generate_random(cls, values: Sequence[int], rng: Optional[random.Random] = None) -> "Tree":
        """Random shape: every new node takes a uniformly chosen free (parent, side) slot."""
        rng = rng or random.Random()
        if not values:
            return cls()

        nodes: Dict[int, TreeNode]   = {0: TreeNode(0, values[0])}
        slots: List[Tuple[int, str]] = [(0, "left"), (0, "right")]

        for node_id in range(1, len(values)):
            parent, side = slots.pop(rng.randrange(len(slots)))
            nodes[node_id] = TreeNode(node_id, values[node_id])
            nodes[parent]  = replace(nodes[parent], **{side: node_id})
            slots.extend([(node_id, "left"), (node_id, "right")])

        return cls(nodes, 0)

    def __repr__(self) -> str:
        return f"Tree(nodes={len(self.nodes)}, root={self.root_id})"
