"""
tree/
-----
Binary tree data layer.

    from tree import Tree, TreeNode
"""

from tree.node import TreeNode
from tree.tree import Tree

__all__ = [
    "TreeNode",
    "Tree",
]
