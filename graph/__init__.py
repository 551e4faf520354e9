"""
graph/
-----
Graph data layer.  Public API:

    from graph import Graph, GraphNode, Edge
"""

from graph.node  import GraphNode
from graph.edge  import Edge
from graph.graph import Graph, node_label

__all__ = [
    "GraphNode",
    "Edge",
    "Graph",
    "node_label",
]
