from typing import Dict, Optional


# ---------------------------------------------------------------------------
# GraphNode
# ---------------------------------------------------------------------------
class GraphNode:
    """
    One vertex of a problem graph.

    Attributes:
        id     : Unique identifier ("A", "B", …), stable for the session.
        label  : Human-readable name shown on the canvas (defaults to id).
        x, y   : Display-only coordinates.  Algorithms never read them.
        edges  : {neighbour_id: weight}.  For undirected graphs the same
                 weight is stored on both endpoints.
    """

    __slots__ = ("id", "label", "x", "y", "edges")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        self.id:    str            = node_id
        self.label: str            = label or node_id
        self.x:     float          = x
        self.y:     float          = y
        self.edges: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     round(self.x, 2),
            "y":     round(self.y, 2),
            "edges": dict(self.edges),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GraphNode":
        node = cls(data["id"], x=data.get("x", 0.0), y=data.get("y", 0.0), label=data.get("label"))
        node.edges = {str(k): int(v) for k, v in data.get("edges", {}).items()}
        return node

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"GraphNode(id={self.id}, degree={len(self.edges)}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphNode) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
