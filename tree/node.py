from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------------
# TreeNode
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TreeNode:
    """
    One binary-tree vertex.  Children are referenced by id, never by
    object, so a whole Tree is a flat {id: TreeNode} map.
    """

    id:    int
    value: int
    left:  Optional[int] = None
    right: Optional[int] = None

    def children(self):
        """Non-null child ids, left first."""
        return [c for c in (self.left, self.right) if c is not None]

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value, "left": self.left, "right": self.right}
