"""
tree_traversal.py — Binary Tree Traversals
===========================================
Inorder / preorder / postorder use an explicit stack, BFS an explicit
FIFO queue.  One state type serves all four:

    stack / queue         – pending node ids
    visited               – visit order so far
    current               – node being descended into (None = "null child")
    parent_of_current     – where we came from
    direction_from_parent – "left" | "right"
    last_visited          – postorder only: tells "came back from the
                            right child" apart from "first arrival"

Per-kind rules (one step each):

    inorder    current → push, go left  |  null → pop, visit, go right
    preorder   current → visit, push, go left  |  null → pop, go right
    postorder  current → push, go left  |  null → peek top; go right if it
               has an unvisited right child, else pop and visit
    bfs        dequeue, visit, enqueue left then right

Terminal for all kinds: stack/queue empty and no pending current node.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from algorithms.step import AlgoState


class Phase(Enum):
    IDLE       = "IDLE"
    TRAVERSING = "TRAVERSING"
    DONE       = "DONE"


@dataclass(frozen=True)
class TraversalState(AlgoState):
    TERMINAL = frozenset({Phase.DONE})

    phase:                 Phase           = Phase.IDLE
    kind:                  str             = "inorder"
    stack:                 Tuple[int, ...] = ()
    queue:                 Tuple[int, ...] = ()
    visited:               Tuple[int, ...] = ()
    current:               Optional[int]   = None
    parent_of_current:     Optional[int]   = None
    direction_from_parent: Optional[str]   = None
    last_visited:          Optional[int]   = None


def initial_state(problem) -> TraversalState:
    root = problem.tree.root_id
    kind = problem.traversal
    if kind == "bfs":
        return TraversalState(
            kind=kind,
            queue=(root,) if root is not None else (),
            explanation="Ready. The queue holds the root.",
        )
    return TraversalState(kind=kind, current=root, explanation="Ready. Starting at the root.")


def visit_values(state: TraversalState, tree) -> List[int]:
    """Values in visit order."""
    return [tree.value(n) for n in state.visited]


def step(state: TraversalState, problem) -> TraversalState:
    if state.is_done:
        return state
    tree = problem.tree
    handler = _HANDLERS[state.kind]
    return handler(state, tree)


def _done(state: TraversalState) -> TraversalState:
    return state.advance(
        phase=Phase.DONE,
        current=None,
        parent_of_current=None,
        direction_from_parent=None,
        explanation=f"Traversal complete: {len(state.visited)} node(s) visited.",
    )


def _go(state: TraversalState, tree, parent: int, side: str, prefix: str, **changes) -> TraversalState:
    """Move to `parent`'s child on `side` (possibly null)."""
    child = getattr(tree.nodes[parent], side)
    what = "null" if child is None else f"value {tree.value(child)}"
    return state.advance(
        phase=Phase.TRAVERSING,
        current=child,
        parent_of_current=parent,
        direction_from_parent=side,
        explanation=f"{prefix}Going {side} to {what}.",
        **changes,
    )


def _inorder(state: TraversalState, tree) -> TraversalState:
    cur = state.current
    if cur is not None:
        return _go(
            state, tree, cur, "left",
            f"Push {tree.value(cur)}. ",
            stack=state.stack + (cur,),
        )
    if state.stack:
        top = state.stack[-1]
        return _go(
            state, tree, top, "right",
            f"Pop and visit {tree.value(top)}. ",
            stack=state.stack[:-1],
            visited=state.visited + (top,),
            last_visited=top,
        )
    return _done(state)


def _preorder(state: TraversalState, tree) -> TraversalState:
    cur = state.current
    if cur is not None:
        return _go(
            state, tree, cur, "left",
            f"Visit {tree.value(cur)} and push it. ",
            stack=state.stack + (cur,),
            visited=state.visited + (cur,),
            last_visited=cur,
        )
    if state.stack:
        top = state.stack[-1]
        return _go(
            state, tree, top, "right",
            f"Pop {tree.value(top)}. ",
            stack=state.stack[:-1],
        )
    return _done(state)


def _postorder(state: TraversalState, tree) -> TraversalState:
    cur = state.current
    if cur is not None:
        return _go(
            state, tree, cur, "left",
            f"Push {tree.value(cur)}. ",
            stack=state.stack + (cur,),
        )
    if state.stack:
        top = state.stack[-1]
        right = tree.right(top)
        if right is not None and state.last_visited != right:
            return _go(state, tree, top, "right", f"Back at {tree.value(top)}. ")
        return state.advance(
            phase=Phase.TRAVERSING,
            stack=state.stack[:-1],
            visited=state.visited + (top,),
            last_visited=top,
            current=None,
            parent_of_current=_parent_map(tree).get(top),
            direction_from_parent=None,
            explanation=f"Both subtrees of {tree.value(top)} done: pop and visit it.",
        )
    return _done(state)


def _bfs(state: TraversalState, tree) -> TraversalState:
    if not state.queue:
        return _done(state)
    node_id = state.queue[0]
    children = tuple(c for c in (tree.left(node_id), tree.right(node_id)) if c is not None)
    parent = _parent_map(tree).get(node_id)
    direction = None
    if parent is not None:
        direction = "left" if tree.left(parent) == node_id else "right"
    added = ", ".join(str(tree.value(c)) for c in children) or "nothing"
    return state.advance(
        phase=Phase.TRAVERSING,
        queue=state.queue[1:] + children,
        visited=state.visited + (node_id,),
        last_visited=node_id,
        current=node_id,
        parent_of_current=parent,
        direction_from_parent=direction,
        explanation=f"Dequeue and visit {tree.value(node_id)}; enqueue {added}.",
    )


def _parent_map(tree) -> Dict[int, int]:
    parents: Dict[int, int] = {}
    for node in tree.nodes.values():
        for child in node.children():
            parents[child] = node.id
    return parents


_HANDLERS = {
    "inorder":   _inorder,
    "preorder":  _preorder,
    "postorder": _postorder,
    "bfs":       _bfs,
}
