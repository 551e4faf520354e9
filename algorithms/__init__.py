"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, family, problem, init, step, …),
        …
    }

`problem` names the kind of instance the session must generate:

    "array"         random values                 (sorts, linear search)
    "sorted_array"  sorted distinct values        (binary search)
    "tree"          binary tree                   (traversals)
    "heap"          build values for a heap       (heap operations)
    "graph"         connected weighted graph      (Dijkstra)
    "signed_graph"  connected, negative chords    (Bellman-Ford)
    "mst_graph"     connected weighted graph      (Kruskal)
    "dag"           directed acyclic graph        (topological sort)

Adding an algorithm is: write `initial_state` + `step`, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from errors import UnknownAlgorithm

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms import (
    bellman_ford,
    binary_search,
    bubble_sort,
    count_sort,
    dijkstra,
    heap_ops,
    heap_sort,
    insertion_sort,
    kruskal,
    linear_search,
    merge_sort,
    quick_sort,
    radix_sort,
    selection_sort,
    topological_sort,
    tree_traversal,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble_sort"
    label:            str                    # human label, e.g. "Bubble Sort"
    family:           str                    # "sorting" | "searching" | "trees" | "heaps" | "graphs"
    problem:          str                    # instance kind, see module docstring
    init:             Callable               # initial_state(problem) -> state
    step:             Callable               # step(state, problem) -> state
    prepare:          Optional[Callable] = None   # queue work on a resting state (heaps: build the instance values)
    pseudocode:       List[str] = field(default_factory=list)
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "family":           self.family,
            "problem":          self.problem,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # ---------- sorting ----------
    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", family="sorting", problem="array",
        init=bubble_sort.initial_state, step=bubble_sort.step, pseudocode=bubble_sort.PSEUDOCODE,
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", family="sorting", problem="array",
        init=insertion_sort.initial_state, step=insertion_sort.step, pseudocode=insertion_sort.PSEUDOCODE,
        tags=["comparison", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by shifting larger values right and dropping each key into place.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", family="sorting", problem="array",
        init=selection_sort.initial_state, step=selection_sort.step, pseudocode=selection_sort.PSEUDOCODE,
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Scans for the minimum of the unsorted part and swaps it to the boundary.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", family="sorting", problem="array",
        init=quick_sort.initial_state, step=quick_sort.step, pseudocode=quick_sort.PSEUDOCODE,
        tags=["comparison", "in-place", "divide-and-conquer"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element, ranges kept on an explicit stack.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", family="sorting", problem="array",
        init=merge_sort.initial_state, step=merge_sort.step, pseudocode=merge_sort.PSEUDOCODE,
        tags=["comparison", "stable", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Bottom-up: merges runs of width 1, 2, 4, … through an auxiliary buffer.",
    ),

    "three_way_merge_sort": AlgoInfo(
        key="three_way_merge_sort", label="3-Way Merge Sort", family="sorting", problem="array",
        init=merge_sort.initial_state_three_way, step=merge_sort.step, pseudocode=merge_sort.PSEUDOCODE,
        tags=["comparison", "stable", "divide-and-conquer"],
        complexity_time="O(n log₃ n)", complexity_space="O(n)",
        description="Bottom-up merge of three runs at a time, widths 1, 3, 9, …",
    ),

    "heap_sort": AlgoInfo(
        key="heap_sort", label="Heap Sort", family="sorting", problem="array",
        init=heap_sort.initial_state, step=heap_sort.step, pseudocode=heap_sort.PSEUDOCODE,
        tags=["comparison", "in-place"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then repeatedly swaps the root to the end and sifts down.",
    ),

    "count_sort": AlgoInfo(
        key="count_sort", label="Count Sort", family="sorting", problem="array",
        init=count_sort.initial_state, step=count_sort.step, pseudocode=count_sort.PSEUDOCODE,
        tags=["distribution", "stable", "non-negative"],
        complexity_time="O(n + k)", complexity_space="O(n + k)",
        description="Counts occurrences, turns counts into positions, places values right to left.",
    ),

    "radix_sort": AlgoInfo(
        key="radix_sort", label="Radix Sort", family="sorting", problem="array",
        init=radix_sort.initial_state, step=radix_sort.step, pseudocode=radix_sort.PSEUDOCODE,
        tags=["distribution", "stable", "non-negative"],
        complexity_time="O(d · (n + 10))", complexity_space="O(n)",
        description="Least-significant digit first: distribute into 10 buckets, collect, repeat.",
    ),

    # ---------- searching ----------
    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", family="searching", problem="array",
        init=linear_search.initial_state, step=linear_search.step, pseudocode=linear_search.PSEUDOCODE,
        tags=["search"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element left to right.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", family="searching", problem="sorted_array",
        init=binary_search.initial_state, step=binary_search.step, pseudocode=binary_search.PSEUDOCODE,
        tags=["search", "sorted-input"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves the search window around the middle element each comparison.",
    ),

    # ---------- trees ----------
    "tree_traversal": AlgoInfo(
        key="tree_traversal", label="Tree Traversal", family="trees", problem="tree",
        init=tree_traversal.initial_state, step=tree_traversal.step,
        tags=["inorder", "preorder", "postorder", "bfs"],
        complexity_time="O(n)", complexity_space="O(h) stack / O(w) queue",
        description="Inorder, preorder and postorder with an explicit stack; level order with a queue.",
    ),

    # ---------- heaps ----------
    "heap": AlgoInfo(
        key="heap", label="Binary Heap", family="heaps", problem="heap",
        init=heap_ops.initial_state, step=heap_ops.step, prepare=heap_ops.prepare_build,
        pseudocode=heap_ops.PSEUDOCODE,
        tags=["min-heap", "max-heap", "priority-queue"],
        complexity_time="O(log n) per operation", complexity_space="O(n)",
        description="Insert with sift-up, extract with sift-down, on a min- or max-heap.",
    ),

    # ---------- graphs ----------
    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", family="graphs", problem="graph",
        init=dijkstra.initial_state, step=dijkstra.step, pseudocode=dijkstra.PSEUDOCODE,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Optimal for non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", family="graphs", problem="signed_graph",
        init=bellman_ford.initial_state, step=bellman_ford.step, pseudocode=bellman_ford.PSEUDOCODE,
        tags=["weighted", "shortest-path", "negative-edges"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges. Detects negative cycles. Slower than Dijkstra.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", family="graphs", problem="mst_graph",
        init=kruskal.initial_state, step=kruskal.step, pseudocode=kruskal.PSEUDOCODE,
        tags=["weighted", "mst", "union-find"],
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Takes the cheapest edge that joins two components until the tree spans the graph.",
    ),

    "topological_sort": AlgoInfo(
        key="topological_sort", label="Topological Sort", family="graphs", problem="dag",
        init=topological_sort.initial_state, step=topological_sort.step,
        pseudocode=topological_sort.PSEUDOCODE,
        tags=["directed", "dag", "cycle-detection"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Kahn's algorithm: repeatedly removes in-degree-0 nodes. Leftovers mean a cycle.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> AlgoInfo:
    """Return AlgoInfo by key; UnknownAlgorithm if there is none."""
    try:
        return REGISTRY[key]
    except KeyError:
        raise UnknownAlgorithm(key) from None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "algorithms_by_tag",
]
