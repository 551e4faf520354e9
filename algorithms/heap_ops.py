"""
heap_ops.py — Binary Heap Operations (min / max)
=================================================
Dense array heap: parent(i) = (i-1)//2, children 2i+1 and 2i+2.

Operations are requested, then animated:

    insert(state, v)      append v              → SIFTING_UP
    extract(state)        root out, last → root → SIFTING_DOWN
    build(state, values)  empty heap, queue the values; each one is
                          appended (BUILDING) and fully sifted up
    step(state, problem)  one comparison / swap of the running sift

Min-heap compares "<", max-heap ">"; that is the only difference
between the variants.  Refusals (full, empty, busy) raise an
OperationRefused subclass and leave the state untouched.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from algorithms.step import AlgoState
from errors import HeapBusy, HeapEmpty, HeapFull


PSEUDOCODE: List[str] = [
    "insert(v): heap.append(v); i ← last",
    "    while i > 0 and heap[i] beats heap[parent(i)]: swap; i ← parent(i)",
    "extract(): root ← heap[0]; heap[0] ← heap.pop()",
    "    while a child beats heap[i]: swap with the better child",
]

COMPARATORS = {
    "min": operator.lt,
    "max": operator.gt,
}


class Phase(Enum):
    IDLE         = "IDLE"
    BUILDING     = "BUILDING"
    SIFTING_UP   = "SIFTING_UP"
    SIFTING_DOWN = "SIFTING_DOWN"
    DONE         = "DONE"


@dataclass(frozen=True)
class HeapState(AlgoState):
    TERMINAL = frozenset({Phase.IDLE, Phase.DONE})

    phase:         Phase           = Phase.IDLE
    heap_type:     str             = "min"
    capacity:      int             = 15
    heap:          Tuple[int, ...] = ()
    current_index: Optional[int]   = None
    pending:       Tuple[int, ...] = ()
    last_op:       Optional[str]   = None
    extracted:     Optional[int]   = None
    comparing:     Tuple[int, ...] = ()
    swapping:      Tuple[int, ...] = ()
    comparisons:   int             = 0
    swaps:         int             = 0

    def beats(self, a: int, b: int) -> bool:
        return COMPARATORS[self.heap_type](a, b)

    @property
    def is_full(self) -> bool:
        return len(self.heap) >= self.capacity


def initial_state(problem) -> HeapState:
    return HeapState(
        heap_type=problem.heap_type,
        capacity=problem.capacity,
        explanation=f"Empty {problem.heap_type}-heap (capacity {problem.capacity}).",
    )


def is_valid_heap(heap: Sequence[int], heap_type: str) -> bool:
    beats = COMPARATORS[heap_type]
    return all(not beats(heap[i], heap[(i - 1) // 2]) for i in range(1, len(heap)))


# ---------------------------------------------------------------------------
# Requested operations
# ---------------------------------------------------------------------------
def _ensure_idle(state: HeapState, what: str) -> None:
    if not state.is_done:
        raise HeapBusy(f"Cannot {what} while a {state.last_op} is still running.")


def insert(state: HeapState, value: int) -> HeapState:
    _ensure_idle(state, "insert")
    if state.is_full:
        raise HeapFull(f"Heap is full ({state.capacity} nodes).")
    heap = state.heap + (value,)
    return state.advance(
        phase=Phase.SIFTING_UP,
        heap=heap,
        current_index=len(heap) - 1,
        last_op="insert",
        extracted=None,
        comparing=(),
        swapping=(),
        explanation=f"Inserted {value} at index {len(heap) - 1}; sifting up.",
    )


def extract(state: HeapState) -> HeapState:
    _ensure_idle(state, "extract")
    if not state.heap:
        raise HeapEmpty("Heap is empty.")
    root = state.heap[0]
    if len(state.heap) == 1:
        return state.advance(
            phase=Phase.DONE,
            heap=(),
            current_index=None,
            last_op="extract",
            extracted=root,
            comparing=(),
            swapping=(),
            explanation=f"Extracted {root}. The heap is now empty.",
        )
    heap = (state.heap[-1],) + state.heap[1:-1]
    return state.advance(
        phase=Phase.SIFTING_DOWN,
        heap=heap,
        current_index=0,
        last_op="extract",
        extracted=root,
        comparing=(),
        swapping=(0,),
        explanation=f"Extracted {root}; moved {heap[0]} to the root, sifting down.",
    )


def build(state: HeapState, values: Sequence[int]) -> HeapState:
    """Clear the heap and queue `values` for one-by-one insertion."""
    _ensure_idle(state, "build")
    values = tuple(values)[:state.capacity]
    return state.advance(
        phase=Phase.BUILDING if values else Phase.DONE,
        heap=(),
        pending=values,
        current_index=None,
        last_op="build",
        extracted=None,
        comparing=(),
        swapping=(),
        explanation=f"Building a {state.heap_type}-heap from {len(values)} values.",
    )


def prepare_build(state: HeapState, problem) -> HeapState:
    """Queue the instance's build values, so a full run has something to animate."""
    return build(state, problem.values)


# ---------------------------------------------------------------------------
# Animation step
# ---------------------------------------------------------------------------
def step(state: HeapState, problem=None) -> HeapState:
    if state.is_done:
        return state
    if state.phase is Phase.BUILDING:
        value = state.pending[0]
        heap = state.heap + (value,)
        return state.advance(
            phase=Phase.SIFTING_UP,
            heap=heap,
            pending=state.pending[1:],
            current_index=len(heap) - 1,
            comparing=(),
            swapping=(),
            explanation=f"Inserted {value} at index {len(heap) - 1}; sifting up.",
        )
    if state.phase is Phase.SIFTING_UP:
        return _sift_up(state)
    return _sift_down(state)


def _settled(state: HeapState, explanation: str, **changes) -> HeapState:
    return state.advance(
        phase=Phase.BUILDING if state.pending else Phase.DONE,
        current_index=None,
        swapping=(),
        explanation=explanation,
        **changes,
    )


def _sift_up(state: HeapState) -> HeapState:
    heap, i = state.heap, state.current_index
    if i == 0:
        return _settled(state, f"{heap[0]} reached the root.", comparing=())

    p = (i - 1) // 2
    if state.beats(heap[i], heap[p]):
        out = list(heap)
        out[i], out[p] = out[p], out[i]
        return state.advance(
            heap=tuple(out),
            current_index=p,
            comparing=(i, p),
            swapping=(i, p),
            comparisons=state.comparisons + 1,
            swaps=state.swaps + 1,
            explanation=f"{heap[i]} beats parent {heap[p]}: swapping up.",
        )
    return _settled(
        state,
        f"{heap[i]} does not beat parent {heap[p]}: heap property holds.",
        comparing=(i, p),
        comparisons=state.comparisons + 1,
    )


def _sift_down(state: HeapState) -> HeapState:
    heap, i = state.heap, state.current_index
    n = len(heap)
    best = i
    compared = 0
    for child in (2 * i + 1, 2 * i + 2):
        if child < n:
            compared += 1
            if state.beats(heap[child], heap[best]):
                best = child
    looked_at = tuple(c for c in (i, 2 * i + 1, 2 * i + 2) if c < n)

    if best != i:
        out = list(heap)
        out[i], out[best] = out[best], out[i]
        return state.advance(
            heap=tuple(out),
            current_index=best,
            comparing=looked_at,
            swapping=(i, best),
            comparisons=state.comparisons + compared,
            swaps=state.swaps + 1,
            explanation=f"Child {heap[best]} beats {heap[i]}: swapping down.",
        )
    return _settled(
        state,
        f"{heap[i]} is in place: heap property holds.",
        comparing=looked_at,
        comparisons=state.comparisons + compared,
    )
