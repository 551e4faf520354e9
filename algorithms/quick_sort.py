"""
quick_sort.py — Quick Sort (Lomuto)
====================================
Recursion replaced by an explicit stack of (low, high) ranges.

    SELECTING     – pop the next range, pivot = arr[high], wall i = low-1
    PARTITIONING  – one comparison of arr[j] against the pivot per step;
                    arr[j] <= pivot moves the wall right and swaps j into it.
                    When j reaches high the pivot is swapped into i+1,
                    marked final, and both non-trivial sub-ranges are pushed.

Terminal when the stack is empty and no partition is in progress.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from algorithms.step import ArrayState, swapped


PSEUDOCODE: List[str] = [
    "stack ← [(0, n-1)]",
    "while stack:",
    "    (low, high) ← stack.pop();  pivot ← arr[high];  i ← low-1",
    "    for j in low .. high-1:",
    "        if arr[j] <= pivot: i ← i+1; swap(arr[i], arr[j])",
    "    swap(arr[i+1], arr[high])",
    "    push non-trivial (low, i) and (i+2, high)",
]


class Phase(Enum):
    IDLE         = "IDLE"
    SELECTING    = "SELECTING"
    PARTITIONING = "PARTITIONING"
    DONE         = "DONE"


@dataclass(frozen=True)
class QuickState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase: Phase                      = Phase.IDLE
    stack: Tuple[Tuple[int, int], ...] = ()
    low:   int                        = 0
    high:  int                        = -1
    i:     int                        = -1
    j:     int                        = 0


def initial_state(problem) -> QuickState:
    n = len(problem.values)
    return QuickState(
        arr=tuple(problem.values),
        stack=((0, n - 1),) if n > 1 else (),
        explanation="Ready. Press play to start sorting.",
    )


def step(state: QuickState, problem=None) -> QuickState:
    if state.is_done:
        return state

    if state.phase is Phase.PARTITIONING:
        return _partition_step(state)

    # SELECTING (or first step from IDLE)
    if not state.stack:
        return state.finished(Phase.DONE)

    low, high = state.stack[-1]
    return state.advance(
        phase=Phase.PARTITIONING,
        stack=state.stack[:-1],
        low=low,
        high=high,
        i=low - 1,
        j=low,
        comparing=(high,),
        swapping=(),
        explanation=f"Partitioning [{low}..{high}] around pivot {state.arr[high]}.",
    )


def _partition_step(state: QuickState) -> QuickState:
    arr, low, high, i, j = state.arr, state.low, state.high, state.i, state.j
    pivot = arr[high]

    if j < high:
        if arr[j] <= pivot:
            wall = i + 1
            moved = wall != j
            return state.advance(
                arr=swapped(arr, wall, j) if moved else arr,
                i=wall,
                j=j + 1,
                comparing=(j, high),
                swapping=(wall, j) if moved else (),
                comparisons=state.comparisons + 1,
                swaps=state.swaps + (1 if moved else 0),
                explanation=f"{arr[j]} <= pivot {pivot}: moved behind the wall at {wall}.",
            )
        return state.advance(
            j=j + 1,
            comparing=(j, high),
            swapping=(),
            comparisons=state.comparisons + 1,
            explanation=f"{arr[j]} > pivot {pivot}: stays right of the wall.",
        )

    # scanner reached the pivot: place it
    p = i + 1
    moved = p != high
    done = set(state.sorted_indices) | {p}
    stack = list(state.stack)
    for a, b in ((p + 1, high), (low, p - 1)):
        if a < b:
            stack.append((a, b))
        elif a == b:
            done.add(a)

    return state.advance(
        phase=Phase.SELECTING,
        arr=swapped(arr, p, high) if moved else arr,
        stack=tuple(stack),
        comparing=(),
        swapping=(p, high) if moved else (),
        swaps=state.swaps + (1 if moved else 0),
        sorted_indices=frozenset(done),
        explanation=f"Pivot {pivot} placed at its final index {p}.",
    )
