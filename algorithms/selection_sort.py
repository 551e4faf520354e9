"""
selection_sort.py — Selection Sort
===================================
Phases:
    SCANNING  – advance j one element per step, tracking the index of
                the smallest value seen since boundary i
    SWAPPING  – swap arr[i] with that minimum, advance the boundary
Terminal when i >= n-1.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from algorithms.step import ArrayState, swapped


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",
    "    min ← i",
    "    for j in i+1 .. n-1:",
    "        if arr[j] < arr[min]: min ← j",
    "    swap(arr[i], arr[min])",
]


class Phase(Enum):
    IDLE     = "IDLE"
    SCANNING = "SCANNING"
    SWAPPING = "SWAPPING"
    DONE     = "DONE"


@dataclass(frozen=True)
class SelectionState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase:     Phase = Phase.IDLE
    i:         int   = 0
    j:         int   = 1
    min_index: int   = 0


def initial_state(problem) -> SelectionState:
    return SelectionState(arr=tuple(problem.values), explanation="Ready. Press play to start sorting.")


def step(state: SelectionState, problem=None) -> SelectionState:
    if state.is_done:
        return state

    arr, i, j, m = state.arr, state.i, state.j, state.min_index
    n = len(arr)

    if i >= n - 1:
        return state.finished(Phase.DONE)

    if state.phase is Phase.SWAPPING:
        changes = dict(
            phase=Phase.SCANNING,
            i=i + 1,
            j=i + 2,
            min_index=i + 1,
            comparing=(),
            sorted_indices=state.sorted_indices | {i},
        )
        if m != i:
            return state.advance(
                arr=swapped(arr, i, m),
                swapping=(i, m),
                swaps=state.swaps + 1,
                explanation=f"Swapping minimum {arr[m]} into index {i}.",
                **changes,
            )
        return state.advance(
            swapping=(),
            explanation=f"{arr[i]} is already the minimum; index {i} is final.",
            **changes,
        )

    # SCANNING (or first step from IDLE)
    if j >= n:
        return state.advance(
            phase=Phase.SWAPPING,
            comparing=(m,),
            swapping=(),
            explanation=f"Scan complete: minimum is {arr[m]} at index {m}.",
        )

    if arr[j] < arr[m]:
        return state.advance(
            phase=Phase.SCANNING,
            j=j + 1,
            min_index=j,
            comparing=(j, m),
            swapping=(),
            comparisons=state.comparisons + 1,
            explanation=f"{arr[j]} < {arr[m]}: new minimum at index {j}.",
        )
    return state.advance(
        phase=Phase.SCANNING,
        j=j + 1,
        comparing=(j, m),
        swapping=(),
        comparisons=state.comparisons + 1,
        explanation=f"{arr[j]} >= {arr[m]}: minimum unchanged.",
    )
