"""
bubble_sort.py — Bubble Sort
=============================
State {i, j}: i is the number of completed passes, j the left index of
the pair being compared.  One step = one comparison of (j, j+1) with a
conditional swap.  When j reaches n-i-1 the pass is over: index n-1-i
is final, i advances and j restarts at 0.

    [5, 3, 8, 1]  --step-->  compare (5, 3), swap  -->  [3, 5, 8, 1]
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from algorithms.step import ArrayState, swapped


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",
    "    for j in 0 .. n-i-2:",
    "        if arr[j] > arr[j+1]:",
    "            swap(arr[j], arr[j+1])",
    "    mark n-1-i sorted",
]


class Phase(Enum):
    IDLE      = "IDLE"
    COMPARING = "COMPARING"
    DONE      = "DONE"


@dataclass(frozen=True)
class BubbleState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase: Phase = Phase.IDLE
    i:     int   = 0
    j:     int   = 0


def initial_state(problem) -> BubbleState:
    return BubbleState(arr=tuple(problem.values), explanation="Ready. Press play to start sorting.")


def step(state: BubbleState, problem=None) -> BubbleState:
    if state.is_done:
        return state

    arr, i, j = state.arr, state.i, state.j
    n = len(arr)

    if i >= n - 1:
        return state.finished(Phase.DONE)

    # -- compare one adjacent pair --
    if j < n - i - 1:
        a, b = arr[j], arr[j + 1]
        if a > b:
            return state.advance(
                phase=Phase.COMPARING,
                arr=swapped(arr, j, j + 1),
                j=j + 1,
                comparing=(j, j + 1),
                swapping=(j, j + 1),
                comparisons=state.comparisons + 1,
                swaps=state.swaps + 1,
                explanation=f"{a} > {b}: swapping positions {j} and {j + 1}.",
            )
        return state.advance(
            phase=Phase.COMPARING,
            j=j + 1,
            comparing=(j, j + 1),
            swapping=(),
            comparisons=state.comparisons + 1,
            explanation=f"{a} <= {b}: no swap.",
        )

    # -- end of pass --
    last = n - 1 - i
    return state.advance(
        phase=Phase.COMPARING,
        i=i + 1,
        j=0,
        comparing=(),
        swapping=(),
        sorted_indices=state.sorted_indices | {last},
        explanation=f"Pass {i + 1} complete: {arr[last]} is in its final position.",
    )
