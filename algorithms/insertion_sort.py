"""
insertion_sort.py — Insertion Sort
===================================
Phases:
    START_ITERATION  – take key = arr[i], set j = i-1
    SHIFTING         – one comparison per step; while arr[j] > key shift
                       arr[j] one slot right and move j left
    INSERTING        – drop key into j+1, advance i

Only strictly greater elements are shifted, so equal keys keep their
relative order (stable).
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from algorithms.step import ArrayState


PSEUDOCODE: List[str] = [
    "for i in 1 .. n-1:",
    "    key ← arr[i];  j ← i-1",
    "    while j >= 0 and arr[j] > key:",
    "        arr[j+1] ← arr[j];  j ← j-1",
    "    arr[j+1] ← key",
]


class Phase(Enum):
    IDLE            = "IDLE"
    START_ITERATION = "START_ITERATION"
    SHIFTING        = "SHIFTING"
    INSERTING       = "INSERTING"
    DONE            = "DONE"


@dataclass(frozen=True)
class InsertionState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase: Phase         = Phase.IDLE
    i:     int           = 1
    j:     int           = 0
    key:   Optional[int] = None


def initial_state(problem) -> InsertionState:
    return InsertionState(arr=tuple(problem.values), explanation="Ready. Press play to start sorting.")


def step(state: InsertionState, problem=None) -> InsertionState:
    if state.is_done:
        return state

    arr, i, j = state.arr, state.i, state.j
    n = len(arr)

    if state.phase in (Phase.IDLE, Phase.START_ITERATION):
        if i >= n:
            return state.finished(Phase.DONE)
        return state.advance(
            phase=Phase.SHIFTING,
            key=arr[i],
            j=i - 1,
            comparing=(i,),
            swapping=(),
            explanation=f"Picked key {arr[i]} at index {i}.",
        )

    if state.phase is Phase.SHIFTING:
        key = state.key
        if j >= 0 and arr[j] > key:
            out = list(arr)
            out[j + 1] = arr[j]
            return state.advance(
                arr=tuple(out),
                j=j - 1,
                comparing=(j, j + 1),
                swapping=(j, j + 1),
                comparisons=state.comparisons + 1,
                swaps=state.swaps + 1,
                explanation=f"{arr[j]} > {key}: shifting it right.",
            )
        if j >= 0:
            return state.advance(
                phase=Phase.INSERTING,
                comparing=(j,),
                swapping=(),
                comparisons=state.comparisons + 1,
                explanation=f"{arr[j]} <= {key}: found the slot at index {j + 1}.",
            )
        return state.advance(
            phase=Phase.INSERTING,
            comparing=(),
            swapping=(),
            explanation=f"Reached the front: {key} goes to index 0.",
        )

    # INSERTING
    out = list(arr)
    out[j + 1] = state.key
    return state.advance(
        phase=Phase.START_ITERATION,
        arr=tuple(out),
        i=i + 1,
        comparing=(),
        swapping=(j + 1,),
        sorted_indices=frozenset(range(i + 1)),
        swaps=state.swaps + 1,
        explanation=f"Inserted {state.key} at index {j + 1}.",
    )
