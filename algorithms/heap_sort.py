"""
heap_sort.py — Heap Sort
=========================
    BUILDING  – sift-down every internal index n/2-1 .. 0 (max-heap)
    SORTING   – while the unsorted boundary is > 0, go swap
    SWAPPING  – swap root with arr[boundary], mark it final, sift root
    SIFTING   – nested state: compare parent with both children, swap
                with the larger, continue from the swapped index; when
                the parent wins, return to BUILDING or SORTING
Terminal when the sorted boundary reaches index 0.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from algorithms.step import ArrayState, swapped


PSEUDOCODE: List[str] = [
    "for i in n/2-1 .. 0: sift_down(i, n)",
    "for end in n-1 .. 1:",
    "    swap(arr[0], arr[end])",
    "    sift_down(0, end)",
]


class Phase(Enum):
    IDLE     = "IDLE"
    BUILDING = "BUILDING"
    SIFTING  = "SIFTING"
    SORTING  = "SORTING"
    SWAPPING = "SWAPPING"
    DONE     = "DONE"


@dataclass(frozen=True)
class HeapSortState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase:       Phase = Phase.IDLE
    build_index: int   = -1
    sort_index:  int   = -1
    heap_size:   int   = 0
    sift_index:  int   = 0
    sift_return: Phase = Phase.BUILDING


def initial_state(problem) -> HeapSortState:
    return HeapSortState(arr=tuple(problem.values), explanation="Ready. Press play to start sorting.")


def step(state: HeapSortState, problem=None) -> HeapSortState:
    if state.is_done:
        return state

    arr = state.arr
    n = len(arr)
    phase = state.phase

    if phase is Phase.IDLE:
        return state.advance(
            phase=Phase.BUILDING,
            build_index=n // 2 - 1,
            sort_index=n - 1,
            heap_size=n,
            explanation="Building a max-heap from the bottom internal node up.",
        )

    if phase is Phase.BUILDING:
        if state.build_index < 0:
            return state.advance(
                phase=Phase.SORTING,
                comparing=(),
                swapping=(),
                explanation="Max-heap built. The largest value is at the root.",
            )
        return state.advance(
            phase=Phase.SIFTING,
            sift_index=state.build_index,
            heap_size=n,
            sift_return=Phase.BUILDING,
            comparing=(state.build_index,),
            swapping=(),
            explanation=f"Sifting down from index {state.build_index}.",
        )

    if phase is Phase.SORTING:
        if state.sort_index <= 0:
            return state.finished(Phase.DONE)
        return state.advance(
            phase=Phase.SWAPPING,
            comparing=(0, state.sort_index),
            swapping=(),
            explanation=f"Root {arr[0]} is the largest remaining value.",
        )

    if phase is Phase.SWAPPING:
        end = state.sort_index
        return state.advance(
            phase=Phase.SIFTING,
            arr=swapped(arr, 0, end),
            sorted_indices=state.sorted_indices | {end},
            heap_size=end,
            sift_index=0,
            sift_return=Phase.SORTING,
            comparing=(),
            swapping=(0, end),
            swaps=state.swaps + 1,
            explanation=f"Swapped root {arr[0]} to its final index {end}.",
        )

    return _sift_step(state)


def _sift_step(state: HeapSortState) -> HeapSortState:
    arr, p, size = state.arr, state.sift_index, state.heap_size
    left, right = 2 * p + 1, 2 * p + 2
    largest = p
    compared = 0
    if left < size:
        compared += 1
        if arr[left] > arr[largest]:
            largest = left
    if right < size:
        compared += 1
        if arr[right] > arr[largest]:
            largest = right
    looked_at = tuple(c for c in (p, left, right) if c < size)

    if largest != p:
        return state.advance(
            arr=swapped(arr, p, largest),
            sift_index=largest,
            comparing=looked_at,
            swapping=(p, largest),
            comparisons=state.comparisons + compared,
            swaps=state.swaps + 1,
            explanation=f"Child {arr[largest]} > parent {arr[p]}: swapping down.",
        )

    if state.sift_return is Phase.BUILDING:
        return state.advance(
            phase=Phase.BUILDING,
            build_index=state.build_index - 1,
            comparing=looked_at,
            swapping=(),
            comparisons=state.comparisons + compared,
            explanation=f"{arr[p]} at index {p} satisfies the heap property.",
        )
    return state.advance(
        phase=Phase.SORTING,
        sort_index=state.sort_index - 1,
        comparing=looked_at,
        swapping=(),
        comparisons=state.comparisons + compared,
        explanation=f"{arr[p]} at index {p} satisfies the heap property.",
    )
