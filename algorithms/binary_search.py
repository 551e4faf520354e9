"""
binary_search.py — Binary Search
=================================
State {low, high, mid} over a sorted array.  Steps alternate:

    COMPUTING_MID  – low > high → NOT_FOUND, else mid = low + (high-low)//2
    COMPARING      – arr[mid] == target → FOUND; otherwise narrow low/high

The first step only sets low = 0, high = n-1.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from algorithms.linear_search import require_target
from algorithms.step import ArrayState


PSEUDOCODE: List[str] = [
    "low ← 0;  high ← n-1",
    "while low <= high:",
    "    mid ← low + (high - low) // 2",
    "    if arr[mid] == target: return mid",
    "    if arr[mid] < target: low ← mid+1  else: high ← mid-1",
    "return NOT FOUND",
]


class Phase(Enum):
    IDLE          = "IDLE"
    COMPUTING_MID = "COMPUTING_MID"
    COMPARING     = "COMPARING"
    FOUND         = "FOUND"
    NOT_FOUND     = "NOT_FOUND"


@dataclass(frozen=True)
class BinarySearchState(ArrayState):
    TERMINAL = frozenset({Phase.FOUND, Phase.NOT_FOUND})

    phase:       Phase         = Phase.IDLE
    target:      Optional[int] = None
    low:         int           = 0
    high:        int           = -1
    mid:         Optional[int] = None
    found_index: Optional[int] = None


def initial_state(problem) -> BinarySearchState:
    return BinarySearchState(
        arr=tuple(problem.values),
        target=problem.target,
        explanation="Ready. Press play to start searching.",
    )


def step(state: BinarySearchState, problem) -> BinarySearchState:
    if state.is_done:
        return state
    target = require_target(problem)
    arr, low, high = state.arr, state.low, state.high

    if state.phase is Phase.IDLE:
        return state.advance(
            phase=Phase.COMPUTING_MID,
            target=target,
            low=0,
            high=len(arr) - 1,
            explanation=f"Searching for {target} in [0..{len(arr) - 1}].",
        )

    if state.phase is Phase.COMPUTING_MID:
        if low > high:
            return state.advance(
                phase=Phase.NOT_FOUND,
                mid=None,
                comparing=(),
                explanation=f"low > high: {target} is not in the array.",
            )
        mid = low + (high - low) // 2
        return state.advance(
            phase=Phase.COMPARING,
            mid=mid,
            comparing=(mid,),
            explanation=f"mid = {low} + ({high} - {low}) // 2 = {mid}.",
        )

    # COMPARING
    mid = state.mid
    value = arr[mid]
    if value == target:
        return state.advance(
            phase=Phase.FOUND,
            found_index=mid,
            comparisons=state.comparisons + 1,
            explanation=f"arr[{mid}] = {target}. Found!",
        )
    if value < target:
        return state.advance(
            phase=Phase.COMPUTING_MID,
            low=mid + 1,
            mid=None,
            comparisons=state.comparisons + 1,
            explanation=f"{value} < {target}: search right half [{mid + 1}..{high}].",
        )
    return state.advance(
        phase=Phase.COMPUTING_MID,
        high=mid - 1,
        mid=None,
        comparisons=state.comparisons + 1,
        explanation=f"{value} > {target}: search left half [{low}..{mid - 1}].",
    )
