"""
linear_search.py — Linear Search
=================================
State {current_index}.  One step = advance one index and compare it to
the target.  Terminal FOUND (index recorded) or NOT_FOUND (ran off the
end of the array).
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from algorithms.step import ArrayState
from errors import InvalidTarget


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-1:",
    "    if arr[i] == target: return i",
    "return NOT FOUND",
]


class Phase(Enum):
    IDLE      = "IDLE"
    SEARCHING = "SEARCHING"
    FOUND     = "FOUND"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class LinearSearchState(ArrayState):
    TERMINAL = frozenset({Phase.FOUND, Phase.NOT_FOUND})

    phase:         Phase         = Phase.IDLE
    target:        Optional[int] = None
    current_index: Optional[int] = None
    found_index:   Optional[int] = None


def require_target(problem) -> int:
    if problem.target is None:
        raise InvalidTarget(f"Search target {problem.target_text!r} is not a number.")
    return problem.target


def initial_state(problem) -> LinearSearchState:
    return LinearSearchState(
        arr=tuple(problem.values),
        target=problem.target,
        explanation="Ready. Press play to start searching.",
    )


def step(state: LinearSearchState, problem) -> LinearSearchState:
    if state.is_done:
        return state
    target = require_target(problem)

    nxt = 0 if state.current_index is None else state.current_index + 1
    if nxt >= len(state.arr):
        return state.advance(
            phase=Phase.NOT_FOUND,
            target=target,
            comparing=(),
            explanation=f"{target} is not in the array.",
        )

    value = state.arr[nxt]
    if value == target:
        return state.advance(
            phase=Phase.FOUND,
            target=target,
            current_index=nxt,
            found_index=nxt,
            comparing=(nxt,),
            comparisons=state.comparisons + 1,
            explanation=f"Found {target} at index {nxt}.",
        )
    return state.advance(
        phase=Phase.SEARCHING,
        target=target,
        current_index=nxt,
        comparing=(nxt,),
        comparisons=state.comparisons + 1,
        explanation=f"arr[{nxt}] = {value} ≠ {target}.",
    )
