"""
radix_sort.py — LSD Radix Sort
===============================
Outer loop over the digit place (1, 10, 100, …):

    DISTRIBUTING  – one element per step into bucket (v // place) % 10
    COLLECTING    – concatenate buckets 0..9 back into the array

Terminal when the next place exceeds the maximum value.
Values must be non-negative integers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from algorithms.step import ArrayState


PSEUDOCODE: List[str] = [
    "place ← 1",
    "while place <= max(arr):",
    "    for v in arr: buckets[(v // place) % 10].append(v)",
    "    arr ← concat(buckets);  place ← place * 10",
]

EMPTY_BUCKETS: Tuple[Tuple[int, ...], ...] = ((),) * 10


class Phase(Enum):
    IDLE         = "IDLE"
    DISTRIBUTING = "DISTRIBUTING"
    COLLECTING   = "COLLECTING"
    DONE         = "DONE"


@dataclass(frozen=True)
class RadixState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase:     Phase                       = Phase.IDLE
    place:     int                         = 1
    index:     int                         = 0
    max_value: int                         = 0
    buckets:   Tuple[Tuple[int, ...], ...] = EMPTY_BUCKETS


def initial_state(problem) -> RadixState:
    values = tuple(problem.values)
    return RadixState(
        arr=values,
        max_value=max(values) if values else 0,
        explanation="Ready. Press play to start sorting.",
    )


def step(state: RadixState, problem=None) -> RadixState:
    if state.is_done:
        return state

    arr, idx, place = state.arr, state.index, state.place

    if state.phase is Phase.IDLE and (not arr or place > state.max_value):
        return state.finished(Phase.DONE)

    if state.phase in (Phase.IDLE, Phase.DISTRIBUTING):
        v = arr[idx]
        digit = (v // place) % 10
        buckets = list(state.buckets)
        buckets[digit] = buckets[digit] + (v,)
        last = idx + 1 >= len(arr)
        return state.advance(
            phase=Phase.COLLECTING if last else Phase.DISTRIBUTING,
            buckets=tuple(buckets),
            index=idx + 1,
            comparing=(idx,),
            explanation=f"{v} → bucket {digit} (digit at place {place}).",
        )

    # COLLECTING
    collected = tuple(v for bucket in state.buckets for v in bucket)
    if place * 10 > state.max_value:
        return state.finished(
            Phase.DONE,
            f"Collected buckets for place {place}. Array is sorted.",
            arr=collected,
            buckets=EMPTY_BUCKETS,
            swaps=state.swaps + len(collected),
        )
    return state.advance(
        phase=Phase.DISTRIBUTING,
        arr=collected,
        buckets=EMPTY_BUCKETS,
        index=0,
        place=place * 10,
        comparing=(),
        swaps=state.swaps + len(collected),
        explanation=f"Collected buckets for place {place}; next place is {place * 10}.",
    )
