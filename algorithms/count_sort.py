"""
count_sort.py — Counting Sort
==============================
One array cell per step in every phase:

    COUNTING         – counts[arr[idx]] += 1                 idx 0 .. n-1
    MODIFYING_COUNT  – counts[idx] += counts[idx-1]          idx 1 .. max
    BUILDING_OUTPUT  – right to left: output[--counts[v]] = v
    COPYING          – arr[idx] = output[idx]

Values must be non-negative integers; the count array spans 0..max.
The right-to-left output pass keeps the sort stable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from algorithms.step import ArrayState


PSEUDOCODE: List[str] = [
    "for v in arr: count[v] += 1",
    "for i in 1 .. max: count[i] += count[i-1]",
    "for v in reversed(arr): count[v] -= 1; out[count[v]] ← v",
    "arr ← out",
]


class Phase(Enum):
    IDLE            = "IDLE"
    COUNTING        = "COUNTING"
    MODIFYING_COUNT = "MODIFYING_COUNT"
    BUILDING_OUTPUT = "BUILDING_OUTPUT"
    COPYING         = "COPYING"
    DONE            = "DONE"


@dataclass(frozen=True)
class CountState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase:  Phase                     = Phase.IDLE
    counts: Tuple[int, ...]           = ()
    output: Tuple[Optional[int], ...] = ()
    index:  int                       = 0


def initial_state(problem) -> CountState:
    return CountState(arr=tuple(problem.values), explanation="Ready. Press play to start sorting.")


def _set(seq, i, value) -> tuple:
    out = list(seq)
    out[i] = value
    return tuple(out)


def step(state: CountState, problem=None) -> CountState:
    if state.is_done:
        return state

    arr, idx = state.arr, state.index
    n = len(arr)
    phase = state.phase

    if phase is Phase.IDLE:
        if n == 0:
            return state.finished(Phase.DONE)
        return state.advance(
            phase=Phase.COUNTING,
            counts=(0,) * (max(arr) + 1),
            output=(None,) * n,
            index=0,
            explanation=f"Count array of size {max(arr) + 1} initialised to zero.",
        )

    if phase is Phase.COUNTING:
        v = arr[idx]
        counts = _set(state.counts, v, state.counts[v] + 1)
        if idx + 1 < n:
            return state.advance(
                counts=counts, index=idx + 1, comparing=(idx,),
                explanation=f"Counted {v}: count[{v}] = {counts[v]}.",
            )
        return state.advance(
            phase=Phase.MODIFYING_COUNT if len(counts) > 1 else Phase.BUILDING_OUTPUT,
            counts=counts,
            index=1 if len(counts) > 1 else n - 1,
            comparing=(idx,),
            explanation=f"Counted {v}. All values counted; computing running totals.",
        )

    if phase is Phase.MODIFYING_COUNT:
        counts = _set(state.counts, idx, state.counts[idx] + state.counts[idx - 1])
        last = idx + 1 >= len(counts)
        return state.advance(
            phase=Phase.BUILDING_OUTPUT if last else Phase.MODIFYING_COUNT,
            counts=counts,
            index=n - 1 if last else idx + 1,
            comparing=(),
            explanation=f"count[{idx}] += count[{idx - 1}] → {counts[idx]}.",
        )

    if phase is Phase.BUILDING_OUTPUT:
        v = arr[idx]
        pos = state.counts[v] - 1
        last = idx == 0
        return state.advance(
            phase=Phase.COPYING if last else Phase.BUILDING_OUTPUT,
            counts=_set(state.counts, v, pos),
            output=_set(state.output, pos, v),
            index=0 if last else idx - 1,
            comparing=(idx,),
            explanation=f"Placed {v} at output index {pos}.",
        )

    # COPYING
    arr = _set(arr, idx, state.output[idx])
    if idx + 1 < n:
        return state.advance(
            arr=arr, index=idx + 1, comparing=(), swapping=(idx,),
            swaps=state.swaps + 1,
            sorted_indices=state.sorted_indices | {idx},
            explanation=f"Copied {arr[idx]} back to index {idx}.",
        )
    return state.finished(Phase.DONE, arr=arr, swaps=state.swaps + 1)
