"""
merge_sort.py — Bottom-Up Merge Sort (2-way and 3-way)
=======================================================
The full queue of merge operations is computed up front, widths
doubling (2-way) or tripling (3-way).  Each queued operation is a
bounds tuple:

    2-way : (left, mid, right)          runs [left..mid] [mid+1..right]
    3-way : (left, mid1, mid2, right)   runs [left..mid1] [mid1+1..mid2] [mid2+1..right]

    SETUP    – pop the next operation, copy arr[left..right] into aux
    MERGING  – one element per step: the smallest run head is written to
               arr[k]; on equal keys the leftmost run wins (stable)

Both variants share this module; the registry binds `initial_state`
and `initial_state_three_way` to the same `step`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from algorithms.step import ArrayState


PSEUDOCODE: List[str] = [
    "for each queued (left, …, right):",
    "    aux ← arr[left..right]",
    "    for k in left .. right:",
    "        pick the smallest head among the runs (leftmost on ties)",
    "        arr[k] ← that head;  advance its run",
]


class Phase(Enum):
    IDLE    = "IDLE"
    SETUP   = "SETUP"
    MERGING = "MERGING"
    DONE    = "DONE"


@dataclass(frozen=True)
class MergeState(ArrayState):
    TERMINAL = frozenset({Phase.DONE})

    phase:    Phase                      = Phase.IDLE
    ways:     int                        = 2
    queue:    Tuple[Tuple[int, ...], ...] = ()
    bounds:   Tuple[int, ...]            = ()
    aux:      Tuple[int, ...]            = ()
    pointers: Tuple[int, ...]            = ()    # next unread aux index per run
    ends:     Tuple[int, ...]            = ()    # exclusive aux end per run
    k:        int                        = 0


def merge_schedule(n: int, ways: int = 2) -> List[Tuple[int, ...]]:
    """Bottom-up merge operations for an array of length n."""
    ops: List[Tuple[int, ...]] = []
    width = 1
    while width < n:
        for left in range(0, n, ways * width):
            cuts = tuple(min(left + r * width - 1, n - 1) for r in range(1, ways))
            right = min(left + ways * width - 1, n - 1)
            if cuts[0] < right:
                ops.append((left,) + cuts + (right,))
        width *= ways
    return ops


def _initial(problem, ways: int) -> MergeState:
    return MergeState(
        arr=tuple(problem.values),
        ways=ways,
        queue=tuple(merge_schedule(len(problem.values), ways)),
        explanation="Ready. Press play to start sorting.",
    )


def initial_state(problem) -> MergeState:
    return _initial(problem, 2)


def initial_state_three_way(problem) -> MergeState:
    return _initial(problem, 3)


def _describe(bounds: Tuple[int, ...]) -> str:
    left, cuts, right = bounds[0], bounds[1:-1], bounds[-1]
    starts = (left,) + tuple(c + 1 for c in cuts)
    stops  = cuts + (right,)
    runs   = [f"[{a}..{b}]" for a, b in zip(starts, stops) if a <= b]
    return " and ".join(runs)


def step(state: MergeState, problem=None) -> MergeState:
    if state.is_done:
        return state

    if state.phase is Phase.MERGING:
        return _merge_step(state)

    # SETUP (or first step from IDLE)
    if not state.queue:
        return state.finished(Phase.DONE)

    bounds = state.queue[0]
    left, cuts, right = bounds[0], bounds[1:-1], bounds[-1]
    starts = (0,) + tuple(c + 1 - left for c in cuts)
    ends   = tuple(c + 1 - left for c in cuts) + (right + 1 - left,)
    return state.advance(
        phase=Phase.MERGING,
        queue=state.queue[1:],
        bounds=bounds,
        aux=state.arr[left:right + 1],
        pointers=starts,
        ends=ends,
        k=left,
        comparing=(),
        swapping=(),
        explanation=f"Merging {_describe(bounds)}.",
    )


def _merge_step(state: MergeState) -> MergeState:
    left, right = state.bounds[0], state.bounds[-1]
    aux, ptrs, ends, k = state.aux, state.pointers, state.ends, state.k

    live = [r for r in range(len(ptrs)) if ptrs[r] < ends[r]]
    winner = live[0]
    for r in live[1:]:
        if aux[ptrs[r]] < aux[ptrs[winner]]:
            winner = r

    value = aux[ptrs[winner]]
    out = list(state.arr)
    out[k] = value
    new_ptrs = list(ptrs)
    new_ptrs[winner] += 1

    finished_op = k + 1 > right
    if finished_op:
        note = f" Merge of [{left}..{right}] complete."
    else:
        note = ""
    return state.advance(
        phase=Phase.SETUP if finished_op else Phase.MERGING,
        arr=tuple(out),
        pointers=tuple(new_ptrs),
        k=k + 1,
        comparing=tuple(left + ptrs[r] for r in live),
        swapping=(k,),
        comparisons=state.comparisons + len(live) - 1,
        swaps=state.swaps + 1,
        explanation=f"Placed {value} at index {k}.{note}",
    )
