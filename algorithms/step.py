"""
step.py — Algorithm State Snapshot
===================================
Every algorithm is a pair of pure functions:

    initial_state(problem)  -> State          (phase IDLE)
    step(state, problem)    -> State'         (exactly one unit of work)

A State is a frozen-in-time picture of everything the visualizer
needs to render one frame: the phase, the working memory that phase
needs (indices, a working copy of the array, a stack / queue of node
ids, distance maps, …) and a plain-English explanation of what the
last step did.

Design decisions:
  - States are frozen dataclasses.  `step` never mutates its input; it
    builds the successor with `advance(**changes)` (dataclasses.replace
    underneath).  A stray timer tick holding an old state can therefore
    never corrupt the current one.
  - Sequences are tuples and sets are frozensets.  Dict fields (distance
    maps, parent maps) are copied before every write.
  - `TERMINAL` lists the phases that end a run.  Stepping a terminal
    state returns it unchanged.
"""

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, ClassVar, FrozenSet, Sequence, Tuple


@dataclass(frozen=True)
class AlgoState:
    """
    Attributes:
        phase       : Current phase (an Enum defined by each algorithm).
        step_number : Steps taken since IDLE.
        explanation : What the most recent step did, in plain English.
    """

    TERMINAL: ClassVar[FrozenSet[Any]] = frozenset()

    phase:       Any = None
    step_number: int = 0
    explanation: str = ""

    @property
    def is_done(self) -> bool:
        return self.phase in self.TERMINAL

    @property
    def outcome(self) -> str:
        """Terminal label used by analytics ("done", "found", "not_found", …)."""
        return self.phase.value.lower() if self.is_done else ""

    def advance(self, **changes: Any) -> "AlgoState":
        """Successor state: one more step, with `changes` applied."""
        return replace(self, step_number=self.step_number + 1, **changes)


# ---------------------------------------------------------------------------
# Shared base for array algorithms (sorts and searches)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ArrayState(AlgoState):
    """
    Attributes:
        arr            : Working copy of the values.
        comparing      : Indices compared in the last step.
        swapping       : Indices written / swapped in the last step.
        sorted_indices : Indices known to be in their final position.
        comparisons    : Running total of element comparisons.
        swaps          : Running total of swaps / element writes.
    """

    arr:            Tuple[int, ...] = ()
    comparing:      Tuple[int, ...] = ()
    swapping:       Tuple[int, ...] = ()
    sorted_indices: FrozenSet[int]  = frozenset()
    comparisons:    int             = 0
    swaps:          int             = 0

    def finished(self, done_phase: Enum, explanation: str = "Array is sorted.", **changes: Any) -> "ArrayState":
        """Terminal successor; every index of the (final) array is marked sorted."""
        arr = changes.get("arr", self.arr)
        return self.advance(
            phase=done_phase,
            comparing=(),
            swapping=(),
            sorted_indices=frozenset(range(len(arr))),
            explanation=explanation,
            **changes,
        )


def swapped(arr: Sequence[int], a: int, b: int) -> Tuple[int, ...]:
    """Copy of `arr` with positions a and b exchanged."""
    out = list(arr)
    out[a], out[b] = out[b], out[a]
    return tuple(out)


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------
def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and math.isinf(value):
        return None
    if isinstance(value, (set, frozenset)):
        items = [_plain(v) for v in value]
        try:
            return sorted(items)
        except TypeError:
            return items
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def to_dict(state: AlgoState) -> dict:
    """JSON-ready view of a state: enums → values, sets → sorted lists, ∞ → None."""
    data = {f.name: _plain(getattr(state, f.name)) for f in fields(state)}
    data["is_done"] = state.is_done
    data["outcome"] = state.outcome
    return data
