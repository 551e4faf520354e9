"""
recorder.py — Run Recorder & Analytics
========================================
Drives a fresh algorithm state to its terminal phase on a given problem
instance, keeps every snapshot, then computes the analytics card.

Usage:
    rec = Recorder()
    rec.start("bubble_sort", problem)
    metrics = rec.run_to_completion()   # RunMetrics
    rec.export()                        # serialisable snapshot list

The live Session is never touched: recording works on its own state
copy, so an analysis can run while a session is paused mid-way.
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import AlgoState, to_dict
from logger import get_logger

logger = get_logger(__name__)

# generous upper bound; the largest configurable instance needs far fewer
DEFAULT_MAX_STEPS = 200_000


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    total_steps:  int   = 0          # steps from IDLE to terminal
    comparisons:  int   = 0          # element comparisons (array / heap algorithms)
    swaps:        int   = 0          # swaps / element writes
    outcome:      str   = ""         # "done", "found", "negative_cycle", "truncated", …
    wall_time_ms: float = 0.0        # wall-clock time to run to completion

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        states    : Every state from the initial one to the terminal one.
        metrics   : Computed RunMetrics (available after run_to_completion).
        max_steps : Safety bound; a run that exceeds it stops with outcome "truncated".
    """

    def __init__(self, max_steps: int = DEFAULT_MAX_STEPS):
        self.states:    List[AlgoState]      = []
        self.metrics:   Optional[RunMetrics] = None
        self.max_steps: int                  = max_steps

        self._info:    Optional[AlgoInfo] = None
        self._problem                     = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, problem) -> None:
        """Initialise a fresh state for `problem`."""
        info = get_algorithm(algo_key)
        state = info.init(problem)
        if info.prepare is not None:
            state = info.prepare(state, problem)

        self._info    = info
        self._problem = problem
        self.states   = [state]
        self.metrics  = None

    def run_to_completion(self) -> RunMetrics:
        """Step until terminal (or max_steps), record every state, compute metrics."""
        if self._info is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        state = self.states[-1]
        while not state.is_done and len(self.states) <= self.max_steps:
            state = self._info.step(state, self._problem)
            self.states.append(state)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info("Recorded %s: %d steps, outcome %s",
                    self._info.key, self.metrics.total_steps, self.metrics.outcome)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def final_state(self) -> Optional[AlgoState]:
        return self.states[-1] if self.states else None

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._info.key if self._info else "",
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "states":   [to_dict(s) for s in self.states],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        last = self.states[-1]
        return RunMetrics(
            algo_key=self._info.key,
            algo_label=self._info.label,
            total_steps=len(self.states) - 1,
            comparisons=getattr(last, "comparisons", 0),
            swaps=getattr(last, "swaps", 0),
            outcome=last.outcome if last.is_done else "truncated",
            wall_time_ms=round(wall_ms, 2),
        )
