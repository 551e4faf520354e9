"""Shared fixtures: a manual event loop and problem-instance helpers."""

import random
from typing import Callable, List, Optional

import pytest

from engine.problem import ProblemInstance
from graph import Graph
from tree import Tree


# ---------------------------------------------------------------------------
# Manual loop — fires timer callbacks only when the test says so
# ---------------------------------------------------------------------------
class FakeHandle:
    def __init__(self, when: float, callback: Callable, args: tuple):
        self.when      = when
        self.callback  = callback
        self.args      = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    def __init__(self):
        self.now = 0.0
        self.handles: List[FakeHandle] = []

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable, *args) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def run_pending(self) -> int:
        """Fire every live handle that is due now (one round).  Returns how many fired."""
        due = [h for h in self.pending if h.when <= self.now]
        for h in due:
            self.handles.remove(h)
            if not h.cancelled:
                h.callback(*h.args)
        return len(due)

    def advance(self, seconds: float) -> int:
        self.now += seconds
        return self.run_pending()

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Keep jumping to the next deadline until nothing is scheduled."""
        fired = 0
        while self.pending and fired < limit:
            self.now = min(h.when for h in self.pending)
            fired += self.run_pending()
        return fired


@pytest.fixture
def loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# ---------------------------------------------------------------------------
# Problem helpers
# ---------------------------------------------------------------------------
def array_problem(values, target=None, algorithm="bubble_sort") -> ProblemInstance:
    return ProblemInstance(
        algorithm=algorithm,
        values=tuple(values),
        target=target,
        target_text="" if target is None else str(target),
    )


def graph_problem(
    graph: Graph,
    start: Optional[str] = "A",
    end: Optional[str] = None,
    algorithm: str = "dijkstra",
) -> ProblemInstance:
    return ProblemInstance(algorithm=algorithm, graph=graph, start_node=start, end_node=end)


def tree_problem(tree: Tree, traversal: str = "inorder") -> ProblemInstance:
    return ProblemInstance(algorithm="tree_traversal", tree=tree, traversal=traversal)


def run(step: Callable, state, problem, limit: int = 100_000):
    """Step until terminal; returns (final_state, steps_taken)."""
    steps = 0
    while not state.is_done and steps < limit:
        state = step(state, problem)
        steps += 1
    return state, steps
