import pytest

from algorithms import binary_search, linear_search
from errors import InvalidTarget
from conftest import array_problem, run


# ---------------------------------------------------------------------------
# Linear search
# ---------------------------------------------------------------------------
def test_linear_search_finds_first_occurrence():
    problem = array_problem([4, 7, 1, 7], target=7)
    final, steps = run(linear_search.step, linear_search.initial_state(problem), problem)

    assert final.phase is linear_search.Phase.FOUND
    assert final.outcome == "found"
    assert final.found_index == 1
    assert final.comparisons == 2
    assert steps == 2


def test_linear_search_not_found_after_every_element():
    problem = array_problem([4, 7, 1], target=99)
    final, _ = run(linear_search.step, linear_search.initial_state(problem), problem)

    assert final.phase is linear_search.Phase.NOT_FOUND
    assert final.found_index is None
    assert final.comparisons == 3


def test_linear_search_empty_array():
    problem = array_problem([], target=3)
    final, steps = run(linear_search.step, linear_search.initial_state(problem), problem)
    assert final.outcome == "not_found"
    assert steps == 1


def test_linear_search_refuses_non_numeric_target():
    problem = array_problem([1, 2, 3], target=None)
    state = linear_search.initial_state(problem)
    with pytest.raises(InvalidTarget):
        linear_search.step(state, problem)
    assert state.step_number == 0


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
VALUES = [2, 5, 8, 12, 16, 23, 38, 56, 72, 91]


@pytest.mark.parametrize("index", range(len(VALUES)))
def test_binary_search_finds_every_element(index):
    problem = array_problem(VALUES, target=VALUES[index])
    final, _ = run(binary_search.step, binary_search.initial_state(problem), problem)

    assert final.phase is binary_search.Phase.FOUND
    assert final.found_index == index
    # ⌊log2 10⌋ + 1 comparisons at most
    assert final.comparisons <= 4


@pytest.mark.parametrize("target", [1, 13, 100])
def test_binary_search_not_found(target):
    problem = array_problem(VALUES, target=target)
    final, _ = run(binary_search.step, binary_search.initial_state(problem), problem)

    assert final.phase is binary_search.Phase.NOT_FOUND
    assert final.low > final.high


def test_binary_search_first_step_opens_window():
    problem = array_problem(VALUES, target=23)
    state = binary_search.step(binary_search.initial_state(problem), problem)
    assert (state.low, state.high) == (0, len(VALUES) - 1)
    assert state.phase is binary_search.Phase.COMPUTING_MID


def test_binary_search_mid_is_lower_middle():
    problem = array_problem([1, 2, 3, 4], target=4)
    state = binary_search.initial_state(problem)
    state = binary_search.step(state, problem)
    state = binary_search.step(state, problem)
    assert state.mid == 1


def test_binary_search_empty_array():
    problem = array_problem([], target=4)
    final, _ = run(binary_search.step, binary_search.initial_state(problem), problem)
    assert final.outcome == "not_found"


def test_binary_search_refuses_non_numeric_target():
    problem = array_problem(VALUES, target=None)
    with pytest.raises(InvalidTarget):
        binary_search.step(binary_search.initial_state(problem), problem)
