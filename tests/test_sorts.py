import random

import pytest

from algorithms import REGISTRY
from algorithms import bubble_sort, count_sort, merge_sort, quick_sort, radix_sort
from algorithms.merge_sort import merge_schedule
from algorithms.step import to_dict
from conftest import array_problem, run


SORT_KEYS = [key for key, info in REGISTRY.items() if info.family == "sorting"]

# in-place exchange sorts keep a permutation of the input at every step
EXCHANGE_SORTS = ["bubble_sort", "selection_sort", "quick_sort", "heap_sort"]


def _arrays():
    rng = random.Random(7)
    return [
        [5, 3, 8, 1],
        [4, 4, 1, 0, 9, 2, 2],
        [1, 2, 3, 4, 5, 6],
        [9, 8, 7, 6, 5, 4, 3, 2, 1],
        [rng.randint(0, 99) for _ in range(25)],
        [rng.randint(100, 999) for _ in range(13)],
    ]


# ---------------------------------------------------------------------------
# Every sort sorts
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", SORT_KEYS)
@pytest.mark.parametrize("values", _arrays())
def test_sort_produces_sorted_permutation(key, values):
    info = REGISTRY[key]
    problem = array_problem(values, algorithm=key)
    final, steps = run(info.step, info.init(problem), problem)

    assert final.is_done
    assert final.outcome == "done"
    assert list(final.arr) == sorted(values)
    assert final.sorted_indices == frozenset(range(len(values)))
    assert final.comparing == () and final.swapping == ()
    assert final.step_number == steps


class Tagged:
    """Orders on `key` only; `tag` records the input position."""

    def __init__(self, key, tag):
        self.key, self.tag = key, tag

    def __lt__(self, other): return self.key < other.key
    def __gt__(self, other): return self.key > other.key
    def __le__(self, other): return self.key <= other.key
    def __ge__(self, other): return self.key >= other.key

    def __repr__(self):
        return f"{self.key}{self.tag}"


@pytest.mark.parametrize("key", ["merge_sort", "three_way_merge_sort", "insertion_sort"])
def test_stable_sorts_keep_equal_keys_in_input_order(key):
    keys = [3, 1, 3, 2, 1, 3, 2, 1, 2, 3]
    items = [Tagged(k, tag) for tag, k in enumerate(keys)]
    info = REGISTRY[key]
    problem = array_problem(items, algorithm=key)
    final, _ = run(info.step, info.init(problem), problem)

    expected = sorted(items, key=lambda item: item.key)
    assert [item.tag for item in final.arr] == [item.tag for item in expected]


@pytest.mark.parametrize("key", SORT_KEYS)
@pytest.mark.parametrize("values", [[], [42]])
def test_trivial_arrays_finish_without_comparisons(key, values):
    info = REGISTRY[key]
    problem = array_problem(values, algorithm=key)
    final, _ = run(info.step, info.init(problem), problem)

    assert final.is_done
    assert list(final.arr) == values
    assert final.comparisons == 0


@pytest.mark.parametrize("key", SORT_KEYS)
def test_step_counter_increments_by_one(key):
    info = REGISTRY[key]
    problem = array_problem([6, 2, 9, 2, 5], algorithm=key)
    state = info.init(problem)
    assert state.step_number == 0
    while not state.is_done:
        nxt = info.step(state, problem)
        assert nxt.step_number == state.step_number + 1
        assert nxt.explanation
        state = nxt


@pytest.mark.parametrize("key", SORT_KEYS)
def test_stepping_terminal_state_is_a_no_op(key):
    info = REGISTRY[key]
    problem = array_problem([3, 1, 2], algorithm=key)
    final, _ = run(info.step, info.init(problem), problem)
    assert info.step(final, problem) is final


@pytest.mark.parametrize("key", EXCHANGE_SORTS)
def test_exchange_sorts_keep_a_permutation(key):
    info = REGISTRY[key]
    values = [7, 3, 9, 3, 1, 8, 0]
    problem = array_problem(values, algorithm=key)
    state = info.init(problem)
    while not state.is_done:
        state = info.step(state, problem)
        assert sorted(state.arr) == sorted(values)


def test_step_never_mutates_its_input():
    problem = array_problem([4, 2, 3, 1])
    state = bubble_sort.initial_state(problem)
    before = to_dict(state)
    bubble_sort.step(state, problem)
    assert to_dict(state) == before


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def test_bubble_first_step_swaps_first_pair():
    problem = array_problem([5, 3, 8, 1])
    state = bubble_sort.step(bubble_sort.initial_state(problem), problem)

    assert state.arr == (3, 5, 8, 1)
    assert state.comparing == (0, 1)
    assert state.swapping == (0, 1)
    assert state.comparisons == 1
    assert state.swaps == 1


def test_bubble_full_run():
    problem = array_problem([5, 3, 8, 1])
    final, _ = run(bubble_sort.step, bubble_sort.initial_state(problem), problem)
    assert final.arr == (1, 3, 5, 8)
    assert final.comparisons == 6


def test_bubble_marks_last_index_after_first_pass():
    problem = array_problem([5, 3, 8, 1])
    state = bubble_sort.initial_state(problem)
    for _ in range(4):  # three comparisons + end of pass
        state = bubble_sort.step(state, problem)
    assert state.i == 1
    assert 3 in state.sorted_indices
    assert state.arr[3] == 8


# ---------------------------------------------------------------------------
# Quick sort
# ---------------------------------------------------------------------------
def test_quick_sort_seeds_the_full_range():
    state = quick_sort.initial_state(array_problem([3, 1, 2]))
    assert state.stack == ((0, 2),)


def test_quick_sort_single_element_has_empty_stack():
    state = quick_sort.initial_state(array_problem([3]))
    assert state.stack == ()


# ---------------------------------------------------------------------------
# Merge sort
# ---------------------------------------------------------------------------
def test_merge_schedule_two_way():
    assert merge_schedule(4, 2) == [(0, 0, 1), (2, 2, 3), (0, 1, 3)]


def test_merge_schedule_three_way_covers_whole_array():
    ops = merge_schedule(9, 3)
    assert ops[-1] == (0, 2, 5, 8)
    assert all(len(op) == 4 for op in ops)


def test_merge_schedule_trivial():
    assert merge_schedule(0) == []
    assert merge_schedule(1) == []


def test_three_way_variant_uses_three_runs():
    state = merge_sort.initial_state_three_way(array_problem([3, 2, 1]))
    assert state.ways == 3
    assert state.queue == ((0, 0, 1, 2),)


# ---------------------------------------------------------------------------
# Distribution sorts
# ---------------------------------------------------------------------------
def test_count_sort_all_zeros():
    problem = array_problem([0, 0, 0], algorithm="count_sort")
    final, _ = run(count_sort.step, count_sort.initial_state(problem), problem)
    assert final.arr == (0, 0, 0)


def test_count_sort_builds_prefix_counts():
    problem = array_problem([2, 0, 2], algorithm="count_sort")
    state = count_sort.initial_state(problem)
    while state.phase is not count_sort.Phase.BUILDING_OUTPUT:
        state = count_sort.step(state, problem)
    assert state.counts == (1, 1, 3)


def test_radix_sort_passes_once_per_digit():
    problem = array_problem([170, 45, 75, 90, 802, 24, 2, 66], algorithm="radix_sort")
    final, _ = run(radix_sort.step, radix_sort.initial_state(problem), problem)
    assert final.arr == (2, 24, 45, 66, 75, 90, 170, 802)
    assert final.place == 100
    assert final.swaps == 3 * 8
