from __future__ import annotations

import pytest

from algorithms import bubble_sort, random_array


def test_sorts_and_counts_operations() -> None:
    result = bubble_sort([5, 3, 1, 4, 2])
    assert result.sorted_array == [1, 2, 3, 4, 5]
    assert sum(1 for s in result.steps if s.comparing) == 10
    assert sum(1 for s in result.steps if s.swapping) == 7


def test_input_is_not_modified() -> None:
    values = [3, 2, 1]
    bubble_sort(values)
    assert values == [3, 2, 1]


def test_first_and_last_step() -> None:
    steps = bubble_sort([5, 3, 1, 4, 2]).steps
    assert steps[0].description == "Starting Bubble Sort on array of 5 elements"
    assert steps[0].array == (5, 3, 1, 4, 2)
    assert steps[0].pass_number == 0
    assert steps[-1].is_final
    assert steps[-1].array == (1, 2, 3, 4, 5)
    assert steps[-1].sorted_indices == frozenset(range(5))
    assert steps[-1].description == "Array is now fully sorted"
    assert [s.step_number for s in steps] == list(range(len(steps)))


def test_swap_step_shows_pre_swap_array() -> None:
    steps = bubble_sort([2, 1]).steps
    descriptions = [s.description for s in steps]
    assert descriptions == [
        "Starting Bubble Sort on array of 2 elements",
        "Pass 1: Bubbling largest unsorted element to position 1",
        "Comparing 2 and 1",
        "2 > 1, swapping",
        "Element 2 is now in its final position",
        "Array is now fully sorted",
    ]
    assert steps[2].comparing == (0, 1)
    assert steps[3].swapping == (0, 1)
    assert steps[3].array == (2, 1)
    assert steps[4].array == (1, 2)
    assert steps[4].sorted_indices == frozenset({1})


def test_sorted_pair_exits_early() -> None:
    steps = bubble_sort([1, 2]).steps
    assert len(steps) == 7
    assert steps[3].description == "1 <= 2, no swap needed"
    assert steps[5].description == "No swaps in this pass - array is sorted early!"


def test_sorted_input_stops_after_one_pass() -> None:
    steps = bubble_sort([1, 2, 3, 4, 5]).steps
    assert len(steps) == 13
    assert max(s.pass_number for s in steps[:-1]) == 1
    assert not any(s.swapping for s in steps)


def test_reversed_input_runs_every_pass() -> None:
    steps = bubble_sort([5, 4, 3, 2, 1]).steps
    assert len(steps) == 30
    assert {s.pass_number for s in steps} == {0, 1, 2, 3, 4}


def test_early_exit_never_adds_steps() -> None:
    # n = 2 is excluded: the early-exit notice makes sorted input one step longer (7 vs 6)
    for n in range(3, 9):
        ascending = bubble_sort(list(range(n))).steps
        descending = bubble_sort(list(range(n, 0, -1))).steps
        assert len(ascending) < len(descending)


@pytest.mark.parametrize("values, count", [([], 1), ([7], 2)])
def test_degenerate_sizes(values: list, count: int) -> None:
    result = bubble_sort(values)
    assert len(result.steps) == count
    assert result.steps[-1].is_final
    assert result.sorted_array == values


def test_duplicates_are_stable() -> None:
    result = bubble_sort([3, 1, 3, 1])
    assert result.sorted_array == [1, 1, 3, 3]
    assert "3 <= 3, no swap needed" in [s.description for s in result.steps]


def test_random_array_is_seeded_and_bounded() -> None:
    first = random_array(12, max_value=50, seed=7)
    assert first == random_array(12, max_value=50, seed=7)
    assert len(first) == 12
    assert all(1 <= v <= 50 for v in first)
