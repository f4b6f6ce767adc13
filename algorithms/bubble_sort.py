"""
bubble_sort.py — Bubble Sort Tracer
===================================
Classic adjacent-pair bubble sort, n-1 outer passes, recorded as a list
of SortSteps.

Per pass:
  1. Announce which trailing position will be finalised
  2. For each adjacent pair: "comparing", then "swapping" or "no swap"
     (swap descriptions use the pre-swap values)
  3. Confirm the trailing position as sorted
  4. If the pass swapped nothing, mark everything left as sorted and stop

The caller's sequence is never touched; the tracer sorts a private copy.
"""

import logging
import random
from typing import List, Optional, Sequence

from algorithms.result import SortResult
from algorithms.step import SortStep

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def BubbleSort(a):",                          # 0
    "    for i in 0 … n-2:",                       # 1
    "        swapped ← false",                     # 2
    "        for j in 0 … n-i-2:",                 # 3
    "            if a[j] > a[j+1]:",               # 4
    "                swap(a[j], a[j+1])",          # 5
    "                swapped ← true",              # 6
    "        if not swapped: break",               # 7
    "    return a",                                # 8
]


def bubble_sort(values: Sequence[float]) -> SortResult:
    """Trace bubble sort over `values`; returns the steps and the sorted copy."""
    array = list(values)
    n = len(array)
    sorted_indices = set()
    steps: List[SortStep] = []

    def add_step(comparing=(), swapping=(), pass_number=0, description="", is_final=False):
        steps.append(SortStep(
            step_number=len(steps),
            array=tuple(array),
            comparing=tuple(comparing),
            swapping=tuple(swapping),
            sorted_indices=frozenset(sorted_indices),
            pass_number=pass_number,
            description=description,
            is_final=is_final,
        ))

    add_step(description=f"Starting Bubble Sort on array of {n} elements", is_final=(n == 0))
    if n == 0:
        return SortResult(steps=steps, sorted_array=array)

    swaps = 0
    for i in range(n - 1):
        swapped = False
        p = i + 1
        last = n - 1 - i

        add_step(pass_number=p, description=f"Pass {p}: Bubbling largest unsorted element to position {last}")

        for j in range(last):
            a, b = array[j], array[j + 1]
            add_step(comparing=(j, j + 1), pass_number=p, description=f"Comparing {a} and {b}")
            if a > b:
                add_step(swapping=(j, j + 1), pass_number=p, description=f"{a} > {b}, swapping")
                array[j], array[j + 1] = b, a
                swapped = True
                swaps += 1
            else:
                add_step(pass_number=p, description=f"{a} <= {b}, no swap needed")

        sorted_indices.add(last)
        add_step(pass_number=p, description=f"Element {array[last]} is now in its final position")

        if not swapped:
            sorted_indices.update(range(last))
            add_step(pass_number=p, description="No swaps in this pass - array is sorted early!")
            break

    sorted_indices.add(0)
    add_step(pass_number=n - 1, description="Array is now fully sorted", is_final=True)

    logger.debug("bubble_sort: n=%d swaps=%d steps=%d", n, swaps, len(steps))
    return SortResult(steps=steps, sorted_array=array)


def random_array(size: int, max_value: int = 50, seed: Optional[int] = None) -> List[int]:
    """`size` random integers in 1..max_value."""
    rng = random.Random(seed)
    return [rng.randint(1, max_value) for _ in range(size)]
