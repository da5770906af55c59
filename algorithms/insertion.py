"""
insertion.py — Insertion Sort
==============================
Generator-based insertion sort.  Element i is walked leftward one
neighbour at a time while the left neighbour is strictly greater.

Frames:
  1. Compare the walking element with its left neighbour  →  pair ACTIVE
  2. Shift (swap with the neighbour)                       →  array-update frame
  3. Element placed                                        →  prefix [0 … i] SORTED

The SORTED set is the verified-in-order prefix, so it grows by one index
per round (the very first round marks 0 and 1 together).
"""

from typing import Any, Dict, Generator, List

from algorithms.frame import COMPARE, DONE, MARK, SWAP, Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",                           # 0
    "    for i in 1 … n-1:",                              # 1
    "        j ← i",                                      # 2
    "        while j > 0 and arr[j-1] > arr[j]:",         # 3
    "            swap(arr[j-1], arr[j])",                 # 4
    "            j ← j - 1",                              # 5
    "        mark arr[0 … i] as sorted",                  # 6
    "    return arr",                                     # 7
]

DELAYS: Dict[str, float] = {
    COMPARE: 0.3,
    SWAP:    0.5,
    MARK:    0.1,
    DONE:    0.0,
}


def insertion_sort(arr: List[Any]) -> Generator[Frame, None, None]:
    """Sorts `arr` in place, yielding a Frame per comparison, shift and placement."""
    n  = len(arr)
    fb = FrameBuilder(arr, delays=DELAYS)

    if n < 2:
        yield fb.finish(line=7, explanation="Nothing to sort: an array this short is already in order.")
        return

    for i in range(1, n):
        j = i
        while j > 0:
            fb.compared()
            yield fb.emit(
                COMPARE, active=(j - 1, j), line=3,
                explanation=(
                    f"Is the left neighbour {arr[j - 1]} (position {j - 1}) "
                    f"greater than {arr[j]} (position {j})?"
                ),
            )
            if not arr[j - 1] > arr[j]:
                break

            fb.swap(j - 1, j)
            yield fb.emit(
                SWAP, active=(j - 1, j), line=4,
                explanation=f"Yes: shift {arr[j - 1]} one place left, into position {j - 1}.",
            )
            j -= 1

        fb.mark_sorted(range(i + 1))
        yield fb.emit(
            MARK, line=6,
            explanation=(
                f"Element placed at position {j}. "
                f"Positions 0 … {i} are now in order."
            ),
        )

    yield fb.finish(line=7)
