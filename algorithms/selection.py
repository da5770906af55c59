"""
selection.py — Selection Sort
==============================
Generator-based selection sort.  Yields a Frame at every meaningful event:
  1. Compare the scan position against the running minimum
     →  {i, j, min} ACTIVE
  2. New minimum found              →  highlight it
  3. Swap the minimum into place    →  array-update frame
  4. End of an outer iteration      →  position i is SORTED

Selection sort is not stable: the long-distance swap can jump a value
over an equal one.
"""

from typing import Any, Dict, Generator, List

from algorithms.frame import COMPARE, DONE, MARK, SELECT, SWAP, Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                   # 0
    "    for i in 0 … n-2:",                      # 1
    "        min ← i",                            # 2
    "        for j in i+1 … n-1:",                # 3
    "            if arr[j] < arr[min]:",          # 4
    "                min ← j",                    # 5
    "        if min ≠ i:",                        # 6
    "            swap(arr[i], arr[min])",         # 7
    "        mark arr[i] as sorted",              # 8
    "    return arr",                             # 9
]

DELAYS: Dict[str, float] = {
    COMPARE: 0.3,
    SELECT:  0.1,
    SWAP:    0.5,
    MARK:    0.1,
    DONE:    0.0,
}


def selection_sort(arr: List[Any]) -> Generator[Frame, None, None]:
    """Sorts `arr` in place, yielding a Frame per comparison, new minimum, swap and placement."""
    n  = len(arr)
    fb = FrameBuilder(arr, delays=DELAYS)

    if n < 2:
        yield fb.finish(line=9, explanation="Nothing to sort: an array this short is already in order.")
        return

    for i in range(n - 1):
        min_idx = i

        for j in range(i + 1, n):
            fb.compared()
            yield fb.emit(
                COMPARE, active=(i, j, min_idx), line=4,
                explanation=(
                    f"Scan position {j}: is {arr[j]} smaller than the "
                    f"current minimum {arr[min_idx]} (at {min_idx})?"
                ),
            )

            if arr[j] < arr[min_idx]:
                min_idx = j
                yield fb.emit(
                    SELECT, active=(i, min_idx), line=5,
                    explanation=f"Yes: {arr[min_idx]} at position {min_idx} is the new minimum.",
                )

        if min_idx != i:
            fb.swap(i, min_idx)
            yield fb.emit(
                SWAP, active=(i, min_idx), line=7,
                explanation=(
                    f"Swap the minimum {arr[i]} into position {i} "
                    f"(it was at {min_idx})."
                ),
            )

        fb.mark_sorted([i])
        yield fb.emit(
            MARK, line=8,
            explanation=f"Position {i} now holds {arr[i]}, the smallest of the unsorted part.",
        )

    yield fb.finish(line=9)
