"""
bubble.py — Bubble Sort
========================
Generator-based bubble sort.  Yields a Frame at every meaningful event:
  1. Compare a neighbouring pair    →  both indices ACTIVE
  2. Swap an inverted pair          →  array-update frame
  3. End of a pass                  →  the bubbled-up maximum is SORTED
  4. Final frame                    →  everything sorted, done

Only strictly greater neighbours are swapped, so equal values keep their
relative order (stable).

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from typing import Any, Dict, Generator, List

from algorithms.frame import COMPARE, DONE, MARK, SWAP, Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                      # 0
    "    n ← len(arr)",                           # 1
    "    for i in 0 … n-1:",                      # 2
    "        for j in 0 … n-i-2:",                # 3
    "            if arr[j] > arr[j+1]:",          # 4
    "                swap(arr[j], arr[j+1])",     # 5
    "        mark arr[n-i-1] as sorted",          # 6
    "    return arr",                             # 7
]

# seconds the consumer holds each kind of frame
DELAYS: Dict[str, float] = {
    COMPARE: 0.3,
    SWAP:    0.5,
    MARK:    0.1,
    DONE:    0.0,
}


def bubble_sort(arr: List[Any]) -> Generator[Frame, None, None]:
    """
    Sorts `arr` in place, yielding a Frame per comparison, swap and pass.

    Args:
        arr : The list to sort.  Mutated in place.

    Yields:
        Frame – one per event, ending with a done frame.
    """
    n  = len(arr)
    fb = FrameBuilder(arr, delays=DELAYS)

    if n < 2:
        yield fb.finish(line=7, explanation="Nothing to sort: an array this short is already in order.")
        return

    for i in range(n):
        for j in range(n - i - 1):
            fb.compared()
            yield fb.emit(
                COMPARE, active=(j, j + 1), line=4,
                explanation=(
                    f"Compare positions {j} and {j + 1}: "
                    f"is {arr[j]} greater than {arr[j + 1]}?"
                ),
            )

            if arr[j] > arr[j + 1]:
                fb.swap(j, j + 1)
                yield fb.emit(
                    SWAP, active=(j, j + 1), line=5,
                    explanation=(
                        f"{arr[j + 1]} > {arr[j]}, so swap them. "
                        f"The larger value keeps bubbling to the right."
                    ),
                )

        last = n - i - 1
        fb.mark_sorted([last])
        yield fb.emit(
            MARK, line=6,
            explanation=(
                f"Pass {i + 1} complete: the largest remaining value ({arr[last]}) "
                f"has reached position {last}."
            ),
        )

    yield fb.finish(line=7)
