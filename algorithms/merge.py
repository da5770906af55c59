"""
merge.py — Merge Sort
======================
Generator-based top-down merge sort.

The range [start, end] is split at ⌊(start + end) / 2⌋, both halves are
sorted recursively, then merged.  The merge copies the two halves and
writes them back into the shared array one position at a time:

  1. Both halves non-empty  →  COMPARE frame on the write position,
                               then WRITE the smaller front (left wins ties)
  2. One half exhausted     →  WRITE the leftovers, one frame each

Every written position is marked SORTED immediately, so the sorted set
grows in recursion order (deepest ranges first, left to right) rather
than as a contiguous prefix.  Ties go to the left half: stable.
"""

from typing import Any, Dict, Generator, List

from algorithms.frame import COMPARE, DONE, WRITE, Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, start, end):",                       # 0
    "    if start >= end: return",                            # 1
    "    mid ← ⌊(start + end) / 2⌋",                          # 2
    "    merge_sort(arr, start, mid)",                        # 3
    "    merge_sort(arr, mid + 1, end)",                      # 4
    "    merge(arr, start, mid, end)",                        # 5
    "def merge(arr, start, mid, end):",                       # 6
    "    left ← arr[start … mid];  right ← arr[mid+1 … end]", # 7
    "    while left and right both have items:",              # 8
    "        if left[i] ≤ right[j]: arr[k] ← left[i]",        # 9
    "        else: arr[k] ← right[j]",                        # 10
    "    copy what is left of left, then of right",           # 11
]

DELAYS: Dict[str, float] = {
    COMPARE: 0.3,
    WRITE:   0.2,
    DONE:    0.0,
}


def merge_sort(arr: List[Any]) -> Generator[Frame, None, None]:
    """Sorts `arr` in place, yielding a Frame per comparison and per write-back."""
    n  = len(arr)
    fb = FrameBuilder(arr, delays=DELAYS)

    if n < 2:
        yield fb.finish(line=1, explanation="Nothing to sort: an array this short is already in order.")
        return

    yield from _sort(fb, arr, 0, n - 1)
    yield fb.finish(line=5)


def _sort(fb: FrameBuilder, arr: List[Any], start: int, end: int) -> Generator[Frame, None, None]:
    if start >= end:
        return
    mid = (start + end) // 2
    yield from _sort(fb, arr, start, mid)
    yield from _sort(fb, arr, mid + 1, end)
    yield from _merge(fb, arr, start, mid, end)


def _merge(
    fb: FrameBuilder,
    arr: List[Any],
    start: int,
    mid: int,
    end: int,
) -> Generator[Frame, None, None]:
    left  = arr[start:mid + 1]
    right = arr[mid + 1:end + 1]
    i = j = 0
    k = start

    while i < len(left) and j < len(right):
        fb.compared()
        yield fb.emit(
            COMPARE, active=(k,), line=8,
            explanation=(
                f"Merging positions {start} … {end}: compare {left[i]} "
                f"(front of left half) with {right[j]} (front of right half)."
            ),
        )

        if left[i] <= right[j]:
            value, line, side = left[i], 9, "left"
            i += 1
        else:
            value, line, side = right[j], 10, "right"
            j += 1

        fb.write(k, value)
        fb.mark_sorted([k])
        yield fb.emit(
            WRITE, active=(k,), line=line,
            explanation=f"Write {value} from the {side} half into position {k}.",
        )
        k += 1

    for value in left[i:] + right[j:]:
        fb.write(k, value)
        fb.mark_sorted([k])
        yield fb.emit(
            WRITE, active=(k,), line=11,
            explanation=f"One half is used up: copy the leftover {value} into position {k}.",
        )
        k += 1
