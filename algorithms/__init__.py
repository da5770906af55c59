"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, resolve_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, delays, stable, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it
so adding a new algorithm is literally: write the generator, add one
entry here.

Unknown identifiers never fail: resolve_algorithm() falls back to
bubble sort, the documented default.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc,    DELAYS as _bubble_d
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc, DELAYS as _selection_d
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc, DELAYS as _insertion_d
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc,     DELAYS as _merge_d
from algorithms.frame     import Frame, FrameBuilder

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    MERGE     = "merge"


DEFAULT_ALGORITHM = Algorithm.BUBBLE.value


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bubble"
    label:             str                    # human label, e.g. "Bubble Sort"
    fn:                Callable               # the generator function
    pseudocode:        List[str]              # lines for the side-panel
    delays:            Dict[str, float] = field(default_factory=dict)   # frame kind → seconds
    tags:              List[str] = field(default_factory=list)
    stable:            bool     = False       # keeps equal values in input order?
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc, delays=_bubble_d,
        tags=["in-place", "stable", "quadratic"],
        stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps neighbouring pairs that are out of order. Big values bubble right.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_selection_pc, delays=_selection_d,
        tags=["in-place", "quadratic"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and swaps it to the front. At most n-1 swaps.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc, delays=_insertion_d,
        tags=["in-place", "adaptive", "quadratic"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Walks each element left into the sorted prefix. Very fast on nearly-sorted input.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc, delays=_merge_d,
        tags=["divide-and-conquer", "stable"],
        stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits the array in half, sorts each half, then merges the two sorted halves.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def normalise_key(key: Union[str, Algorithm, None]) -> str:
    """'Merge Sort', 'merge_sort', Algorithm.MERGE → 'merge'."""
    if isinstance(key, Algorithm):
        return key.value
    k = str(key or "").strip().lower().replace("_", " ").replace("-", " ")
    if k.endswith(" sort"):
        k = k[:-len(" sort")].strip()
    return k


def get_algorithm(key: Union[str, Algorithm, None]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key (aliases accepted), or None."""
    return REGISTRY.get(normalise_key(key))


def resolve_algorithm(key: Union[str, Algorithm, None]) -> AlgoInfo:
    """Like get_algorithm(), but unknown keys degrade to the default algorithm."""
    info = get_algorithm(key)
    if info is None:
        logger.warning("Unknown algorithm %r, falling back to %s", key, DEFAULT_ALGORITHM)
        info = REGISTRY[DEFAULT_ALGORITHM]
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "DEFAULT_ALGORITHM",
    "Frame",
    "FrameBuilder",
    "REGISTRY",
    "algorithms_by_tag",
    "get_algorithm",
    "list_algorithms",
    "normalise_key",
    "resolve_algorithm",
]
