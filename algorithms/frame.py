"""
frame.py — Sort Frame Snapshot
===============================
Every sorting algorithm is a generator that yields Frame objects.
A Frame is a frozen-in-time picture of everything the renderer
needs to draw one picture of the array:

    • The array contents at this instant
    • Which indices are ACTIVE (being compared / moved right now)
    • Which indices are SORTED (inside a region verified to be in order)
    • Whether the run is done
    • Which line of pseudocode is executing, and a plain-English
      explanation of *why* this frame happened (Learning Mode)
    • How long the consumer should hold the frame before the next one

Design decisions:
  - Frame is a frozen dataclass built from tuples / frozensets, so a
    consumer holding one can never observe the engine's later writes.
  - `kind` tags the event that produced the frame ("compare", "swap", …)
    so analytics and tests can count events without re-deriving them.
  - `delay` is data, not behaviour.  The engine decides whether to
    honour it (and by how much) when it paces the stream.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple


# frame kinds
COMPARE = "compare"
SELECT  = "select"
SWAP    = "swap"
WRITE   = "write"
MARK    = "mark"
DONE    = "done"

# kinds that change the array contents
UPDATE_KINDS = frozenset({SWAP, WRITE})


@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        step_number     : 0-based index of this frame in the run.
        kind            : Event that produced the frame (see module constants).
        array           : Copy of the array contents.
        active_indices  : Indices being compared / moved right now.
        sorted_indices  : Indices inside a verified-in-order region.
        done            : True only on the terminal frame.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable "why" text for Learning Mode.
        metrics         : Running tally: comparisons, swaps, writes.
        delay           : Seconds the consumer should hold this frame.
    """

    step_number:      int                = 0
    kind:             str                = COMPARE
    array:            Tuple[Any, ...]    = ()
    active_indices:   FrozenSet[int]     = frozenset()
    sorted_indices:   FrozenSet[int]     = frozenset()
    done:             bool               = False
    pseudocode_line:  int                = 0
    explanation:      str                = ""
    metrics:          Dict[str, int]     = field(default_factory=dict)
    delay:            float              = 0.0

    @property
    def is_update(self) -> bool:
        return self.kind in UPDATE_KINDS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":     self.step_number,
            "kind":            self.kind,
            "array":           list(self.array),
            "active_indices":  sorted(self.active_indices),
            "sorted_indices":  sorted(self.sorted_indices),
            "done":            self.done,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "metrics":         dict(self.metrics),
            "delay":           self.delay,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Frame":
        return cls(
            step_number=data.get("step_number", 0),
            kind=data.get("kind", COMPARE),
            array=tuple(data.get("array", ())),
            active_indices=frozenset(data.get("active_indices", ())),
            sorted_indices=frozenset(data.get("sorted_indices", ())),
            done=data.get("done", False),
            pseudocode_line=data.get("pseudocode_line", 0),
            explanation=data.get("explanation", ""),
            metrics=dict(data.get("metrics", {})),
            delay=data.get("delay", 0.0),
        )


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class FrameBuilder:
    """
    Mutable scratch-pad an algorithm generator keeps for the whole run.

    The builder owns the running bookkeeping (sorted set, counters,
    step number); each emit() call snapshots it into a new Frame.

    Usage inside an algorithm generator:
        fb = FrameBuilder(arr, delays=DELAYS)
        fb.explanation = "Compare positions 0 and 1."
        yield fb.emit(COMPARE, active=(0, 1), line=3)
    """

    def __init__(self, array: List[Any], delays: Optional[Dict[str, float]] = None):
        self.array = array
        self.delays: Dict[str, float] = dict(delays or {})
        self.sorted_indices: set = set()
        self.metrics: Dict[str, int] = {"comparisons": 0, "swaps": 0, "writes": 0}
        self.explanation: str = ""
        self.step_number: int = 0

    # -- bookkeeping helpers --
    def compared(self) -> None:
        self.metrics["comparisons"] += 1

    def swap(self, a: int, b: int) -> None:
        self.array[a], self.array[b] = self.array[b], self.array[a]
        self.metrics["swaps"] += 1

    def write(self, index: int, value: Any) -> None:
        self.array[index] = value
        self.metrics["writes"] += 1

    def mark_sorted(self, indices: Iterable[int]) -> None:
        self.sorted_indices.update(indices)

    # -- snapshot --
    def emit(
        self,
        kind: str,
        active: Iterable[int] = (),
        line: int = 0,
        explanation: Optional[str] = None,
    ) -> Frame:
        frame = Frame(
            step_number=self.step_number,
            kind=kind,
            array=tuple(self.array),
            active_indices=frozenset(active),
            sorted_indices=frozenset(self.sorted_indices),
            done=False,
            pseudocode_line=line,
            explanation=self.explanation if explanation is None else explanation,
            metrics=dict(self.metrics),
            delay=self.delays.get(kind, 0.0),
        )
        self.step_number += 1
        return frame

    def finish(self, line: int = 0, explanation: str = "") -> Frame:
        """Terminal frame: nothing active, every index sorted."""
        self.sorted_indices = set(range(len(self.array)))
        frame = Frame(
            step_number=self.step_number,
            kind=DONE,
            array=tuple(self.array),
            active_indices=frozenset(),
            sorted_indices=frozenset(self.sorted_indices),
            done=True,
            pseudocode_line=line,
            explanation=explanation or f"Done! The array is sorted: {list(self.array)}",
            metrics=dict(self.metrics),
            delay=self.delays.get(DONE, 0.0),
        )
        self.step_number += 1
        return frame
