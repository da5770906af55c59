"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete sort run (all Frames) without wall-clock pacing,
then computes the analytics the UI needs for the Analytics panel and
Comparison Mode.

Usage:
    rec = Recorder()
    rec.start(algo_key="merge", array=[5, 3, 8, 1])
    rec.run_to_completion()          # exhausts the stream
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for replay

Comparison Mode:
    The UI holds two Recorders (one per algorithm), runs both to
    completion on the SAME array, then calls compare(rec1, rec2).
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, resolve_algorithm
from algorithms.frame import Frame
from engine.sorter import SortEngine
from engine.stepper import Stepper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    length:          int   = 0
    comparisons:     int   = 0
    swaps:           int   = 0
    writes:          int   = 0          # merge write-backs
    updates:         int   = 0          # array-update frames (swaps + writes)
    total_frames:    int   = 0
    animation_ms:    float = 0.0        # sum of frame delays at speed 1.0
    wall_time_ms:    float = 0.0        # time to compute every frame
    memory_bytes:    int   = 0          # approx, via sys.getsizeof on the frame buffer
    is_sorted:       bool  = False
    stable:          bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""
    winner_updates:     str = ""
    winner_frames:      str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        frames  : Full list of Frames from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The underlying Stepper (if you want live frame-by-frame access).
    """

    def __init__(self):
        self.frames:    List[Frame]          = []
        self.metrics:   Optional[RunMetrics] = None
        self.stepper:   Optional[Stepper]    = None

        self._algo_info:  Optional[AlgoInfo] = None
        self._array:      List[Any]          = []

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, array: List[Any]) -> None:
        """Resolve the algorithm and attach an unpaced stream to a Stepper."""
        info = resolve_algorithm(algo_key)

        self._algo_info = info
        self._array     = list(array)
        self.frames     = []
        self.metrics    = None

        engine = SortEngine(delay_scale=0.0)
        self.stepper = Stepper()
        self.stepper.start(engine.run(self._array, info.key))

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the stream, record every frame, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        self.frames = list(self.stepper.frames)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "Recorded %s over %d values: %d frames, %d comparisons",
            self.metrics.algo_key, self.metrics.length,
            self.metrics.total_frames, self.metrics.comparisons,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "array":    list(self._array),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "frames":   [f.to_dict() for f in self.frames],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.frames[-1] if self.frames else None
        tally = last.metrics if last else {}

        mem = sys.getsizeof(self.frames)
        for f in self.frames:
            mem += sys.getsizeof(f) + sys.getsizeof(f.array)

        final = list(last.array) if last else []
        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            length=len(self._array),
            comparisons=tally.get("comparisons", 0),
            swaps=tally.get("swaps", 0),
            writes=tally.get("writes", 0),
            updates=sum(1 for f in self.frames if f.is_update),
            total_frames=len(self.frames),
            animation_ms=round(sum(f.delay for f in self.frames) * 1000, 2),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            is_sorted=bool(last and last.done) and final == sorted(final),
            stable=info.stable if info else False,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_updates=winner(l.updates, r.updates),
        winner_frames=winner(l.total_frames, r.total_frames),
    )
