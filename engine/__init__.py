"""
engine/
-------
Run, playback & recording layer.

    from engine import SortEngine, Stepper, Recorder, compare
"""

from engine.sorter   import SortEngine, CancelToken, run
from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "SortEngine",
    "CancelToken",
    "run",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
