"""
stepper.py — Frame-by-Frame Playback
=====================================
The Stepper is the object a UI drives during playback.
It owns a frame stream, buffers every Frame it has seen (enabling
rewind), and exposes a play/pause/next/prev/speed API.

State machine:
    IDLE  →  start()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (stream exhausted) → FINISHED
    any     →  reset()  →  IDLE

Timing:
  Each Frame carries its own hold time (`frame.delay`).  tick() advances
  once the current frame has been on screen for delay × speed, where
  speed is a multiplier picked from SPEED_PRESETS.

Thread safety:
  This class is NOT thread-safe.  Call it from a single thread (or one
  event loop).
"""

import time
from enum import Enum
from typing import Callable, Iterator, List, Optional

from algorithms.frame import Frame


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (multiplier on each frame's delay)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   2.0,    # teaching mode
    "medium": 1.0,    # frame delays as-is
    "fast":   0.5,
    "turbo":  0.1,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        frames      : List of all Frames pulled so far (buffer for rewind).
        current_idx : Index into `frames` that is currently displayed.
        speed       : Multiplier on frame delays for auto-advance.
        on_frame    : Optional callback(Frame) fired every time the current
                      frame changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        on_frame: Optional[Callable[[Frame], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._stream:     Optional[Iterator[Frame]] = None
        self.frames:      List[Frame]   = []
        self.current_idx: int           = -1
        self.state:       StepperState  = StepperState.IDLE
        self.speed:       float         = SPEED_PRESETS["medium"]
        self.on_frame:    Optional[Callable[[Frame], None]] = on_frame

        self._clock = clock
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, stream: Iterator[Frame]) -> None:
        """Attach a fresh frame stream and load the first frame."""
        self._stream     = stream
        self.frames      = []
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        # eagerly fetch frame 0 so the UI can show the initial state
        if self._fetch_next():
            self._goto(0)
        if not self.frames or self.frames[0].done:
            self.state = StepperState.FINISHED

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self._stream     = None
        self.frames      = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_frame(self) -> bool:
        """Advance one frame.  Returns False if already at the end."""
        target = self.current_idx + 1
        if target >= len(self.frames):
            if not self._fetch_next():
                self.state = StepperState.FINISHED
                return False
        self._goto(target)
        if self.frames[target].done:
            self.state = StepperState.FINISHED
        return True

    def prev_frame(self) -> bool:
        """Rewind one frame.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_frame(self, idx: int) -> bool:
        """Jump to an arbitrary frame index, pulling forward if needed."""
        while idx >= len(self.frames):
            if not self._fetch_next():
                break
        if 0 <= idx < len(self.frames):
            self._goto(idx)
            return True
        return False

    def rewind(self) -> None:
        """Jump back to frame 0."""
        if self.frames:
            self._goto(0)
            self.state = StepperState.PAUSED

    def jump_to_end(self) -> None:
        """Exhaust the stream and jump to the final frame."""
        while self._fetch_next():
            pass
        if self.frames:
            self._goto(len(self.frames) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = self._clock()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and the current
        frame has been held long enough, advances one frame.  Returns True
        if a frame was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now  = self._clock()
        hold = self.current_frame.delay * self.speed if self.current_frame else 0.0
        if now - self._last_tick >= hold:
            self._last_tick = now
            return self.next_frame()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, multiplier: float) -> None:
        self.speed = max(0.0, multiplier)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_frame(self) -> Optional[Frame]:
        if 0 <= self.current_idx < len(self.frames):
            return self.frames[self.current_idx]
        return None

    @property
    def total_frames_fetched(self) -> int:
        return len(self.frames)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Pull one Frame from the stream into the buffer."""
        if self._stream is None:
            return False
        try:
            frame = next(self._stream)
        except StopIteration:
            self._stream = None
            return False
        self.frames.append(frame)
        return True

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_frame and 0 <= idx < len(self.frames):
            self.on_frame(self.frames[idx])
