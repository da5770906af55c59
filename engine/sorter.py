"""
sorter.py — Animated Sort Engine
=================================
The engine turns (array, algorithm) into a lazy, paced stream of Frames.

    engine = SortEngine(delay_scale=1.0)
    for frame in engine.run([5, 3, 8, 1], "bubble"):
        draw(frame)

Responsibilities:
  1. Copy the caller's array: the run owns its own list for its lifetime.
  2. Resolve the algorithm (unknown keys fall back to bubble sort).
  3. Pace the stream: after each frame, suspend for
     frame.delay × delay_scale seconds (0 → no waiting at all).
  4. Guard against reentrancy: while a run is active, a second run() on
     the same engine yields nothing and leaves the active run untouched.
  5. Cooperative cancellation: a CancelToken is checked at every
     suspension point; a cancelled run ends without a done frame.

A run becomes active when its stream is first pulled and stops being
active when it emits the done frame, is cancelled, or is closed.

stream() is the asyncio twin of run(): same frames, but it suspends with
`await asyncio.sleep(...)` so it can share an event loop with the UI.
"""

import asyncio
import logging
import time
from typing import Any, AsyncIterator, Callable, Iterable, Iterator, List, Optional, Tuple

from algorithms import AlgoInfo, DEFAULT_ALGORITHM, resolve_algorithm
from algorithms.frame import Frame
from config import Config

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
class CancelToken:
    """Flag checked by the engine at every suspension point."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class SortEngine:
    """
    Attributes:
        delay_scale : Multiplier on every frame's delay.  0 = instant.
        array       : The active run's private array (None when idle).
                      Consumers may read it between frames, never write.
    """

    def __init__(
        self,
        delay_scale: Optional[float] = None,
        sleep: Callable[[float], Any] = time.sleep,
        async_sleep: Callable[[float], Any] = asyncio.sleep,
    ):
        self.delay_scale: float = Config.delay_scale if delay_scale is None else delay_scale
        self.array:       Optional[List[Any]] = None

        self._sleep       = sleep
        self._async_sleep = async_sleep
        self._running:    bool = False
        self._token:      Optional[CancelToken] = None
        self._run_id:     Optional[object] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        array: Iterable[Any],
        algorithm: Any = DEFAULT_ALGORITHM,
        token: Optional[CancelToken] = None,
    ) -> Iterator[Frame]:
        """Lazy stream of Frames sorting a copy of `array`."""
        return self._run(list(array), algorithm, token or CancelToken())

    def stream(
        self,
        array: Iterable[Any],
        algorithm: Any = DEFAULT_ALGORITHM,
        token: Optional[CancelToken] = None,
    ) -> AsyncIterator[Frame]:
        """Async twin of run()."""
        return self._stream(list(array), algorithm, token or CancelToken())

    def cancel(self) -> bool:
        """Cancel the active run.  Returns False when nothing is running."""
        if self._token is None:
            return False
        self._token.cancel()
        return True

    @property
    def is_running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    # The token is checked before every step is pulled, so a cancel during
    # a pause never lets the algorithm touch the array again.  The done
    # frame is yielded with the engine already idle.
    def _run(self, arr: List[Any], algorithm: Any, token: CancelToken) -> Iterator[Frame]:
        started = self._begin(arr, algorithm, token)
        if started is None:
            return
        info, run_id = started
        steps = info.fn(arr)
        try:
            while not token.cancelled:
                frame = next(steps, None)
                if frame is None:
                    return
                if frame.done:
                    logger.debug("%s run finished after %d frames", info.key, frame.step_number + 1)
                    self._end(run_id)
                    yield frame
                    return
                yield frame
                seconds = self._pause_for(frame)
                if seconds:
                    self._sleep(seconds)
            logger.info("%s run cancelled", info.key)
        finally:
            steps.close()
            self._end(run_id)

    async def _stream(self, arr: List[Any], algorithm: Any, token: CancelToken) -> AsyncIterator[Frame]:
        started = self._begin(arr, algorithm, token)
        if started is None:
            return
        info, run_id = started
        steps = info.fn(arr)
        try:
            while not token.cancelled:
                frame = next(steps, None)
                if frame is None:
                    return
                if frame.done:
                    self._end(run_id)
                    yield frame
                    return
                yield frame
                seconds = self._pause_for(frame)
                if seconds:
                    await self._async_sleep(seconds)
            logger.info("%s stream cancelled", info.key)
        finally:
            steps.close()
            self._end(run_id)

    def _begin(self, arr: List[Any], algorithm: Any, token: CancelToken) -> Optional[Tuple[AlgoInfo, object]]:
        if self._running:
            logger.warning("A sort run is already in progress; ignoring new %r run", algorithm)
            return None
        info = resolve_algorithm(algorithm)
        self._running = True
        self._token   = token
        self._run_id  = run_id = object()
        self.array    = arr
        logger.debug("Starting %s over %d values", info.key, len(arr))
        return info, run_id

    def _end(self, run_id: object) -> None:
        # no-op once the run is released, or when a newer run owns the engine
        if self._run_id is not run_id:
            return
        self._running = False
        self._token   = None
        self._run_id  = None
        self.array    = None

    def _pause_for(self, frame: Frame) -> float:
        if self.delay_scale <= 0 or frame.delay <= 0:
            return 0.0
        return frame.delay * self.delay_scale


# ---------------------------------------------------------------------------
# Convenience
# ---------------------------------------------------------------------------
def run(
    array: Iterable[Any],
    algorithm: Any = DEFAULT_ALGORITHM,
    delay_scale: float = 0.0,
) -> Iterator[Frame]:
    """One-shot stream on a fresh engine.  Unpaced by default."""
    return SortEngine(delay_scale=delay_scale).run(array, algorithm)
