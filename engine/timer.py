"""
timer.py — Step Timer
======================
Drives auto-play.  While asked to run, calls `on_tick` once every
`delay_ms`, re-arming only after the previous call has returned
(never a free-running interval, so ticks can not overlap).

    timer = StepTimer(loop)
    timer.schedule(True, 400, session_tick)    # start / re-arm
    timer.schedule(False, 0, None)             # stop; nothing fires after this

Cancellation is generation based: every cancel bumps `generation`, and a
callback that wakes up with an old generation does nothing.  Cancelling
from inside `on_tick` (e.g. the run just finished) suppresses the
re-arm.  The timer knows nothing about algorithms.
"""

import asyncio
from typing import Callable, Optional

from logger import get_logger

logger = get_logger(__name__)


class StepTimer:
    """
    Attributes:
        delay_ms   : Delay used for the next re-arm.
        generation : Bumped on every cancel; stale callbacks compare against it.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop:      Optional[asyncio.AbstractEventLoop] = loop
        self._handle:    Optional[asyncio.TimerHandle]       = None
        self._on_tick:   Optional[Callable[[], None]]        = None
        self.delay_ms:   int                                 = 0
        self.generation: int                                 = 0

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def active(self) -> bool:
        return self._handle is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def schedule(self, should_run: bool, delay_ms: int, on_tick: Optional[Callable[[], None]]) -> None:
        """Cancel whatever is pending; if `should_run`, arm a fresh tick chain."""
        self.cancel()
        if not should_run:
            return
        self.delay_ms = delay_ms
        self._on_tick = on_tick
        self._arm()

    def cancel(self) -> None:
        self.generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def step_once(self, fn: Callable[[], object]) -> object:
        """Manual single step: stop auto-play, then call `fn` exactly once."""
        self.cancel()
        return fn()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _arm(self) -> None:
        self._handle = self.loop.call_later(self.delay_ms / 1000, self._fire, self.generation)

    def _fire(self, generation: int) -> None:
        if generation != self.generation:
            return
        self._handle = None
        try:
            self._on_tick()
        except Exception:
            self.cancel()
            raise
        # re-arm only if nobody cancelled during the tick
        if generation == self.generation:
            self._arm()
