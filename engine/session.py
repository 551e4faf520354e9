"""
session.py — Session Controller
================================
One Session per active algorithm view.  It is the ONLY writer of the
algorithm state and the problem instance; the presentation layer reads
snapshots and forwards intent (play / pause / step / reset / configure).

State machine:
    IDLE      →  play()     →  PLAYING
    PLAYING   →  pause()    →  PAUSED
    PLAYING   →  (terminal) →  FINISHED
    any       →  step()     →  PAUSED  (or FINISHED)
    FINISHED  →  play()     →  PLAYING (replay on the same instance)
    any       →  reset()    →  IDLE    (fresh instance)
    any       →  restart()  →  IDLE    (same instance, fresh state)

Every transition that stops auto-play cancels the StepTimer first, so no
stale tick can touch a superseded state.  Refusals (InvalidTarget,
HeapFull, …) never propagate: the state is left untouched, `status`
explains why and the call returns False.

Threading: not thread-safe by design.  All calls, timer ticks included,
must happen on the loop the timer was given (see engine.hub for the
HTTP adapter's arrangement).
"""

import random
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from algorithms import AlgoInfo, get_algorithm, heap_ops
from algorithms.step import AlgoState, to_dict
from config import SPEED_PRESETS, SessionConfig, defaults_for, resolve
from engine.problem import ProblemInstance, build_problem
from engine.recorder import Recorder, RunMetrics
from engine.timer import StepTimer
from errors import InvalidTarget, NoProblemInstance, OperationRefused
from logger import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class SessionState(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
class Session:
    """
    Attributes:
        info        : Registry card of the algorithm this session runs.
        config      : Resolved SessionConfig (defaults filled, numbers clamped).
        problem     : Current ProblemInstance (None once closed).
        algo_state  : Current algorithm state (frozen; replaced every step).
        state       : SessionState.
        status      : Last refusal / notice, "" when none.
        on_change   : Optional callback(algo_state) fired after every mutation.
                      The renderer hooks its redraw here.
    """

    def __init__(
        self,
        info: AlgoInfo,
        config: Optional[SessionConfig] = None,
        loop=None,
        on_change: Optional[Callable[[AlgoState], None]] = None,
    ):
        self.info:         AlgoInfo                    = info
        self.config:       SessionConfig               = resolve(info.key, config)
        self.timer:        StepTimer                   = StepTimer(loop)
        self.on_change:    Optional[Callable]          = on_change
        self.problem:      Optional[ProblemInstance]   = None
        self.algo_state:   Optional[AlgoState]         = None
        self.state:        SessionState                = SessionState.IDLE
        self.status:       str                         = ""
        self.last_refusal: Optional[OperationRefused]  = None

        self._rng = random.Random(self.config.seed)
        self.reset()
        logger.info("Session created: %s", info.key)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Stop, generate a fresh problem instance, rebuild the state at IDLE."""
        self._install(build_problem(self.info, self.config, self._rng))

    def restart(self) -> None:
        """Stop and rebuild the state on the current problem instance."""
        self._require_problem()
        self.timer.cancel()
        self._rebuild("Restart on the same instance")

    def close(self) -> None:
        """Tear down: cancel the timer and drop the instance.  Stepping afterwards raises."""
        self.timer.cancel()
        self.problem = None
        self.state = SessionState.IDLE
        logger.info("Session closed: %s", self.info.key)

    @property
    def closed(self) -> bool:
        return self.problem is None

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def play(self) -> bool:
        self._require_problem()
        if self.state is SessionState.PLAYING:
            return True
        if self.algo_state.is_done:
            if self.info.family == "heaps":
                self.state = SessionState.FINISHED
                self.status = "Nothing to animate. Insert, extract or build first."
                return False
            self._rebuild("Replay on the same instance")

        refusal = self._precheck()
        if refusal is not None:
            return self._refuse(refusal)

        self.state = SessionState.PLAYING
        self._clear_status()
        self.timer.schedule(True, self.config.delay_ms, self._tick)
        logger.info("Play: %s every %d ms", self.info.key, self.config.delay_ms)
        return True

    def pause(self) -> bool:
        self._require_problem()
        if self.state is not SessionState.PLAYING:
            return False
        self.timer.cancel()
        self.state = SessionState.PAUSED
        return True

    def step(self) -> bool:
        """Exactly one unit of work, bypassing the timer.  Leaves the session PAUSED."""
        self._require_problem()
        self.timer.cancel()
        if self.algo_state.is_done:
            self.state = SessionState.FINISHED
            self.status = "Finished. Reset or play to run again."
            return False
        try:
            self._advance()
        except OperationRefused as exc:
            return self._refuse(exc)
        self._clear_status()
        if self.algo_state.is_done:
            self._finish()
        else:
            self.state = SessionState.PAUSED
        return True

    def get_snapshot(self) -> AlgoState:
        """Current state, read-only (frozen)."""
        self._require_problem()
        return self.algo_state

    # ------------------------------------------------------------------
    # Configuration & selection
    # ------------------------------------------------------------------
    def configure(self, **changes: Any) -> None:
        """
        Apply config changes.  A delay-only change keeps the run going at
        the new speed; anything else regenerates the instance (reset).
        """
        self._require_problem()
        new_config = resolve(self.info.key, self.config.with_changes(**changes))
        if set(changes) <= {"delay_ms"}:
            self.config = new_config
            if self.state is SessionState.PLAYING:
                self.timer.schedule(True, new_config.delay_ms, self._tick)
            logger.info("Delay set to %d ms", new_config.delay_ms)
            return

        # a rejected instance leaves config, problem and playback untouched
        rng = random.Random(new_config.seed) if "seed" in changes else self._rng
        problem = build_problem(self.info, new_config, rng)
        self.config, self._rng = new_config, rng
        self._install(problem)

    def set_speed(self, preset: str) -> None:
        self.configure(delay_ms=SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"]))

    def set_selection(
        self,
        target: Any = None,
        start_node: Optional[str] = None,
        end_node: Optional[str] = None,
    ) -> bool:
        """New search target / start / end node; restarts the run on the same instance."""
        self._require_problem()
        try:
            problem = self.problem.with_selection(target=target, start_node=start_node, end_node=end_node)
        except OperationRefused as exc:
            return self._refuse(exc)
        self.timer.cancel()
        self.problem = problem
        self._rebuild("Selection changed")
        return True

    # ------------------------------------------------------------------
    # Heap operations
    # ------------------------------------------------------------------
    def heap_insert(self, value: int) -> bool:
        return self._heap_op(lambda s: heap_ops.insert(s, value), f"insert {value}")

    def heap_extract(self) -> bool:
        return self._heap_op(heap_ops.extract, "extract")

    def heap_build(self, values: Optional[Sequence[int]] = None) -> bool:
        if values is None:
            low, high = defaults_for(self.info.key).value_range
            pool = range(low, high + 1)
            values = self._rng.sample(pool, min(self.config.size, len(pool)))
        return self._heap_op(lambda s: heap_ops.build(s, values), "build")

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def analyze(self) -> Optional[RunMetrics]:
        """Run a private copy of the current instance to completion.  Playback is untouched."""
        self._require_problem()
        recorder = Recorder()
        recorder.start(self.info.key, self.problem)
        try:
            return recorder.run_to_completion()
        except OperationRefused as exc:
            self.status = str(exc)
            self.last_refusal = exc
            logger.warning("%s analysis refused: %s", self.info.key, exc)
            return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def snapshot_dict(self) -> Dict[str, Any]:
        self._require_problem()
        return {
            "algorithm":    self.info.key,
            "label":        self.info.label,
            "session":      self.state.value,
            "status":       self.status,
            "delay_ms":     self.config.delay_ms,
            "problem":      self.problem.to_dict(),
            "state":        to_dict(self.algo_state),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _require_problem(self) -> None:
        if self.problem is None:
            raise NoProblemInstance(f"Session for {self.info.key} has no problem instance (closed?)")

    def _install(self, problem: ProblemInstance) -> None:
        self.timer.cancel()
        self.problem = problem
        self._rebuild("Reset: new problem instance")

    def _rebuild(self, reason: str) -> None:
        self.algo_state = self.info.init(self.problem)
        self.state = SessionState.IDLE
        self._clear_status()
        logger.info("%s: %s", self.info.key, reason)
        self._notify()

    def _precheck(self) -> Optional[OperationRefused]:
        """Refusal the first tick would hit, found before any timer is armed."""
        if self.info.family == "searching" and self.problem.target is None:
            return InvalidTarget(f"Search target {self.problem.target_text!r} is not a number.")
        return None

    def _advance(self) -> None:
        self._require_problem()
        self.algo_state = self.info.step(self.algo_state, self.problem)
        logger.debug("%s step %d: %s", self.info.key, self.algo_state.step_number, self.algo_state.explanation)
        self._notify()

    def _tick(self) -> None:
        try:
            self._advance()
        except OperationRefused as exc:
            self._refuse(exc)
            return
        if self.algo_state.is_done:
            self._finish()

    def _finish(self) -> None:
        self.timer.cancel()
        self.state = SessionState.FINISHED
        logger.info("%s finished after %d steps: %s", self.info.key,
                    self.algo_state.step_number, self.algo_state.outcome)

    def _clear_status(self) -> None:
        self.status = ""
        self.last_refusal = None

    def _refuse(self, exc: OperationRefused) -> bool:
        self.timer.cancel()
        if self.state is SessionState.PLAYING:
            self.state = SessionState.PAUSED
        self.status = str(exc)
        self.last_refusal = exc
        logger.warning("%s refused: %s", self.info.key, exc)
        return False

    def _heap_op(self, op: Callable[[AlgoState], AlgoState], what: str) -> bool:
        self._require_problem()
        try:
            new_state = op(self.algo_state)
        except OperationRefused as exc:
            return self._refuse(exc)
        self.algo_state = new_state
        self._clear_status()
        self._notify()
        logger.info("Heap %s requested", what)
        if new_state.is_done:
            self._finish()
            return True
        self.state = SessionState.PLAYING
        self.timer.schedule(True, self.config.delay_ms, self._tick)
        return True

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.algo_state)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------
def create_session(
    algorithm_kind: str,
    config: Optional[Any] = None,
    loop=None,
    on_change: Optional[Callable[[AlgoState], None]] = None,
) -> Session:
    """Build a Session for a registry key.  `config` may be a SessionConfig or a plain dict."""
    info = get_algorithm(algorithm_kind)
    if config is None or isinstance(config, dict):
        config = SessionConfig.from_dict(config)
    return Session(info, config, loop=loop, on_change=on_change)
