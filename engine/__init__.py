"""
engine/
-------
Timer, problem instances, session control & recording.

    from engine import create_session, Session, SessionState, Recorder
"""

from engine.timer    import StepTimer
from engine.problem  import ProblemInstance, build_problem, parse_target
from engine.session  import Session, SessionState, create_session
from engine.recorder import Recorder, RunMetrics
from engine.hub      import SessionHub

__all__ = [
    "StepTimer",
    "ProblemInstance",
    "build_problem",
    "parse_target",
    "Session",
    "SessionState",
    "create_session",
    "Recorder",
    "RunMetrics",
    "SessionHub",
]
