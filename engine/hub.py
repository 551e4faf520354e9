"""
hub.py — Session Hub
=====================
Owns the one asyncio event loop every Session and StepTimer of the
HTTP adapter runs on.  Flask request threads never touch a Session
directly; they submit work with `call()`, which runs it on the loop
thread and waits for the result.  Timer ticks and requests are thereby
serialised onto a single writer.

    hub = SessionHub()
    sid = hub.create("bubble_sort", {"size": 10})
    hub.call(hub.get(sid).play)
"""

import asyncio
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

from engine.session import Session, create_session
from errors import UnknownSession
from logger import get_logger

logger = get_logger(__name__)


class SessionHub:
    """
    Attributes:
        loop     : Event loop running on the hub's daemon thread.
        sessions : {session_id: Session}
    """

    def __init__(self):
        self.loop:     asyncio.AbstractEventLoop = asyncio.new_event_loop()
        self.sessions: Dict[str, Session]        = {}
        self._thread = threading.Thread(target=self._run, name="session-hub", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    # ------------------------------------------------------------------
    # Work submission
    # ------------------------------------------------------------------
    def call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Run fn(*args, **kwargs) on the loop thread; return its result or re-raise."""

        async def runner():
            return fn(*args, **kwargs)

        return asyncio.run_coroutine_threadsafe(runner(), self.loop).result()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def create(self, algorithm_kind: str, config: Optional[Dict[str, Any]] = None) -> str:
        session = self.call(create_session, algorithm_kind, config, loop=self.loop)
        session_id = uuid.uuid4().hex[:12]
        self.sessions[session_id] = session
        logger.info("Hub: session %s (%s) registered", session_id, algorithm_kind)
        return session_id

    def get(self, session_id: str) -> Session:
        try:
            return self.sessions[session_id]
        except KeyError:
            raise UnknownSession(session_id) from None

    def ids(self) -> List[str]:
        return list(self.sessions)

    def close(self, session_id: str) -> None:
        """Unregister and close.  Of two racing closes, the loser gets UnknownSession."""
        session = self.sessions.pop(session_id, None)
        if session is None:
            raise UnknownSession(session_id)
        self.call(session.close)

    def shutdown(self) -> None:
        for session_id in list(self.sessions):
            self.close(session_id)
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(timeout=2)
