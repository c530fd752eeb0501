"""
Session Store - Session lifecycle management.

This module provides centralized management of chat sessions:
- Create and retrieve sessions by id
- TTL-based eviction by a periodic sweep task
- Session statistics

Architecture note:
This is an in-memory implementation suitable for single-instance deployments.
For multi-instance deployments, consider Redis-backed storage.
"""
import asyncio
import threading
import uuid
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from acns.core.logging_config import get_logger
from acns.memory.conversation import ConversationSession

logger = get_logger(__name__)

ANONYMOUS_PREFIX = "anon-"


def new_anonymous_session_id() -> str:
    """Session id for callers that did not supply one."""
    return f"{ANONYMOUS_PREFIX}{uuid.uuid4().hex}"


class SessionStore:
    """
    Holds chat sessions in memory and evicts idle ones.

    The sweep runs as an asyncio task between start() and stop();
    sweep() may also be called directly.

    Example:
        >>> store = SessionStore(ttl_minutes=30, sweep_interval_minutes=10)
        >>> session = store.get_or_create("user-123")
        >>> session.add_turn("Hello!", "Hi! How can I help?")
        >>> store.get_or_create("user-123") is session
        True
    """

    def __init__(
        self,
        ttl_minutes: float = 30,
        sweep_interval_minutes: float = 10,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """
        Initialize the session store.

        Args:
            ttl_minutes: Idle time after which a session is swept
            sweep_interval_minutes: Delay between sweeps
            clock: Source of the current time

        Raises:
            ValueError: If either interval is not positive
        """
        if ttl_minutes <= 0 or sweep_interval_minutes <= 0:
            raise ValueError(
                f"Session TTL and sweep interval must be positive "
                f"(ttl={ttl_minutes}, sweep={sweep_interval_minutes})"
            )
        self.ttl = timedelta(minutes=ttl_minutes)
        self.sweep_interval = timedelta(minutes=sweep_interval_minutes)
        self._clock = clock

        self._sessions: Dict[str, ConversationSession] = {}
        self._lock = threading.RLock()
        self._sweep_task: Optional[asyncio.Task] = None

        logger.info(
            f"SessionStore initialized: "
            f"TTL={ttl_minutes}min, sweep_interval={sweep_interval_minutes}min"
        )

    def get_or_create(self, session_id: str) -> ConversationSession:
        """
        Get an existing session or create an empty one.

        Either way the session's last_access is set to now.
        """
        with self._lock:
            now = self._clock()
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_access = now
                logger.debug(f"Retrieved existing session: {session_id}")
                return session

            session = ConversationSession(
                session_id=session_id,
                created_at=now,
                last_access=now,
            )
            self._sessions[session_id] = session
            logger.info(f"Created new session: {session_id}")
            return session

    def get(self, session_id: str) -> Optional[ConversationSession]:
        """Look up a session without refreshing it."""
        with self._lock:
            return self._sessions.get(session_id)

    def clear(self, session_id: str) -> bool:
        """
        Remove a session completely.

        Returns:
            True if session was removed, False if not found
        """
        with self._lock:
            if self._sessions.pop(session_id, None) is not None:
                logger.info(f"Cleared session: {session_id}")
                return True
            return False

    def sweep(self) -> int:
        """
        Remove sessions idle longer than the TTL.

        Returns:
            Number of sessions removed
        """
        with self._lock:
            now = self._clock()
            expired = [
                sid for sid, session in self._sessions.items()
                if now - session.last_access > self.ttl
            ]
            for session_id in expired:
                del self._sessions[session_id]

        if expired:
            logger.info(f"Swept {len(expired)} expired sessions")
        return len(expired)

    def stats(self) -> Dict:
        with self._lock:
            return {
                "active_sessions": len(self._sessions),
                "total_turns": sum(s.turn_count for s in self._sessions.values()),
                "session_ttl_minutes": int(self.ttl.total_seconds() / 60),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    # ------------------------------------------------------------
    # Background sweep
    # ------------------------------------------------------------

    @property
    def is_sweeping(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self.is_sweeping:
            return
        self._sweep_task = asyncio.get_running_loop().create_task(
            self._sweep_loop(), name="session-sweep"
        )
        logger.info("Session sweep task started")

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Session sweep task stopped")

    async def _sweep_loop(self) -> None:
        interval = self.sweep_interval.total_seconds()
        while True:
            await asyncio.sleep(interval)
            try:
                self.sweep()
            except Exception as e:
                logger.exception(f"Session sweep failed: {e}")
