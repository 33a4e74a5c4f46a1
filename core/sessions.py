# core/sessions.py

"""
In-memory session store.

One SessionContext per authenticated browsing session, created at login
and torn down at logout. The store is owned by the application
(``app.state.sessions``) and handed to routes through a dependency.

Sessions expire after ``SESSION_IDLE_TIMEOUT_SECONDS`` without a lookup,
and a user holds at most one session: opening a new one (login or page
reload) closes the previous.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Dict, List, Optional, Union

from core.config import settings
from core.content_view import DEFAULT_VIEW, ContentViewRouter
from core.errors import ContextNotInitializedError
from core.logging_config import logger
from core.roles import parse_role
from core.stats import StatAggregator
from models.enums import Role


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionContext:
    session_id: str
    role: Role
    user_id: Optional[str] = None
    router: ContentViewRouter = field(default_factory=ContentViewRouter)
    stats: Optional[StatAggregator] = None
    last_seen: datetime = field(default_factory=_now)

    def touch(self) -> None:
        self.last_seen = _now()

    def is_expired(self, idle_timeout_seconds: int) -> bool:
        """Check if the session has been idle for longer than the timeout."""
        return _now() >= self.last_seen + timedelta(seconds=idle_timeout_seconds)

    def close(self) -> None:
        self.router.close()
        if self.stats is not None:
            self.stats.close()
            self.stats = None


class SessionStore:
    """
    Session registry keyed by session id.

    Thread-safe: sync routes such as /health/app read it from the worker pool.
    """

    def __init__(self, idle_timeout_seconds: Optional[int] = None) -> None:
        self._sessions: Dict[str, SessionContext] = {}
        self._lock = Lock()
        if idle_timeout_seconds is None:
            idle_timeout_seconds = settings.SESSION_IDLE_TIMEOUT_SECONDS
        self.idle_timeout_seconds = idle_timeout_seconds

    def _pop_expired(self) -> List[SessionContext]:
        # Caller holds the lock
        expired = [
            context for context in self._sessions.values()
            if context.is_expired(self.idle_timeout_seconds)
        ]
        for context in expired:
            del self._sessions[context.session_id]
        return expired

    def _pop_for_user(self, user_id: str) -> List[SessionContext]:
        # Caller holds the lock
        previous = [
            context for context in self._sessions.values()
            if context.user_id == user_id
        ]
        for context in previous:
            del self._sessions[context.session_id]
        return previous

    def open(
        self,
        role: Union[Role, str],
        user_id: Optional[str] = None,
        initial_view: Optional[str] = None,
    ) -> SessionContext:
        """
        Start a session. The router begins on ``initial_view`` or the dashboard.

        Any earlier session of the same user is closed.
        """
        context = SessionContext(
            session_id=str(uuid.uuid4()),
            role=parse_role(role),
            user_id=user_id,
            router=ContentViewRouter(initial_view or DEFAULT_VIEW),
        )
        with self._lock:
            stale = self._pop_expired()
            replaced = self._pop_for_user(user_id) if user_id is not None else []
            self._sessions[context.session_id] = context

        for old in stale + replaced:
            old.close()
        if stale:
            logger.info(f"Evicted {len(stale)} idle session(s)")
        if replaced:
            logger.info(f"Replaced {len(replaced)} earlier session(s) for user {user_id}")

        logger.info(f"Session opened for {context.role} ({context.session_id})")
        return context

    def get(self, session_id: Optional[str]) -> SessionContext:
        """Look up a live session and mark it as seen."""
        expired = False
        with self._lock:
            context = self._sessions.get(session_id) if session_id else None
            if context is not None and context.is_expired(self.idle_timeout_seconds):
                del self._sessions[session_id]
                expired = True
            elif context is not None:
                context.touch()

        if expired:
            context.close()
            logger.info(f"Session expired ({session_id})")
            raise ContextNotInitializedError(f"Session expired: {session_id!r}")
        if context is None:
            raise ContextNotInitializedError(f"No active session: {session_id!r}")
        return context

    def close(self, session_id: str) -> None:
        with self._lock:
            context = self._sessions.pop(session_id, None)
        if context is None:
            raise ContextNotInitializedError(f"No active session: {session_id!r}")

        context.close()
        logger.info(f"Session closed ({session_id})")

    def clear(self) -> None:
        """Close every session (application shutdown)."""
        with self._lock:
            contexts = list(self._sessions.values())
            self._sessions.clear()
        for context in contexts:
            context.close()

    def size(self) -> int:
        with self._lock:
            return len(self._sessions)
