"""
In-memory session store
The only place interview sessions are kept; nothing survives a restart.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from interview_api.core.errors import SessionNotFoundError
from interview_api.models.session import InterviewSession, utc_now

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Process-wide map of session ID to session.

    put/get/delete/list (plus purge_idle) are the whole mutation surface, so a
    persistent backend can replace this class without touching the service.
    """

    def __init__(self):
        self._sessions: Dict[str, InterviewSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def put(self, session: InterviewSession) -> None:
        """
        Store a new session

        Raises:
            ValueError: The ID is already in use
        """
        if session.session_id in self._sessions:
            raise ValueError(f"Session {session.session_id} already exists")
        self._sessions[session.session_id] = session

    def get(self, session_id: str) -> InterviewSession:
        """
        Look up a session

        Raises:
            SessionNotFoundError: Unknown ID
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        """
        Remove a session

        Raises:
            SessionNotFoundError: Unknown ID
        """
        if session_id not in self._sessions:
            raise SessionNotFoundError(session_id)
        del self._sessions[session_id]

    def list(self) -> List[InterviewSession]:
        """All sessions in creation order."""
        return list(self._sessions.values())

    def purge_idle(self, max_idle: timedelta, now: Optional[datetime] = None) -> int:
        """
        Drop sessions with no activity for longer than max_idle

        Sessions whose lock is held (a request is in flight) are kept.

        Args:
            max_idle: Allowed idle time
            now: Reference time (defaults to the current UTC time)

        Returns:
            int: Number of sessions removed
        """
        cutoff = (now or utc_now()) - max_idle
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.last_active_at < cutoff and not session.lock.locked()
        ]
        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            logger.info(f"Purged {len(expired)} idle session(s)")
        return len(expired)
