"""Signed, expiring sessions that each hold one live Twenty-One match."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import BadSignature, URLSafeSerializer

from config import config
from core.game import TwentyOneMatch

logger = logging.getLogger(__name__)


class SessionSigner:
    """Issue and verify client-facing session tokens using itsdangerous."""

    SALT = "twenty-one-session"

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeSerializer(
            secret_key or config.security.secret_key, salt=self.SALT
        )

    def sign(self, session_id: str) -> str:
        return self._serializer.dumps(session_id)

    def unsign(self, token: str) -> str | None:
        """Return the session ID inside a genuine token, None for anything forged."""
        try:
            return self._serializer.loads(token)
        except BadSignature:
            return None


@dataclass
class MatchSession:
    """A match plus the bookkeeping needed to expire it."""

    match: TwentyOneMatch
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)

    def is_expired(self, ttl: int, now: datetime | None = None) -> bool:
        return (now or datetime.now()) - self.last_activity > timedelta(seconds=ttl)


class MatchSessionStore:
    """
    Process-local map from session ID to live match.

    Clients only ever see signed tokens; every lookup verifies the token
    before touching the map. Sessions idle for longer than ``ttl`` seconds
    are dropped on access or by purge_expired(). Nothing survives a restart.
    """

    def __init__(self, signer: SessionSigner | None = None, ttl: int | None = None) -> None:
        self.signer = signer or SessionSigner()
        self.ttl = ttl or config.session_ttl
        self._sessions: dict[str, MatchSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self, match: TwentyOneMatch) -> str:
        """Store a match under a fresh session and return its token."""
        session_id = str(uuid4())
        self._sessions[session_id] = MatchSession(match)
        logger.debug("Opened session %s for %s", session_id, match.player.name)
        return self.signer.sign(session_id)

    async def get(self, token: str) -> MatchSession | None:
        """Live session for a token, or None if forged, unknown or expired."""
        session_id = self.signer.unsign(token)
        if session_id is None:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired(self.ttl):
            logger.debug("Session %s expired", session_id)
            del self._sessions[session_id]
            return None
        return session

    async def touch(self, token: str, match: TwentyOneMatch | None = None) -> bool:
        """
        Refresh a session's expiry, optionally swapping in a new match.

        Returns:
            False if the token does not name a live session
        """
        session = await self.get(token)
        if session is None:
            return False
        if match is not None:
            session.match = match
        session.last_activity = datetime.now()
        return True

    async def close(self, token: str) -> None:
        """Forget a session; unknown tokens are ignored."""
        session_id = self.signer.unsign(token)
        if session_id is not None:
            self._sessions.pop(session_id, None)

    async def purge_expired(self) -> int:
        """Drop every idle session and return how many were removed."""
        now = datetime.now()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(self.ttl, now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Purged %d expired sessions", len(expired))
        return len(expired)


# Global session store instance
_session_store: MatchSessionStore | None = None


def get_session_store() -> MatchSessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = MatchSessionStore()
    return _session_store
