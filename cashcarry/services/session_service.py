"""
Session registry for token-based authentication.

Tokens live in process memory only: a restart invalidates every token.
"""
import logging
import secrets
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from flask import Flask, current_app

from cashcarry.database import JsonStore
from cashcarry.models import Session, User

logger = logging.getLogger(__name__)

_BASE36 = '0123456789abcdefghijklmnopqrstuvwxyz'


def _to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


def generate_token() -> str:
    """Random part plus base-36 current time in milliseconds."""
    return secrets.token_urlsafe(16) + _to_base36(int(time.time() * 1000))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionRegistry:
    """
    Token -> user id registry.

    Args:
        users: Users store used to resolve a session's user id.
        ttl_seconds: Expiry policy; 0/None keeps sessions for the process lifetime.
        clock: Callable returning the current aware datetime (tests override it).
    """

    def __init__(self, users: JsonStore, ttl_seconds: Optional[int] = 0,
                 clock: Callable[[], datetime] = _utcnow):
        self.users = users
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_token(self, user_id: int) -> str:
        """Issue a new token for ``user_id`` and record it."""
        with self._lock:
            token = generate_token()
            while token in self._sessions:
                token = generate_token()
            self._sessions[token] = Session(token=token, user_id=user_id, created_at=self._clock())
        return token

    def get(self, token: Optional[str]) -> Optional[Session]:
        """Return the live session for ``token``; expired sessions are dropped."""
        if not token:
            return None
        with self._lock:
            sess = self._sessions.get(token)
            if sess is None:
                return None
            if sess.is_expired(self._clock(), self.ttl_seconds):
                del self._sessions[token]
                logger.info(f"[AUTH] Session for user {sess.user_id} expired")
                return None
            return sess

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """
        Resolve a token to its user.

        Returns None if the token is absent, unknown, expired, or the user
        no longer exists in the users store.
        """
        sess = self.get(token)
        if sess is None:
            return None
        record = self.users.get(sess.user_id)
        if record is None:
            return None
        return User.from_record(record)

    def revoke(self, token: Optional[str]) -> bool:
        """Forget a token. Returns True if it was registered."""
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


def init_sessions(app: Flask, users: JsonStore) -> SessionRegistry:
    """Create the session registry and attach it to the app."""
    registry = SessionRegistry(users, ttl_seconds=app.config.get('SESSION_TTL_SECONDS', 0))
    app.extensions['cashcarry.sessions'] = registry
    return registry


def get_sessions() -> SessionRegistry:
    """Get the session registry of the current application."""
    return current_app.extensions['cashcarry.sessions']
