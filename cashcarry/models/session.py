"""Session model."""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass
class Session:
    """Process-lifetime mapping from an opaque token to a user id."""

    token: str
    user_id: int
    created_at: datetime

    def is_expired(self, now: datetime, ttl_seconds: Optional[int]) -> bool:
        """A missing, zero or negative ttl means the session never expires."""
        if ttl_seconds is None or ttl_seconds <= 0:
            return False
        return now - self.created_at > timedelta(seconds=ttl_seconds)
