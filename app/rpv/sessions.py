"""
Server-side session store.

The browser only ever holds the opaque session id (inside Flask's signed
cookie). The authenticated-user snapshot lives here and is copied once at
login; it is not refreshed from the users table, so a role change only takes
effect on the next login.
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.rpv.models import User, UserRole


@dataclass(frozen=True)
class SessionUser:
    id: int
    username: str
    role: UserRole


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    user: SessionUser
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.utcnow()) >= self.expires_at


class SessionStore:
    """Process-wide mapping of session id -> SessionRecord. Last write wins."""

    def __init__(self, ttl: timedelta = timedelta(hours=24)):
        self.ttl = ttl
        self._sessions: dict[str, SessionRecord] = {}

    def create(self, user: User, now: datetime | None = None) -> SessionRecord:
        now = now or datetime.utcnow()
        self._sweep(now)
        record = SessionRecord(
            session_id=secrets.token_urlsafe(32),
            user=SessionUser(id=user.id, username=user.username, role=UserRole(user.role)),
            created_at=now,
            expires_at=now + self.ttl,
        )
        self._sessions[record.session_id] = record
        return record

    def resolve(self, session_id: str | None, now: datetime | None = None) -> SessionRecord | None:
        if not session_id:
            return None
        record = self._sessions.get(session_id)
        if record is None:
            return None
        if record.is_expired(now):
            self._sessions.pop(session_id, None)
            return None
        return record

    def destroy(self, session_id: str | None) -> None:
        if session_id:
            self._sessions.pop(session_id, None)

    def _sweep(self, now: datetime) -> None:
        # Abandoned sessions are never resolved again; drop them here.
        self._sessions = {sid: r for sid, r in self._sessions.items() if not r.is_expired(now)}

    def __len__(self) -> int:
        return len(self._sessions)
