"""Server-side session storage.

A session associates an opaque session key with the identity of the user who
logged in. Sessions expire a fixed lifetime after login; an expired session is
never handed out again and is dropped the first time it is looked up.
"""
from __future__ import annotations

import secrets
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from database import db
from models.user_session import UserSession

DEFAULT_SESSION_LIFETIME = timedelta(hours=24)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class SessionData:
    session_id: str
    user_id: str
    email: str
    name: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) >= self.expires_at

    @classmethod
    def for_user(cls, user, lifetime: timedelta = DEFAULT_SESSION_LIFETIME) -> "SessionData":
        now = datetime.utcnow()
        return cls(
            session_id=new_session_id(),
            user_id=user.id,
            email=user.email,
            name=user.name,
            created_at=now,
            expires_at=now + lifetime,
        )

    def to_dict(self) -> dict[str, object]:
        return {"id": self.user_id, "email": self.email, "name": self.name}


class SessionStore(ABC):
    """Persistence for sessions, keyed by session id."""

    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionData]:
        """Return the live session for ``session_id`` or ``None``."""

    @abstractmethod
    def set(self, session: SessionData) -> None:
        """Create or replace a session."""

    @abstractmethod
    def destroy(self, session_id: str) -> None:
        """Remove a session; unknown ids are ignored."""

    @abstractmethod
    def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Remove every expired session and return how many were removed."""


class MemorySessionStore(SessionStore):
    """Process-local store, suitable for tests and single-process servers."""

    def __init__(self):
        self._sessions: dict[str, SessionData] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[SessionData]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired():
                del self._sessions[session_id]
                return None
            return session

    def set(self, session: SessionData) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        with self._lock:
            expired = [key for key, session in self._sessions.items() if session.is_expired(now)]
            for key in expired:
                del self._sessions[key]
            return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


def _session_from_record(record: UserSession) -> SessionData:
    return SessionData(
        session_id=record.id,
        user_id=record.user_id,
        email=record.email,
        name=record.name,
        created_at=record.created_at,
        expires_at=record.expires_at,
    )


class DatabaseSessionStore(SessionStore):
    """Store backed by the ``sessions`` table.

    Rows reference their user with ON DELETE CASCADE, so deleting a user also
    ends all of their sessions.
    """

    def get(self, session_id: str) -> Optional[SessionData]:
        record = db.session.get(UserSession, session_id)
        if record is None:
            return None
        session = _session_from_record(record)
        if session.is_expired():
            self.destroy(session_id)
            return None
        return session

    def set(self, session: SessionData) -> None:
        record = db.session.get(UserSession, session.session_id)
        if record is None:
            record = UserSession(id=session.session_id)
            db.session.add(record)
        record.user_id = session.user_id
        record.email = session.email
        record.name = session.name
        record.created_at = session.created_at
        record.expires_at = session.expires_at
        self._commit()

    def destroy(self, session_id: str) -> None:
        UserSession.query.filter_by(id=session_id).delete(synchronize_session=False)
        self._commit()

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        removed = UserSession.query.filter(
            UserSession.expires_at <= (now or datetime.utcnow())
        ).delete(synchronize_session=False)
        self._commit()
        return removed

    @staticmethod
    def _commit() -> None:
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

