"""Binds the session store to HTTP requests and responses."""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer

from database import db
from models.user import User
from routes import read_json_payload
from routes.guards import RequestContext
from services.session_store import SessionData, SessionStore


class SessionManager:
    """Issues and resolves session cookies.

    The cookie only carries the session id, signed with the application
    secret; identity data stays in the store.
    """

    def __init__(
        self,
        store: SessionStore,
        *,
        secret_key: str,
        cookie_name: str = "sid",
        lifetime: timedelta = timedelta(hours=24),
        secure: bool = False,
        samesite: str = "Lax",
    ):
        self.store = store
        self.cookie_name = cookie_name
        self.lifetime = lifetime
        self.secure = secure
        self.samesite = samesite
        self.serializer = URLSafeTimedSerializer(secret_key, salt="session-cookie")

    @property
    def max_age(self) -> int:
        return int(self.lifetime.total_seconds())

    def session_id_from(self, request) -> Optional[str]:
        token = request.cookies.get(self.cookie_name)
        if not token:
            return None
        try:
            return self.serializer.loads(token, max_age=self.max_age)
        except BadSignature:
            return None

    def load(self, request) -> Optional[SessionData]:
        session_id = self.session_id_from(request)
        if not session_id:
            return None
        return self.store.get(session_id)

    def context_for(self, request, params: dict) -> RequestContext:
        session = self.load(request)
        user = None
        if session is not None:
            user = db.session.get(User, session.user_id)
            if user is None:
                logging.info("Dropping session of deleted user %s", session.user_id)
                self.store.destroy(session.session_id)
                session = None
        return RequestContext(
            session=session,
            user=user,
            params=dict(params),
            body=read_json_payload(),
        )

    def start(self, user: User, previous: Optional[SessionData] = None) -> SessionData:
        """Create a fresh session for ``user``, replacing ``previous``."""
        if previous is not None:
            self.store.destroy(previous.session_id)
        session = SessionData.for_user(user, self.lifetime)
        self.store.set(session)
        return session

    def end(self, session: Optional[SessionData]) -> None:
        if session is not None:
            self.store.destroy(session.session_id)

    def write_cookie(self, response, session: SessionData) -> None:
        response.set_cookie(
            self.cookie_name,
            self.serializer.dumps(session.session_id),
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

    def clear_cookie(self, response) -> None:
        response.delete_cookie(
            self.cookie_name,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )
