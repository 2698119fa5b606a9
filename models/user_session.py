"""Server-side session records."""
from __future__ import annotations

from datetime import datetime

from database import db


class UserSession(db.Model):
    """Row backing one login; the browser only holds its id."""

    __tablename__ = "sessions"

    id = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(
        "userId",
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    created_at = db.Column("createdAt", db.DateTime, nullable=False, default=datetime.utcnow)
    expires_at = db.Column("expiresAt", db.DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<UserSession user={self.user_id}>"
