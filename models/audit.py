"""Columns shared by records that remember who created and last edited them."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import declared_attr

from database import db


class AuditMixin:
    """Adds createdBy/lastUpdatedBy references and their timestamps.

    Both user references cascade on delete, so removing a user removes every
    record they created or last touched.
    """

    created_at = db.Column("createdAt", db.DateTime, nullable=False, default=datetime.utcnow)
    last_updated_at = db.Column("lastUpdatedAt", db.DateTime, nullable=False, default=datetime.utcnow)

    @declared_attr
    def created_by_id(cls):
        return db.Column(
            "createdBy",
            db.String(36),
            db.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )

    @declared_attr
    def last_updated_by_id(cls):
        return db.Column(
            "lastUpdatedBy",
            db.String(36),
            db.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )

    @declared_attr
    def created_by(cls):
        return db.relationship("User", foreign_keys=f"{cls.__name__}.created_by_id", lazy="joined")

    @declared_attr
    def last_updated_by(cls):
        return db.relationship("User", foreign_keys=f"{cls.__name__}.last_updated_by_id", lazy="joined")

    def stamp_created(self, user, when: datetime | None = None) -> None:
        when = when or datetime.utcnow()
        self.created_by = user
        self.last_updated_by = user
        self.created_at = when
        self.last_updated_at = when

    def stamp_updated(self, user, when: datetime | None = None) -> None:
        self.last_updated_by = user
        self.last_updated_at = when or datetime.utcnow()

    def audit_dict(self) -> dict[str, object]:
        return {
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "created_by": self.created_by_id,
            "created_by_name": self.created_by.name if self.created_by else None,
            "last_updated_at": self.last_updated_at.isoformat() if self.last_updated_at else None,
            "last_updated_by": self.last_updated_by_id,
            "last_updated_by_name": self.last_updated_by.name if self.last_updated_by else None,
        }
