"""Membership of users in projects."""
from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from database import db
from models.user import new_id


class ProjectRole(StrEnum):
    """Role a member holds inside a single project."""

    ADMIN = "ADMIN"
    USER = "USER"


class ProjectMember(db.Model):
    """Join model linking projects to the users allowed to work on them."""

    __tablename__ = "project_members"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    project_id = db.Column(
        "projectId",
        db.String(36),
        db.ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        "userId",
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = db.Column(db.String(20), nullable=False, default=ProjectRole.USER.value)
    created_at = db.Column("createdAt", db.DateTime, nullable=False, default=datetime.utcnow)
    last_updated_at = db.Column("lastUpdatedAt", db.DateTime, nullable=False, default=datetime.utcnow)

    project = db.relationship("Project", back_populates="members")
    user = db.relationship("User", lazy="joined")

    __table_args__ = (db.UniqueConstraint("projectId", "userId", name="uq_project_user"),)

    @property
    def role_enum(self) -> ProjectRole:
        """Return the role as an enum value."""

        return ProjectRole(self.role)

    @role_enum.setter
    def role_enum(self, value: ProjectRole) -> None:
        self.role = value.value

    @property
    def is_admin(self) -> bool:
        return self.role_enum == ProjectRole.ADMIN

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "user_id": self.user_id,
            "role": self.role,
            "user_name": self.user.name if self.user else None,
            "user_email": self.user.email if self.user else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_updated_at": self.last_updated_at.isoformat() if self.last_updated_at else None,
        }
