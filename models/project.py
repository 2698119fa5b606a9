# models/project.py
from database import db
from models.audit import AuditMixin
from models.user import new_id

PROJECT_NAME_MAX_LENGTH = 100
PROJECT_DESCRIPTION_MAX_LENGTH = 500


class Project(AuditMixin, db.Model):
    __tablename__ = "projects"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(PROJECT_NAME_MAX_LENGTH), unique=True, nullable=False, index=True)
    description = db.Column(db.String(PROJECT_DESCRIPTION_MAX_LENGTH), nullable=True)

    tasks = db.relationship(
        "Task",
        back_populates="project",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    members = db.relationship(
        "ProjectMember",
        back_populates="project",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            **self.audit_dict(),
        }

    def __repr__(self):
        return f'<Project {self.name}>'
