"""A task represents a unit of work inside a Project

A Task belongs to exactly one Project
Any member of the Project can create, edit and delete its Tasks
A Task keeps track of who created it and who edited it last
A Task can receive Comments from any member of the Project
Deleting a Task deletes its Comments

"""
from __future__ import annotations

from database import db
from models.audit import AuditMixin
from models.user import new_id
from utils.rendering import render_markdown_html

TASK_TITLE_MAX_LENGTH = 300
TASK_SUMMARY_MAX_LENGTH = 500
TASK_DESCRIPTION_MAX_LENGTH = 5000


class Task(AuditMixin, db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    project_id = db.Column(
        "projectId",
        db.String(36),
        db.ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(TASK_TITLE_MAX_LENGTH), nullable=False, index=True)
    summary = db.Column(db.String(TASK_SUMMARY_MAX_LENGTH), nullable=True)
    description = db.Column(db.Text, nullable=False, default="")

    project = db.relationship("Project", back_populates="tasks")
    comments = db.relationship(
        "TaskComment",
        back_populates="task",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TaskComment.created_at",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "summary": self.summary,
            "description": self.description,
            "description_html": str(render_markdown_html(self.description)),
            **self.audit_dict(),
        }

    def __repr__(self):
        return f"<Task {self.title}>"
