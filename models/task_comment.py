"""Comments left by project members on tasks."""
from __future__ import annotations

from database import db
from models.audit import AuditMixin
from models.user import new_id
from utils.rendering import render_markdown_html

COMMENT_MAX_LENGTH = 5000


class TaskComment(AuditMixin, db.Model):
    """A comment cascades away with its task and with the users it references."""

    __tablename__ = "task_comments"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    task_id = db.Column(
        "taskId",
        db.String(36),
        db.ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment = db.Column(db.Text, nullable=False)

    task = db.relationship("Task", back_populates="comments")

    __table_args__ = (db.Index("comment_task_index", "taskId"),)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "task_id": self.task_id,
            "comment": self.comment,
            "comment_html": str(render_markdown_html(self.comment)),
            **self.audit_dict(),
        }

    def __repr__(self):
        return f"<TaskComment {self.id} task={self.task_id}>"
