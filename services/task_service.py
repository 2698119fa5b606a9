"""Tasks and task comments inside a project."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from database import db
from forms import CreateTaskInput, TaskCommentInput, UpdateTaskInput
from models.task import Task
from models.task_comment import TaskComment
from models.user import User
from services.errors import NotFound


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logging.error("Database error while %s", action, exc_info=True)
        raise


def create_task(project_id: str, data: CreateTaskInput, user: User) -> Task:
    task = Task(
        project_id=project_id,
        title=data.title,
        description=data.description,
        summary=data.summary,
    )
    task.stamp_created(user)
    db.session.add(task)
    _commit("adding task")
    return task


def list_project_tasks(project_id: str) -> list[Task]:
    return Task.query.filter_by(project_id=project_id).order_by(Task.created_at.desc()).all()


def get_task(project_id: str, task_id: str) -> Task:
    task = Task.query.filter_by(id=task_id, project_id=project_id).one_or_none()
    if task is None:
        raise NotFound("Task not found")
    return task


def update_task(project_id: str, task_id: str, data: UpdateTaskInput, user: User) -> Task:
    task = get_task(project_id, task_id)
    for attribute, value in data.changes.items():
        if attribute == "description" and value is None:
            value = ""
        setattr(task, attribute, value)
    task.stamp_updated(user)
    _commit("updating task")
    return task


def delete_task(project_id: str, task_id: str) -> None:
    """Delete a task; its comments cascade."""
    task = get_task(project_id, task_id)
    db.session.delete(task)
    _commit("deleting task")


def _get_comment(task: Task, comment_id: str) -> TaskComment:
    comment = TaskComment.query.filter_by(id=comment_id, task_id=task.id).one_or_none()
    if comment is None:
        raise NotFound("Comment not found")
    return comment


def add_task_comment(project_id: str, task_id: str, data: TaskCommentInput, user: User) -> TaskComment:
    task = get_task(project_id, task_id)
    comment = TaskComment(task_id=task.id, comment=data.comment)
    comment.stamp_created(user)
    db.session.add(comment)
    _commit("adding task comment")
    return comment


def list_task_comments(project_id: str, task_id: str) -> list[TaskComment]:
    task = get_task(project_id, task_id)
    return (
        TaskComment.query.filter_by(task_id=task.id)
        .order_by(TaskComment.created_at.asc())
        .all()
    )


def update_task_comment(
    project_id: str, task_id: str, comment_id: str, data: TaskCommentInput, user: User
) -> TaskComment:
    comment = _get_comment(get_task(project_id, task_id), comment_id)
    comment.comment = data.comment
    comment.stamp_updated(user)
    _commit("updating task comment")
    return comment


def delete_task_comment(project_id: str, task_id: str, comment_id: str) -> None:
    comment = _get_comment(get_task(project_id, task_id), comment_id)
    db.session.delete(comment)
    _commit("deleting task comment")
