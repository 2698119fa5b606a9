"""Project membership management.

Only project administrators can add, remove or re-role members. The creator
of a project always stays an administrator of it.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database import db
from forms import ProjectMemberInput
from models.project_member import ProjectMember, ProjectRole
from models.user import User
from services.errors import AccessDenied, Conflict, NotFound
from services.project_service import get_project


def find_member(project_id: str, user_id: str) -> ProjectMember | None:
    return ProjectMember.query.filter_by(project_id=project_id, user_id=user_id).one_or_none()


def is_project_member(project_id: str, user_id: str) -> bool:
    return find_member(project_id, user_id) is not None


def require_project_member(project_id: str, user: User) -> ProjectMember:
    member = find_member(project_id, user.id)
    if member is None:
        raise AccessDenied("You are not a member of this project")
    return member


def require_project_admin(project_id: str, user: User) -> ProjectMember:
    member = require_project_member(project_id, user)
    if not member.is_admin:
        raise AccessDenied("You must be a project administrator to perform this action")
    return member


def get_project_members(project_id: str, user: User) -> list[ProjectMember]:
    require_project_member(project_id, user)
    return (
        ProjectMember.query.filter_by(project_id=project_id)
        .order_by(ProjectMember.created_at.asc())
        .all()
    )


def add_member(project_id: str, user: User, data: ProjectMemberInput) -> ProjectMember:
    require_project_admin(project_id, user)
    if db.session.get(User, data.user_id) is None:
        raise NotFound(f"No user exists with ID {data.user_id}")
    if find_member(project_id, data.user_id) is not None:
        raise Conflict("User is already a project member")

    now = datetime.utcnow()
    member = ProjectMember(
        project_id=project_id,
        user_id=data.user_id,
        role=data.role.value,
        created_at=now,
        last_updated_at=now,
    )
    db.session.add(member)
    _commit("adding project member", conflict_message="User is already a project member")
    return member


def remove_member(project_id: str, user: User, target_user_id: str) -> None:
    require_project_admin(project_id, user)
    project = get_project(project_id)
    if project.created_by_id == target_user_id:
        raise AccessDenied("The project creator cannot be removed from the project")
    member = find_member(project_id, target_user_id)
    if member is None:
        raise NotFound("User is not a member of this project")
    db.session.delete(member)
    _commit("removing project member")


def update_member_role(
    project_id: str, user: User, target_user_id: str, role: ProjectRole
) -> ProjectMember:
    require_project_admin(project_id, user)
    project = get_project(project_id)
    if project.created_by_id == target_user_id:
        raise AccessDenied("The role of the project creator cannot be changed")
    member = find_member(project_id, target_user_id)
    if member is None:
        raise NotFound("User is not a member of this project")
    member.role_enum = role
    member.last_updated_at = datetime.utcnow()
    _commit("updating project member role")
    return member


def _commit(action: str, *, conflict_message: str | None = None) -> None:
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        if conflict_message:
            raise Conflict(conflict_message)
        logging.error("Integrity error while %s", action, exc_info=True)
        raise
    except SQLAlchemyError:
        db.session.rollback()
        logging.error("Database error while %s", action, exc_info=True)
        raise
