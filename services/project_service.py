"""Project creation and lookup."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database import db
from forms import CreateProjectInput
from models.project import Project
from models.project_member import ProjectMember, ProjectRole
from models.user import User
from services.errors import NotFound, Conflict


def create_project(data: CreateProjectInput, user: User) -> Project:
    """Create a project and make its creator the project administrator."""
    project = Project(name=data.name, description=data.description)
    project.stamp_created(user)
    member = ProjectMember(project=project, user=user, role=ProjectRole.ADMIN.value)
    member.created_at = member.last_updated_at = project.created_at
    db.session.add_all([project, member])
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Name already exists")
    except SQLAlchemyError:
        db.session.rollback()
        logging.error("Database error while creating project", exc_info=True)
        raise
    return project


def get_project(project_id: str) -> Project:
    project = db.session.get(Project, project_id)
    if project is None:
        raise NotFound(f"No project exists with ID {project_id}")
    return project


def list_user_projects(user: User) -> list[Project]:
    """Return the projects the user is a member of, newest first."""
    return (
        Project.query.join(ProjectMember, ProjectMember.project_id == Project.id)
        .filter(ProjectMember.user_id == user.id)
        .order_by(Project.created_at.desc())
        .all()
    )
