"""Project, task and task comment endpoints.

Every route below ``/api/projects/<project_id>`` is restricted to members of
that project.
"""
from __future__ import annotations

from flask import Blueprint, jsonify

from forms import (
    validate_create_project,
    validate_create_task,
    validate_task_comment,
    validate_update_task,
)
from routes.guards import Guard, RequestContext, guarded
from routes.sessions import SessionManager
from services.project_service import create_project, get_project, list_user_projects
from services.task_service import (
    add_task_comment,
    create_task,
    delete_task,
    delete_task_comment,
    get_task,
    list_project_tasks,
    list_task_comments,
    update_task,
    update_task_comment,
)


def create_projects_blueprint(
    sessions: SessionManager, authenticated: Guard, project_member: Guard
) -> Blueprint:
    projects_bp = Blueprint("projects", __name__, url_prefix="/api/projects")
    member_only = guarded(sessions, authenticated, project_member)

    @projects_bp.route("", methods=["POST"])
    @guarded(sessions, authenticated)
    def add_project(context: RequestContext):
        data = validate_create_project(context.body).unwrap()
        return jsonify(create_project(data, context.user).to_dict()), 201

    @projects_bp.route("", methods=["GET"])
    @guarded(sessions, authenticated)
    def list_projects(context: RequestContext):
        return jsonify([project.to_dict() for project in list_user_projects(context.user)])

    @projects_bp.route("/<string:project_id>", methods=["GET"])
    @member_only
    def project_detail(context: RequestContext, project_id: str):
        return jsonify(get_project(project_id).to_dict())

    # Tasks
    # ------------------------------
    @projects_bp.route("/<string:project_id>/tasks", methods=["POST"])
    @member_only
    def add_task(context: RequestContext, project_id: str):
        data = validate_create_task(context.body).unwrap()
        return jsonify(create_task(project_id, data, context.user).to_dict()), 201

    @projects_bp.route("/<string:project_id>/tasks", methods=["GET"])
    @member_only
    def list_tasks(context: RequestContext, project_id: str):
        return jsonify([task.to_dict() for task in list_project_tasks(project_id)])

    @projects_bp.route("/<string:project_id>/tasks/<string:task_id>", methods=["GET"])
    @member_only
    def task_detail(context: RequestContext, project_id: str, task_id: str):
        return jsonify(get_task(project_id, task_id).to_dict())

    @projects_bp.route("/<string:project_id>/tasks/<string:task_id>", methods=["PATCH"])
    @member_only
    def edit_task(context: RequestContext, project_id: str, task_id: str):
        data = validate_update_task(context.body).unwrap()
        return jsonify(update_task(project_id, task_id, data, context.user).to_dict())

    @projects_bp.route("/<string:project_id>/tasks/<string:task_id>", methods=["DELETE"])
    @member_only
    def remove_task(context: RequestContext, project_id: str, task_id: str):
        delete_task(project_id, task_id)
        return "", 204

    # Task comments
    # ------------------------------
    @projects_bp.route("/<string:project_id>/tasks/<string:task_id>/comments", methods=["POST"])
    @member_only
    def add_comment(context: RequestContext, project_id: str, task_id: str):
        data = validate_task_comment(context.body).unwrap()
        comment = add_task_comment(project_id, task_id, data, context.user)
        return jsonify(comment.to_dict()), 201

    @projects_bp.route("/<string:project_id>/tasks/<string:task_id>/comments", methods=["GET"])
    @member_only
    def list_comments(context: RequestContext, project_id: str, task_id: str):
        return jsonify([comment.to_dict() for comment in list_task_comments(project_id, task_id)])

    @projects_bp.route(
        "/<string:project_id>/tasks/<string:task_id>/comments/<string:comment_id>",
        methods=["PATCH"],
    )
    @member_only
    def edit_comment(context: RequestContext, project_id: str, task_id: str, comment_id: str):
        data = validate_task_comment(context.body).unwrap()
        comment = update_task_comment(project_id, task_id, comment_id, data, context.user)
        return jsonify(comment.to_dict())

    @projects_bp.route(
        "/<string:project_id>/tasks/<string:task_id>/comments/<string:comment_id>",
        methods=["DELETE"],
    )
    @member_only
    def remove_comment(context: RequestContext, project_id: str, task_id: str, comment_id: str):
        delete_task_comment(project_id, task_id, comment_id)
        return "", 204

    return projects_bp
