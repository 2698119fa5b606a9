"""Project membership endpoints."""
from __future__ import annotations

from flask import Blueprint, jsonify

from forms import validate_project_member, validate_project_role
from routes.guards import Guard, RequestContext, guarded
from routes.sessions import SessionManager
from services.project_member_service import (
    add_member,
    get_project_members,
    remove_member,
    update_member_role,
)


def create_project_members_blueprint(
    sessions: SessionManager, authenticated: Guard, project_member: Guard
) -> Blueprint:
    members_bp = Blueprint(
        "project_members", __name__, url_prefix="/api/projects/<string:project_id>/members"
    )
    member_only = guarded(sessions, authenticated, project_member)

    @members_bp.route("", methods=["GET"])
    @member_only
    def list_members(context: RequestContext, project_id: str):
        members = get_project_members(project_id, context.user)
        return jsonify([member.to_dict() for member in members])

    @members_bp.route("", methods=["POST"])
    @member_only
    def add_project_member(context: RequestContext, project_id: str):
        data = validate_project_member(context.body).unwrap()
        return jsonify(add_member(project_id, context.user, data).to_dict()), 201

    @members_bp.route("/<string:user_id>/role", methods=["PATCH"])
    @member_only
    def change_member_role(context: RequestContext, project_id: str, user_id: str):
        role = validate_project_role(context.body).unwrap()
        member = update_member_role(project_id, context.user, user_id, role)
        return jsonify(member.to_dict())

    @members_bp.route("/<string:user_id>", methods=["DELETE"])
    @member_only
    def remove_project_member(context: RequestContext, project_id: str, user_id: str):
        remove_member(project_id, context.user, user_id)
        return "", 204

    return members_bp
