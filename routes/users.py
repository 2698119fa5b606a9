"""User account endpoints."""
from __future__ import annotations

from flask import Blueprint, jsonify

from forms import validate_signup
from routes.guards import Guard, RequestContext, guarded
from routes.sessions import SessionManager
from services.auth_service import create_user, delete_user, get_user, list_users


def create_users_blueprint(
    sessions: SessionManager, authenticated: Guard, admin: Guard
) -> Blueprint:
    users_bp = Blueprint("users", __name__, url_prefix="/api/users")

    @users_bp.route("", methods=["POST"])
    @guarded(sessions)
    def signup(context: RequestContext):
        """Create an account and log it in unless a user is already logged in."""
        data = validate_signup(context.body).unwrap()
        user = create_user(data)
        response = jsonify(user.to_dict())
        if not context.is_authenticated():
            sessions.write_cookie(response, sessions.start(user))
        return response, 201

    @users_bp.route("/admin", methods=["POST"])
    @guarded(sessions, authenticated, admin)
    def create_user_as_admin(context: RequestContext):
        data = validate_signup(context.body).unwrap()
        return jsonify(create_user(data).to_dict()), 201

    @users_bp.route("", methods=["GET"])
    @guarded(sessions, authenticated)
    def all_users(context: RequestContext):
        return jsonify([user.to_dict() for user in list_users()])

    @users_bp.route("/me", methods=["GET"])
    @guarded(sessions, authenticated)
    def current_user(context: RequestContext):
        return jsonify(get_user(context.user.id).to_dict())

    @users_bp.route("/<string:user_id>", methods=["DELETE"])
    @guarded(sessions, authenticated, admin)
    def remove_user(context: RequestContext, user_id: str):
        delete_user(user_id)
        return jsonify({"message": "User deleted successfully"})

    return users_bp
