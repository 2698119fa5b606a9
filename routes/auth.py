"""Login, logout and current-session endpoints."""
from __future__ import annotations

from flask import Blueprint, jsonify

from routes.guards import Guard, RequestContext, guarded
from routes.sessions import SessionManager
from services.metrics import MetricsRegistry


def create_auth_blueprint(
    sessions: SessionManager, local_guard: Guard, metrics: MetricsRegistry
) -> Blueprint:
    auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

    def login_failed(context: RequestContext):
        metrics.track_auth_event("login_failure")

    @auth_bp.route("/login", methods=["POST"])
    @guarded(sessions, local_guard, on_denied=login_failed)
    def login(context: RequestContext):
        """Start a session for the user verified by the local guard."""
        session = sessions.start(context.user, previous=context.session)
        metrics.track_auth_event("login_success", context.user.id)
        response = jsonify(context.user.to_dict())
        sessions.write_cookie(response, session)
        return response

    @auth_bp.route("/logout", methods=["POST"])
    @guarded(sessions)
    def logout(context: RequestContext):
        if context.session is not None:
            metrics.track_auth_event("logout", context.session.user_id)
        sessions.end(context.session)
        response = jsonify({"success": True})
        sessions.clear_cookie(response)
        return response

    @auth_bp.route("/me", methods=["GET"])
    @guarded(sessions)
    def current_session(context: RequestContext):
        if context.session is None:
            return jsonify(None)
        return jsonify(context.session.to_dict())

    return auth_bp
