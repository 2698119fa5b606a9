"""Administrator view of the collected metrics."""
from __future__ import annotations

from flask import Blueprint, jsonify

from routes.guards import Guard, RequestContext, guarded
from routes.sessions import SessionManager
from services.metrics import MetricsRegistry


def create_metrics_blueprint(
    sessions: SessionManager, authenticated: Guard, admin: Guard, metrics: MetricsRegistry
) -> Blueprint:
    metrics_bp = Blueprint("metrics", __name__, url_prefix="/api/metrics")

    @metrics_bp.route("", methods=["GET"])
    @guarded(sessions, authenticated, admin)
    def current_window(context: RequestContext):
        return jsonify(metrics.snapshot())

    return metrics_bp
