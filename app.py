import logging
import time
import uuid
from datetime import timedelta

import click
from flask import Flask, current_app, g, jsonify, request
from flask.cli import AppGroup
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import DEFAULT_SECRET_KEY, Config
from database import db

# Models import should be after initializing db
from models.user import User
from models.user_session import UserSession
from models.project import Project
from models.project_member import ProjectMember
from models.task import Task
from models.task_comment import TaskComment

from forms import validate_signup
from routes import problem_details
from routes.auth import create_auth_blueprint
from routes.guards import AdminGuard, AuthenticatedGuard, LocalAuthGuard, ProjectMemberGuard
from routes.metrics import create_metrics_blueprint
from routes.project_members import create_project_members_blueprint
from routes.projects import create_projects_blueprint
from routes.sessions import SessionManager
from routes.users import create_users_blueprint
from services.auth_service import LocalStrategy, create_user, list_users
from services.errors import ServiceError
from services.metrics import METRICS_KEY, MetricsRegistry
from services.session_store import DatabaseSessionStore, MemorySessionStore, SessionStore

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."
SESSION_MANAGER_KEY = "teamtasks.sessions"

# Create flask command lines to update the db based on the model
# Useage:
# Create a migration script in ./migrations/versions
# > flask db migrate -m "Update comments"
# Run the update
# > flask db upgrade
migrate = Migrate()

users_cli = AppGroup("users", help="Manage user accounts.")
sessions_cli = AppGroup("sessions", help="Manage login sessions.")


def create_session_store(kind: str) -> SessionStore:
    if kind == "memory":
        return MemorySessionStore()
    if kind == "database":
        return DatabaseSessionStore()
    raise ValueError(f"Unknown session store '{kind}'")


def create_app(overrides=None):
    """Build the application.

    ``overrides`` is applied on top of ``Config``; tests use it to point the
    app at a temporary database.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"])
    if app.config["SECRET_KEY"] == DEFAULT_SECRET_KEY and not app.testing:
        logging.warning("SECRET_KEY is not set; using the development default")

    db.init_app(app)
    migrate.init_app(app, db)

    sessions = SessionManager(
        create_session_store(app.config["SESSION_STORE"]),
        secret_key=app.config["SECRET_KEY"],
        cookie_name=app.config["AUTH_COOKIE_NAME"],
        lifetime=timedelta(seconds=app.config["SESSION_LIFETIME_SECONDS"]),
        secure=app.config["AUTH_COOKIE_SECURE"],
        samesite=app.config["AUTH_COOKIE_SAMESITE"],
    )
    app.extensions[SESSION_MANAGER_KEY] = sessions
    metrics = MetricsRegistry(report_interval=app.config["METRICS_REPORT_INTERVAL_SECONDS"])
    app.extensions[METRICS_KEY] = metrics

    # Guards are shared by every blueprint
    authenticated = AuthenticatedGuard()
    admin = AdminGuard()
    project_member = ProjectMemberGuard()
    local = LocalAuthGuard(LocalStrategy())

    app.register_blueprint(create_auth_blueprint(sessions, local, metrics))
    app.register_blueprint(create_users_blueprint(sessions, authenticated, admin))
    app.register_blueprint(create_projects_blueprint(sessions, authenticated, project_member))
    app.register_blueprint(create_project_members_blueprint(sessions, authenticated, project_member))
    app.register_blueprint(create_metrics_blueprint(sessions, authenticated, admin, metrics))

    _register_request_hooks(app, metrics)
    _register_error_handlers(app)
    app.cli.add_command(users_cli)
    app.cli.add_command(sessions_cli)
    return app


# Request Hooks
# ------------------------------
def _register_request_hooks(app, metrics):
    @app.before_request
    def assign_correlation_id():
        g.correlation_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = getattr(g, "request_started", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        correlation_id = getattr(g, "correlation_id", None)
        if correlation_id:
            response.headers["X-Request-ID"] = correlation_id
        logging.info(
            "%s %s -> %s (%.1f ms) [%s]",
            request.method,
            request.path,
            response.status_code,
            elapsed_ms,
            correlation_id,
        )
        route = request.url_rule.rule if request.url_rule is not None else "unmatched"
        metrics.record_histogram(
            "http_request_duration_ms",
            elapsed_ms,
            {"method": request.method, "route": route, "status": str(response.status_code)},
        )
        metrics.report_if_due()
        return response

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin and origin == app.config["CORS_ORIGIN"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Vary"] = "Origin"
            if request.method == "OPTIONS":
                response.headers["Access-Control-Allow-Methods"] = "GET, POST, PATCH, DELETE, OPTIONS"
                response.headers["Access-Control-Allow-Headers"] = "Content-Type, X-Request-ID"
        return response


# Error Handlers
# ------------------------------
def _register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(error: ServiceError):
        if error.status_code >= 500:
            logging.error("Service error: %s", error.message, exc_info=True)
        body = problem_details(error.status_code, error.message, errors=error.errors)
        return jsonify(body), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        if not request.path.startswith("/api"):
            return error
        return jsonify(problem_details(error.code, error.description)), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logging.exception("Unhandled error on %s %s", request.method, request.path)
        db.session.rollback()
        detail = INTERNAL_ERROR_MESSAGE
        if app.config["EXPOSE_INTERNAL_ERRORS"]:
            detail = f"{INTERNAL_ERROR_MESSAGE} ({error})"
        return jsonify(problem_details(500, detail)), 500


# Command Line
# ------------------------------
@users_cli.command("create-admin")
@click.argument("email")
@click.argument("name")
@click.password_option()
def create_admin_command(email, name, password):
    """Create an administrator account."""
    try:
        data = validate_signup({"email": email, "password": password, "name": name}).unwrap()
        user = create_user(data, role=User.ADMIN)
    except ServiceError as error:
        raise click.ClickException(error.message) from error
    click.echo(f"Created administrator {user.email} ({user.id})")


@users_cli.command("list")
def list_users_command():
    """List every user account."""
    for user in list_users():
        click.echo(f"{user.id}\t{user.role}\t{user.email}\t{user.name}")


@sessions_cli.command("purge")
def purge_sessions_command():
    """Remove expired sessions from the store."""
    removed = current_app.extensions[SESSION_MANAGER_KEY].store.purge_expired()
    click.echo(f"Removed {removed} expired session(s)")


# Application Execution
# ------------------------------
if __name__ == "__main__":
    create_app().run(debug=True)
