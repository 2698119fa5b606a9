"""Application configuration loaded from the environment."""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = "dev-secret-change-me"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///teamtasks.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Server-side sessions; the cookie only carries a signed session id.
    SESSION_STORE = os.environ.get("SESSION_STORE", "database")
    SESSION_LIFETIME_SECONDS = int(os.environ.get("SESSION_LIFETIME_SECONDS", 24 * 60 * 60))
    AUTH_COOKIE_NAME = os.environ.get("AUTH_COOKIE_NAME", "sid")
    AUTH_COOKIE_SECURE = _env_flag("AUTH_COOKIE_SECURE")
    AUTH_COOKIE_SAMESITE = "Lax"

    CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "http://localhost:1234")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    # Seconds between logged metrics reports; 0 disables them.
    METRICS_REPORT_INTERVAL_SECONDS = int(os.environ.get("METRICS_REPORT_INTERVAL_SECONDS", 60))
    # Include exception detail in 5xx responses; development only.
    EXPOSE_INTERNAL_ERRORS = _env_flag("EXPOSE_INTERNAL_ERRORS")
