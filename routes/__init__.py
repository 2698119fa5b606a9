"""Shared helpers for route blueprints."""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from flask import g, request

__all__ = ["problem_details", "read_json_payload"]

PROBLEM_TYPE_BASE_URI = "https://httpstatuses.io/"


def read_json_payload() -> dict[str, Any]:
    """Return the JSON object sent with the request, or an empty dict."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _status_title(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown Error"


def problem_details(status: int, detail: str, *, errors: list[str] | None = None) -> dict[str, Any]:
    """Build an RFC 7807 problem document.

    ``message`` mirrors ``detail`` for clients that only read that field.
    """
    body: dict[str, Any] = {
        "type": f"{PROBLEM_TYPE_BASE_URI}{status}",
        "title": _status_title(status),
        "status": status,
        "detail": detail,
        "instance": request.path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": detail,
    }
    correlation_id = getattr(g, "correlation_id", None)
    if correlation_id:
        body["correlation_id"] = correlation_id
    if errors:
        body["errors"] = list(errors)
    return body
