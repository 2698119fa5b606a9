"""HTTP transport for the teamtasks API.

Every request goes through one opener that owns a cookie jar, so the session
cookie set at login is sent back on each later call.
"""

from __future__ import annotations

import json
import logging
from http.client import HTTPException
from http.cookiejar import CookieJar
from typing import Any, Optional
from urllib import request as urllib_request, error as urllib_error
from urllib.parse import quote

DEFAULT_BASE_URL = "http://localhost:5000"
CONNECTION_ERROR_MESSAGE = "Unable to connect to the server"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ApiError(RuntimeError):
    """Raised for any failed API call.

    ``status`` is 0 when the server could not be reached at all.
    """

    def __init__(self, status: int, payload: Any = None):
        self.status = status
        self.payload = payload if payload is not None else {}
        super().__init__(extract_error_message(self))


def extract_error_message(error: Any) -> str:
    """Pick the most helpful message out of a failed call."""
    status = getattr(error, "status", None)
    payload = getattr(error, "payload", None)
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(str(item) for item in errors)
        detail = payload.get("detail")
        if isinstance(detail, str) and detail:
            return detail
        message = payload.get("message")
        if isinstance(message, list) and message:
            return ", ".join(str(item) for item in message)
        if isinstance(message, str) and message:
            return message
    if status == 0:
        return CONNECTION_ERROR_MESSAGE
    return UNEXPECTED_ERROR_MESSAGE


def path(*segments: str) -> str:
    """Join URL segments, quoting each one."""
    return "/" + "/".join(quote(str(segment), safe="") for segment in segments)


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        opener=None,
        cookie_jar: Optional[CookieJar] = None,
        timeout: float = 20,
    ):
        self.base_url = base_url.rstrip("/")
        self.cookie_jar = cookie_jar if cookie_jar is not None else CookieJar()
        self.opener = opener or urllib_request.build_opener(
            urllib_request.HTTPCookieProcessor(self.cookie_jar)
        )
        self.timeout = timeout

    def request(self, method: str, endpoint: str, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {"Accept": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        request = urllib_request.Request(url, data=data, headers=headers, method=method)
        try:
            with self.opener.open(request, timeout=self.timeout) as response:
                status = response.getcode()
                raw = response.read()
        except urllib_error.HTTPError as error:
            status = error.code
            raw = error.read()
        except (OSError, HTTPException) as error:
            # URLError, timeouts, resets and truncated bodies alike
            logging.warning("Unable to reach %s: %s", url, error)
            raise ApiError(0) from error

        text = raw.decode("utf-8") if raw else ""
        try:
            body = json.loads(text) if text else None
        except json.JSONDecodeError:
            body = None
        if status >= 400:
            logging.warning("API call failed: %s %s -> %s", method, url, status)
            raise ApiError(status, body)
        return body

    def get(self, endpoint: str) -> Any:
        return self.request("GET", endpoint)

    def post(self, endpoint: str, payload: Optional[dict] = None) -> Any:
        return self.request("POST", endpoint, payload if payload is not None else {})

    def patch(self, endpoint: str, payload: dict) -> Any:
        return self.request("PATCH", endpoint, payload)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)
