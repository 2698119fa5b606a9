"""Errors raised by the service layer.

Each error carries the HTTP status the API answers with; routes never build
error responses by hand, the application error handler renders them.
"""
from __future__ import annotations

from typing import Optional


class ServiceError(RuntimeError):
    """Base class for expected, user-facing failures."""

    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None, *, errors: Optional[list[str]] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = list(errors or [])


class ValidationFailed(ServiceError):
    """Raised when an input payload does not pass validation."""

    status_code = 400
    default_message = "Validation failed"

    @classmethod
    def from_field_errors(cls, field_errors) -> "ValidationFailed":
        messages = [error.message for error in field_errors]
        return cls(", ".join(messages) or None, errors=messages)


class AuthenticationFailed(ServiceError):
    status_code = 401
    default_message = "Authentication required."


class AccessDenied(ServiceError):
    status_code = 403
    default_message = "Forbidden resource"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Resource already exists"
