"""Route guards.

A guard is a predicate over the ``RequestContext`` of the current request.
Guards never raise: a denial is ``False``, optionally with the reason stored
on ``context.rejection``. ``guarded`` evaluates the guards of a view in order
and turns the first denial into an error response.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Optional

from flask import request

from models.user import User
from services.errors import AccessDenied, AuthenticationFailed, ServiceError
from services.metrics import current_metrics
from services.project_member_service import is_project_member
from services.session_store import SessionData


@dataclass
class RequestContext:
    """Everything guards and handlers may know about the current request."""

    session: Optional[SessionData] = None
    user: Optional[User] = None
    params: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    rejection: Optional[ServiceError] = None

    def is_authenticated(self) -> bool:
        return self.user is not None


class Guard(ABC):
    @abstractmethod
    def can_activate(self, context: RequestContext) -> bool:
        """Return True when the request may reach its handler."""


class AuthenticatedGuard(Guard):
    def can_activate(self, context: RequestContext) -> bool:
        return context.is_authenticated()


class LocalAuthGuard(Guard):
    """Authenticates the request body with a credential strategy.

    On success the verified user is attached to the context; the handler is
    responsible for starting a session.
    """

    def __init__(self, strategy):
        self.strategy = strategy

    def can_activate(self, context: RequestContext) -> bool:
        try:
            user = self.strategy.validate(context.body)
        except ServiceError as error:
            context.rejection = error
            return False
        context.user = user
        return True


class AdminGuard(Guard):
    def can_activate(self, context: RequestContext) -> bool:
        if not context.is_authenticated():
            return False
        if not context.user.is_admin:
            context.rejection = AccessDenied("Only administrators can perform this action")
            return False
        return True


class ProjectMemberGuard(Guard):
    """Lets through members of the project named by the ``project_id`` route parameter."""

    def __init__(self, is_member: Callable[[str, str], bool] = is_project_member):
        self.is_member = is_member

    def can_activate(self, context: RequestContext) -> bool:
        if not context.is_authenticated():
            logging.warning("ProjectMemberGuard: user not authenticated")
            return False

        project_id = context.params.get("project_id")
        if not project_id:
            logging.warning("ProjectMemberGuard: no project id in route parameters")
            return False

        if not self.is_member(project_id, context.user.id):
            logging.warning(
                "Unauthorized project access attempt: user=%s project=%s",
                context.user.id,
                project_id,
            )
            context.rejection = AccessDenied("You are not a member of this project")
            return False
        return True


def rejection_for(context: RequestContext) -> ServiceError:
    if context.rejection is not None:
        return context.rejection
    if not context.is_authenticated():
        return AuthenticationFailed()
    return AccessDenied()


def _record_denial(context: RequestContext, error: ServiceError) -> None:
    metrics = current_metrics()
    if metrics is not None and isinstance(error, AccessDenied):
        user_id = context.user.id if context.user is not None else None
        metrics.track_authorization_failure(request.endpoint or request.path, user_id, error.message)


def guarded(sessions, *guards: Guard, on_denied: Optional[Callable[[RequestContext], None]] = None):
    """Resolve the request context and check ``guards`` before calling the view.

    The view receives the context as its first positional argument followed
    by its route parameters. ``on_denied`` is called with the context before
    the rejection is raised.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(**params):
            context = sessions.context_for(request, params)
            for guard in guards:
                if not guard.can_activate(context):
                    error = rejection_for(context)
                    _record_denial(context, error)
                    if on_denied is not None:
                        on_denied(context)
                    raise error
            return view(context, **params)

        return wrapper

    return decorator
