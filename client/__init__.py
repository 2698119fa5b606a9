"""Python client for the teamtasks API."""

from client.http import ApiClient, ApiError, extract_error_message
from client.login import LoginFlow, LoginForm, LoginState
from client.services import (
    AuthService,
    ProjectMembersService,
    ProjectsService,
    TasksService,
    UsersService,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthService",
    "LoginFlow",
    "LoginForm",
    "LoginState",
    "ProjectMembersService",
    "ProjectsService",
    "TasksService",
    "UsersService",
    "extract_error_message",
]
