"""Thin wrappers around the API endpoints, one class per resource."""

from __future__ import annotations

from typing import Any, Optional

from client.http import ApiClient, path


class AuthService:
    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, email: str, password: str) -> dict[str, Any]:
        return self.client.post("/api/auth/login", {"email": email, "password": password})

    def logout(self) -> dict[str, Any]:
        return self.client.post("/api/auth/logout")

    def me(self) -> Optional[dict[str, Any]]:
        return self.client.get("/api/auth/me")


class UsersService:
    def __init__(self, client: ApiClient):
        self.client = client

    def signup(self, email: str, password: str, name: str) -> dict[str, Any]:
        return self.client.post("/api/users", {"email": email, "password": password, "name": name})

    def create_admin(self, email: str, password: str, name: str) -> dict[str, Any]:
        payload = {"email": email, "password": password, "name": name}
        return self.client.post("/api/users/admin", payload)

    def list(self) -> list[dict[str, Any]]:
        return self.client.get("/api/users")

    def me(self) -> dict[str, Any]:
        return self.client.get("/api/users/me")

    def delete(self, user_id: str) -> dict[str, Any]:
        return self.client.delete("/api/users" + path(user_id))


class ProjectsService:
    def __init__(self, client: ApiClient):
        self.client = client

    def create(self, name: str, description: Optional[str] = None) -> dict[str, Any]:
        payload = {"name": name}
        if description is not None:
            payload["description"] = description
        return self.client.post("/api/projects", payload)

    def list(self) -> list[dict[str, Any]]:
        return self.client.get("/api/projects")

    def get(self, project_id: str) -> dict[str, Any]:
        return self.client.get("/api/projects" + path(project_id))


class TasksService:
    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _tasks(project_id: str, *segments: str) -> str:
        return "/api/projects" + path(project_id, "tasks", *segments)

    def create(
        self,
        project_id: str,
        title: str,
        description: str = "",
        summary: Optional[str] = None,
    ) -> dict[str, Any]:
        payload = {"title": title, "description": description}
        if summary is not None:
            payload["summary"] = summary
        return self.client.post(self._tasks(project_id), payload)

    def list(self, project_id: str) -> list[dict[str, Any]]:
        return self.client.get(self._tasks(project_id))

    def get(self, project_id: str, task_id: str) -> dict[str, Any]:
        return self.client.get(self._tasks(project_id, task_id))

    def update(self, project_id: str, task_id: str, **changes: Any) -> dict[str, Any]:
        return self.client.patch(self._tasks(project_id, task_id), changes)

    def delete(self, project_id: str, task_id: str) -> None:
        self.client.delete(self._tasks(project_id, task_id))

    def add_comment(self, project_id: str, task_id: str, comment: str) -> dict[str, Any]:
        return self.client.post(self._tasks(project_id, task_id, "comments"), {"comment": comment})

    def list_comments(self, project_id: str, task_id: str) -> list[dict[str, Any]]:
        return self.client.get(self._tasks(project_id, task_id, "comments"))

    def update_comment(
        self, project_id: str, task_id: str, comment_id: str, comment: str
    ) -> dict[str, Any]:
        endpoint = self._tasks(project_id, task_id, "comments", comment_id)
        return self.client.patch(endpoint, {"comment": comment})

    def delete_comment(self, project_id: str, task_id: str, comment_id: str) -> None:
        self.client.delete(self._tasks(project_id, task_id, "comments", comment_id))


class ProjectMembersService:
    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _members(project_id: str, *segments: str) -> str:
        return "/api/projects" + path(project_id, "members", *segments)

    def list(self, project_id: str) -> list[dict[str, Any]]:
        return self.client.get(self._members(project_id))

    def add(self, project_id: str, user_id: str, role: str = "USER") -> dict[str, Any]:
        return self.client.post(self._members(project_id), {"user_id": user_id, "role": role})

    def update_role(self, project_id: str, user_id: str, role: str) -> dict[str, Any]:
        return self.client.patch(self._members(project_id, user_id, "role"), {"role": role})

    def remove(self, project_id: str, user_id: str) -> None:
        self.client.delete(self._members(project_id, user_id))
