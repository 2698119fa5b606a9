import unittest

from database import db
from models.project import Project
from models.project_member import ProjectMember
from tests.utils.app import ApiTestCase


class ProjectsTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.user_id = self.login_as_new_user("owner@example.com", "Owner")

    def test_create_project_trims_and_makes_creator_admin(self):
        response = self.client.post(
            "/api/projects", json={"name": "  Apollo  ", "description": "  Moon landing  "}
        )

        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(body["name"], "Apollo")
        self.assertEqual(body["description"], "Moon landing")
        self.assertEqual(body["created_by"], self.user_id)
        self.assertEqual(body["last_updated_by"], self.user_id)

        with self.app.app_context():
            member = ProjectMember.query.filter_by(project_id=body["id"]).one()
            self.assertEqual(member.user_id, self.user_id)
            self.assertEqual(member.role, "ADMIN")

    def test_name_length_boundary(self):
        accepted = self.client.post("/api/projects", json={"name": "a" * 100})
        self.assertEqual(accepted.status_code, 201)

        rejected = self.client.post("/api/projects", json={"name": "b" * 101})
        self.assertEqual(rejected.status_code, 400)
        self.assertEqual(
            rejected.get_json()["errors"], ["Project name must not exceed 100 characters"]
        )
        with self.app.app_context():
            self.assertEqual(Project.query.count(), 1)

    def test_name_is_required(self):
        for payload in ({}, {"name": ""}, {"name": "   "}):
            with self.subTest(payload=payload):
                response = self.client.post("/api/projects", json=payload)
                self.assertEqual(response.status_code, 400)
                body = response.get_json()
                self.assertEqual(body["errors"], ["Project name is required"])
                self.assertEqual(body["message"], "Project name is required")

    def test_non_string_name_is_rejected(self):
        for name in (["Apollo", "x"], 42, {"value": "Apollo"}):
            with self.subTest(name=name):
                response = self.client.post("/api/projects", json={"name": name})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.get_json()["errors"], ["name must be a string"])
        with self.app.app_context():
            self.assertEqual(Project.query.count(), 0)

    def test_description_length_boundary(self):
        ok = self.client.post("/api/projects", json={"name": "Gemini", "description": "d" * 500})
        self.assertEqual(ok.status_code, 201)

        too_long = self.client.post(
            "/api/projects", json={"name": "Mercury", "description": "d" * 501}
        )
        self.assertEqual(too_long.status_code, 400)
        self.assertEqual(
            too_long.get_json()["errors"], ["Description must not exceed 500 characters"]
        )

    def test_blank_description_is_stored_as_null(self):
        response = self.client.post("/api/projects", json={"name": "Skylab", "description": "   "})
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.get_json()["description"])

    def test_duplicate_name_conflicts(self):
        self.create_project("Apollo")
        response = self.client.post("/api/projects", json={"name": "Apollo"})

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["message"], "Name already exists")

    def test_listing_only_returns_member_projects(self):
        own_id = self.create_project("Apollo")
        other_client = self.app.test_client()
        self.login_as_new_user("other@example.com", "Other", client=other_client)
        self.create_project("Vostok", client=other_client)

        response = self.client.get("/api/projects")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([project["id"] for project in response.get_json()], [own_id])

    def test_non_member_cannot_read_project(self):
        project_id = self.create_project("Apollo")
        outsider = self.app.test_client()
        self.login_as_new_user("outsider@example.com", "Outsider", client=outsider)

        response = outsider.get(f"/api/projects/{project_id}")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["message"], "You are not a member of this project")

        self.assertEqual(self.client.get(f"/api/projects/{project_id}").status_code, 200)

    def test_project_routes_require_authentication(self):
        anonymous = self.app.test_client()
        self.assertEqual(anonymous.get("/api/projects").status_code, 401)
        self.assertEqual(anonymous.post("/api/projects", json={"name": "X"}).status_code, 401)

    def test_deleting_creator_removes_projects(self):
        project_id = self.create_project("Apollo")
        admin = self.app.test_client()
        self.login_as_new_user("root@example.com", "Root", role="ADMIN", client=admin)

        self.assertEqual(admin.delete(f"/api/users/{self.user_id}").status_code, 200)
        with self.app.app_context():
            self.assertIsNone(db.session.get(Project, project_id))
            self.assertEqual(ProjectMember.query.count(), 0)


if __name__ == "__main__":
    unittest.main()
