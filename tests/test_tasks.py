import unittest

from database import db
from models.task import Task
from models.task_comment import TaskComment
from tests.utils.app import ApiTestCase


class TasksTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.owner_id = self.login_as_new_user("owner@example.com", "Owner")
        self.project_id = self.create_project("Apollo")
        self.tasks_url = f"/api/projects/{self.project_id}/tasks"

    def test_create_and_read_task(self):
        response = self.client.post(
            self.tasks_url,
            json={"title": "  Write docs ", "summary": "Short", "description": "**bold**"},
        )

        self.assertEqual(response.status_code, 201)
        task = response.get_json()
        self.assertEqual(task["title"], "Write docs")
        self.assertEqual(task["summary"], "Short")
        self.assertEqual(task["project_id"], self.project_id)
        self.assertIn("<strong>bold</strong>", task["description_html"])
        self.assertEqual(task["created_by_name"], "Owner")

        detail = self.client.get(f"{self.tasks_url}/{task['id']}")
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.get_json()["id"], task["id"])

        listing = self.client.get(self.tasks_url)
        self.assertEqual([item["id"] for item in listing.get_json()], [task["id"]])

    def test_title_is_required(self):
        response = self.client.post(self.tasks_url, json={"title": "  "})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["errors"], ["Task title is required"])

    def test_update_only_changes_supplied_fields(self):
        task_id = self.create_task(self.project_id, "Write docs", summary="Keep me")
        editor = self.app.test_client()
        editor_id = self.login_as_new_user("editor@example.com", "Editor", client=editor)
        self.client.post(
            f"/api/projects/{self.project_id}/members", json={"user_id": editor_id, "role": "USER"}
        )

        response = editor.patch(f"{self.tasks_url}/{task_id}", json={"title": "Write more docs"})

        self.assertEqual(response.status_code, 200)
        task = response.get_json()
        self.assertEqual(task["title"], "Write more docs")
        self.assertEqual(task["summary"], "Keep me")
        self.assertEqual(task["created_by"], self.owner_id)
        self.assertEqual(task["last_updated_by"], editor_id)

    def test_update_rejects_blank_title(self):
        task_id = self.create_task(self.project_id)
        response = self.client.patch(f"{self.tasks_url}/{task_id}", json={"title": ""})
        self.assertEqual(response.status_code, 400)

    def test_task_of_other_project_is_not_found(self):
        other_project = self.create_project("Gemini")
        task_id = self.create_task(other_project)

        response = self.client.get(f"{self.tasks_url}/{task_id}")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Task not found")

    def test_non_member_cannot_touch_tasks(self):
        outsider = self.app.test_client()
        self.login_as_new_user("outsider@example.com", client=outsider)

        self.assertEqual(outsider.get(self.tasks_url).status_code, 403)
        self.assertEqual(outsider.post(self.tasks_url, json={"title": "x"}).status_code, 403)


class TaskCommentsTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.owner_id = self.login_as_new_user("owner@example.com", "Owner")
        self.project_id = self.create_project("Apollo")
        self.task_id = self.create_task(self.project_id)
        self.comments_url = f"/api/projects/{self.project_id}/tasks/{self.task_id}/comments"

    def _add_member(self, email, name):
        member_client = self.app.test_client()
        member_id = self.login_as_new_user(email, name, client=member_client)
        response = self.client.post(
            f"/api/projects/{self.project_id}/members", json={"user_id": member_id, "role": "USER"}
        )
        self.assertEqual(response.status_code, 201)
        return member_id, member_client

    def test_add_list_edit_delete_comment(self):
        response = self.client.post(self.comments_url, json={"comment": "  Looks *good*  "})
        self.assertEqual(response.status_code, 201)
        comment = response.get_json()
        self.assertEqual(comment["comment"], "Looks *good*")
        self.assertIn("<em>good</em>", comment["comment_html"])
        self.assertEqual(comment["created_by"], self.owner_id)

        listing = self.client.get(self.comments_url)
        self.assertEqual([item["id"] for item in listing.get_json()], [comment["id"]])

        edited = self.client.patch(f"{self.comments_url}/{comment['id']}", json={"comment": "Done"})
        self.assertEqual(edited.status_code, 200)
        self.assertEqual(edited.get_json()["comment"], "Done")

        deleted = self.client.delete(f"{self.comments_url}/{comment['id']}")
        self.assertEqual(deleted.status_code, 204)
        self.assertEqual(self.client.get(self.comments_url).get_json(), [])

    def test_blank_comment_is_rejected(self):
        response = self.client.post(self.comments_url, json={"comment": "   "})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["errors"], ["Comment cannot be blank"])

    def test_list_valued_comment_is_rejected(self):
        response = self.client.post(self.comments_url, json={"comment": ["first", "second"]})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["errors"], ["comment must be a string"])
        self.assertEqual(self.client.get(self.comments_url).get_json(), [])

    def test_unknown_comment_is_not_found(self):
        response = self.client.patch(f"{self.comments_url}/missing", json={"comment": "x"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["message"], "Comment not found")

    def test_deleting_task_removes_its_comments(self):
        self.client.post(self.comments_url, json={"comment": "first"})
        self.client.post(self.comments_url, json={"comment": "second"})

        response = self.client.delete(f"/api/projects/{self.project_id}/tasks/{self.task_id}")

        self.assertEqual(response.status_code, 204)
        with self.app.app_context():
            self.assertIsNone(db.session.get(Task, self.task_id))
            self.assertEqual(TaskComment.query.count(), 0)

    def test_deleting_author_removes_their_comments(self):
        author_id, author = self._add_member("author@example.com", "Author")
        author.post(self.comments_url, json={"comment": "by author"})
        kept = self.client.post(self.comments_url, json={"comment": "by owner"}).get_json()

        admin = self.app.test_client()
        self.login_as_new_user("root@example.com", "Root", role="ADMIN", client=admin)
        self.assertEqual(admin.delete(f"/api/users/{author_id}").status_code, 200)

        remaining = self.client.get(self.comments_url).get_json()
        self.assertEqual([item["id"] for item in remaining], [kept["id"]])

    def test_deleting_last_editor_removes_edited_comments(self):
        editor_id, editor = self._add_member("editor@example.com", "Editor")
        comment = self.client.post(self.comments_url, json={"comment": "draft"}).get_json()
        response = editor.patch(f"{self.comments_url}/{comment['id']}", json={"comment": "final"})
        self.assertEqual(response.get_json()["last_updated_by"], editor_id)

        admin = self.app.test_client()
        self.login_as_new_user("root@example.com", "Root", role="ADMIN", client=admin)
        admin.delete(f"/api/users/{editor_id}")

        with self.app.app_context():
            self.assertEqual(TaskComment.query.count(), 0)


if __name__ == "__main__":
    unittest.main()
