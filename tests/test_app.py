import unittest

from app import create_app, create_session_store
from models.user import User
from services.session_store import DatabaseSessionStore, MemorySessionStore
from tests.utils.app import ApiTestCase


class ErrorResponsesTestCase(ApiTestCase):
    def test_unknown_api_route_is_problem_json(self):
        response = self.client.get("/api/nothing-here")

        self.assertEqual(response.status_code, 404)
        body = response.get_json()
        self.assertEqual(body["status"], 404)
        self.assertEqual(body["title"], "Not Found")
        self.assertEqual(body["instance"], "/api/nothing-here")
        self.assertIn("message", body)
        self.assertIn("timestamp", body)

    def test_wrong_method_is_problem_json(self):
        response = self.client.put("/api/projects")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.get_json()["status"], 405)

    def test_validation_problem_lists_errors(self):
        self.login_as_new_user("pat@example.com")
        response = self.client.post("/api/projects", json={})

        body = response.get_json()
        self.assertEqual(body["type"], "https://httpstatuses.io/400")
        self.assertEqual(body["detail"], "Project name is required")
        self.assertEqual(body["errors"], ["Project name is required"])

    def test_unexpected_error_hides_details(self):
        @self.app.route("/api/boom")
        def boom():
            raise RuntimeError("secret internals")

        with self.assertLogs(level="ERROR"):
            response = self.client.get("/api/boom")

        self.assertEqual(response.status_code, 500)
        body = response.get_json()
        self.assertEqual(body["message"], "An internal server error occurred.")
        self.assertNotIn("secret internals", response.get_data(as_text=True))


class RequestHooksTestCase(ApiTestCase):
    def test_correlation_id_is_echoed(self):
        response = self.client.get("/api/auth/me", headers={"X-Request-ID": "abc-123"})
        self.assertEqual(response.headers["X-Request-ID"], "abc-123")

    def test_correlation_id_is_generated(self):
        response = self.client.get("/api/auth/me")
        self.assertTrue(response.headers["X-Request-ID"])

    def test_problem_carries_correlation_id(self):
        response = self.client.get("/api/users/me", headers={"X-Request-ID": "req-9"})
        self.assertEqual(response.get_json()["correlation_id"], "req-9")

    def test_cors_for_configured_origin(self):
        response = self.client.get("/api/auth/me", headers={"Origin": "http://localhost:1234"})
        self.assertEqual(response.headers["Access-Control-Allow-Origin"], "http://localhost:1234")
        self.assertEqual(response.headers["Access-Control-Allow-Credentials"], "true")

        other = self.client.get("/api/auth/me", headers={"Origin": "http://evil.example.com"})
        self.assertNotIn("Access-Control-Allow-Origin", other.headers)


class CommandLineTestCase(ApiTestCase):
    def test_create_admin_and_list(self):
        runner = self.app.test_cli_runner()
        result = runner.invoke(
            args=["users", "create-admin", "Root@Example.com", "Root", "--password", "password123"]
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("root@example.com", result.output)
        with self.app.app_context():
            self.assertEqual(User.query.one().role, User.ADMIN)

        result = runner.invoke(args=["users", "list"])
        self.assertIn("ADMIN\troot@example.com\tRoot", result.output)

    def test_create_admin_rejects_short_password(self):
        runner = self.app.test_cli_runner()
        result = runner.invoke(args=["users", "create-admin", "a@example.com", "A", "--password", "short"])

        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Password must be at least 8 characters long", result.output)

    def test_purge_sessions(self):
        self.login_as_new_user("quinn@example.com")
        result = self.app.test_cli_runner().invoke(args=["sessions", "purge"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Removed 0 expired session(s)", result.output)


class SessionStoreSelectionTestCase(unittest.TestCase):
    def test_known_stores(self):
        self.assertIsInstance(create_session_store("memory"), MemorySessionStore)
        self.assertIsInstance(create_session_store("database"), DatabaseSessionStore)

    def test_unknown_store_is_rejected(self):
        with self.assertRaises(ValueError):
            create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://", "SESSION_STORE": "redis"})


if __name__ == "__main__":
    unittest.main()
