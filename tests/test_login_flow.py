import socket
import unittest

from client.http import ApiClient, ApiError
from client.services import AuthService
from client.login import LOGIN_FAILED_MESSAGE, LoginFlow, LoginState


class FakeAuth:
    def __init__(self, error=None):
        self.error = error
        self.calls = []
        self.seen_loading = None

    def login(self, email, password):
        self.calls.append((email, password))
        if self.error is not None:
            raise self.error
        return {"id": "u1", "email": email}


class LoginFlowTestCase(unittest.TestCase):
    def setUp(self):
        self.navigations = []

    def _flow(self, auth):
        return LoginFlow(auth, self.navigations.append)

    def test_starts_idle(self):
        flow = self._flow(FakeAuth())
        self.assertEqual(flow.state, LoginState.IDLE)
        self.assertFalse(flow.is_loading)
        self.assertIsNone(flow.error_message)

    def test_invalid_form_issues_no_request(self):
        auth = FakeAuth()
        flow = self._flow(auth)

        for email, password in (("a@example.com", ""), ("", "secret"), ("not-an-email", "secret")):
            with self.subTest(email=email, password=password):
                self.assertFalse(flow.submit(email, password))
                self.assertEqual(flow.state, LoginState.IDLE)

        self.assertEqual(auth.calls, [])
        self.assertEqual(self.navigations, [])

    def test_success_navigates_home(self):
        auth = FakeAuth()
        flow = self._flow(auth)

        self.assertTrue(flow.submit("a@example.com", "secret"))
        self.assertEqual(auth.calls, [("a@example.com", "secret")])
        self.assertEqual(flow.state, LoginState.SUCCESS)
        self.assertFalse(flow.is_loading)
        self.assertEqual(self.navigations, ["/"])

    def test_is_loading_while_submitting(self):
        flow = None

        class RecordingAuth(FakeAuth):
            def login(inner, email, password):
                inner.seen_loading = (flow.state, flow.is_loading)
                return super().login(email, password)

        auth = RecordingAuth()
        flow = self._flow(auth)
        flow.submit("a@example.com", "secret")

        self.assertEqual(auth.seen_loading, (LoginState.SUBMITTING, True))

    def test_failure_without_message_uses_fallback(self):
        flow = self._flow(FakeAuth(error=ApiError(401, {})))

        self.assertFalse(flow.submit("a@example.com", "secret"))
        self.assertEqual(flow.state, LoginState.FAILURE)
        self.assertFalse(flow.is_loading)
        self.assertEqual(flow.error_message, LOGIN_FAILED_MESSAGE)
        self.assertEqual(flow.error_message, "Invalid email or password")
        self.assertEqual(self.navigations, [])

    def test_failure_shows_server_message(self):
        flow = self._flow(FakeAuth(error=ApiError(401, {"message": "Account locked"})))

        flow.submit("a@example.com", "secret")
        self.assertEqual(flow.error_message, "Account locked")

    def test_resubmitting_clears_previous_error(self):
        auth = FakeAuth(error=ApiError(401, {"message": "Account locked"}))
        flow = self._flow(auth)
        flow.submit("a@example.com", "secret")

        auth.error = None
        flow.submit("a@example.com", "secret")
        self.assertIsNone(flow.error_message)
        self.assertEqual(flow.state, LoginState.SUCCESS)

    def test_unreachable_server_uses_fallback(self):
        flow = self._flow(FakeAuth(error=ApiError(0)))
        flow.submit("a@example.com", "secret")
        self.assertEqual(flow.error_message, "Invalid email or password")

    def test_timeout_ends_in_failure_state(self):
        class TimeoutOpener:
            def open(self, request, timeout=None):
                raise socket.timeout("timed out")

        flow = self._flow(AuthService(ApiClient(opener=TimeoutOpener())))

        self.assertFalse(flow.submit("a@example.com", "secret"))
        self.assertEqual(flow.state, LoginState.FAILURE)
        self.assertFalse(flow.is_loading)
        self.assertEqual(flow.error_message, "Invalid email or password")
        self.assertEqual(self.navigations, [])

    def test_whitespace_password_is_submitted(self):
        auth = FakeAuth()
        flow = self._flow(auth)

        self.assertTrue(flow.submit("a@example.com", "   "))
        self.assertEqual(auth.calls, [("a@example.com", "   ")])


if __name__ == "__main__":
    unittest.main()
