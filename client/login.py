"""Login screen flow: idle -> submitting -> success | failure."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

from werkzeug.datastructures import MultiDict
from wtforms import Form, PasswordField, StringField
from wtforms.validators import DataRequired, Email, InputRequired

from client.http import ApiError

LOGIN_FAILED_MESSAGE = "Invalid email or password"
HOME_PATH = "/"


class LoginForm(Form):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[InputRequired()])


class LoginState(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


class LoginFlow:
    """Drives one login form.

    ``auth`` needs a ``login(email, password)`` method (``AuthService``);
    ``navigate`` is called with the path to show after a successful login.
    """

    def __init__(self, auth, navigate: Callable[[str], None]):
        self.auth = auth
        self.navigate = navigate
        self.state = LoginState.IDLE
        self.is_loading = False
        self.error_message: Optional[str] = None
        self.form = LoginForm()

    def submit(self, email: str, password: str) -> bool:
        """Submit the credentials; return True once logged in.

        An invalid form is left untouched and nothing is sent.
        """
        self.form = LoginForm(formdata=MultiDict({"email": email or "", "password": password or ""}))
        if not self.form.validate():
            return False

        self.state = LoginState.SUBMITTING
        self.error_message = None
        self.is_loading = True
        try:
            self.auth.login(self.form.email.data, self.form.password.data)
        except ApiError as error:
            self.state = LoginState.FAILURE
            self.is_loading = False
            self.error_message = self._failure_message(error)
            logging.info("Login failed with status %s", error.status)
            return False

        self.state = LoginState.SUCCESS
        self.is_loading = False
        self.navigate(HOME_PATH)
        return True

    @staticmethod
    def _failure_message(error: ApiError) -> str:
        payload = error.payload if isinstance(error.payload, dict) else {}
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
        return LOGIN_FAILED_MESSAGE
