"""Input forms for the JSON API.

Each payload is bound to a form, validated, and turned into a typed input
object. ``validate_*`` helpers never raise: they return a ``ValidationResult``
holding either the input object or the list of field errors.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional as Maybe, TypeVar

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import PasswordField, StringField, TextAreaField
from wtforms.validators import (
    AnyOf,
    DataRequired,
    Email,
    Length,
    Optional,
    ValidationError,
)

from models.project import PROJECT_DESCRIPTION_MAX_LENGTH, PROJECT_NAME_MAX_LENGTH
from models.project_member import ProjectRole
from models.task import (
    TASK_DESCRIPTION_MAX_LENGTH,
    TASK_SUMMARY_MAX_LENGTH,
    TASK_TITLE_MAX_LENGTH,
)
from models.task_comment import COMMENT_MAX_LENGTH
from services.errors import ValidationFailed

MIN_PASSWORD_LENGTH = 8
PROJECT_ROLES = [role.value for role in ProjectRole]

T = TypeVar("T")


def _trimmed(value):
    return value.strip() if isinstance(value, str) else ""


def _trimmed_or_none(value):
    if value and isinstance(value, str):
        return value.strip() or None
    return None


def _normalized_email(value):
    return value.strip().lower() if isinstance(value, str) else ""


class ApiForm(FlaskForm):
    """Base form for JSON payloads; the session cookie is SameSite=Lax."""

    class Meta:
        csrf = False


class ProjectForm(ApiForm):
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Project name is required"),
            Length(
                max=PROJECT_NAME_MAX_LENGTH,
                message=f"Project name must not exceed {PROJECT_NAME_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed],
    )
    description = TextAreaField(
        "Description",
        validators=[
            Optional(),
            Length(
                max=PROJECT_DESCRIPTION_MAX_LENGTH,
                message=f"Description must not exceed {PROJECT_DESCRIPTION_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed_or_none],
    )


class TaskForm(ApiForm):
    title = StringField(
        "Title",
        validators=[
            DataRequired(message="Task title is required"),
            Length(
                max=TASK_TITLE_MAX_LENGTH,
                message=f"Task title must not exceed {TASK_TITLE_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed],
    )
    description = TextAreaField(
        "Description",
        validators=[
            Length(
                max=TASK_DESCRIPTION_MAX_LENGTH,
                message=f"Task description must not exceed {TASK_DESCRIPTION_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed],
    )
    summary = StringField(
        "Summary",
        validators=[
            Optional(),
            Length(
                max=TASK_SUMMARY_MAX_LENGTH,
                message=f"Task summary must not exceed {TASK_SUMMARY_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed_or_none],
    )


class TaskUpdateForm(TaskForm):
    # Every field is optional on update, but a supplied title may not be blank.
    title = StringField(
        "Title",
        validators=[
            Length(
                max=TASK_TITLE_MAX_LENGTH,
                message=f"Task title must not exceed {TASK_TITLE_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed],
    )

    def validate_title(self, field):
        if field.raw_data and not field.data:
            raise ValidationError("Task title is required")


class TaskCommentForm(ApiForm):
    comment = TextAreaField(
        "Comment",
        validators=[
            DataRequired(message="Comment cannot be blank"),
            Length(
                max=COMMENT_MAX_LENGTH,
                message=f"Comment must not exceed {COMMENT_MAX_LENGTH} characters",
            ),
        ],
        filters=[_trimmed],
    )


class SignupForm(ApiForm):
    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Invalid email"),
            Email(message="Invalid email format"),
        ],
        filters=[_normalized_email],
    )
    password = PasswordField(
        "Password",
        validators=[
            DataRequired(message="Invalid password"),
            Length(
                min=MIN_PASSWORD_LENGTH,
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            ),
        ],
    )
    name = StringField(
        "Name",
        validators=[DataRequired(message="Invalid name")],
        filters=[_trimmed],
    )


def _role_field():
    return StringField(
        "Role",
        validators=[
            AnyOf(PROJECT_ROLES, message=f"role must be one of {', '.join(PROJECT_ROLES)}"),
        ],
        filters=[_trimmed],
    )


class ProjectMemberForm(ApiForm):
    user_id = StringField(
        "User",
        validators=[DataRequired(message="user_id should not be empty")],
        filters=[_trimmed],
    )
    role = _role_field()


class ProjectRoleForm(ApiForm):
    role = _role_field()


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult(Generic[T]):
    value: Maybe[T] = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the value or raise ``ValidationFailed`` with the field errors."""
        if self.errors:
            raise ValidationFailed.from_field_errors(self.errors)
        return self.value


@dataclass(frozen=True)
class CreateProjectInput:
    name: str
    description: Maybe[str] = None


@dataclass(frozen=True)
class CreateTaskInput:
    title: str
    description: str = ""
    summary: Maybe[str] = None


@dataclass(frozen=True)
class UpdateTaskInput:
    changes: dict[str, Any]


@dataclass(frozen=True)
class TaskCommentInput:
    comment: str


@dataclass(frozen=True)
class SignupInput:
    email: str
    password: str
    name: str


@dataclass(frozen=True)
class ProjectMemberInput:
    user_id: str
    role: ProjectRole


def _field_errors(form: FlaskForm) -> list[FieldError]:
    errors = []
    for form_field in form:
        for message in form_field.errors:
            errors.append(FieldError(form_field.name, str(message)))
    return errors


def _validate(
    form_class: type[FlaskForm],
    payload: Maybe[Mapping[str, Any]],
    build: Callable[[FlaskForm], T],
) -> ValidationResult[T]:
    payload = dict(payload or {})
    # Only strings are bound; a list would otherwise expand into several values
    form = form_class(
        formdata=MultiDict([(key, value) for key, value in payload.items() if isinstance(value, str)])
    )
    valid = form.validate()
    mistyped = [
        form_field.name
        for form_field in form
        if payload.get(form_field.name) is not None and not isinstance(payload[form_field.name], str)
    ]
    if mistyped or not valid:
        errors = [FieldError(name, f"{name} must be a string") for name in mistyped]
        errors += [error for error in _field_errors(form) if error.field not in mistyped]
        return ValidationResult(errors=errors)
    return ValidationResult(value=build(form))


def validate_create_project(payload) -> ValidationResult[CreateProjectInput]:
    return _validate(
        ProjectForm,
        payload,
        lambda form: CreateProjectInput(name=form.name.data, description=form.description.data),
    )


def validate_create_task(payload) -> ValidationResult[CreateTaskInput]:
    return _validate(
        TaskForm,
        payload,
        lambda form: CreateTaskInput(
            title=form.title.data,
            description=form.description.data,
            summary=form.summary.data,
        ),
    )


def validate_update_task(payload) -> ValidationResult[UpdateTaskInput]:
    """Only keys present in the payload end up in ``changes``."""
    payload = dict(payload or {})
    if "title" in payload and payload["title"] is None:
        # a null title is a blank title, not an absent one
        payload["title"] = ""

    def build(form):
        changes = {}
        for name in ("title", "summary", "description"):
            if name in payload:
                changes[name] = form[name].data
        return UpdateTaskInput(changes=changes)

    return _validate(TaskUpdateForm, payload, build)


def validate_task_comment(payload) -> ValidationResult[TaskCommentInput]:
    return _validate(
        TaskCommentForm,
        payload,
        lambda form: TaskCommentInput(comment=form.comment.data),
    )


def validate_signup(payload) -> ValidationResult[SignupInput]:
    return _validate(
        SignupForm,
        payload,
        lambda form: SignupInput(
            email=form.email.data,
            password=form.password.data,
            name=form.name.data,
        ),
    )


def validate_project_member(payload) -> ValidationResult[ProjectMemberInput]:
    return _validate(
        ProjectMemberForm,
        payload,
        lambda form: ProjectMemberInput(user_id=form.user_id.data, role=ProjectRole(form.role.data)),
    )


def validate_project_role(payload) -> ValidationResult[ProjectRole]:
    return _validate(ProjectRoleForm, payload, lambda form: ProjectRole(form.role.data))
