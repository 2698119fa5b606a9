"""User accounts and credential verification."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database import db
from forms import SignupInput
from models.user import User
from services.errors import AuthenticationFailed, Conflict, NotFound, ValidationFailed

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def authenticate(email: Optional[str], password: Optional[str]) -> User:
    """Return the user matching the credentials.

    Unknown emails and wrong passwords fail with the same message so callers
    cannot tell which accounts exist.
    """
    if email is None or not isinstance(email, str) or not email.strip():
        raise ValidationFailed("You must provide an email")
    if password is None or not isinstance(password, str) or not password.strip():
        raise ValidationFailed("You must provide a password")

    user = User.query.filter_by(email=normalize_email(email)).first()
    if user is None or not user.check_password(password):
        raise AuthenticationFailed(INVALID_CREDENTIALS_MESSAGE)
    return user


def create_user(data: SignupInput, *, role: str = User.USER) -> User:
    user = User(email=normalize_email(data.email), name=data.name, role=role)
    user.set_password(data.password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Email already exists")
    except SQLAlchemyError:
        db.session.rollback()
        logging.error("Database error while creating user", exc_info=True)
        raise
    return user


def get_user(user_id: Optional[str]) -> User:
    user = db.session.get(User, user_id) if user_id else None
    if user is None:
        raise NotFound(f"No user exists with ID {user_id}")
    return user


def list_users() -> list[User]:
    return User.query.order_by(User.name.asc()).all()


def delete_user(user_id: str) -> None:
    """Delete a user; their projects, tasks, comments and sessions cascade."""
    user = get_user(user_id)
    db.session.delete(user)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logging.error("Database error while deleting user %s", user_id, exc_info=True)
        raise


class LocalStrategy:
    """Email/password verification used by the login guard."""

    name = "local"
    username_field = "email"
    password_field = "password"

    def validate(self, credentials: dict) -> User:
        return authenticate(
            credentials.get(self.username_field),
            credentials.get(self.password_field),
        )
