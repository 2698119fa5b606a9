""" Represents a user in the system.

Users sign up with an email address, a display name and a password.
A User can login to get a session and manage the Projects they are a member of.
Administrators (role ADMIN) can create and delete other Users.
Deleting a User removes every Project, Task and TaskComment they created or
last updated (database level cascade).

"""

from datetime import datetime
import uuid

from werkzeug.security import generate_password_hash, check_password_hash
from database import db

PASSWORD_HASH_METHOD = "scrypt"


def new_id() -> str:
    return str(uuid.uuid4())


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column("password", db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="USER")
    created_at = db.Column("createdAt", db.DateTime, nullable=False, default=datetime.utcnow)
    last_updated_at = db.Column(
        "lastUpdatedAt",
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    ADMIN = "ADMIN"
    USER = "USER"

    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method=PASSWORD_HASH_METHOD)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self) -> bool:
        return self.role == self.ADMIN

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }

    def __repr__(self):
        return f"<User {self.id}>"
