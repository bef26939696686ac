"""
Database models for the todo application.

Defines the two tables the API persists: ``account`` (credentials used by
signup and login) and ``task`` (the shared task list).  Tasks carry no
reference to an account.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from . import db

DEFAULT_HASH_METHOD = "pbkdf2:sha256:600000"


class Account(db.Model):
    """
    A registered user.

    Only a salted one-way digest of the password is stored.  ``to_dict``
    returns ``id`` and ``email`` only so it can be sent to clients as-is.

    Attributes:
        id: Auto-incrementing integer primary key.
        email: Unique, case-sensitive email address used as the login key.
        password_hash: Werkzeug digest of the password.
        created_at: Timestamp of account creation, stored as UTC.
    """

    __tablename__ = "account"

    __table_args__ = (
        db.CheckConstraint("length(email) <= 255", name="ck_account_email_len"),
    )

    id: int = db.Column(db.Integer, primary_key=True)
    # Unique constraint is the authority for duplicate signups
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def set_password(self, password: str, method: str = DEFAULT_HASH_METHOD) -> None:
        """
        Hash and store a plain-text password.

        Args:
            password: The plain-text password to hash.
            method: Werkzeug hash method string.  The iteration count in it
                is the work factor.
        """
        self.password_hash = generate_password_hash(password, method=method)

    def check_password(self, password: str) -> bool:
        """Return ``True`` if *password* matches the stored digest."""
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email}

    def __repr__(self) -> str:
        return f"<Account {self.id}: {self.email}>"


class Task(db.Model):
    """
    A to-do item.

    Attributes:
        id: Unique identifier for the task.
        description: Short, non-empty text of the task.
        created_at: Timestamp when the task was created.
    """

    __tablename__ = "task"

    id: int = db.Column(db.Integer, primary_key=True)
    description: str = db.Column(db.String(255), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert the task to its JSON representation."""
        return {"id": self.id, "description": self.description}

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.description}>"
