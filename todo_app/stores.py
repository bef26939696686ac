"""
Row-level persistence for accounts and tasks.

Both stores are constructed once by the application factory around the
app's :class:`~flask_sqlalchemy.SQLAlchemy` handle.  Each call uses the
request-scoped ``session``, which Flask-SQLAlchemy returns to the
connection pool when the app context is torn down.

Driver failures are rolled back and re-raised as :class:`StoreError`; a
unique-constraint violation on ``account.email`` becomes :class:`Conflict`.
"""

from __future__ import annotations

import logging

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .errors import Conflict, StoreError
from .models import Account, Task

logger = logging.getLogger(__name__)


class AccountStore:
    """Lookup and insert of :class:`Account` rows."""

    def __init__(self, db: SQLAlchemy) -> None:
        self._db = db

    def find_by_email(self, email: str) -> Account | None:
        try:
            return self._db.session.scalar(select(Account).where(Account.email == email))
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StoreError() from exc

    def add(self, account: Account) -> Account:
        """
        Persist a new account and return it with its assigned ``id``.

        Raises:
            Conflict: If the email is already registered.
            StoreError: On any other database failure.
        """
        try:
            self._db.session.add(account)
            self._db.session.commit()
        except IntegrityError as exc:
            self._db.session.rollback()
            raise Conflict("Email already exists") from exc
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StoreError() from exc
        return account

    def count(self) -> int:
        try:
            return self._db.session.scalar(select(func.count()).select_from(Account)) or 0
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StoreError() from exc


class TaskStore:
    """List, insert and delete of :class:`Task` rows."""

    def __init__(self, db: SQLAlchemy) -> None:
        self._db = db

    def list_all(self) -> list[Task]:
        """Return every task, oldest first."""
        try:
            stmt = select(Task).order_by(Task.created_at.asc(), Task.id.asc())
            return list(self._db.session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StoreError() from exc

    def create(self, description: str) -> Task:
        task = Task(description=description)
        try:
            self._db.session.add(task)
            self._db.session.commit()
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StoreError() from exc
        return task

    def delete(self, task_id: int) -> bool:
        """Delete the task with *task_id*; return ``False`` if it did not exist."""
        try:
            task = self._db.session.get(Task, task_id)
            if task is None:
                return False
            self._db.session.delete(task)
            self._db.session.commit()
        except SQLAlchemyError as exc:
            self._db.session.rollback()
            raise StoreError() from exc
        return True
