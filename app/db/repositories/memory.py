"""
In-memory stores.

Satisfy the same contracts as the SQL repositories without a database.
Used by ``STORAGE_BACKEND=memory`` and by the tests. Rows are kept as
plain dicts and handed out as fresh model instances so callers cannot
mutate stored state.
"""

import itertools
import threading
from datetime import datetime
from typing import Any, Optional

from app.core.clock import as_utc, utcnow
from app.core.exceptions import ConflictError, EmptyTodoError, NotFoundError
from app.db.repositories.base import DEFAULT_PAGE_SIZE, blank_to_none
from app.models.todo import Todo
from app.models.user import User


class InMemoryCredentialStore:
    """Credential store backed by a dict keyed by user id."""

    def __init__(self):
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, email: str, hashed_password: str, first_name: Optional[str] = None,
               last_name: Optional[str] = None) -> User:
        with self._lock:
            if any(row["email"] == email for row in self._rows.values()):
                raise ConflictError(f"Email already used: {email}")
            user = User(id=next(self._ids), email=email, hashed_password=hashed_password, first_name=first_name,
                        last_name=last_name)
            self._rows[user.id] = user.model_dump()
            return User(**self._rows[user.id])

    def get_by_email(self, email: str) -> User:
        with self._lock:
            for row in self._rows.values():
                if row["email"] == email:
                    return User(**row)
        raise NotFoundError("User not found")

    def get_by_id(self, user_id: int) -> User:
        with self._lock:
            row = self._rows.get(user_id)
        if row is None:
            raise NotFoundError(f"User {user_id} not found")
        return User(**row)


class InMemoryTodoStore:
    """Todo store backed by a dict keyed by todo id."""

    def __init__(self):
        self._rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, owner_id: int, title: Optional[str] = None, note: Optional[str] = None,
               due_at: Optional[datetime] = None) -> Todo:
        title, note = blank_to_none(title), blank_to_none(note)
        if title is None and note is None:
            raise EmptyTodoError()
        now = utcnow()
        with self._lock:
            todo = Todo(id=next(self._ids), user_id=owner_id, title=title, note=note, due_at=as_utc(due_at),
                        created_at=now, modified_at=now)
            self._rows[todo.id] = todo.model_dump()
            return Todo(**self._rows[todo.id])

    def list_by_owner(self, owner_id: int, cursor_id: int = 0, page_size: int = DEFAULT_PAGE_SIZE) -> list[Todo]:
        with self._lock:
            ids = sorted(todo_id for todo_id, row in self._rows.items()
                         if row["user_id"] == owner_id and todo_id > cursor_id)
            return [Todo(**self._rows[todo_id]) for todo_id in ids[:page_size]]

    def get_by_id(self, todo_id: int, owner_id: int) -> Todo:
        with self._lock:
            return Todo(**self._owned(todo_id, owner_id))

    def update(self, todo_id: int, owner_id: int, title: Optional[str] = None, note: Optional[str] = None,
               due_at: Optional[datetime] = None) -> Todo:
        with self._lock:
            row = self._owned(todo_id, owner_id)
            changes: dict[str, Any] = {}
            if title is not None:
                changes["title"] = blank_to_none(title)
            if note is not None:
                changes["note"] = blank_to_none(note)
            if changes.get("title", row["title"]) is None and changes.get("note", row["note"]) is None:
                raise EmptyTodoError()
            if due_at is not None:
                changes["due_at"] = as_utc(due_at)
            row.update(changes, modified_at=utcnow())
            return Todo(**row)

    def mark_complete(self, todo_id: int, owner_id: int, completed_at: datetime) -> Todo:
        with self._lock:
            row = self._owned(todo_id, owner_id)
            row["completed_at"] = as_utc(completed_at)
            row["is_done"] = True
            return Todo(**row)

    def delete(self, todo_id: int, owner_id: int) -> int:
        with self._lock:
            self._owned(todo_id, owner_id)
            del self._rows[todo_id]
        return todo_id

    def _owned(self, todo_id: int, owner_id: int) -> dict[str, Any]:
        row = self._rows.get(todo_id)
        if row is None or row["user_id"] != owner_id:
            raise NotFoundError(f"Todo {todo_id} not found")
        return row
