"""
Store contracts.

Handlers and services depend on these protocols only. ``UserRepository``
and ``TodoRepository`` satisfy them on top of SQLModel; the in-memory
stores satisfy them without a database.
"""

from datetime import datetime
from typing import Optional, Protocol

from app.models.todo import Todo
from app.models.user import User

DEFAULT_PAGE_SIZE = 10


class CredentialStore(Protocol):
    def create(self, email: str, hashed_password: str, first_name: Optional[str] = None,
               last_name: Optional[str] = None) -> User:
        """Persist a new user. Raises ConflictError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User:
        """Raises NotFoundError."""
        ...

    def get_by_id(self, user_id: int) -> User:
        """Raises NotFoundError."""
        ...


class TodoStore(Protocol):
    def create(self, owner_id: int, title: Optional[str] = None, note: Optional[str] = None,
               due_at: Optional[datetime] = None) -> Todo:
        """Persist a new todo. Raises EmptyTodoError without a title or note."""
        ...

    def list_by_owner(self, owner_id: int, cursor_id: int = 0, page_size: int = DEFAULT_PAGE_SIZE) -> list[Todo]:
        """Todos with ``id > cursor_id`` in ascending id order, at most ``page_size``."""
        ...

    def get_by_id(self, todo_id: int, owner_id: int) -> Todo:
        """Raises NotFoundError when absent or owned by someone else."""
        ...

    def update(self, todo_id: int, owner_id: int, title: Optional[str] = None, note: Optional[str] = None,
               due_at: Optional[datetime] = None) -> Todo:
        """Write the supplied fields and bump ``modified_at``."""
        ...

    def mark_complete(self, todo_id: int, owner_id: int, completed_at: datetime) -> Todo:
        ...

    def delete(self, todo_id: int, owner_id: int) -> int:
        """Remove the todo and return its id."""
        ...


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Empty strings are stored as NULL so they serialize as absent."""
    return value if value else None
