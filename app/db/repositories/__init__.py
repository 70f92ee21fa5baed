"""Database repositories."""

from app.db.repositories.base import CredentialStore, TodoStore
from app.db.repositories.memory import InMemoryCredentialStore, InMemoryTodoStore
from app.db.repositories.todo import TodoRepository
from app.db.repositories.user import UserRepository

__all__ = [
    "CredentialStore",
    "TodoStore",
    "InMemoryCredentialStore",
    "InMemoryTodoStore",
    "TodoRepository",
    "UserRepository",
]
