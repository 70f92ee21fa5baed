"""Business logic services."""

from app.services.todo_service import TodoService
from app.services.user_service import UserService

__all__ = [
    "TodoService",
    "UserService",
]
