"""SQLModel database models."""

from app.models.user import User
from app.models.todo import Todo

__all__ = [
    "User",
    "Todo",
]
