"""Pydantic schemas for request/response validation."""

from app.schemas.response import Envelope
from app.schemas.user import AuthResponse, UserCreate, UserLogin
from app.schemas.todo import (
    TodoCreate,
    TodoEnvelope,
    TodoListEnvelope,
    TodoResponse,
    TodoUpdate,
)

__all__ = [
    "Envelope",
    "AuthResponse",
    "UserCreate",
    "UserLogin",
    "TodoCreate",
    "TodoEnvelope",
    "TodoListEnvelope",
    "TodoResponse",
    "TodoUpdate",
]
