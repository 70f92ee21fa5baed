"""
Todo database model.

Every todo belongs to exactly one user; all access goes through
queries scoped by both ``id`` and ``user_id``.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow
from app.models.types import UTCTimestamp


class Todo(SQLModel, table=True):
    """A single todo item owned by a user."""

    __tablename__ = "todos"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    title: Optional[str] = Field(default=None)
    note: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp(), nullable=False))
    modified_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp(), nullable=False))
    due_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCTimestamp(), nullable=True))

    # Completion
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCTimestamp(), nullable=True))
    is_done: bool = Field(default=False, nullable=False)
