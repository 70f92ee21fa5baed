"""
User database model.

Defines the User table for authentication and user management.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from app.core.clock import utcnow
from app.models.types import UTCTimestamp


class User(SQLModel, table=True):
    """
    User model for authentication.

    Stores credentials and profile information. Rows are written once at
    registration and never modified afterwards.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    hashed_password: str = Field(nullable=False)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp(), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp(), nullable=False))
