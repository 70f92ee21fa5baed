"""
User API schemas.

Pydantic models for registration and login request/response validation.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from app.schemas.response import Envelope

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


# Request schemas
class UserCreate(BaseModel):
    """Schema for user registration. Every field is required and non-blank."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(..., min_length=1)
    first_name: Name = Field(..., alias="firstName")
    last_name: Name = Field(..., alias="lastName")

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        # Whitespace inside a password is kept as typed
        if not value.strip():
            raise ValueError("Password must not be blank")
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


# Response schemas
class AuthResponse(Envelope):
    """Registration/login result. ``resourceId`` is the user id."""

    email: Optional[str] = None
    token: Optional[str] = None
