"""
Todo API schemas.

Request bodies and the serialized todo use camelCase on the wire.
Optional fields that are unset are omitted from responses.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.core.clock import as_utc
from app.schemas.response import Envelope

# Offsets are converted to UTC; a timestamp without one is read as UTC
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


class TodoCreate(BaseModel):
    """Schema for creating a todo. Title or note must be non-empty (enforced by the store)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = None
    note: Optional[str] = None
    due_at: Optional[UTCDatetime] = None


class TodoUpdate(BaseModel):
    """
    Schema for updating a todo. Only supplied fields are written.

    A body carrying only ``dueAt`` is accepted. Blanking the last non-empty
    text field is rejected by the store.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = None
    note: Optional[str] = None
    due_at: Optional[UTCDatetime] = None

    @model_validator(mode="after")
    def check_not_empty(self) -> "TodoUpdate":
        if self.title is None and self.note is None and self.due_at is None:
            raise ValueError("At least one of title, note or dueAt is required")
        return self


class TodoResponse(BaseModel):
    """Serialized todo."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    title: Optional[str] = None
    note: Optional[str] = None
    created_at: UTCDatetime
    modified_at: UTCDatetime
    due_at: Optional[UTCDatetime] = None
    completed_at: Optional[UTCDatetime] = None
    is_done: bool = False


class TodoEnvelope(Envelope):
    data: Optional[TodoResponse] = None


class TodoListEnvelope(Envelope):
    data: list[TodoResponse] = Field(default_factory=list)
