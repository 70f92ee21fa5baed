"""
Response envelope.

Every endpoint answers with ``{"status", "message", "data", "resourceId"}``;
keys left as ``None`` are dropped when the response is serialized.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Envelope(BaseModel):
    """Common response wrapper."""

    model_config = ConfigDict(populate_by_name=True)

    status: int
    message: Optional[str] = None
    resource_id: Optional[int] = Field(default=None, alias="resourceId")
