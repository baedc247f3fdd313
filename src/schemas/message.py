"""Direct message schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    """Send a direct message."""

    model_config = ConfigDict(extra="forbid")

    sender: str = Field(..., min_length=1, max_length=50)
    receiver: str = Field(..., min_length=1, max_length=50)
    content: str = Field(..., min_length=1, max_length=5000)


class DirectMessageResponse(BaseModel):
    """Direct message response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    sender: str
    receiver: str
    content: str
    created_at: datetime
