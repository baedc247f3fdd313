"""Push notification schemas."""

from typing import Any

from pydantic import BaseModel, Field


class PushPayload(BaseModel):
    """What a notification says, independent of who receives it."""

    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)


class BatchFailure(BaseModel):
    """A batch the push gateway did not accept."""

    batch_index: int
    error: str


class DispatchReport(BaseModel):
    """Outcome of one fan-out."""

    sent: int = 0
    failed_batches: list[BatchFailure] = Field(default_factory=list)
