"""Post and comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Create a new post."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1, max_length=5000)
    username: str = Field(..., min_length=1, max_length=50)


class PostUpdate(BaseModel):
    """Replace the content of a post."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1, max_length=5000)


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    username: str
    created_at: datetime
    updated_at: datetime


class CommentCreate(BaseModel):
    """Create a comment; ``parentId`` threads it under another comment."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    content: str = Field(..., min_length=1, max_length=2000)
    username: str = Field(..., min_length=1, max_length=50)
    parent_id: int | None = Field(None, alias="parentId")


class CommentResponse(BaseModel):
    """Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    parent_id: int | None
    content: str
    username: str
    created_at: datetime
    updated_at: datetime
