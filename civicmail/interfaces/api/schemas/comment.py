"""Schemas for posting comments."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    commentable_type: Literal["proposal", "debate"]
    commentable_id: int = Field(..., ge=1)
    body: str = Field(..., min_length=1)
    parent_id: int | None = Field(default=None, ge=1, description="Comment being replied to")


class CommentRead(BaseModel):
    id: int
    commentable_type: str
    commentable_id: int
    author_id: int | None
    body: str
    parent_id: int | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentCreated(BaseModel):
    comment: CommentRead
    notification: str = Field(..., description="Outcome of the email to the addressee")


__all__ = ["CommentCreate", "CommentCreated", "CommentRead"]
