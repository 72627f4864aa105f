"""Schemas for private messages."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DirectMessageCreate(BaseModel):
    receiver_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=120)
    body: str = Field(..., min_length=1)


class DirectMessageRead(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    title: str
    body: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DirectMessageCreated(BaseModel):
    message: DirectMessageRead
    receiver_notification: str
    sender_notification: str


__all__ = ["DirectMessageCreate", "DirectMessageCreated", "DirectMessageRead"]
