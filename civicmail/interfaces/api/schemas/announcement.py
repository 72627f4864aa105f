"""Schemas for announcements published on proposals and debates."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    subject_type: Literal["proposal", "debate"]
    subject_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=120)
    body: str = Field(..., min_length=1)
    recipient_ids: list[int] | None = Field(
        default=None,
        description="Explicit audience; defaults to every supporter of the subject",
    )


class AnnouncementRead(BaseModel):
    id: int
    subject_type: str
    subject_id: int
    author_id: int | None
    title: str
    body: str
    created_at: datetime | None = None
    queued_for: int = Field(0, description="Number of ledger entries created or bumped")

    model_config = ConfigDict(from_attributes=True)


__all__ = ["AnnouncementCreate", "AnnouncementRead"]
