"""Pydantic models describing ledger entries."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationRead(BaseModel):
    """Representation of a ledger entry delivered to the client."""

    id: int
    recipient_id: int
    notifiable_type: str
    notifiable_id: int
    subject_type: str | None = None
    subject_id: int | None = None
    counter: int = 1
    created_at: datetime | None = None
    emailed_at: datetime | None = None
    expired_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["NotificationRead"]
