"""Domain entity representing a private message between two users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class DirectMessage:
    id: int | None
    sender_id: int
    receiver_id: int
    title: str
    body: str
    created_at: datetime | None = None


__all__ = ["DirectMessage"]
