"""Domain entity for administrative notifications attached to a subject."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Announcement:
    """Update published on a proposal or debate for its followers."""

    id: int | None
    subject_type: str
    subject_id: int
    author_id: int | None
    title: str
    body: str
    created_at: datetime | None = None


__all__ = ["Announcement"]
