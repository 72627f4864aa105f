"""Domain entity recording that a user supports a votable subject."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Vote:
    id: int | None
    voter_id: int
    votable_type: str
    votable_id: int
    created_at: datetime | None = None


__all__ = ["Vote"]
