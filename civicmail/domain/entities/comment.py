"""Domain entity representing a comment or a reply to a comment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """A comment posted on a proposal or debate thread."""

    id: int | None
    commentable_type: str
    commentable_id: int
    author_id: int | None
    body: str
    parent_id: int | None = None
    created_at: datetime | None = None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


__all__ = ["Comment"]
